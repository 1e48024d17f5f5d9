import json
import unittest

from rlstats import MalformedResponse, Platform, Player, ResponseCode, ServiceError
from rlstats.client.decoding import attempt, decode_body
from stub_service import make_player


class TestDecodeBody(unittest.TestCase):

    def test_success_shape_wins(self):
        platforms = decode_body(list[Platform], '[{"id":1,"name":"Steam"},{"id":2,"name":"PS4"}]')

        self.assertEqual(platforms, [Platform(id=1, name="Steam"), Platform(id=2, name="PS4")])

    def test_empty_list_is_success(self):
        self.assertEqual(decode_body(list[Player], "[]"), [])

    def test_error_envelope(self):
        with self.assertRaises(ServiceError) as cm:
            decode_body(Player, '{"code":404,"message":"Player not found"}', url="http://x/player", status_code=200)

        self.assertEqual(cm.exception.response, ResponseCode(code=404, message="Player not found"))
        self.assertEqual(cm.exception.code, 404)
        self.assertEqual(cm.exception.message, "Player not found")
        self.assertIn("Player not found", str(cm.exception))
        self.assertIn("URL: http://x/player", str(cm.exception))

    def test_error_envelope_for_list(self):
        with self.assertRaises(ServiceError) as cm:
            decode_body(list[Platform], '{"code":500,"message":"Internal error"}')

        self.assertEqual(cm.exception.code, 500)

    def test_neither_shape(self):
        with self.assertRaises(MalformedResponse) as cm:
            decode_body(list[Platform], '{"unexpected":"shape"}')

        self.assertEqual(cm.exception.body, '{"unexpected":"shape"}')

    def test_invalid_json(self):
        with self.assertRaises(MalformedResponse):
            decode_body(list[Platform], "")

    def test_partial_player_is_not_returned(self):
        payload = make_player("a")
        del payload["rankedSeasons"]

        with self.assertRaises(MalformedResponse):
            decode_body(Player, json.dumps(payload))

    def test_attempt_reports_without_raising(self):
        ok = attempt(ResponseCode, '{"code":400,"message":"Bad request"}')
        failed = attempt(ResponseCode, '{"code":"nope"}')

        self.assertTrue(ok.ok)
        self.assertEqual(ok.value.code, 400)
        self.assertFalse(failed.ok)
        self.assertIsNone(failed.value)


if __name__ == '__main__':
    unittest.main()
