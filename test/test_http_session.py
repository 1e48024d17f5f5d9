import unittest

from rlstats import ConstructionError, __title__, __version__
from rlstats.client.http_session import USER_AGENT, build_headers, create_session


class TestBuildHeaders(unittest.TestCase):

    def test_fixed_headers(self):
        headers = build_headers("abc123")

        self.assertEqual(headers["authorization"], "abc123")
        self.assertEqual(headers["Accept"], "application/json")
        self.assertEqual(headers["User-Agent"], f"{__title__} (v {__version__})")
        self.assertEqual(USER_AGENT, "rlstats (v 0.1.0)")

    def test_headers_are_read_only(self):
        headers = build_headers("abc123")

        with self.assertRaises(TypeError):
            headers["Authorization"] = "other"

    def test_tab_is_allowed(self):
        self.assertEqual(build_headers("a\tb")["Authorization"], "a\tb")

    def test_control_characters_rejected(self):
        for key in ("abc\n", "abc\r", "a\x00b", "a\x7fb"):
            with self.subTest(key=key), self.assertRaises(ConstructionError):
                build_headers(key)


class TestCreateSession(unittest.IsolatedAsyncioTestCase):

    async def test_session_carries_headers(self):
        session = create_session(build_headers("abc123"))
        try:
            self.assertEqual(session.headers["Authorization"], "abc123")
            self.assertEqual(session.timeout.total, 30)
        finally:
            await session.close()


if __name__ == '__main__':
    unittest.main()
