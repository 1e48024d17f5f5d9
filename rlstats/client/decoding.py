from functools import lru_cache
from typing import Any, NamedTuple, Optional

from pydantic import TypeAdapter, ValidationError

from rlstats.client.errors import MalformedResponse, ServiceError
from rlstats.client.structures import ResponseCode


class Attempt(NamedTuple):
    value: Any
    error: Optional[ValidationError]

    @property
    def ok(self) -> bool:
        return self.error is None


@lru_cache(maxsize=None)
def adapter_for(expected: Any) -> TypeAdapter:
    return TypeAdapter(expected)


def attempt(expected: Any, data: str | bytes) -> Attempt:
    """Validate ``data`` as JSON of type ``expected`` without raising."""
    try:
        return Attempt(adapter_for(expected).validate_json(data), None)
    except ValidationError as e:
        return Attempt(None, e)


def decode_body(
        expected: Any,
        data: str | bytes,
        url: Optional[str] = None,
        status_code: Optional[int] = None
) -> Any:
    """
    Decode a response body that is either ``expected`` or a :class:`ResponseCode`.

    The success shape is always tried first, whatever the status code was,
    so an empty list or object is never mistaken for an error. If it fails the
    body is tried as the error envelope and raised as :class:`ServiceError`.
    When neither matches, :class:`MalformedResponse` carries the error
    envelope's validation error. Bytes that are not valid UTF-8 end up there too.
    """
    success = attempt(expected, data)
    if success.ok:
        return success.value

    failure = attempt(ResponseCode, data)
    if failure.ok:
        raise ServiceError(failure.value, url=url, status_code=status_code)

    text = data.decode("utf-8", errors="replace") if isinstance(data, bytes) else data
    raise MalformedResponse(text, failure.error, url=url, status_code=status_code)
