from typing import Optional

from pydantic import ValidationError

from rlstats.client.structures import ResponseCode


class RLStatsError(Exception):
    """Base class of every error raised by the client."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.url = url
        self.status_code = status_code

    def __str__(self) -> str:
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.status_code is not None:
            parts.append(f"Status: {self.status_code}")
        return " | ".join(parts)


class ConstructionError(RLStatsError):
    """The api key cannot be used to build the client headers."""


class TransportError(RLStatsError):
    """The request never produced a readable response. ``__cause__`` holds the aiohttp error."""


class RateLimited(RLStatsError):
    """The service answered 429. Back off before calling again."""

    def __init__(self, url: str, retry_after: Optional[float] = None):
        super().__init__("Rate limited by the service", url=url, status_code=429)
        self.retry_after = retry_after


class ServiceError(RLStatsError):
    """The service reported an application level failure with its own code and message."""

    def __init__(self, response: ResponseCode, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(response.message, url=url, status_code=status_code)
        self.response = response
        self.code = response.code

    def __str__(self) -> str:
        return f"[{self.code}] {super().__str__()}"


class MalformedResponse(RLStatsError):
    """The body matched neither the expected record nor the error envelope."""

    def __init__(
            self,
            body: str,
            error: ValidationError,
            url: Optional[str] = None,
            status_code: Optional[int] = None
    ):
        super().__init__(f"Unexpected response body: {error.error_count()} validation error(s)",
                         url=url, status_code=status_code)
        self.body = body
        self.error = error
