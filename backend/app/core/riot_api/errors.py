"""Error taxonomy for Riot API calls.

``RiotAPIError`` is the generic upstream failure (non-2xx or transport). The
subclasses let callers tell apart the cases they react to differently: a
``NotFoundError`` is surfaced as-is, a ``RateLimitError`` is absorbed by the
request scheduler and retried after ``retry_after`` seconds.
"""

from typing import Optional


class RiotAPIError(Exception):
    """Upstream failure, with the HTTP status when one was received."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class RateLimitError(RiotAPIError):
    """429 response. ``retry_after`` is None when the header was unusable."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = 429,
        retry_after: Optional[float] = None,
        app_rate_limit: Optional[str] = None,
        method_rate_limit: Optional[str] = None,
    ) -> None:
        super().__init__(message, status_code)
        self.retry_after = retry_after
        self.app_rate_limit = app_rate_limit
        self.method_rate_limit = method_rate_limit


class NotFoundError(RiotAPIError):
    """404 response: the account, summoner or match does not exist."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = 404,
        resource: Optional[str] = None,
    ) -> None:
        super().__init__(message, status_code)
        self.resource = resource


class BadRequestError(RiotAPIError):
    """400 - invalid parameters."""


class AuthenticationError(RiotAPIError):
    """401 - missing or expired API key."""


class ForbiddenError(RiotAPIError):
    """403 - key not allowed to call this endpoint."""


class ServiceUnavailableError(RiotAPIError):
    """503 - Riot servers down or in maintenance."""
