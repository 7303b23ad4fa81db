"""Errors raised while talking to the GrowthBook REST API."""

from __future__ import annotations

from gbgen.exceptions import GBGenError


class APIError(GBGenError):
    """Raised when contacting the API or parsing its response fails.

    Attributes:
        status_code: HTTP status of the failed response, when there was one.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class APIAuthError(APIError):
    """Raised when the API rejects the configured API key (401/403)."""
