"""Structured exceptions for pixx.io API errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class APIError(Exception):
    """Base exception for pixx.io API errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        error_code: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.error_code = error_code


class ClientError(APIError):
    """4xx client errors."""

    pass


class ServerError(APIError):
    """5xx server errors."""

    pass


class UnsuccessfulResponseError(APIError):
    """A 2xx response whose JSON body reports ``success`` as false."""

    pass
