"""Error handling utilities for pixx.io HTTP responses."""

from typing import Any

import httpx

from pixxio_asset_source.errors.exceptions import (
    APIError,
    ClientError,
    ServerError,
    UnsuccessfulResponseError,
)
from pixxio_asset_source.errors.models import ErrorPayload, is_truthy_flag


def raise_for_status(response: httpx.Response) -> None:
    """Raise appropriate exception for HTTP error responses.

    Uses the pixx.io error payload for the message if present, otherwise
    the status code and the start of the response text.

    Args:
        response: HTTP response object

    Raises:
        ClientError for 4xx, ServerError for 5xx, APIError otherwise
    """
    if response.is_success:
        return

    payload = ErrorPayload.from_response(response)
    status_code = response.status_code

    if 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    if payload:
        message = f"HTTP {status_code}: {payload.to_exception_message()}"
    else:
        response_text = response.text[:200]
        message = f"HTTP {status_code}: {response_text}" if response_text else f"HTTP {status_code}"

    error_code = payload.error_code if payload else None

    raise exc_class(
        message=message,
        status_code=status_code,
        response=response,
        error_code=error_code,
    )


def parse_success_payload(response: httpx.Response) -> dict[str, Any]:
    """Return the JSON body of a successful pixx.io response.

    Args:
        response: HTTP response object

    Returns:
        The decoded JSON object

    Raises:
        APIError subclass for HTTP errors, UnsuccessfulResponseError when the
        body is not a JSON object or its ``success`` flag is not true
    """
    raise_for_status(response)

    try:
        data = response.json()
    except ValueError as e:
        raise UnsuccessfulResponseError(
            f"Invalid JSON in pixx.io response: {e}",
            status_code=response.status_code,
            response=response,
        ) from e

    if not isinstance(data, dict):
        raise UnsuccessfulResponseError(
            "Unexpected pixx.io response body",
            status_code=response.status_code,
            response=response,
        )

    if not is_truthy_flag(data.get("success")):
        payload = ErrorPayload.from_response(response)
        message = payload.to_exception_message() if payload else "pixx.io reported an unsuccessful request"
        raise UnsuccessfulResponseError(
            message,
            status_code=response.status_code,
            response=response,
            error_code=payload.error_code if payload else None,
        )

    return data
