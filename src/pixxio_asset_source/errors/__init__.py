"""Error handling for pixx.io API responses."""

from pixxio_asset_source.errors.exceptions import (
    APIError,
    ClientError,
    ServerError,
    UnsuccessfulResponseError,
)
from pixxio_asset_source.errors.handler import parse_success_payload, raise_for_status
from pixxio_asset_source.errors.models import ErrorPayload

__all__ = [
    "APIError",
    "ClientError",
    "ErrorPayload",
    "ServerError",
    "UnsuccessfulResponseError",
    "parse_success_payload",
    "raise_for_status",
]
