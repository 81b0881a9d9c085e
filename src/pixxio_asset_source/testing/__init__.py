"""Testing utilities for pixx.io asset sources.

Doubles for the asset source collaborators that record how they were called.

Example:
    ```python
    from pixxio_asset_source.testing import RecordingAuthenticator, RecordingClientFactory

    factory = RecordingClientFactory()
    authenticator = RecordingAuthenticator()
    asset_source = PixxioAssetSource(
        "pixxio", options, client_factory=factory, authenticator=authenticator
    )
    ```
"""

import threading
import time
from dataclasses import dataclass, field

from pixxio_asset_source.auth.exceptions import AuthenticationFailedError


@dataclass
class FakeClient:
    """Stand-in for PixxioClient."""

    principal_identifier: str
    api_endpoint_uri: str
    api_key: str
    refresh_token: str | None = None
    closed: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.refresh_token is not None

    def close(self) -> None:
        self.closed = True


class StaticPrincipalSupplier:
    """Principal supplier returning a fixed identifier, or none."""

    def __init__(self, principal_identifier: str | None = None):
        self.principal_identifier = principal_identifier

    def is_active(self) -> bool:
        return self.principal_identifier is not None

    def current_principal_identifier(self) -> str:
        if self.principal_identifier is None:
            raise LookupError("No principal is active")
        return self.principal_identifier


@dataclass
class RecordingClientFactory:
    """Client factory producing FakeClient instances and recording each call."""

    calls: list[tuple[str, str, str]] = field(default_factory=list)
    clients: list[FakeClient] = field(default_factory=list)

    def create_for_account(self, principal_identifier: str, api_endpoint_uri: str, api_key: str) -> FakeClient:
        self.calls.append((principal_identifier, api_endpoint_uri, api_key))
        client = FakeClient(principal_identifier, api_endpoint_uri, api_key)
        self.clients.append(client)
        return client


class RecordingAuthenticator:
    """Authenticator recording refresh tokens, optionally rejecting some of them.

    Args:
        rejected_tokens: Refresh tokens that fail with AuthenticationFailedError.
        delay: Seconds to block in each call, to widen race windows in tests.
    """

    def __init__(self, rejected_tokens: set[str] | None = None, delay: float = 0.0):
        self.rejected_tokens = set(rejected_tokens or ())
        self.delay = delay
        self.calls: list[str] = []
        self._lock = threading.Lock()

    @property
    def successful_calls(self) -> int:
        return len([token for token in self.calls if token not in self.rejected_tokens])

    def authenticate(self, client: FakeClient, refresh_token: str) -> None:
        if self.delay:
            time.sleep(self.delay)
        with self._lock:
            self.calls.append(refresh_token)
        if refresh_token in self.rejected_tokens:
            raise AuthenticationFailedError("Refresh token rejected")
        client.refresh_token = refresh_token


__all__ = [
    "FakeClient",
    "RecordingAuthenticator",
    "RecordingClientFactory",
    "StaticPrincipalSupplier",
]
