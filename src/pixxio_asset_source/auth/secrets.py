"""Client secrets and their lookup."""

import logging
from dataclasses import dataclass
from threading import Lock
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# Principal used when nobody is logged in
SHARED_PRINCIPAL = "shared"


@dataclass(frozen=True)
class ClientSecret:
    """A pixx.io refresh token stored for one principal.

    An empty ``refresh_token`` counts as no token at all.
    """

    principal_identifier: str
    refresh_token: str

    @property
    def is_usable(self) -> bool:
        return self.refresh_token != ""

    def __repr__(self) -> str:
        return f"ClientSecret(principal_identifier={self.principal_identifier!r}, refresh_token='***')"


@runtime_checkable
class ClientSecretRepository(Protocol):
    """Looks up stored client secrets by principal identifier."""

    def find_by_principal(self, principal_identifier: str) -> ClientSecret | None: ...


class InMemoryClientSecretRepository:
    """Thread-safe, process-local secret store.

    Example:
        ```python
        repository = InMemoryClientSecretRepository()
        repository.add(ClientSecret("editor@example.com", "rt-123"))
        ```
    """

    def __init__(self, secrets: list[ClientSecret] | None = None):
        self._lock = Lock()
        self._secrets: dict[str, ClientSecret] = {}
        for secret in secrets or []:
            self.add(secret)

    def add(self, secret: ClientSecret) -> None:
        """Store ``secret``, replacing any secret of the same principal."""
        with self._lock:
            self._secrets[secret.principal_identifier] = secret
        logger.debug(f"Stored client secret for principal '{secret.principal_identifier}'")

    def remove(self, principal_identifier: str) -> None:
        with self._lock:
            self._secrets.pop(principal_identifier, None)

    def find_by_principal(self, principal_identifier: str) -> ClientSecret | None:
        with self._lock:
            return self._secrets.get(principal_identifier)
