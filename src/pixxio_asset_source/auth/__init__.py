"""Authentication components for pixx.io asset sources.

This module provides:
- Refresh token resolution per principal with a shared-token fallback
- Principal suppliers for anonymous and request-bound contexts
- Client secret lookup

Example:
    ```python
    from pixxio_asset_source.auth import CredentialResolver, InMemoryClientSecretRepository

    resolver = CredentialResolver(InMemoryClientSecretRepository())
    secret = resolver.resolve("shared", shared_refresh_token="rt-shared")
    ```
"""

from pixxio_asset_source.auth.credentials import CredentialResolver
from pixxio_asset_source.auth.exceptions import (
    AuthenticationFailedError,
    CredentialError,
    MissingClientSecretError,
)
from pixxio_asset_source.auth.principal import (
    AnonymousPrincipalSupplier,
    ContextPrincipalSupplier,
    PrincipalSupplier,
)
from pixxio_asset_source.auth.secrets import (
    SHARED_PRINCIPAL,
    ClientSecret,
    ClientSecretRepository,
    InMemoryClientSecretRepository,
)

__all__ = [
    "SHARED_PRINCIPAL",
    "AnonymousPrincipalSupplier",
    "AuthenticationFailedError",
    "ClientSecret",
    "ClientSecretRepository",
    "ContextPrincipalSupplier",
    "CredentialError",
    "CredentialResolver",
    "InMemoryClientSecretRepository",
    "MissingClientSecretError",
    "PrincipalSupplier",
]
