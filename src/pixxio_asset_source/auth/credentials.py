"""Refresh token resolution for pixx.io clients.

This module decides which refresh token authenticates a pixx.io client for the
principal that is currently acting.

Resolution order (first match wins):
1. The client secret stored for the active principal, if its token is not empty
2. The asset source's shared refresh token, bound to the active principal
3. Failure with MissingClientSecretError

When no principal is active, the reserved "shared" principal is looked up instead.

Example:
    ```python
    from pixxio_asset_source.auth import CredentialResolver, InMemoryClientSecretRepository

    resolver = CredentialResolver(InMemoryClientSecretRepository())
    principal = resolver.active_principal(principal_supplier)
    secret = resolver.resolve(principal, shared_refresh_token="rt-shared")
    ```

Security Considerations:
    - Refresh tokens are never logged (masked with ***)
    - Only the principal identifier and the source of the token are logged
"""

import logging

from pixxio_asset_source.auth.exceptions import MissingClientSecretError
from pixxio_asset_source.auth.principal import PrincipalSupplier
from pixxio_asset_source.auth.secrets import SHARED_PRINCIPAL, ClientSecret, ClientSecretRepository

logger = logging.getLogger(__name__)


class CredentialResolver:
    """Resolve the client secret to use for a principal.

    The resolver holds no state besides its secret repository, so one
    instance can serve any number of asset sources and threads.

    Attributes:
        secret_repository: Lookup for secrets stored per principal.
    """

    def __init__(self, secret_repository: ClientSecretRepository):
        self.secret_repository = secret_repository

    def _mask_credential(self, value: str | None) -> str:
        """Mask a credential value for safe logging."""
        if value is None:
            return "None"
        return "***"

    def active_principal(self, principal_supplier: PrincipalSupplier | None) -> str:
        """Return the identifier of the acting principal, or "shared" when there is none.

        Args:
            principal_supplier: Supplier for the current principal. None is
                treated like a supplier without an active principal.
        """
        if principal_supplier is not None and principal_supplier.is_active():
            return principal_supplier.current_principal_identifier()
        return SHARED_PRINCIPAL

    def resolve(self, principal_identifier: str, shared_refresh_token: str | None = None) -> ClientSecret:
        """Resolve a usable client secret for ``principal_identifier``.

        Args:
            principal_identifier: The active principal ("shared" if anonymous).
            shared_refresh_token: The asset source's fallback token, if configured.

        Returns:
            A client secret with a non-empty refresh token. When the fallback is
            used, the secret is bound to ``principal_identifier``.

        Raises:
            MissingClientSecretError: If neither a stored secret nor a shared
                refresh token provides a token.
        """
        client_secret = self.secret_repository.find_by_principal(principal_identifier)
        source = f"stored secret of '{principal_identifier}'"

        is_invalid_secret = client_secret is None or not client_secret.is_usable
        if is_invalid_secret and shared_refresh_token:
            client_secret = ClientSecret(
                principal_identifier=principal_identifier,
                refresh_token=shared_refresh_token,
            )
            source = "shared refresh token"

        if client_secret is None or not client_secret.is_usable:
            raise MissingClientSecretError(
                f"No client secret found for account {principal_identifier}. "
                "Please set up the pixx.io plugin with the correct credentials.",
                principal_identifier=principal_identifier,
            )

        logger.debug(
            f"Resolved refresh token for '{principal_identifier}' from {source}: "
            f"{self._mask_credential(client_secret.refresh_token)}"
        )
        return client_secret
