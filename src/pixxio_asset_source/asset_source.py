"""pixx.io asset source configuration and its lazily authenticated client.

An asset source is created once per tenant from an options mapping and lives
for the lifetime of the process. Construction only validates; the first call
to ``get_client()`` resolves a refresh token, authenticates a client and caches
it. Every later call returns that same client.

Example:
    ```python
    from pixxio_asset_source import PixxioAssetSource

    asset_source = PixxioAssetSource.from_configuration(
        "pixxio",
        {
            "apiEndpointUri": "https://example.pixx.io/api",
            "apiKey": "k1",
            "sharedRefreshToken": "rt-shared",
        },
    )
    client = asset_source.get_client()
    ```

Note:
    The cached client belongs to whichever principal was active on the first
    successful call. Later calls by other principals reuse it.
"""

import logging
import re
from collections.abc import Mapping
from threading import Lock
from typing import Any, Generic, TypeVar

import httpx

from pixxio_asset_source.auth.credentials import CredentialResolver
from pixxio_asset_source.auth.exceptions import AuthenticationFailedError
from pixxio_asset_source.auth.principal import AnonymousPrincipalSupplier, PrincipalSupplier
from pixxio_asset_source.auth.secrets import ClientSecretRepository, InMemoryClientSecretRepository
from pixxio_asset_source.client import Authenticator, ClientAuthenticator, ClientFactory, PixxioClientFactory
from pixxio_asset_source.exceptions import InvalidIdentifierError, InvalidOptionError, UnknownOptionError
from pixxio_asset_source.media_types import MediaTypeRegistry, MimetypesRegistry

logger = logging.getLogger(__name__)

IDENTIFIER_PATTERN = re.compile(r"[a-z][a-z0-9-]{0,62}[a-z]")

OPTION_API_ENDPOINT_URI = "apiEndpointUri"
OPTION_API_KEY = "apiKey"
OPTION_SHARED_REFRESH_TOKEN = "sharedRefreshToken"
OPTION_MEDIA_TYPES = "mediaTypes"

SUPPORTED_OPTIONS = frozenset(
    [OPTION_API_ENDPOINT_URI, OPTION_API_KEY, OPTION_SHARED_REFRESH_TOKEN, OPTION_MEDIA_TYPES]
)
REQUIRED_OPTIONS = (OPTION_API_ENDPOINT_URI, OPTION_API_KEY)

ClientT = TypeVar("ClientT")


class PixxioAssetSource(Generic[ClientT]):
    """A tenant's pixx.io configuration owning one authenticated client.

    Args:
        identifier: Unique asset source name, matching ``^[a-z][a-z0-9-]{0,62}[a-z]$``
        options: Mapping with ``apiEndpointUri``, ``apiKey`` and optionally
            ``sharedRefreshToken`` and ``mediaTypes``
        secret_repository: Lookup for per-principal client secrets
        client_factory: Builds unauthenticated clients
        authenticator: Authenticates built clients
        principal_supplier: Default supplier of the acting principal
        media_type_registry: Used to validate ``mediaTypes`` keys

    Raises:
        InvalidIdentifierError: If the identifier does not match the naming rule
        UnknownOptionError: If an unsupported option is given
        InvalidOptionError: If a supported option is missing or invalid
    """

    label = "pixx.io"
    is_read_only = True

    def __init__(
        self,
        identifier: str,
        options: Mapping[str, Any],
        *,
        secret_repository: ClientSecretRepository | None = None,
        client_factory: ClientFactory[ClientT] | None = None,
        authenticator: Authenticator | None = None,
        principal_supplier: PrincipalSupplier | None = None,
        media_type_registry: MediaTypeRegistry | None = None,
    ) -> None:
        if not isinstance(identifier, str) or IDENTIFIER_PATTERN.fullmatch(identifier) is None:
            raise InvalidIdentifierError(
                f'Invalid asset source identifier "{identifier}". '
                f"The identifier must match /^{IDENTIFIER_PATTERN.pattern}$/",
                asset_source_identifier=identifier if isinstance(identifier, str) else None,
            )

        self.identifier = identifier
        self.asset_source_options = dict(options)
        self.api_endpoint_uri: str | None = None
        self.api_key: str | None = None
        self.shared_refresh_token: str | None = None
        self.media_type_filters: dict[str, Any] = {}

        registry = media_type_registry or MimetypesRegistry()
        for option_name, option_value in self.asset_source_options.items():
            if option_name == OPTION_API_ENDPOINT_URI:
                self.api_endpoint_uri = self._normalize_uri(option_value)
            elif option_name == OPTION_API_KEY:
                self.api_key = self._require_non_empty(option_name, option_value, "api key")
            elif option_name == OPTION_SHARED_REFRESH_TOKEN:
                self.shared_refresh_token = self._require_non_empty(
                    option_name, option_value, "shared refresh token"
                )
            elif option_name == OPTION_MEDIA_TYPES:
                self.media_type_filters = self._validate_media_types(option_value, registry)
            else:
                raise UnknownOptionError(
                    f'Unknown asset source option "{option_name}" specified for pixx.io asset source '
                    f'"{identifier}". Please check your settings.',
                    option_name=option_name,
                    asset_source_identifier=identifier,
                )

        for option_name in REQUIRED_OPTIONS:
            if option_name not in self.asset_source_options:
                raise InvalidOptionError(
                    f'Missing required option "{option_name}" for pixx.io asset source {identifier}',
                    option_name=option_name,
                    asset_source_identifier=identifier,
                )

        self.credential_resolver = CredentialResolver(secret_repository or InMemoryClientSecretRepository())
        self.client_factory = client_factory or PixxioClientFactory()
        self.authenticator = authenticator or ClientAuthenticator()
        self.principal_supplier = principal_supplier or AnonymousPrincipalSupplier()

        self._client: ClientT | None = None
        self._client_lock = Lock()

    @classmethod
    def from_configuration(
        cls, identifier: str, options: Mapping[str, Any], **collaborators
    ) -> "PixxioAssetSource[Any]":
        """Create an asset source from configuration. Same arguments as the constructor."""
        return cls(identifier, options, **collaborators)

    def _normalize_uri(self, value: Any) -> str:
        error = InvalidOptionError(
            f"Invalid api endpoint URI specified for pixx.io asset source {self.identifier}",
            option_name=OPTION_API_ENDPOINT_URI,
            value=value,
            asset_source_identifier=self.identifier,
        )
        if not isinstance(value, str) or not value:
            raise error
        try:
            uri = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise error from e
        if not uri.is_absolute_url:
            raise error
        return str(uri)

    def _require_non_empty(self, option_name: str, value: Any, description: str) -> str:
        if not isinstance(value, str) or not value:
            raise InvalidOptionError(
                f"Invalid {description} specified for pixx.io asset source {self.identifier}",
                option_name=option_name,
                asset_source_identifier=self.identifier,
            )
        return value

    def _validate_media_types(self, value: Any, registry: MediaTypeRegistry) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            raise InvalidOptionError(
                f"Invalid media types specified for pixx.io asset source {self.identifier}",
                option_name=OPTION_MEDIA_TYPES,
                asset_source_identifier=self.identifier,
            )
        for media_type in value:
            if not registry.extensions_for(media_type):
                raise InvalidOptionError(
                    f'Unknown media type "{media_type}" specified for pixx.io asset source {self.identifier}',
                    option_name=OPTION_MEDIA_TYPES,
                    value=media_type,
                    asset_source_identifier=self.identifier,
                )
        return dict(value)

    def _close_discarded_client(self, client: ClientT) -> None:
        close = getattr(client, "close", None)
        if callable(close):
            close()

    @property
    def has_client(self) -> bool:
        """Whether an authenticated client has been cached."""
        return self._client is not None

    def get_client(self, principal_supplier: PrincipalSupplier | None = None) -> ClientT:
        """Return the authenticated client, creating it on the first successful call.

        Args:
            principal_supplier: Supplier of the acting principal for this call.
                Defaults to the supplier given at construction. Ignored once a
                client is cached.

        Returns:
            The cached authenticated client

        Raises:
            MissingClientSecretError: If no refresh token is available for the principal
            AuthenticationFailedError: If the token exchange is rejected

        Failures leave the cache empty, so the next call tries again. A client
        that fails to authenticate is closed before the error propagates.
        """
        client = self._client
        if client is not None:
            return client

        with self._client_lock:
            if self._client is not None:
                return self._client

            supplier = principal_supplier if principal_supplier is not None else self.principal_supplier
            principal_identifier = self.credential_resolver.active_principal(supplier)
            client_secret = self.credential_resolver.resolve(principal_identifier, self.shared_refresh_token)

            client = self.client_factory.create_for_account(principal_identifier, self.api_endpoint_uri, self.api_key)
            authenticated = False
            try:
                self.authenticator.authenticate(client, client_secret.refresh_token)
                authenticated = True
            except AuthenticationFailedError as e:
                if e.principal_identifier is None:
                    e.principal_identifier = principal_identifier
                logger.warning(
                    f"pixx.io authentication failed for '{principal_identifier}' "
                    f"on asset source '{self.identifier}': {e}"
                )
                raise
            finally:
                if not authenticated:
                    self._close_discarded_client(client)

            self._client = client
            logger.info(f"Authenticated pixx.io client for '{principal_identifier}' on asset source '{self.identifier}'")
            return client
