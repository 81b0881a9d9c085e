"""pixx.io client, its factory and the authenticator used by asset sources.

The client only implements the refresh token exchange. Asset queries are
built on top of an authenticated client elsewhere.

Example:
    ```python
    factory = PixxioClientFactory()
    client = factory.create_for_account("shared", "https://example.pixx.io/api", "api-key")
    ClientAuthenticator().authenticate(client, "refresh-token")
    ```
"""

import logging
from typing import Any, Protocol, TypeVar, runtime_checkable

import httpx

from pixxio_asset_source.auth.exceptions import AuthenticationFailedError
from pixxio_asset_source.errors.exceptions import APIError
from pixxio_asset_source.errors.handler import parse_success_payload

logger = logging.getLogger(__name__)

# Asset fields requested from pixx.io
DEFAULT_FIELDS: tuple[str, ...] = (
    "id",
    "originalFilename",
    "fileType",
    "keywords",
    "createDate",
    "imageHeight",
    "imageWidth",
    "originalPath",
    "subject",
    "description",
    "modifyDate",
    "fileSize",
    "modifiedImagePaths",
    "imagePath",
)

# Renditions requested for every image: two thumbnails and a preview
DEFAULT_IMAGE_OPTIONS: tuple[dict[str, int], ...] = (
    {"width": 400, "height": 400, "quality": 90},
    {"width": 1500, "height": 1500, "quality": 90},
    {"sizeMax": 1920, "quality": 90},
)

DEFAULT_TIMEOUT = 30.0

ClientT_co = TypeVar("ClientT_co", covariant=True)


class PixxioClient:
    """Session-bound handle for the pixx.io API.

    Construction performs no I/O. ``authenticate()`` exchanges a refresh token
    for an access token, after which ``is_authenticated`` is true.

    Args:
        api_endpoint_uri: Base URI of the pixx.io API, e.g. ``https://example.pixx.io/api``
        api_key: The pixx.io API key
        fields: Asset fields to request
        image_options: Image rendition presets to request
        http_client: Optional httpx client; one is created on first use otherwise
    """

    def __init__(
        self,
        api_endpoint_uri: str,
        api_key: str,
        fields: list[str] | tuple[str, ...],
        image_options: list[dict[str, int]] | tuple[dict[str, int], ...],
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.api_endpoint_uri = api_endpoint_uri
        self.api_key = api_key
        self.fields = list(fields)
        self.image_options = [dict(option) for option in image_options]
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._access_token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self._access_token is not None

    @property
    def access_token(self) -> str | None:
        return self._access_token

    def _get_http_client(self) -> httpx.Client:
        if self._http_client is None:
            self._http_client = httpx.Client(timeout=DEFAULT_TIMEOUT)
        return self._http_client

    def _url(self, path: str) -> str:
        return f"{self.api_endpoint_uri.rstrip('/')}/{path.lstrip('/')}"

    def authenticate(self, refresh_token: str) -> None:
        """Exchange ``refresh_token`` for an access token.

        Args:
            refresh_token: The pixx.io refresh token

        Raises:
            AuthenticationFailedError: If the request fails or pixx.io rejects the token
        """
        url = self._url("json/accessToken")
        try:
            response = self._get_http_client().post(
                url,
                data={"apiKey": self.api_key, "refreshToken": refresh_token},
            )
            data = parse_success_payload(response)
        except httpx.HTTPError as e:
            raise AuthenticationFailedError(f"Authentication request to {url} failed: {e}") from e
        except APIError as e:
            raise AuthenticationFailedError(f"Authentication failed: {e}") from e

        access_token = data.get("accessToken")
        if not isinstance(access_token, str) or not access_token:
            raise AuthenticationFailedError("Authentication failed: no access token in pixx.io response")

        self._access_token = access_token
        logger.debug(f"Obtained pixx.io access token from {url}: ***")

    def close(self) -> None:
        """Close the underlying httpx client if this client created it."""
        if self._owns_http_client and self._http_client is not None:
            self._http_client.close()
            self._http_client = None

    def __enter__(self) -> "PixxioClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


@runtime_checkable
class ClientFactory(Protocol[ClientT_co]):
    """Builds unauthenticated clients. Must not perform I/O."""

    def create_for_account(self, principal_identifier: str, api_endpoint_uri: str, api_key: str) -> ClientT_co: ...


@runtime_checkable
class Authenticator(Protocol):
    """Authenticates a client built by a ClientFactory."""

    def authenticate(self, client: Any, refresh_token: str) -> None: ...


class PixxioClientFactory:
    """Factory for PixxioClient instances.

    The field list and image presets are fixed per factory and passed to
    every client unchanged.
    """

    def __init__(
        self,
        *,
        fields: tuple[str, ...] = DEFAULT_FIELDS,
        image_options: tuple[dict[str, int], ...] = DEFAULT_IMAGE_OPTIONS,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.fields = fields
        self.image_options = image_options
        self._http_client = http_client

    def create_for_account(self, principal_identifier: str, api_endpoint_uri: str, api_key: str) -> PixxioClient:
        """Create a new, unauthenticated PixxioClient for a principal."""
        logger.debug(f"Creating pixx.io client for '{principal_identifier}' at {api_endpoint_uri}")
        return PixxioClient(
            api_endpoint_uri,
            api_key,
            self.fields,
            self.image_options,
            http_client=self._http_client,
        )


class ClientAuthenticator:
    """Authenticator that delegates to the client's own ``authenticate()``."""

    def authenticate(self, client: Any, refresh_token: str) -> None:
        client.authenticate(refresh_token)
