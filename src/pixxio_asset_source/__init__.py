"""pixx.io asset source - credential resolution and authenticated clients for pixx.io.

This library provides:
- Validation of per-tenant pixx.io asset source options
- Refresh token resolution per principal with a shared-token fallback
- A lazily authenticated, cached pixx.io client per asset source
- Options from the environment and .env files

Example:
    ```python
    from pixxio_asset_source import PixxioAssetSource
    from pixxio_asset_source.auth import ContextPrincipalSupplier
    from pixxio_asset_source.settings import EnvironmentSettings

    options = EnvironmentSettings().options_for("pixxio")
    principals = ContextPrincipalSupplier()
    asset_source = PixxioAssetSource.from_configuration(
        "pixxio", options, principal_supplier=principals
    )

    with principals.bind("editor@example.com"):
        client = asset_source.get_client()
    ```
"""

from pixxio_asset_source.asset_source import PixxioAssetSource
from pixxio_asset_source.exceptions import (
    ConfigurationError,
    InvalidIdentifierError,
    InvalidOptionError,
    UnknownOptionError,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "InvalidIdentifierError",
    "InvalidOptionError",
    "PixxioAssetSource",
    "UnknownOptionError",
    "__version__",
]
