"""Asset source options from the environment.

Builds the options mapping for ``PixxioAssetSource`` from environment variables
and an optional .env file (python-dotenv).

Resolution order per option (highest to lowest priority):
1. Explicitly provided value
2. Environment variable ``PIXXIO_<IDENTIFIER>_<OPTION>``
3. .env file (loaded into the environment once)

``<IDENTIFIER>`` is the asset source identifier upper-cased with ``-`` replaced
by ``_``, e.g. ``PIXXIO_MY_DAM_API_KEY`` for identifier ``my-dam``.

Example:
    ```python
    settings = EnvironmentSettings()
    options = settings.options_for("my-dam")
    asset_source = PixxioAssetSource.from_configuration("my-dam", options)
    ```

Options that are not set anywhere are left out of the mapping, so the asset
source reports them as missing.
"""

import logging
import os
from threading import Lock

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_PREFIX = "PIXXIO"

# option name -> environment variable suffix
ENV_OPTIONS = {
    "apiEndpointUri": "API_ENDPOINT_URI",
    "apiKey": "API_KEY",
    "sharedRefreshToken": "SHARED_REFRESH_TOKEN",
}

SECRET_OPTIONS = frozenset(["apiKey", "sharedRefreshToken"])


def env_var_name(identifier: str, option_name: str) -> str:
    """Return the environment variable holding ``option_name`` for ``identifier``."""
    return f"{ENV_PREFIX}_{identifier.upper().replace('-', '_')}_{ENV_OPTIONS[option_name]}"


class EnvironmentSettings:
    """Read asset source options from the environment.

    Args:
        dotenv_path: Path to .env file. If None, searches parent directories
            for .env file (default behavior of python-dotenv).
        load_dotenv: Whether to load the .env file. Default is True.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        """Load the .env file once (thread-safe)."""
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for pixx.io settings")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            self._dotenv_loaded = True

    def options_for(self, identifier: str, **overrides: str) -> dict[str, str]:
        """Build the options mapping for asset source ``identifier``.

        Args:
            identifier: The asset source identifier.
            **overrides: Explicit option values keyed by option name
                (e.g. ``apiKey="k1"``), taking precedence over the environment.

        Returns:
            Options mapping containing only the options that were found.
        """
        options: dict[str, str] = {}
        for option_name in ENV_OPTIONS:
            name = env_var_name(identifier, option_name)
            if option_name in overrides:
                value = overrides[option_name]
                source = "explicit parameter"
            elif name in os.environ:
                value = os.environ[name]
                source = f"environment variable '{name}'"
            else:
                continue

            shown = "***" if option_name in SECRET_OPTIONS else value
            logger.debug(f"Resolved {option_name} for '{identifier}' from {source}: {shown}")
            options[option_name] = value

        return options
