"""Configuration errors raised while constructing an asset source."""

from typing import Any


class ConfigurationError(ValueError):
    """Base exception for invalid asset source configuration."""

    def __init__(self, message: str, asset_source_identifier: str | None = None):
        super().__init__(message)
        self.asset_source_identifier = asset_source_identifier


class InvalidIdentifierError(ConfigurationError):
    """The asset source identifier does not match the naming rule."""

    pass


class UnknownOptionError(ConfigurationError):
    """An option outside the supported set was configured."""

    def __init__(self, message: str, option_name: str, **kwargs):
        super().__init__(message, **kwargs)
        self.option_name = option_name


class InvalidOptionError(ConfigurationError):
    """A supported option is missing or has an invalid value.

    ``value`` holds the offending entry where there is one, e.g. the unknown
    media type for ``mediaTypes``.
    """

    def __init__(self, message: str, option_name: str, value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.option_name = option_name
        self.value = value
