"""Tests for asset source options from the environment."""

import os

import pytest

from pixxio_asset_source import PixxioAssetSource
from pixxio_asset_source.settings import EnvironmentSettings, env_var_name

DOTENV_VARIABLES = (
    "PIXXIO_DOTENV_DAM_API_ENDPOINT_URI",
    "PIXXIO_DOTENV_DAM_API_KEY",
    "PIXXIO_DOTENV_DAM_SHARED_REFRESH_TOKEN",
)


@pytest.fixture
def dotenv_cleanup():
    """Remove variables that load_dotenv writes into os.environ."""
    yield DOTENV_VARIABLES
    for name in DOTENV_VARIABLES:
        os.environ.pop(name, None)


class TestEnvVarName:
    def test_identifier_is_upper_cased(self):
        assert env_var_name("pixxio", "apiKey") == "PIXXIO_PIXXIO_API_KEY"

    def test_hyphens_become_underscores(self):
        assert env_var_name("my-dam", "apiEndpointUri") == "PIXXIO_MY_DAM_API_ENDPOINT_URI"

    def test_media_types_are_not_read_from_environment(self):
        with pytest.raises(KeyError):
            env_var_name("my-dam", "mediaTypes")


class TestEnvironmentSettingsInit:
    def test_init_default(self):
        settings = EnvironmentSettings()
        assert settings._dotenv_loaded

    def test_init_skip_dotenv(self):
        settings = EnvironmentSettings(load_dotenv=False)
        assert not settings._dotenv_loaded


class TestOptionsFor:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PIXXIO_MY_DAM_API_ENDPOINT_URI", "https://example.pixx.io/api")
        monkeypatch.setenv("PIXXIO_MY_DAM_API_KEY", "k1")
        settings = EnvironmentSettings(load_dotenv=False)

        options = settings.options_for("my-dam")

        assert options == {"apiEndpointUri": "https://example.pixx.io/api", "apiKey": "k1"}

    def test_explicit_value_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("PIXXIO_MY_DAM_API_KEY", "env-key")
        settings = EnvironmentSettings(load_dotenv=False)

        options = settings.options_for("my-dam", apiKey="explicit-key")

        assert options["apiKey"] == "explicit-key"

    def test_unset_options_are_left_out(self):
        settings = EnvironmentSettings(load_dotenv=False)

        assert settings.options_for("my-dam") == {}

    def test_reads_dotenv_file(self, tmp_path, dotenv_cleanup):
        dotenv_file = tmp_path / ".env"
        dotenv_file.write_text(
            "PIXXIO_DOTENV_DAM_API_ENDPOINT_URI=https://example.pixx.io/api\n"
            "PIXXIO_DOTENV_DAM_API_KEY=k1\n"
            "PIXXIO_DOTENV_DAM_SHARED_REFRESH_TOKEN=rt-shared\n"
        )

        settings = EnvironmentSettings(dotenv_path=str(dotenv_file))
        options = settings.options_for("dotenv-dam")

        assert options == {
            "apiEndpointUri": "https://example.pixx.io/api",
            "apiKey": "k1",
            "sharedRefreshToken": "rt-shared",
        }

    def test_secrets_are_masked_in_logs(self, monkeypatch, caplog):
        monkeypatch.setenv("PIXXIO_MY_DAM_API_KEY", "super-secret-key")
        settings = EnvironmentSettings(load_dotenv=False)

        with caplog.at_level("DEBUG", logger="pixxio_asset_source"):
            settings.options_for("my-dam")

        assert "super-secret-key" not in caplog.text

    def test_options_feed_asset_source(self, monkeypatch):
        monkeypatch.setenv("PIXXIO_MY_DAM_API_ENDPOINT_URI", "https://example.pixx.io/api")
        monkeypatch.setenv("PIXXIO_MY_DAM_API_KEY", "k1")

        options = EnvironmentSettings(load_dotenv=False).options_for("my-dam")
        asset_source = PixxioAssetSource.from_configuration("my-dam", options)

        assert asset_source.api_key == "k1"
