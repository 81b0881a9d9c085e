"""Pytest configuration and shared fixtures for pixxio-asset-source tests."""

import pytest

from pixxio_asset_source.auth import InMemoryClientSecretRepository
from pixxio_asset_source.testing import RecordingAuthenticator, RecordingClientFactory


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear pixx.io environment variables before each test.

    This prevents test pollution when testing settings resolution.
    """
    import os

    for key in list(os.environ.keys()):
        if key.startswith("PIXXIO_"):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def options():
    """Valid options for a pixx.io asset source with a shared refresh token."""
    return {
        "apiEndpointUri": "https://example.pixx.io/api",
        "apiKey": "k1",
        "sharedRefreshToken": "rt-shared",
    }


@pytest.fixture
def secret_repository():
    return InMemoryClientSecretRepository()


@pytest.fixture
def client_factory():
    return RecordingClientFactory()


@pytest.fixture
def authenticator():
    return RecordingAuthenticator()
