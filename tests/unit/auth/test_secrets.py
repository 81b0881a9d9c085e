"""Tests for client secrets and the in-memory repository."""

from pixxio_asset_source.auth import ClientSecret, ClientSecretRepository, InMemoryClientSecretRepository


def test_empty_refresh_token_is_not_usable():
    assert ClientSecret("editor", "").is_usable is False
    assert ClientSecret("editor", "rt").is_usable is True


def test_repr_masks_refresh_token():
    assert "rt-secret" not in repr(ClientSecret("editor", "rt-secret"))


def test_find_by_principal_returns_none_when_missing():
    repository = InMemoryClientSecretRepository()

    assert repository.find_by_principal("editor") is None


def test_add_replaces_secret_of_same_principal():
    repository = InMemoryClientSecretRepository([ClientSecret("editor", "rt-1")])

    repository.add(ClientSecret("editor", "rt-2"))

    assert repository.find_by_principal("editor") == ClientSecret("editor", "rt-2")


def test_remove():
    repository = InMemoryClientSecretRepository([ClientSecret("editor", "rt-1")])

    repository.remove("editor")
    repository.remove("unknown")

    assert repository.find_by_principal("editor") is None


def test_satisfies_protocol():
    assert isinstance(InMemoryClientSecretRepository(), ClientSecretRepository)
