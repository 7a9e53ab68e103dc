# tests/test_storage.py
import json

import httpx
import pytest

from pkg_auth_client.adapters.storage.cookie import CookieJarBackend
from pkg_auth_client.adapters.storage.file import JsonFileBackend
from pkg_auth_client.adapters.storage.memory import InMemoryBackend
from pkg_auth_client.application.token_store import TokenStore
from pkg_auth_client.domain.constants import StorageBackend
from pkg_auth_client.domain.entities import TokenPair
from pkg_auth_client.domain.exceptions import ConfigurationError
from pkg_auth_client.domain.value_objects import StorageKey


@pytest.mark.parametrize("backend", list(StorageBackend))
def test_round_trip_on_each_backend(store, backend):
    store.set(backend, "a-key", "a")
    store.set(backend, "r-key", "r")

    assert store.get(backend, "a-key") == "a"
    assert store.get(backend, "r-key") == "r"


@pytest.mark.parametrize("backend", list(StorageBackend))
def test_absent_value_reads_as_empty_string(store, backend):
    assert store.get(backend, "missing") == ""


def test_save_and_clear_pair(store):
    store.save(TokenPair(access_token="A1", refresh_token="R1"))
    assert store.access_token == "A1"
    assert store.refresh_token == "R1"

    store.clear()
    assert store.access_token == ""
    assert store.refresh_token == ""


def test_save_keeps_refresh_token_when_not_rotated(store):
    store.seed("A1", "R1")
    store.save(TokenPair(access_token="A2"))

    assert store.access_token == "A2"
    assert store.refresh_token == "R1"


def test_missing_backend_is_a_configuration_error():
    with pytest.raises(ConfigurationError, match="cookie"):
        TokenStore(
            backends={StorageBackend.SESSION_STORAGE: InMemoryBackend()},
            access_key=StorageKey(StorageBackend.SESSION_STORAGE, "a"),
            refresh_key=StorageKey(StorageBackend.COOKIE, "r"),
        )


def test_json_file_backend_survives_new_instance(tmp_path):
    path = tmp_path / "nested" / "tokens.json"
    JsonFileBackend(path).set("refresh", "R1")

    backend = JsonFileBackend(path)
    assert backend.get("refresh") == "R1"
    assert json.loads(path.read_text()) == {"refresh": "R1"}

    backend.delete("refresh")
    backend.delete("never-there")
    assert backend.get("refresh") is None


def test_json_file_backend_rejects_non_object(tmp_path):
    path = tmp_path / "tokens.json"
    path.write_text("[1, 2]")

    with pytest.raises(ValueError):
        JsonFileBackend(path).get("refresh")


def test_cookie_backend_uses_shared_jar():
    jar = httpx.Cookies()
    backend = CookieJarBackend(jar, domain="api.example.com")

    backend.set("access", "A1")
    assert jar.get("access", domain="api.example.com") == "A1"
    assert backend.get("access") == "A1"

    backend.delete("access")
    assert backend.get("access") is None


def test_in_memory_backend_initial_values():
    backend = InMemoryBackend({"access": "A0"})
    assert backend.get("access") == "A0"
    backend.delete("access")
    assert backend.get("access") is None


def test_cookie_backend_ignores_same_name_on_other_path():
    jar = httpx.Cookies()
    backend = CookieJarBackend(jar, domain="api.example.com")
    backend.set("access", "A1")
    jar.set("access", "srv", domain="api.example.com", path="/api")

    assert backend.get("access") == "A1"

    backend.delete("access")
    assert backend.get("access") is None
    assert jar.get("access", domain="api.example.com", path="/api") == "srv"
    # deleting an absent key stays a no-op
    backend.delete("access")
