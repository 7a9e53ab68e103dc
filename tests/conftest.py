# tests/conftest.py
import time

import httpx
import jwt
import pytest
import pytest_asyncio
import respx

from pkg_auth_client.adapters.storage.cookie import CookieJarBackend
from pkg_auth_client.adapters.storage.file import JsonFileBackend
from pkg_auth_client.adapters.storage.memory import InMemoryBackend
from pkg_auth_client.application.strategies import DefaultRefresherStrategy
from pkg_auth_client.application.token_store import TokenStore
from pkg_auth_client.application.use_cases.refresh_coordinator import RefreshCoordinator
from pkg_auth_client.config.settings import TokenClientSettings
from pkg_auth_client.domain.constants import StorageBackend
from pkg_auth_client.domain.value_objects import StorageKey
from pkg_auth_client.integrations.common.client_factory import create_token_client

BASE_URL = "https://api.example.com"
REFRESHER_URL = f"{BASE_URL}/token"
SIGNING_KEY = "unit-test-signing-key-that-is-long-enough-for-hs256"


def make_token(expires_in: int, **claims) -> str:
    payload = {"sub": "user-1", "exp": int(time.time()) + expires_in, **claims}
    return jwt.encode(payload, SIGNING_KEY, algorithm="HS256")


@pytest.fixture
def fresh_token() -> str:
    return make_token(3600)


@pytest.fixture
def expired_token() -> str:
    return make_token(-3600)


@pytest.fixture
def store(tmp_path) -> TokenStore:
    return TokenStore(
        backends={
            StorageBackend.SESSION_STORAGE: InMemoryBackend(),
            StorageBackend.LOCAL_STORAGE: JsonFileBackend(tmp_path / "tokens.json"),
            StorageBackend.COOKIE: CookieJarBackend(httpx.Cookies()),
        },
        access_key=StorageKey(StorageBackend.SESSION_STORAGE, "access"),
        refresh_key=StorageKey(StorageBackend.LOCAL_STORAGE, "refresh"),
    )


@pytest.fixture
def api():
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        yield router


@pytest_asyncio.fixture
async def coordinator(store):
    coordinator = RefreshCoordinator(
        store=store,
        refresher_url=REFRESHER_URL,
        strategy=DefaultRefresherStrategy(),
    )
    yield coordinator
    await coordinator.close()


@pytest.fixture
def settings(tmp_path) -> TokenClientSettings:
    return TokenClientSettings(
        base_url=BASE_URL,
        access_token_refresher_endpoint="/token",
        access_token_storage="sessionStorage",
        refresh_token_storage="localStorage",
        access_token_storage_key="access",
        refresh_token_storage_key="refresh",
        is_bearer=True,
        local_storage_path=str(tmp_path / "tokens.json"),
    )


@pytest_asyncio.fixture
async def token_client(settings):
    client = create_token_client(settings)
    yield client
    await client.aclose()
