# tests/test_domain.py
import pytest

from pkg_auth_client.config.settings import TokenClientSettings
from pkg_auth_client.domain.constants import StorageBackend
from pkg_auth_client.domain.entities import DecodedClaims, IDLE, Idle, TokenPair
from pkg_auth_client.domain.exceptions import (
    AuthClientError,
    ConfigurationError,
    RefreshTokenRejectedError,
    TokenRefreshError,
)
from pkg_auth_client.domain.value_objects import AuthorizationScheme, StorageKey


def _settings(**overrides) -> TokenClientSettings:
    values = dict(
        base_url="https://api.example.com/v1/",
        access_token_refresher_endpoint="/auth/refresh",
        access_token_storage="sessionStorage",
        refresh_token_storage="cookie",
        access_token_storage_key="at",
        refresh_token_storage_key="rt",
    )
    values.update(overrides)
    return TokenClientSettings(**values)


def test_storage_backend_values():
    assert StorageBackend("localStorage") is StorageBackend.LOCAL_STORAGE
    assert StorageBackend("sessionStorage") is StorageBackend.SESSION_STORAGE
    assert StorageBackend("cookie") is StorageBackend.COOKIE


def test_storage_key():
    key = StorageKey(StorageBackend.COOKIE, "rt")
    assert str(key) == "cookie:rt"

    with pytest.raises(ValueError):
        StorageKey(StorageBackend.COOKIE, "  ")


def test_authorization_scheme():
    assert AuthorizationScheme(is_bearer=True).format("abc") == "Bearer abc"
    assert AuthorizationScheme().format("abc") == "abc"


def test_decoded_claims_expiry():
    claims = DecodedClaims(exp=1000)
    # still valid during its last second, as in the original client
    assert not claims.is_expired(now=1000)
    assert claims.is_expired(now=1000.5)
    assert claims.is_expired(now=1001)
    assert not claims.is_expired(now=999)
    # leeway refreshes slightly early
    assert claims.is_expired(now=990, leeway=30)


def test_token_pair_defaults():
    pair = TokenPair(access_token="a")
    assert pair.refresh_token is None
    assert isinstance(IDLE, Idle)


def test_exception_hierarchy():
    assert issubclass(RefreshTokenRejectedError, TokenRefreshError)
    assert issubclass(TokenRefreshError, AuthClientError)
    assert issubclass(ConfigurationError, AuthClientError)
    assert TokenRefreshError("boom").response is None


def test_settings_coerce_storage_kinds():
    settings = _settings()
    assert settings.access_token_storage is StorageBackend.SESSION_STORAGE
    assert settings.refresh_key == StorageKey(StorageBackend.COOKIE, "rt")
    assert settings.authorization_scheme == AuthorizationScheme(is_bearer=False)


def test_settings_reject_unknown_storage():
    with pytest.raises(ConfigurationError, match="access_token_storage"):
        _settings(access_token_storage="indexedDB")


def test_settings_reject_missing_endpoint():
    with pytest.raises(ConfigurationError, match="access_token_refresher_endpoint"):
        _settings(access_token_refresher_endpoint="")


def test_refresher_url_relative_and_absolute():
    assert str(_settings().refresher_url) == "https://api.example.com/v1/auth/refresh"
    assert str(_settings(access_token_refresher_endpoint="auth/refresh").refresher_url) == (
        "https://api.example.com/v1/auth/refresh"
    )

    absolute = _settings(access_token_refresher_endpoint="https://sso.example.com/token")
    assert str(absolute.refresher_url) == "https://sso.example.com/token"


def test_settings_strategy_uses_callables():
    strategy = _settings(
        token_refresher_payload_generator=lambda rt: {"refresh_token": rt, "grant_type": "refresh_token"},
        access_token_getter=lambda body: body["data"]["access"],
    ).refresher_strategy()

    assert strategy.build_payload("r1") == {"refresh_token": "r1", "grant_type": "refresh_token"}
    assert strategy.extract_access_token({"data": {"access": "a1"}}) == "a1"
    assert strategy.extract_refresh_token({"refreshToken": "r2"}) == "r2"
