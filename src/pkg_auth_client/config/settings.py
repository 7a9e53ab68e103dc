from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx

from ..application.strategies import (
    AccessTokenGetter,
    DefaultRefresherStrategy,
    PayloadGenerator,
    RefreshTokenGetter,
)
from ..domain.constants import StorageBackend
from ..domain.exceptions import ConfigurationError
from ..domain.value_objects import AuthorizationScheme, StorageKey

DEFAULT_LOCAL_STORAGE_PATH = os.path.join("~", ".pkg_auth_client", "tokens.json")


def _storage_backend(value: StorageBackend | str, field_name: str) -> StorageBackend:
    if isinstance(value, StorageBackend):
        return value
    try:
        return StorageBackend(value)
    except ValueError as exc:
        allowed = ", ".join(b.value for b in StorageBackend)
        raise ConfigurationError(f"{field_name} must be one of {allowed}, got {value!r}") from exc


@dataclass(slots=True)
class TokenClientSettings:
    """
    Managed client settings.

    Host code decides how to construct this (env, config file, etc.).
    Storage kinds accept either the enum or its string value
    ("localStorage", "sessionStorage", "cookie").
    """
    base_url: str
    access_token_refresher_endpoint: str
    access_token_storage: StorageBackend
    refresh_token_storage: StorageBackend
    access_token_storage_key: str
    refresh_token_storage_key: str

    is_bearer: bool = False
    token_refresher_payload_generator: Optional[PayloadGenerator] = None
    access_token_getter: Optional[AccessTokenGetter] = None
    refresh_token_getter: Optional[RefreshTokenGetter] = None

    expiry_leeway_seconds: float = 0.0
    refresher_timeout_seconds: float = 30.0
    verify_ssl: bool = True
    local_storage_path: str = DEFAULT_LOCAL_STORAGE_PATH

    def __post_init__(self) -> None:
        missing = [
            name
            for name in (
                "base_url",
                "access_token_refresher_endpoint",
                "access_token_storage_key",
                "refresh_token_storage_key",
            )
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ConfigurationError(f"Missing token client settings: {', '.join(missing)}")

        self.access_token_storage = _storage_backend(self.access_token_storage, "access_token_storage")
        self.refresh_token_storage = _storage_backend(self.refresh_token_storage, "refresh_token_storage")

    @property
    def refresher_url(self) -> httpx.URL:
        """Absolute endpoints are used as-is, relative ones hang off base_url."""
        endpoint = httpx.URL(self.access_token_refresher_endpoint.strip())
        if endpoint.is_absolute_url:
            return endpoint
        base = self.base_url.strip().rstrip("/")
        return httpx.URL(f"{base}/{self.access_token_refresher_endpoint.strip().lstrip('/')}")

    @property
    def access_key(self) -> StorageKey:
        return StorageKey(self.access_token_storage, self.access_token_storage_key)

    @property
    def refresh_key(self) -> StorageKey:
        return StorageKey(self.refresh_token_storage, self.refresh_token_storage_key)

    @property
    def authorization_scheme(self) -> AuthorizationScheme:
        return AuthorizationScheme(is_bearer=self.is_bearer)

    def refresher_strategy(self) -> DefaultRefresherStrategy:
        return DefaultRefresherStrategy(
            payload_generator=self.token_refresher_payload_generator,
            access_token_getter=self.access_token_getter,
            refresh_token_getter=self.refresh_token_getter,
        )
