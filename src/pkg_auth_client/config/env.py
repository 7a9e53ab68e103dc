from __future__ import annotations

import os

from .settings import DEFAULT_LOCAL_STORAGE_PATH, TokenClientSettings
from ..domain.exceptions import ConfigurationError

ENV_PREFIX = "AUTH_CLIENT_"


def settings_from_env() -> TokenClientSettings:
    def _env(name: str) -> str | None:
        return os.getenv(ENV_PREFIX + name)

    def _bool(name: str, default: bool) -> bool:
        raw = _env(name)
        if raw is None:
            return default
        return str(raw).strip().lower() in {"1", "true", "yes", "on"}

    def _float(name: str, default: float) -> float:
        raw = _env(name)
        if raw is None or not raw.strip():
            return default
        try:
            return float(raw)
        except ValueError as exc:
            raise ConfigurationError(f"{ENV_PREFIX}{name} must be a number, got {raw!r}") from exc

    required = {
        "BASE_URL": _env("BASE_URL"),
        "REFRESHER_ENDPOINT": _env("REFRESHER_ENDPOINT"),
        "ACCESS_TOKEN_STORAGE": _env("ACCESS_TOKEN_STORAGE"),
        "REFRESH_TOKEN_STORAGE": _env("REFRESH_TOKEN_STORAGE"),
        "ACCESS_TOKEN_KEY": _env("ACCESS_TOKEN_KEY"),
        "REFRESH_TOKEN_KEY": _env("REFRESH_TOKEN_KEY"),
    }
    missing = [ENV_PREFIX + name for name, value in required.items() if not value]
    if missing:
        raise ConfigurationError(f"Missing token client settings: {', '.join(missing)}")

    return TokenClientSettings(
        base_url=required["BASE_URL"],
        access_token_refresher_endpoint=required["REFRESHER_ENDPOINT"],
        access_token_storage=required["ACCESS_TOKEN_STORAGE"],
        refresh_token_storage=required["REFRESH_TOKEN_STORAGE"],
        access_token_storage_key=required["ACCESS_TOKEN_KEY"],
        refresh_token_storage_key=required["REFRESH_TOKEN_KEY"],
        is_bearer=_bool("IS_BEARER", False),
        expiry_leeway_seconds=_float("EXPIRY_LEEWAY", 0.0),
        refresher_timeout_seconds=_float("TIMEOUT", 30.0),
        verify_ssl=_bool("VERIFY_SSL", True),
        local_storage_path=_env("LOCAL_STORAGE_PATH") or DEFAULT_LOCAL_STORAGE_PATH,
    )
