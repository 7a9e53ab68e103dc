# src/pkg_auth_client/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass

from .constants import BEARER_PREFIX, StorageBackend


# --- Storage value objects -----------------------------------------------


@dataclass(frozen=True, slots=True)
class StorageKey:
    """
    Where a single token string lives: a backend kind plus the key inside it.
    """
    backend: StorageBackend
    key: str

    def __post_init__(self) -> None:
        if not self.key or not self.key.strip():
            raise ValueError(f"Storage key for {self.backend.value} must not be blank")

    def __str__(self) -> str:
        return f"{self.backend.value}:{self.key}"


# --- Header value objects ------------------------------------------------


@dataclass(frozen=True, slots=True)
class AuthorizationScheme:
    """
    How a token is rendered into the Authorization header.

    - is_bearer=True:  "Bearer <token>"
    - is_bearer=False: "<token>" as-is (some APIs expect the raw JWT)
    """
    is_bearer: bool = False

    def format(self, token: str) -> str:
        if self.is_bearer:
            return f"{BEARER_PREFIX} {token}"
        return token
