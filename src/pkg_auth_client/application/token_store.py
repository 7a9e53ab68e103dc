from __future__ import annotations

import logging
from typing import Mapping

from ..domain.constants import StorageBackend
from ..domain.entities import TokenPair
from ..domain.exceptions import ConfigurationError
from ..domain.ports import KeyValueBackend
from ..domain.value_objects import StorageKey

logger = logging.getLogger(__name__)


class TokenStore:
    """
    Reads and writes the access/refresh token strings.

    Each token lives under its own StorageKey, so the access token can sit
    in memory while the refresh token is persisted to disk, or the other
    way round. Absent values read as "" - there is no difference between
    "no token" and "empty token".
    """

    def __init__(
        self,
        *,
        backends: Mapping[StorageBackend, KeyValueBackend],
        access_key: StorageKey,
        refresh_key: StorageKey,
    ) -> None:
        for key in (access_key, refresh_key):
            if key.backend not in backends:
                raise ConfigurationError(
                    f"No storage backend registered for {key.backend.value!r} (key {key.key!r})"
                )

        self._backends = dict(backends)
        self.access_key = access_key
        self.refresh_key = refresh_key

    # ------------------------------------------------------------------ #
    # get / set / clear-pair
    # ------------------------------------------------------------------ #

    def get(self, backend: StorageBackend, key: str) -> str:
        return self._backend(backend).get(key) or ""

    def set(self, backend: StorageBackend, key: str, value: str) -> None:
        self._backend(backend).set(key, value)

    def clear(self) -> None:
        """Remove both the access and the refresh token."""
        for key in (self.access_key, self.refresh_key):
            self._backend(key.backend).delete(key.key)
        logger.debug("Cleared stored tokens (%s, %s)", self.access_key, self.refresh_key)

    # ------------------------------------------------------------------ #
    # Pair helpers
    # ------------------------------------------------------------------ #

    @property
    def access_token(self) -> str:
        return self.get(self.access_key.backend, self.access_key.key)

    @property
    def refresh_token(self) -> str:
        return self.get(self.refresh_key.backend, self.refresh_key.key)

    def save(self, pair: TokenPair) -> None:
        self.set(self.access_key.backend, self.access_key.key, pair.access_token)
        if pair.refresh_token:
            self.set(self.refresh_key.backend, self.refresh_key.key, pair.refresh_token)

    def seed(self, access_token: str, refresh_token: str) -> None:
        """Store the pair obtained from a login flow that happened elsewhere."""
        self.save(TokenPair(access_token=access_token, refresh_token=refresh_token))

    def _backend(self, backend: StorageBackend) -> KeyValueBackend:
        try:
            return self._backends[backend]
        except KeyError as exc:
            raise ConfigurationError(f"No storage backend registered for {backend.value!r}") from exc
