from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

import httpx

from ..httpx.auth import RefreshingTokenAuth
from ...adapters.jwt.claims_decoder import UnverifiedClaimDecoder
from ...adapters.storage.cookie import CookieJarBackend
from ...adapters.storage.file import JsonFileBackend
from ...adapters.storage.memory import InMemoryBackend
from ...application.token_store import TokenStore
from ...application.use_cases.refresh_coordinator import RefreshCoordinator
from ...application.use_cases.request_gate import RequestGate
from ...application.use_cases.response_recovery import ResponseRecovery
from ...config.settings import TokenClientSettings
from ...domain.constants import AUTHORIZATION_HEADER, StorageBackend
from ...domain.ports import ClaimDecoder, KeyValueBackend

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class TokenClient:
    """
    Managed HTTP client facade.

    `http` is a regular httpx.AsyncClient: use it as usual, every request
    goes through RequestGate and every response through ResponseRecovery.
    """

    http: httpx.AsyncClient
    store: TokenStore
    coordinator: RefreshCoordinator
    gate: RequestGate
    recovery: ResponseRecovery

    # --- Core operations --------------------------------------------------

    def clear_tokens(self) -> None:
        """Forget both tokens (e.g. on logout)."""
        self.store.clear()

    async def refresh_access_token(self) -> str:
        """Force a refresh now, sharing any refresh already in flight."""
        return await self.coordinator.obtain_fresh_access_token()

    async def aclose(self) -> None:
        await self.http.aclose()
        await self.coordinator.close()

    async def __aenter__(self) -> "TokenClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


def build_backends(
        settings: TokenClientSettings,
        cookies: httpx.Cookies,
) -> dict[StorageBackend, KeyValueBackend]:
    """Default backend for each storage kind."""
    return {
        StorageBackend.LOCAL_STORAGE: JsonFileBackend(settings.local_storage_path),
        StorageBackend.SESSION_STORAGE: InMemoryBackend(),
        StorageBackend.COOKIE: CookieJarBackend(cookies, domain=httpx.URL(settings.base_url).host),
    }


def create_token_client(
        settings: TokenClientSettings,
        *,
        backends: Optional[Mapping[StorageBackend, KeyValueBackend]] = None,
        decoder: Optional[ClaimDecoder] = None,
        refresher_client: Optional[httpx.AsyncClient] = None,
        clock: Optional[Callable[[], float]] = None,
        **client_kwargs,
) -> TokenClient:
    """
    High-level factory: TokenClientSettings -> TokenClient.

    - builds the storage backends (or uses the given ones)
    - wires TokenStore, RefreshCoordinator, RequestGate, ResponseRecovery
    - returns an httpx.AsyncClient with the auth flow installed

    Extra keyword arguments go straight to httpx.AsyncClient.
    """
    http = httpx.AsyncClient(
        base_url=settings.base_url,
        verify=settings.verify_ssl,
        **client_kwargs,
    )

    store = TokenStore(
        backends=backends if backends is not None else build_backends(settings, http.cookies),
        access_key=settings.access_key,
        refresh_key=settings.refresh_key,
    )

    coordinator = RefreshCoordinator(
        store=store,
        refresher_url=settings.refresher_url,
        strategy=settings.refresher_strategy(),
        client=refresher_client,
        timeout=settings.refresher_timeout_seconds,
        verify_ssl=settings.verify_ssl,
    )

    gate_kwargs = {"clock": clock} if clock is not None else {}
    gate = RequestGate(
        store=store,
        decoder=decoder or UnverifiedClaimDecoder(),
        coordinator=coordinator,
        scheme=settings.authorization_scheme,
        expiry_leeway=settings.expiry_leeway_seconds,
        **gate_kwargs,
    )
    recovery = ResponseRecovery(
        store=store,
        coordinator=coordinator,
        authorize=gate.authorize,
    )

    http.auth = RefreshingTokenAuth(gate, recovery)

    # default header until the first request overwrites it
    initial_token = store.access_token
    if initial_token:
        http.headers[AUTHORIZATION_HEADER] = settings.authorization_scheme.format(initial_token)

    logger.debug("Created token client for %s (refresher %s)", settings.base_url, settings.refresher_url)

    return TokenClient(
        http=http,
        store=store,
        coordinator=coordinator,
        gate=gate,
        recovery=recovery,
    )
