from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

import httpx

from .refresh_coordinator import RefreshCoordinator
from ..token_store import TokenStore
from ...domain.constants import AUTHORIZATION_HEADER
from ...domain.exceptions import TokenDecodeError
from ...domain.ports import ClaimDecoder
from ...domain.value_objects import AuthorizationScheme

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RequestGate:
    """
    Application use case, run once per outgoing request:

    - attach the stored access token
    - if it is already expired (or unreadable), wait for a refresh and
      attach the new token instead

    A request never leaves with a token we already know is dead, whatever
    the clock skew with the resource server.
    """

    store: TokenStore
    decoder: ClaimDecoder
    coordinator: RefreshCoordinator
    scheme: AuthorizationScheme = field(default_factory=AuthorizationScheme)
    expiry_leeway: float = 0.0
    clock: Callable[[], float] = time.time

    async def prepare(self, request: httpx.Request) -> httpx.Request:
        """
        Raises:
            TokenRefreshError when a needed refresh fails; the request
            keeps the stale header it was given first.
        """
        token = self.store.access_token
        self.authorize(request, token)

        if self.is_expired(token):
            logger.debug("Access token expired, refreshing before %s %s", request.method, request.url)
            token = await self.coordinator.obtain_fresh_access_token()
            self.authorize(request, token)

        return request

    def authorize(self, request: httpx.Request, token: str) -> None:
        request.headers[AUTHORIZATION_HEADER] = self.scheme.format(token)

    def is_expired(self, token: str) -> bool:
        try:
            claims = self.decoder.decode(token)
        except TokenDecodeError as exc:
            # unreadable tokens are refreshed rather than sent
            logger.debug("Treating access token as expired: %s", exc)
            return True
        return claims.is_expired(self.clock(), self.expiry_leeway)
