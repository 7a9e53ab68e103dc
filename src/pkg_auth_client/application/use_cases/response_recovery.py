from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from .refresh_coordinator import RefreshCoordinator
from ..token_store import TokenStore
from ...domain.exceptions import RefreshTokenRejectedError

logger = logging.getLogger(__name__)


def _endpoint(url: httpx.URL) -> tuple:
    return url.scheme, url.host, url.port, url.path


@dataclass(slots=True)
class ResponseRecovery:
    """
    Application use case, run on every response of the managed client.

    Outcomes:
      - anything but 401              -> pass through (no retry)
      - 401 from the refresher itself -> clear tokens, raise (terminal)
      - 401 from any other endpoint   -> refresh, re-authorize, retry once

    `authorize` writes a token into a request (normally `RequestGate.authorize`).
    """

    store: TokenStore
    coordinator: RefreshCoordinator
    authorize: Callable[[httpx.Request, str], None]

    def is_refresher_request(self, request: httpx.Request) -> bool:
        return _endpoint(request.url) == _endpoint(self.coordinator.refresher_url)

    async def recover(
        self,
        request: httpx.Request,
        response: httpx.Response,
    ) -> Optional[httpx.Request]:
        """
        Return the request to resubmit, or None to hand `response` back.

        Raises:
            RefreshTokenRejectedError (401 from the refresher endpoint)
            TokenRefreshError (the recovery refresh itself failed)
        """
        if response.status_code != 401:
            return None

        if self.is_refresher_request(request):
            logger.warning("Refresher endpoint answered 401, clearing stored tokens")
            self.store.clear()
            raise RefreshTokenRejectedError(
                "Refresh token was rejected by the refresher endpoint",
                response=response,
            )

        logger.debug("%s %s answered 401, refreshing and retrying once", request.method, request.url)
        token = await self.coordinator.obtain_fresh_access_token()
        self.authorize(request, token)
        return request
