from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

import httpx

from ..token_store import TokenStore
from ...domain.entities import IDLE, RefreshState, Running, TokenPair
from ...domain.exceptions import (
    ConfigurationError,
    RefreshTokenRejectedError,
    TokenRefreshError,
)
from ...domain.ports import RefresherStrategy

logger = logging.getLogger(__name__)


def _log_unretrieved_failure(task: "asyncio.Task[str]") -> None:
    # every waiter may have been cancelled; collect the outcome anyway
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Refresh task settled with %r", task.exception())


class RefreshCoordinator:
    """
    Single-flight renewal of the access token.

    - at most one POST to the refresher endpoint is in flight
    - every caller that shows up while it runs awaits the same task and
      gets the same token (or the same exception)
    - the state goes back to Idle as soon as the task settles, so a
      failure is never cached and the next caller starts a new attempt

    The refresher call goes through its own `httpx.AsyncClient`, never
    through the managed client, so it is not subject to the auth flow.
    """

    def __init__(
        self,
        *,
        store: TokenStore,
        refresher_url: httpx.URL | str | None,
        strategy: RefresherStrategy,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
        verify_ssl: bool = True,
    ) -> None:
        if not refresher_url or not str(refresher_url).strip():
            raise ConfigurationError("access_token_refresher_endpoint must be provided")

        self._store = store
        self._refresher_url = httpx.URL(str(refresher_url))
        self._strategy = strategy
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(verify=verify_ssl, timeout=timeout)
        self._state: RefreshState = IDLE

    @property
    def refresher_url(self) -> httpx.URL:
        return self._refresher_url

    @property
    def state(self) -> RefreshState:
        return self._state

    @property
    def is_refreshing(self) -> bool:
        return isinstance(self._state, Running)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------ #
    # public API
    # ------------------------------------------------------------------ #

    async def obtain_fresh_access_token(self) -> str:
        """
        Return a freshly issued access token, joining an in-flight refresh
        if there is one.

        Raises:
            TokenRefreshError
            RefreshTokenRejectedError
        """
        state = self._state
        if isinstance(state, Running):
            logger.debug("Refresh already in flight, waiting for it")
            task = state.task
        else:
            # no await between the check above and this assignment
            task = asyncio.get_running_loop().create_task(self._refresh())
            task.add_done_callback(_log_unretrieved_failure)
            self._state = Running(task)

        # a cancelled waiter must not cancel the refresh the others share
        return await asyncio.shield(task)

    # ------------------------------------------------------------------ #
    # refresh task
    # ------------------------------------------------------------------ #

    async def _refresh(self) -> str:
        try:
            refresh_token = self._store.refresh_token
            try:
                pair = await self._request_token_pair(refresh_token)
            except TokenRefreshError as exc:
                logger.warning("Access token refresh failed: %s", exc)
                self._store.clear()
                raise
            except Exception as exc:
                logger.warning("Access token refresh failed: %s", exc)
                self._store.clear()
                raise TokenRefreshError(
                    f"Something went wrong while refreshing access token: {exc}"
                ) from exc

            self._store.save(pair)
            logger.info(
                "Access token refreshed (refresh token %s)",
                "rotated" if pair.refresh_token else "kept",
            )
            return pair.access_token
        finally:
            self._state = IDLE

    async def _request_token_pair(self, refresh_token: str) -> TokenPair:
        payload = self._strategy.build_payload(refresh_token)
        response = await self._client.post(self._refresher_url, json=payload)

        if response.status_code == 401:
            raise RefreshTokenRejectedError(
                "Refresh token was rejected by the refresher endpoint",
                response=response,
            )
        if response.status_code != 200:
            raise TokenRefreshError(
                f"Unable to obtain new access token: {response.status_code} {response.reason_phrase}",
                response=response,
            )

        body: Mapping[str, Any] = response.json()
        access_token = self._strategy.extract_access_token(body)
        if not isinstance(access_token, str) or not access_token:
            raise TokenRefreshError(
                f"Refresher response did not contain an access token string (got {type(access_token).__name__})",
                response=response,
            )

        refresh_token = self._strategy.extract_refresh_token(body) or None
        if refresh_token is not None and not isinstance(refresh_token, str):
            raise TokenRefreshError(
                f"Refresher response held a non-string refresh token ({type(refresh_token).__name__})",
                response=response,
            )

        return TokenPair(access_token=access_token, refresh_token=refresh_token)
