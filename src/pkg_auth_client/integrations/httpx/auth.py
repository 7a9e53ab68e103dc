from __future__ import annotations

from typing import AsyncGenerator, Generator

import httpx

from ...application.use_cases.request_gate import RequestGate
from ...application.use_cases.response_recovery import ResponseRecovery


class RefreshingTokenAuth(httpx.Auth):
    """
    httpx integration for pkg_auth_client.

    Plugs RequestGate (before sending) and ResponseRecovery (after the
    response) into httpx's auth flow. The flow yields the request at most
    twice, so a resubmitted request is never recovered again: a second
    401 reaches the caller as-is.
    """

    requires_request_body = True

    def __init__(self, gate: RequestGate, recovery: ResponseRecovery) -> None:
        self.gate = gate
        self.recovery = recovery

    def sync_auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        raise RuntimeError("RefreshingTokenAuth only works with httpx.AsyncClient")

    async def async_auth_flow(
            self,
            request: httpx.Request,
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        await self.gate.prepare(request)
        response = yield request

        retry = await self.recovery.recover(request, response)
        if retry is not None:
            yield retry
