from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from ..domain.constants import (
    DEFAULT_ACCESS_TOKEN_FIELD,
    DEFAULT_REFRESH_PAYLOAD_FIELD,
    DEFAULT_REFRESH_TOKEN_FIELD,
)
from ..domain.ports import RefresherStrategy

PayloadGenerator = Callable[[str], Any]
AccessTokenGetter = Callable[[Mapping[str, Any]], str]
RefreshTokenGetter = Callable[[Mapping[str, Any]], Optional[str]]


@dataclass(slots=True)
class DefaultRefresherStrategy(RefresherStrategy):
    """
    Refresher contract used unless overridden:

      request:  {"token": <refresh token>}
      response: {"accessToken": "...", "refreshToken": "..."}  (refreshToken optional)

    Any of the three steps can be swapped by passing a callable.
    """

    payload_generator: Optional[PayloadGenerator] = None
    access_token_getter: Optional[AccessTokenGetter] = None
    refresh_token_getter: Optional[RefreshTokenGetter] = None

    def build_payload(self, refresh_token: str) -> Any:
        if self.payload_generator is not None:
            return self.payload_generator(refresh_token)
        return {DEFAULT_REFRESH_PAYLOAD_FIELD: refresh_token}

    def extract_access_token(self, body: Mapping[str, Any]) -> str:
        if self.access_token_getter is not None:
            return self.access_token_getter(body)
        return body[DEFAULT_ACCESS_TOKEN_FIELD]

    def extract_refresh_token(self, body: Mapping[str, Any]) -> Optional[str]:
        if self.refresh_token_getter is not None:
            return self.refresh_token_getter(body)
        return body.get(DEFAULT_REFRESH_TOKEN_FIELD)
