from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union


@dataclass(slots=True)
class TokenPair:
    """
    Result of a successful refresh call.

    `refresh_token` is None when the refresher did not rotate it; the
    previously stored refresh token is kept in that case.
    """
    access_token: str
    refresh_token: Optional[str] = None


@dataclass(slots=True)
class DecodedClaims:
    """
    Unverified claims read from an access token.

    Only `exp` is interpreted; everything else is kept as-is in `claims`.
    """
    exp: int
    claims: Mapping[str, Any] = field(default_factory=dict)

    def is_expired(self, now: float, leeway: float = 0.0) -> bool:
        return self.exp < now + leeway


# ---- Refresh state -------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Idle:
    """No refresh call is in flight."""


@dataclass(frozen=True, slots=True)
class Running:
    """A refresh call is in flight; every caller shares `task`."""
    task: "asyncio.Task[str]"


RefreshState = Union[Idle, Running]

IDLE = Idle()
