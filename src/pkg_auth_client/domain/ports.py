from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .entities import DecodedClaims


class KeyValueBackend(Protocol):
    """
    Port for one storage medium holding token strings.

    Implementations live in the adapters layer (memory, JSON file, cookie jar).
    Failures of the medium itself are not caught anywhere; let them raise.
    """

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        ...

    def delete(self, key: str) -> None:
        """Remove the key; a missing key is not an error."""
        ...


class ClaimDecoder(Protocol):
    """
    Port for reading the expiry claim out of an access token.

    Should:
      - NOT verify the signature (the resource server does that)
      - return the `exp` claim as seconds since epoch
    Raises:
      - TokenDecodeError
    """

    def decode(self, token: str) -> DecodedClaims:
        ...


class RefresherStrategy(Protocol):
    """
    Port describing how to talk to a particular refresher endpoint:
    what to POST and where the new tokens are in the answer.
    """

    def build_payload(self, refresh_token: str) -> Any:
        ...

    def extract_access_token(self, body: Mapping[str, Any]) -> str:
        ...

    def extract_refresh_token(self, body: Mapping[str, Any]) -> Optional[str]:
        ...
