from typing import Any, Mapping

import jwt
from jwt.exceptions import InvalidTokenError as JWTInvalidTokenError

from ...domain.entities import DecodedClaims
from ...domain.exceptions import TokenDecodeError
from ...domain.ports import ClaimDecoder


class UnverifiedClaimDecoder(ClaimDecoder):
    """
    Adapter implementing ClaimDecoder port using PyJWT.

    The signature is not checked: this runs on the client, which only
    needs to know when the token stops being worth sending.
    """

    def decode(self, token: str) -> DecodedClaims:
        """
        Read the `exp` claim of a JWT without verifying it.

        Raises:
            TokenDecodeError
        """
        if not token:
            raise TokenDecodeError("Token is empty")

        try:
            payload: Mapping[str, Any] = jwt.decode(
                token,
                options={"verify_signature": False},
            )
        except JWTInvalidTokenError as exc:
            raise TokenDecodeError(f"Invalid token: {exc}") from exc

        exp = payload.get("exp")
        # bool is an int subclass; a literal `true` is not a timestamp
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise TokenDecodeError(f"Token has no numeric exp claim (got {exp!r})")

        return DecodedClaims(exp=int(exp), claims=payload)
