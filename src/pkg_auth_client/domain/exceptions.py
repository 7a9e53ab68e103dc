from __future__ import annotations

from typing import Optional

import httpx


class AuthClientError(Exception):
    """Base class for every error raised by pkg_auth_client."""
    pass


class ConfigurationError(AuthClientError):
    """Raised when settings are missing or invalid."""
    pass


class TokenDecodeError(AuthClientError):
    """Raised when an access token has no readable expiry claim."""
    pass


class TokenRefreshError(AuthClientError):
    """Raised when the refresher endpoint could not issue a new access token."""

    def __init__(self, message: str, response: Optional[httpx.Response] = None) -> None:
        super().__init__(message)
        self.response = response


class RefreshTokenRejectedError(TokenRefreshError):
    """Raised when the refresher endpoint answers 401; the token pair is gone."""
    pass
