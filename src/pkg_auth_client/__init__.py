"""
pkg_auth_client

OAuth2 access-token lifecycle for httpx: attach the current token to
every request, refresh it before it expires or after a 401, and never run
more than one refresh call at a time.
"""

__version__ = "0.1.0"

from .domain.constants import StorageBackend
from .domain.entities import TokenPair, DecodedClaims, Idle, Running, RefreshState
from .domain.exceptions import (
    AuthClientError,
    ConfigurationError,
    TokenDecodeError,
    TokenRefreshError,
    RefreshTokenRejectedError,
)
from .domain.value_objects import StorageKey, AuthorizationScheme
from .domain.ports import KeyValueBackend, ClaimDecoder, RefresherStrategy

from .application.token_store import TokenStore
from .application.strategies import DefaultRefresherStrategy
from .application.use_cases.refresh_coordinator import RefreshCoordinator
from .application.use_cases.request_gate import RequestGate
from .application.use_cases.response_recovery import ResponseRecovery

from .adapters.storage.memory import InMemoryBackend
from .adapters.storage.file import JsonFileBackend
from .adapters.storage.cookie import CookieJarBackend
from .adapters.jwt.claims_decoder import UnverifiedClaimDecoder

from .config.settings import TokenClientSettings
from .config.env import settings_from_env
from .integrations.httpx.auth import RefreshingTokenAuth
from .integrations.common.client_factory import TokenClient, create_token_client

__all__ = [
    "__version__",
    # domain core
    "StorageBackend",
    "StorageKey",
    "AuthorizationScheme",
    "TokenPair",
    "DecodedClaims",
    "RefreshState",
    "Idle",
    "Running",
    "KeyValueBackend",
    "ClaimDecoder",
    "RefresherStrategy",
    # exceptions
    "AuthClientError",
    "ConfigurationError",
    "TokenDecodeError",
    "TokenRefreshError",
    "RefreshTokenRejectedError",
    # use cases
    "TokenStore",
    "DefaultRefresherStrategy",
    "RefreshCoordinator",
    "RequestGate",
    "ResponseRecovery",
    # adapters
    "InMemoryBackend",
    "JsonFileBackend",
    "CookieJarBackend",
    "UnverifiedClaimDecoder",
    # config + integrations
    "TokenClientSettings",
    "settings_from_env",
    "RefreshingTokenAuth",
    "TokenClient",
    "create_token_client",
]
