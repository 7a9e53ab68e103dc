from enum import Enum


class StorageBackend(Enum):
    LOCAL_STORAGE = "localStorage"
    SESSION_STORAGE = "sessionStorage"
    COOKIE = "cookie"


AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer"

DEFAULT_REFRESH_PAYLOAD_FIELD = "token"
DEFAULT_ACCESS_TOKEN_FIELD = "accessToken"
DEFAULT_REFRESH_TOKEN_FIELD = "refreshToken"
