from .env import settings_from_env
from .settings import TokenClientSettings

__all__ = ["TokenClientSettings", "settings_from_env"]
