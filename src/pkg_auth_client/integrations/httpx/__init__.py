from .auth import RefreshingTokenAuth

__all__ = ["RefreshingTokenAuth"]
