from .http import Http

__all__ = ["Http"]
