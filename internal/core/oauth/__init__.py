from .oauth_entity import OAuthProviderEntity
from .oauth_manager import OAuthManager

__all__ = ["OAuthProviderEntity", "OAuthManager"]
