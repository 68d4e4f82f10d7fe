from .client import OAuth2Client
from .entities import (
    OAuthConfigError,
    FlowStateError,
    TokenMethod,
    ErrorKind,
    FlowState,
    ProviderConfig,
    FlowOptions,
    AuthorizationRequest,
    TokenResult,
    ProfileResult,
    Info,
    Credentials,
    Extra,
    NormalizedIdentity,
    OAuthError,
    FlowContext,
)
from .flow import OAuthFlow
from .github_oauth import GithubOAuth
from .normalizer import normalize, split_scopes
from .oauth import OAuthStrategy, OAuth2Strategy
from .wechat_oauth import WechatOAuth

__all__ = [
    "OAuth2Client",
    "OAuthConfigError",
    "FlowStateError",
    "TokenMethod",
    "ErrorKind",
    "FlowState",
    "ProviderConfig",
    "FlowOptions",
    "AuthorizationRequest",
    "TokenResult",
    "ProfileResult",
    "Info",
    "Credentials",
    "Extra",
    "NormalizedIdentity",
    "OAuthError",
    "FlowContext",
    "OAuthFlow",
    "OAuthStrategy",
    "OAuth2Strategy",
    "WechatOAuth",
    "GithubOAuth",
    "normalize",
    "split_scopes",
]
