#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@Time    : 2024/9/12 10:21
@Author  : thezehui@gmail.com
@File    : entities.py
"""
import urllib.parse
from dataclasses import dataclass, field
from enum import Enum

from typing_extensions import Any, Optional


class OAuthConfigError(ValueError):
    """OAuth配置错误，在应用启动构建提供商时抛出"""
    pass


class FlowStateError(RuntimeError):
    """授权流程状态机出现非法跳转时抛出，属于程序错误"""
    pass


class TokenMethod(str, Enum):
    """获取授权令牌使用的请求方法"""
    GET = "get"
    POST = "post"


class ErrorKind(str, Enum):
    """授权流程错误类型"""
    MISSING_CODE = "missing_code"  # 回调中未携带code
    PROVIDER_ERROR = "provider_error"  # 提供商返回了明确的错误码
    UNAUTHORIZED = "unauthorized"  # 获取用户信息时令牌无效
    TRANSPORT = "transport"  # 网络或状态码异常
    CONFIG_ERROR = "config_error"  # 配置错误


class FlowState(str, Enum):
    """单次请求内的授权流程状态"""
    IDLE = "idle"
    AWAITING_CALLBACK = "awaiting_callback"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class ProviderConfig:
    """提供商凭证与端点配置，进程内只读共享"""
    client_id: str
    client_secret: str
    site: str  # api基础地址，相对路径的端点基于该地址拼接
    authorize_url: str
    token_url: str
    userinfo_url: str
    token_method: TokenMethod = TokenMethod.POST
    refresh_url: str = ""
    subject_field: str = "openid"  # 令牌响应中标识用户的字段

    def __post_init__(self):
        if not self.client_id:
            raise OAuthConfigError("OAuth配置缺少client_id")
        if not self.client_secret:
            raise OAuthConfigError("OAuth配置缺少client_secret")
        object.__setattr__(self, "token_method", TokenMethod(self.token_method))

    def resolve(self, url: str) -> str:
        """将相对端点拼接成完整地址"""
        if url.startswith("http://") or url.startswith("https://"):
            return url
        return self.site.rstrip("/") + "/" + url.lstrip("/")


@dataclass(frozen=True)
class FlowOptions:
    """授权流程可选项"""
    default_scope: str
    uid_field: str
    redirect_uri: str = ""  # 为空时由宿主根据回调路由计算


@dataclass
class AuthorizationRequest:
    """跳转授权页时的请求参数"""
    scope: str
    redirect_uri: str
    state: Optional[str] = None

    def to_params(self) -> dict[str, str]:
        params = {"redirect_uri": self.redirect_uri, "scope": self.scope}
        if self.state is not None:
            params["state"] = self.state
        return params


@dataclass
class TokenResult:
    """授权令牌，access_token为空代表获取失败，错误信息保存在raw_params中"""
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_type: Optional[str] = None
    expires_at: Optional[int] = None
    provider_subject_id: str = ""
    raw_params: dict[str, Any] = field(default_factory=dict)


@dataclass
class ProfileResult:
    """提供商返回的原始用户信息"""
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass
class Info:
    name: Optional[str] = None
    nickname: Optional[str] = None
    image: Optional[str] = None
    location: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    urls: dict[str, str] = field(default_factory=dict)


@dataclass
class Credentials:
    token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    token_type: Optional[str] = None
    expires: bool = False
    scopes: list[str] = field(default_factory=list)


@dataclass
class Extra:
    raw_token: TokenResult
    raw_profile: ProfileResult


@dataclass
class NormalizedIdentity:
    """标准化后的第三方身份信息，交给宿主使用"""
    provider: str
    uid: str
    info: Info
    credentials: Credentials
    extra: Extra


@dataclass
class OAuthError:
    """授权流程中的错误值，不作为异常抛出"""
    kind: ErrorKind
    code: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


@dataclass
class FlowContext:
    """单次请求的授权流程上下文，贯穿request/callback/cleanup三个阶段，请求结束后丢弃"""
    params: dict[str, Any] = field(default_factory=dict)
    redirect_uri: str = ""
    state: FlowState = FlowState.IDLE
    redirect_url: Optional[str] = None
    token: Optional[TokenResult] = None
    profile: Optional[ProfileResult] = None
    identity: Optional[NormalizedIdentity] = None
    errors: list[OAuthError] = field(default_factory=list)

    @classmethod
    def for_callback(cls, params: dict[str, Any], redirect_uri: str) -> "FlowContext":
        """回调请求由新的上下文承接，直接处于等待回调状态"""
        return cls(params=params, redirect_uri=redirect_uri, state=FlowState.AWAITING_CALLBACK)

    @property
    def failed(self) -> bool:
        return len(self.errors) > 0


def append_query(url: str, params: dict[str, Any]) -> str:
    """在已有地址上追加查询参数"""
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urllib.parse.urlencode(params)}"
