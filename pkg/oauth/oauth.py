from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, Union

from typing_extensions import Any, Optional

from .client import OAuth2Client
from .entities import (
    ProviderConfig,
    FlowOptions,
    FlowContext,
    AuthorizationRequest,
    TokenResult,
    ProfileResult,
    OAuthError,
    ErrorKind,
    OAuthConfigError,
)
from .normalizer import normalize


class OAuthStrategy(ABC):
    """第三方授权认证策略接口，每个提供商通过实现request/callback/cleanup三个生命周期方法接入"""

    @abstractmethod
    def get_provider(self) -> str:
        """获取服务提供者对应的名字"""
        pass

    @abstractmethod
    def handle_request(self, ctx: FlowContext) -> None:
        """请求阶段，构建跳转授权页的地址并写入ctx.redirect_url"""
        pass

    @abstractmethod
    def handle_callback(self, ctx: FlowContext) -> None:
        """回调阶段，成功时写入ctx.identity，失败时追加ctx.errors"""
        pass

    @abstractmethod
    def handle_cleanup(self, ctx: FlowContext) -> None:
        """清理阶段，丢弃本次请求的令牌与用户信息"""
        pass


@dataclass
class OAuth2Strategy(OAuthStrategy):
    """授权码模式的通用策略，提供商只需声明端点、uid字段集合与信息映射"""
    config: ProviderConfig
    options: FlowOptions
    client: Optional[OAuth2Client] = None

    # 允许作为uid的用户信息字段，启动时校验uid_field
    uid_fields: ClassVar[tuple[str, ...]] = ()
    # Info属性名 -> 用户信息字段名
    info_fields: ClassVar[dict[str, str]] = {}

    def __post_init__(self):
        if self.options.uid_field not in self.uid_fields:
            raise OAuthConfigError(
                f"{self.get_provider()}不支持的uid_field: {self.options.uid_field}, 可选值: {', '.join(self.uid_fields)}"
            )
        if self.client is None:
            self.client = OAuth2Client(config=self.config)

    @abstractmethod
    def profile_request(self, token: TokenResult) -> tuple[dict[str, Any], dict[str, str]]:
        """根据令牌返回获取用户信息时的查询参数与请求头"""
        pass

    def profile_error(self, fields: dict[str, Any]) -> Optional[OAuthError]:
        """检测用户信息响应体中携带的业务错误，默认不检测"""
        return None

    def build_authorization_request(self, params: dict[str, Any], redirect_uri: str) -> AuthorizationRequest:
        """根据请求参数构建授权请求，未传递scope时使用默认scope"""
        return AuthorizationRequest(
            scope=params.get("scope") or self.options.default_scope,
            redirect_uri=self.options.redirect_uri or redirect_uri,
            state=params.get("state"),
        )

    def authorize_params(self, request: AuthorizationRequest) -> dict[str, Any]:
        return request.to_params()

    def authorize_url(self, request: AuthorizationRequest) -> str:
        """获取跳转授权认证的URL地址"""
        return self.client.authorize_url(self.authorize_params(request))

    def token_params(self, code: str, redirect_uri: str) -> dict[str, Any]:
        return {"code": code, "redirect_uri": redirect_uri}

    def refresh_params(self, refresh_token: str) -> dict[str, Any]:
        return {"refresh_token": refresh_token}

    def exchange_code_for_token(self, code: str, redirect_uri: str) -> Union[TokenResult, OAuthError]:
        """根据传入的code代码获取授权令牌"""
        return self.client.get_token(self.token_params(code, redirect_uri))

    def refresh(self, refresh_token: str) -> Union[TokenResult, OAuthError]:
        """按需刷新一次授权令牌"""
        return self.client.refresh_token(self.refresh_params(refresh_token))

    def fetch_profile(self, token: TokenResult) -> Union[ProfileResult, OAuthError]:
        """根据令牌获取用户原始信息"""
        params, headers = self.profile_request(token)
        profile = self.client.get_profile(params, headers)
        if isinstance(profile, ProfileResult):
            error = self.profile_error(profile.fields)
            if error is not None:
                return error
        return profile

    def handle_request(self, ctx: FlowContext) -> None:
        request = self.build_authorization_request(ctx.params, ctx.redirect_uri)
        ctx.redirect_url = self.authorize_url(request)

    def handle_callback(self, ctx: FlowContext) -> None:
        # 1.回调未携带code，直接失败且不发起任何请求
        code = ctx.params.get("code")
        if not code:
            ctx.errors.append(OAuthError(kind=ErrorKind.MISSING_CODE, code="missing_code", message="No code received"))
            return

        # 2.使用code换取令牌
        redirect_uri = self.options.redirect_uri or ctx.redirect_uri
        token = self.exchange_code_for_token(code, redirect_uri)
        if isinstance(token, OAuthError):
            ctx.errors.append(token)
            return
        ctx.token = token

        # 3.令牌获取成功后才请求用户信息
        profile = self.fetch_profile(token)
        if isinstance(profile, OAuthError):
            ctx.errors.append(profile)
            return
        ctx.profile = profile

        # 4.转换成标准化身份信息
        identity = normalize(self.get_provider(), token, profile, self.options, self.info_fields)
        if isinstance(identity, OAuthError):
            ctx.errors.append(identity)
            return
        ctx.identity = identity

    def handle_cleanup(self, ctx: FlowContext) -> None:
        ctx.token = None
        ctx.profile = None
