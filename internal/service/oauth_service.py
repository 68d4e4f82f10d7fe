import logging
from dataclasses import dataclass, field

from injector import inject
from typing_extensions import Any, Optional, Union

from internal.core.oauth import OAuthManager
from internal.exception import FailException
from pkg.oauth import Credentials, FlowContext, NormalizedIdentity, OAuthError, OAuthFlow, OAuth2Strategy
from pkg.oauth.normalizer import build_credentials


@dataclass
class CallbackResult:
    """回调阶段交给宿主的结果，identity与errors二者只会存在一个"""
    provider: str
    identity: Optional[NormalizedIdentity] = None
    errors: list[OAuthError] = field(default_factory=list)
    state: Optional[str] = None


@inject
@dataclass
class OAuthService:
    """第三方授权认证服务"""
    oauth_manager: OAuthManager

    def get_oauth_flow(self, provider_name: str) -> OAuthFlow:
        """根据提供商名字获取授权流程"""
        return self.oauth_manager.get_flow(provider_name)

    def get_providers(self) -> list[dict[str, Any]]:
        """获取已启用的提供商列表"""
        return [
            {"name": entity.name, "label": entity.label, "description": entity.description}
            for entity in self.oauth_manager.get_provider_entities()
        ]

    def get_authorization_url(self, provider_name: str, params: dict[str, Any], redirect_uri: str) -> str:
        """请求阶段，构建跳转到第三方授权页的地址"""
        flow = self.get_oauth_flow(provider_name)
        ctx = FlowContext(params=params, redirect_uri=redirect_uri)
        with flow.scoped(ctx):
            flow.request(ctx)
        return ctx.redirect_url

    def oauth_callback(self, provider_name: str, params: dict[str, Any], redirect_uri: str) -> CallbackResult:
        """回调阶段，使用code换取令牌并获取用户信息，失败时返回有序的错误列表"""
        flow = self.get_oauth_flow(provider_name)
        ctx = FlowContext.for_callback(params=params, redirect_uri=redirect_uri)

        # 1.无论成功失败，离开作用域时都会执行一次清理
        with flow.scoped(ctx):
            flow.callback(ctx)

        # 2.清理后上下文只保留标准化结果与错误信息
        if ctx.identity is not None:
            logging.info("%s授权成功, uid=%s", provider_name, ctx.identity.uid)
        return CallbackResult(
            provider=provider_name,
            identity=ctx.identity,
            errors=list(ctx.errors),
            state=params.get("state"),
        )

    def refresh(self, provider_name: str, refresh_token: str) -> Union[Credentials, OAuthError]:
        """按需刷新一次授权令牌"""
        flow = self.get_oauth_flow(provider_name)
        if not isinstance(flow.strategy, OAuth2Strategy):
            raise FailException("该授权认证服务不支持刷新令牌")

        token = flow.strategy.refresh(refresh_token)
        if isinstance(token, OAuthError):
            logging.warning("%s刷新令牌失败: %s(%s)", provider_name, token.code, token.message)
            return token
        return build_credentials(token)
