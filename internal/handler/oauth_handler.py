from dataclasses import dataclass

from flask import request, url_for
from injector import inject

from internal.schema.oauth_schema import (
    AuthorizationReq,
    CallbackReq,
    RefreshTokenReq,
    OAuthIdentityResp,
    CredentialsResp,
)
from internal.service import OAuthService
from pkg.oauth import OAuthError
from pkg.response import success_json, errors_json, validate_error_json, redirect_to


@inject
@dataclass
class OAuthHandler:
    """第三方授权认证信息"""
    oauth_service: OAuthService

    def providers(self):
        """获取已启用的第三方授权提供商列表"""
        return success_json({"providers": self.oauth_service.get_providers()})

    def provider(self, provider_name: str):
        """根据传递的提供商名字重定向到第三方授权页"""
        # 1.提取请求并校验
        req = AuthorizationReq(request.args)
        if not req.validate():
            return validate_error_json(req.errors)

        # 2.构建授权地址，回调地址根据当前回调路由计算，state未传递时为None
        redirect_url = self.oauth_service.get_authorization_url(
            provider_name,
            {"scope": req.scope.data, "state": request.args.get("state")},
            self._callback_url(provider_name),
        )

        return redirect_to(redirect_url)

    def callback(self, provider_name: str):
        """第三方授权回调，成功返回标准化身份信息，失败返回有序的错误列表"""
        # 1.提取回调参数
        req = CallbackReq(request.args)
        if not req.validate():
            return validate_error_json(req.errors)

        # 2.调用服务执行回调阶段
        result = self.oauth_service.oauth_callback(
            provider_name,
            {"code": req.code.data, "state": request.args.get("state")},
            self._callback_url(provider_name),
        )

        # 3.根据结果构建响应
        if result.errors:
            return errors_json(
                [error.to_dict() for error in result.errors],
                {"provider": result.provider, "state": result.state},
            )

        return success_json(OAuthIdentityResp().dump(result))

    def refresh(self, provider_name: str):
        """使用刷新令牌重新获取授权凭证"""
        req = RefreshTokenReq()
        if not req.validate():
            return validate_error_json(req.errors)

        credentials = self.oauth_service.refresh(provider_name, req.refresh_token.data)
        if isinstance(credentials, OAuthError):
            return errors_json([credentials.to_dict()], {"provider": provider_name})

        return success_json(CredentialsResp().dump(credentials))

    @classmethod
    def _callback_url(cls, provider_name: str) -> str:
        return url_for("oauth.callback", provider_name=provider_name, _external=True)
