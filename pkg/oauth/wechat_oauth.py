from typing_extensions import Any, Optional

from .entities import AuthorizationRequest, TokenResult, OAuthError, ErrorKind, ProviderConfig, TokenMethod
from .oauth import OAuth2Strategy


class WechatOAuth(OAuth2Strategy):
    """微信开放平台网站应用授权登录

    微信的接口与标准OAuth2有几处差异:
    1.授权页与令牌接口读取的是appid/secret而不是client_id/client_secret
    2.授权地址需要以#wechat_redirect结尾
    3.令牌接口使用GET请求，错误以errcode/errmsg返回
    4.用户信息接口在令牌失效时同样返回200并携带errcode
    """
    SITE = "https://api.weixin.qq.com/sns"  # api基础地址
    AUTHORIZE_URL = "https://open.weixin.qq.com/connect/qrconnect"  # 扫码授权页
    ACCESS_TOKEN_URL = "/oauth2/access_token"  # 获取授权令牌接口
    REFRESH_TOKEN_URL = "/oauth2/refresh_token"  # 刷新授权令牌接口
    USER_INFO_URL = "/userinfo"  # 获取用户信息接口

    uid_fields = ("openid", "unionid", "nickname")
    info_fields = {
        "name": "nickname",
        "nickname": "nickname",
        "image": "headimgurl",
        "location": "city",
    }

    @classmethod
    def build_config(cls, client_id: str, client_secret: str) -> ProviderConfig:
        """使用微信默认端点构建提供商配置"""
        return ProviderConfig(
            client_id=client_id,
            client_secret=client_secret,
            site=cls.SITE,
            authorize_url=cls.AUTHORIZE_URL,
            token_url=cls.ACCESS_TOKEN_URL,
            refresh_url=cls.REFRESH_TOKEN_URL,
            userinfo_url=cls.USER_INFO_URL,
            token_method=TokenMethod.GET,
            subject_field="openid",
        )

    def get_provider(self) -> str:
        return "wechat"

    def authorize_params(self, request: AuthorizationRequest) -> dict[str, Any]:
        return {"appid": self.config.client_id, **request.to_params()}

    def authorize_url(self, request: AuthorizationRequest) -> str:
        return f"{super().authorize_url(request)}#wechat_redirect"

    def token_params(self, code: str, redirect_uri: str) -> dict[str, Any]:
        return {
            "appid": self.config.client_id,
            "secret": self.config.client_secret,
            **super().token_params(code, redirect_uri),
        }

    def refresh_params(self, refresh_token: str) -> dict[str, Any]:
        return {"appid": self.config.client_id, **super().refresh_params(refresh_token)}

    def profile_request(self, token: TokenResult) -> tuple[dict[str, Any], dict[str, str]]:
        params = {
            "access_token": token.access_token,
            "openid": token.provider_subject_id,
        }
        return params, {}

    def profile_error(self, fields: dict[str, Any]) -> Optional[OAuthError]:
        errcode = fields.get("errcode")
        if errcode in (None, 0, "0"):
            return None
        return OAuthError(
            kind=ErrorKind.PROVIDER_ERROR,
            code=str(errcode),
            message=str(fields.get("errmsg", "")),
        )
