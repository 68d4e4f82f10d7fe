from typing_extensions import Any

from .entities import ProviderConfig, TokenMethod, TokenResult
from .oauth import OAuth2Strategy


class GithubOAuth(OAuth2Strategy):
    """GithubOAuth第三方授权认证类"""
    SITE = "https://api.github.com"
    AUTHORIZE_URL = "https://github.com/login/oauth/authorize"  # 跳转授权接口
    ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"  # 获取授权令牌接口
    USER_INFO_URL = "/user"  # 获取用户信息接口

    uid_fields = ("id", "login")
    info_fields = {
        "name": "name",
        "nickname": "login",
        "image": "avatar_url",
        "location": "location",
        "email": "email",
        "description": "bio",
    }

    @classmethod
    def build_config(cls, client_id: str, client_secret: str) -> ProviderConfig:
        return ProviderConfig(
            client_id=client_id,
            client_secret=client_secret,
            site=cls.SITE,
            authorize_url=cls.AUTHORIZE_URL,
            token_url=cls.ACCESS_TOKEN_URL,
            userinfo_url=cls.USER_INFO_URL,
            token_method=TokenMethod.POST,
            subject_field="",
        )

    def get_provider(self) -> str:
        return "github"

    def profile_request(self, token: TokenResult) -> tuple[dict[str, Any], dict[str, str]]:
        # Github通过请求头传递令牌，用户信息接口不需要subject id
        return {}, {"Authorization": f"token {token.access_token}", "Accept": "application/json"}
