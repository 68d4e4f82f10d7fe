import os
from typing import Any

from .default_config import DEFAULT_CONFIG


def _get_env(key: str) -> Any:
    """从环境变量中获取配置项，如果找不到则返回默认值"""
    return os.getenv(key, DEFAULT_CONFIG.get(key))


def _get_bool_env(key: str) -> bool:
    """从环境变量中获取布尔值型的配置项，如果找不到则返回默认值"""
    value: str = _get_env(key)
    return value.lower() == "true" if value is not None else False


def _get_list_env(key: str) -> list[str]:
    """从环境变量中获取逗号分隔的列表配置项"""
    value: str = _get_env(key) or ""
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    def __init__(self):
        # 关闭wtf的csrf保护
        self.WTF_CSRF_ENABLED = _get_bool_env("WTF_CSRF_ENABLED")

        # 日志配置
        self.LOG_FOLDER = _get_env("LOG_FOLDER")
        self.LOG_BACKUP_COUNT = int(_get_env("LOG_BACKUP_COUNT"))

        # 第三方授权通用配置
        self.OAUTH_PROVIDERS = _get_list_env("OAUTH_PROVIDERS")
        self.OAUTH_HTTP_TIMEOUT = float(_get_env("OAUTH_HTTP_TIMEOUT"))

        # 微信开放平台配置
        self.WECHAT_CLIENT_ID = _get_env("WECHAT_CLIENT_ID")
        self.WECHAT_CLIENT_SECRET = _get_env("WECHAT_CLIENT_SECRET")
        self.WECHAT_DEFAULT_SCOPE = _get_env("WECHAT_DEFAULT_SCOPE")
        self.WECHAT_UID_FIELD = _get_env("WECHAT_UID_FIELD")
        self.WECHAT_REDIRECT_URI = _get_env("WECHAT_REDIRECT_URI")

        # Github配置
        self.GITHUB_CLIENT_ID = _get_env("GITHUB_CLIENT_ID")
        self.GITHUB_CLIENT_SECRET = _get_env("GITHUB_CLIENT_SECRET")
        self.GITHUB_DEFAULT_SCOPE = _get_env("GITHUB_DEFAULT_SCOPE")
        self.GITHUB_UID_FIELD = _get_env("GITHUB_UID_FIELD")
        self.GITHUB_REDIRECT_URI = _get_env("GITHUB_REDIRECT_URI")
