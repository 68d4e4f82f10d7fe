# 应用默认配置项
DEFAULT_CONFIG = {
    # wft配置
    "WTF_CSRF_ENABLED": "False",

    # 日志配置
    "LOG_FOLDER": "storage/log",
    "LOG_BACKUP_COUNT": 30,

    # 启用的第三方授权提供商，多个使用逗号分隔
    "OAUTH_PROVIDERS": "wechat",
    # 请求第三方接口的超时时间(秒)
    "OAUTH_HTTP_TIMEOUT": 10,

    # 微信开放平台配置
    "WECHAT_CLIENT_ID": "",
    "WECHAT_CLIENT_SECRET": "",
    "WECHAT_DEFAULT_SCOPE": "snsapi_userinfo",
    "WECHAT_UID_FIELD": "openid",
    "WECHAT_REDIRECT_URI": "",

    # Github配置
    "GITHUB_CLIENT_ID": "",
    "GITHUB_CLIENT_SECRET": "",
    "GITHUB_DEFAULT_SCOPE": "user:email",
    "GITHUB_UID_FIELD": "id",
    "GITHUB_REDIRECT_URI": "",
}
