from typing import Union

from typing_extensions import Any

from .entities import (
    TokenResult,
    ProfileResult,
    FlowOptions,
    NormalizedIdentity,
    Info,
    Credentials,
    Extra,
    OAuthError,
    ErrorKind,
)


def split_scopes(scope: Any) -> list[str]:
    """按逗号拆分授权范围，空字符串返回空列表，其余情况保留中间的空片段"""
    if not scope:
        return []
    return str(scope).split(",")


def build_credentials(token: TokenResult) -> Credentials:
    """根据令牌构建凭证信息"""
    return Credentials(
        token=token.access_token,
        refresh_token=token.refresh_token,
        expires_at=token.expires_at,
        token_type=token.token_type,
        expires=token.expires_at is not None,
        scopes=split_scopes(token.raw_params.get("scope")),
    )


def normalize(
        provider: str,
        token: TokenResult,
        profile: ProfileResult,
        options: FlowOptions,
        info_fields: dict[str, str],
) -> Union[NormalizedIdentity, OAuthError]:
    """将令牌与用户信息转换成标准化身份，不发起任何请求"""
    # 1.uid字段不存在属于配置错误，不做默认值兜底
    uid = profile.fields.get(options.uid_field)
    if uid is None:
        return OAuthError(
            kind=ErrorKind.CONFIG_ERROR,
            code="config_error",
            message=f"用户信息中不存在uid字段: {options.uid_field}",
        )

    # 2.按静态映射提取展示信息，缺失字段为None
    info = Info(**{attr: profile.fields.get(key) for attr, key in info_fields.items()})

    # 3.组装凭证信息
    credentials = build_credentials(token)

    return NormalizedIdentity(
        provider=provider,
        uid=str(uid),
        info=info,
        credentials=credentials,
        extra=Extra(raw_token=token, raw_profile=profile),
    )
