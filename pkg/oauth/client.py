#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@Time    : 2024/9/12 11:05
@Author  : thezehui@gmail.com
@File    : client.py
"""
import json
import logging
import threading
import time
import urllib.parse
from dataclasses import dataclass, field
from typing import Union

import requests
from typing_extensions import Any, Optional

from .entities import (
    ProviderConfig,
    TokenMethod,
    TokenResult,
    ProfileResult,
    OAuthError,
    ErrorKind,
    append_query,
)

logger = logging.getLogger(__name__)

# 令牌响应中的标准字段，其余字段保存到raw_params
_TOKEN_FIELDS = ("access_token", "refresh_token", "token_type", "expires_in")


@dataclass
class OAuth2Client:
    """通用OAuth2授权码客户端，负责拼接授权地址、换取令牌、请求用户信息"""
    config: ProviderConfig
    session: Optional[requests.Session] = None  # 注入后所有线程共用，调用方需保证线程安全
    timeout: float = 10
    _local: threading.local = field(default_factory=threading.local, init=False, repr=False, compare=False)

    def get_session(self) -> requests.Session:
        """未注入会话时，每个线程使用各自的requests.Session"""
        if self.session is not None:
            return self.session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def authorize_url(self, params: dict[str, Any]) -> str:
        """拼接跳转到提供商授权页的地址，不发起网络请求"""
        query = {"client_id": self.config.client_id, **params, "response_type": "code"}
        return append_query(self.config.resolve(self.config.authorize_url), query)

    def get_token(self, params: dict[str, Any], headers: Optional[dict[str, str]] = None) -> Union[
        TokenResult, OAuthError]:
        """使用授权码换取令牌，提供商返回的错误以OAuthError形式返回"""
        data = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "grant_type": "authorization_code",
            **params,
        }
        return self._request_token(self.config.token_url, data, headers)

    def refresh_token(self, params: dict[str, Any], headers: Optional[dict[str, str]] = None) -> Union[
        TokenResult, OAuthError]:
        """使用刷新令牌重新获取授权令牌，只发起一次请求"""
        data = {
            "client_id": self.config.client_id,
            "client_secret": self.config.client_secret,
            "grant_type": "refresh_token",
            **params,
        }
        return self._request_token(self.config.refresh_url or self.config.token_url, data, headers)

    def get_profile(
            self,
            params: Optional[dict[str, Any]] = None,
            headers: Optional[dict[str, str]] = None,
    ) -> Union[ProfileResult, OAuthError]:
        """请求用户信息接口，并根据响应状态码映射结果"""
        # 1.发起get请求，网络异常直接返回transport错误
        url = self.config.resolve(self.config.userinfo_url)
        try:
            resp = self.get_session().request(
                "GET", url, params=params or {}, headers=headers or {}, timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("获取用户信息请求失败: %s", e)
            return OAuthError(kind=ErrorKind.TRANSPORT, code="transport", message=str(e))

        # 2.401代表令牌无效或已过期
        if resp.status_code == 401:
            return OAuthError(kind=ErrorKind.UNAUTHORIZED, code="token", message="unauthorized")

        # 3.200-399之间解析用户信息
        if 200 <= resp.status_code < 400:
            return ProfileResult(fields=parse_body(resp))

        return OAuthError(
            kind=ErrorKind.TRANSPORT,
            code="transport",
            message=f"用户信息接口返回异常状态码: {resp.status_code}",
        )

    def _request_token(self, url: str, data: dict[str, Any], headers: Optional[dict[str, str]]) -> Union[
        TokenResult, OAuthError]:
        # 1.根据提供商配置决定get/post请求
        url = self.config.resolve(url)
        headers = {"Accept": "application/json", **(headers or {})}
        try:
            if self.config.token_method == TokenMethod.GET:
                resp = self.get_session().request("GET", url, params=data, headers=headers, timeout=self.timeout)
            else:
                resp = self.get_session().request("POST", url, data=data, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("请求令牌接口失败: %s", e)
            return OAuthError(kind=ErrorKind.TRANSPORT, code="transport", message=str(e))

        # 2.解析响应并构建令牌
        body = parse_body(resp)
        token = build_token(body, self.config.subject_field)
        if token.access_token:
            return token

        # 3.响应中没有令牌，提取提供商返回的错误码与错误信息
        code = body.get("errcode", body.get("error"))
        if code is not None:
            message = body.get("errmsg", body.get("error_description", ""))
            logger.info("令牌接口返回错误: %s %s", code, message)
            return OAuthError(kind=ErrorKind.PROVIDER_ERROR, code=str(code), message=str(message))

        return OAuthError(
            kind=ErrorKind.TRANSPORT,
            code="transport",
            message=f"令牌接口返回异常状态码: {resp.status_code}",
        )


def parse_body(resp: requests.Response) -> dict[str, Any]:
    """解析响应内容，优先按json解析，失败时按表单格式解析"""
    # 微信接口返回text/plain且不带charset，requests会按ISO-8859-1解码，这里按utf-8解码原始字节
    try:
        text = (resp.content or b"").decode("utf-8")
    except UnicodeDecodeError:
        text = resp.text or ""
    try:
        data = json.loads(text)
    except ValueError:
        return dict(urllib.parse.parse_qsl(text))
    return data if isinstance(data, dict) else {}


def build_token(body: dict[str, Any], subject_field: str) -> TokenResult:
    """将令牌接口的响应转换成TokenResult"""
    expires_at = None
    expires_in = body.get("expires_in")
    if expires_in not in (None, ""):
        try:
            expires_at = int(time.time()) + int(expires_in)
        except (TypeError, ValueError):
            expires_at = None

    raw_params = {key: value for key, value in body.items() if key not in _TOKEN_FIELDS}
    subject_id = raw_params.get(subject_field)

    return TokenResult(
        access_token=body.get("access_token") or None,
        refresh_token=body.get("refresh_token") or None,
        token_type=body.get("token_type") or None,
        expires_at=expires_at,
        provider_subject_id=str(subject_id) if subject_id is not None else "",
        raw_params=raw_params,
    )
