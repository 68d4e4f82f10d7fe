#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@Time    : 2024/4/4 16:39
@Author  : thezehui@gmail.com
@File    : conftest.py.py
"""
import json
import os
import threading

import pytest
import requests

# 应用启动时会校验提供商凭证，需要在导入应用之前设置
os.environ["OAUTH_PROVIDERS"] = "wechat,github"
os.environ["WECHAT_CLIENT_ID"] = "wx_test_appid"
os.environ["WECHAT_CLIENT_SECRET"] = "wx_test_secret"
os.environ["GITHUB_CLIENT_ID"] = "gh_test_client"
os.environ["GITHUB_CLIENT_SECRET"] = "gh_test_secret"

from app.http.app import app as _app  # noqa: E402
from pkg.oauth import FlowOptions, OAuth2Client, WechatOAuth, OAuthFlow  # noqa: E402


class FakeResponse:
    """模拟requests.Response，只提供客户端用到的属性"""

    def __init__(self, status_code: int = 200, body=None, text: str = None):
        self.status_code = status_code
        if text is not None:
            self.text = text
        else:
            self.text = json.dumps(body if body is not None else {})
        self.content = self.text.encode("utf-8")


class FakeSession:
    """模拟requests.Session，按method+url返回预设响应并记录每一次请求"""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self._lock = threading.Lock()

    def add(self, method: str, url: str, response):
        """response可以是FakeResponse、异常实例，或接收(params, data)的函数"""
        self.routes[(method.upper(), url)] = response

    def request(self, method, url, params=None, data=None, headers=None, timeout=None):
        with self._lock:
            self.calls.append({
                "method": method.upper(),
                "url": url,
                "params": params or {},
                "data": data or {},
                "headers": headers or {},
                "timeout": timeout,
            })

        response = self.routes.get((method.upper(), url))
        if response is None:
            raise requests.ConnectionError(f"no route for {method} {url}")
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response(params or {}, data or {})
        return response

    def count(self, url: str) -> int:
        return len([call for call in self.calls if call["url"] == url])


@pytest.fixture
def app():
    """获取Flask应用并返回"""
    _app.config["TESTING"] = True
    return _app


@pytest.fixture
def client(app):
    """获取Flask应用的测试应用，并返回"""
    with app.test_client() as client:
        yield client


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def wechat_oauth(fake_session):
    """使用模拟会话构建的微信授权策略"""
    config = WechatOAuth.build_config(client_id="wx_test_appid", client_secret="wx_test_secret")
    options = FlowOptions(default_scope="snsapi_userinfo", uid_field="openid")
    return WechatOAuth(config=config, options=options, client=OAuth2Client(config=config, session=fake_session))


@pytest.fixture
def wechat_flow(wechat_oauth):
    return OAuthFlow(strategy=wechat_oauth)


@pytest.fixture
def app_session(app, fake_session, monkeypatch):
    """将应用中所有提供商的http会话替换成模拟会话"""
    oauth_manager = app.extensions["oauth"]
    for flow in oauth_manager.flow_map.values():
        monkeypatch.setattr(flow.strategy.client, "session", fake_session)
    return fake_session
