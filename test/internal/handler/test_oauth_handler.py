#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@Time    : 2024/9/14 10:12
@Author  : thezehui@gmail.com
@File    : test_oauth_handler.py
"""
import urllib.parse

import pytest

from pkg.response import HttpCode

WECHAT_TOKEN_URL = "https://api.weixin.qq.com/sns/oauth2/access_token"
WECHAT_REFRESH_URL = "https://api.weixin.qq.com/sns/oauth2/refresh_token"
WECHAT_USER_INFO_URL = "https://api.weixin.qq.com/sns/userinfo"


class TestOAuthHandler:
    """第三方授权处理器测试类"""

    def test_providers(self, client):
        resp = client.get("/auth/providers")
        assert resp.status_code == 200
        assert resp.json.get("code") == HttpCode.SUCCESS
        names = [provider["name"] for provider in resp.json.get("data").get("providers")]
        assert names == ["wechat", "github"]

    @pytest.mark.parametrize("query", [
        {},
        {"scope": "snsapi_login"},
        {"scope": "snsapi_login", "state": "csrf-token"},
    ])
    def test_provider_redirect(self, query, client, app_session):
        resp = client.get("/auth/wechat", query_string=query)
        assert resp.status_code == 302

        location = resp.headers["Location"]
        parsed = urllib.parse.urlparse(location)
        params = urllib.parse.parse_qs(parsed.query)
        assert location.startswith("https://open.weixin.qq.com/connect/qrconnect?")
        assert params["client_id"] == ["wx_test_appid"]
        assert params["scope"] == [query.get("scope", "snsapi_userinfo")]
        assert params["redirect_uri"] == ["http://localhost/auth/wechat/callback"]
        if "state" in query:
            assert params["state"] == [query["state"]]
        else:
            assert "state" not in params
        assert app_session.calls == []

    def test_provider_not_found(self, client):
        resp = client.get("/auth/weibo")
        assert resp.status_code == 200
        assert resp.json.get("code") == HttpCode.NOT_FOUND

    def test_callback_success(self, client, app_session, fake_response):
        app_session.add("GET", WECHAT_TOKEN_URL, fake_response(200, {
            "access_token": "T",
            "openid": "O",
            "scope": "a,b,c",
            "expires_in": 7200,
            "refresh_token": "R",
        }))
        app_session.add("GET", WECHAT_USER_INFO_URL, fake_response(200, {
            "openid": "O",
            "nickname": "Alice",
            "headimgurl": "http://x/y.png",
        }))

        resp = client.get("/auth/wechat/callback", query_string={"code": "C", "state": "s-1"})
        assert resp.status_code == 200
        assert resp.json.get("code") == HttpCode.SUCCESS

        data = resp.json.get("data")
        assert data["provider"] == "wechat"
        assert data["uid"] == "O"
        assert data["state"] == "s-1"
        assert data["info"]["name"] == "Alice"
        assert data["info"]["image"] == "http://x/y.png"
        assert data["credentials"]["token"] == "T"
        assert data["credentials"]["scopes"] == ["a", "b", "c"]
        assert data["credentials"]["expires"] is True
        assert data["extra"]["raw_profile"]["nickname"] == "Alice"
        assert app_session.calls[0]["params"]["redirect_uri"] == "http://localhost/auth/wechat/callback"

    def test_callback_missing_code(self, client, app_session):
        resp = client.get("/auth/wechat/callback")
        assert resp.status_code == 200
        assert resp.json.get("code") == HttpCode.FAIL
        assert resp.json.get("data").get("errors") == [{"code": "missing_code", "message": "No code received"}]
        assert app_session.calls == []

    def test_callback_provider_error(self, client, app_session, fake_response):
        app_session.add("GET", WECHAT_TOKEN_URL, fake_response(200, {"errcode": 40029, "errmsg": "invalid code"}))

        resp = client.get("/auth/wechat/callback", query_string={"code": "bad"})
        assert resp.json.get("code") == HttpCode.FAIL
        assert resp.json.get("message") == "invalid code"
        assert resp.json.get("data").get("errors") == [{"code": "40029", "message": "invalid code"}]
        assert app_session.count(WECHAT_USER_INFO_URL) == 0

    def test_callback_unauthorized(self, client, app_session, fake_response):
        app_session.add("GET", WECHAT_TOKEN_URL, fake_response(200, {"access_token": "T", "openid": "O"}))
        app_session.add("GET", WECHAT_USER_INFO_URL, fake_response(401, {}))

        resp = client.get("/auth/wechat/callback", query_string={"code": "C"})
        assert resp.json.get("code") == HttpCode.FAIL
        assert resp.json.get("data").get("errors") == [{"code": "token", "message": "unauthorized"}]

    def test_refresh(self, client, app_session, fake_response):
        app_session.add("GET", WECHAT_REFRESH_URL, fake_response(200, {
            "access_token": "T2",
            "refresh_token": "R",
            "expires_in": 7200,
            "openid": "O",
            "scope": "snsapi_userinfo",
        }))

        resp = client.post("/auth/wechat/refresh", json={"refresh_token": "R"})
        assert resp.status_code == 200
        assert resp.json.get("code") == HttpCode.SUCCESS
        assert resp.json.get("data")["token"] == "T2"
        assert resp.json.get("data")["scopes"] == ["snsapi_userinfo"]

    @pytest.mark.parametrize("payload", [{}, {"refresh_token": ""}])
    def test_refresh_validate_error(self, payload, client):
        resp = client.post("/auth/wechat/refresh", json=payload)
        assert resp.status_code == 200
        assert resp.json.get("code") == HttpCode.VALIDATE_ERROR

    def test_refresh_provider_error(self, client, app_session, fake_response):
        app_session.add("GET", WECHAT_REFRESH_URL, fake_response(200, {
            "errcode": 40030,
            "errmsg": "invalid refresh_token",
        }))

        resp = client.post("/auth/wechat/refresh", json={"refresh_token": "R"})
        assert resp.json.get("code") == HttpCode.FAIL
        assert resp.json.get("data").get("errors") == [{"code": "40030", "message": "invalid refresh_token"}]
