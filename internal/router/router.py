#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@Time    : 2024/3/29 15:01
@Author  : thezehui@gmail.com
@File    : router.py
"""
from dataclasses import dataclass

from flask import Flask, Blueprint
from injector import inject

from internal.handler import OAuthHandler


@inject
@dataclass
class Router:
    """路由"""
    oauth_handler: OAuthHandler

    def register_router(self, app: Flask):
        """注册路由"""
        # 1.创建一个蓝图
        bp = Blueprint("oauth", __name__, url_prefix="/auth")

        # 2.将url与对应的控制器方法做绑定
        bp.add_url_rule("/providers", view_func=self.oauth_handler.providers)
        bp.add_url_rule("/<string:provider_name>", view_func=self.oauth_handler.provider)
        bp.add_url_rule(
            "/<string:provider_name>/callback",
            endpoint="callback",
            view_func=self.oauth_handler.callback,
        )
        bp.add_url_rule(
            "/<string:provider_name>/refresh",
            methods=["POST"],
            view_func=self.oauth_handler.refresh,
        )

        # 3.在应用上注册蓝图
        app.register_blueprint(bp)
