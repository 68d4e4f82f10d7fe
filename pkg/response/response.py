#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@Time    : 2024/4/1 19:30
@Author  : thezehui@gmail.com
@File    : response.py
"""
from dataclasses import field, dataclass
from typing import Any

from flask import jsonify, redirect, Response as FlaskResponse

from .http_code import HttpCode


@dataclass
class Response:
    """基础HTTP接口响应格式"""
    code: HttpCode = HttpCode.SUCCESS
    message: str = ""
    data: Any = field(default_factory=dict)


def json(data: Response = None):
    """基础的响应接口"""
    return jsonify(data), 200


def success_json(data: Any = None):
    """成功数据响应"""
    return json(Response(code=HttpCode.SUCCESS, message="", data=data))


def fail_json(data: Any = None, msg: str = ""):
    """失败数据响应"""
    return json(Response(code=HttpCode.FAIL, message=msg, data=data))


def errors_json(errors: list[dict[str, str]], data: dict[str, Any] = None):
    """授权流程失败响应，按顺序返回全部错误，消息取第一条错误"""
    msg = errors[0].get("message", "") if errors else ""
    return fail_json({**(data or {}), "errors": errors}, msg=msg)


def validate_error_json(errors: dict = None):
    """数据验证错误响应"""
    first_key = next(iter(errors), None)
    msg = errors.get(first_key)[0] if first_key is not None else ""
    return json(Response(code=HttpCode.VALIDATE_ERROR, message=msg, data=errors))


def redirect_to(location: str) -> FlaskResponse:
    """302重定向到第三方授权页"""
    return redirect(location, code=302)
