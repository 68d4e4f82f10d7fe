#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@Time    : 2024/3/29 10:44
@Author  : thezehui@gmail.com
@File    : __init__.py.py
"""
from .oauth_service import OAuthService, CallbackResult

__all__ = [
    "OAuthService",
    "CallbackResult",
]
