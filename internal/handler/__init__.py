#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@Time    : 2024/3/29 10:43
@Author  : thezehui@gmail.com
@File    : __init__.py.py
"""
from .oauth_handler import OAuthHandler

__all__ = [
    "OAuthHandler",
]
