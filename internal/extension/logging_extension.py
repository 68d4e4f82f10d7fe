#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
@Time    : 2024/8/13 21:57
@Author  : thezehui@gmail.com
@File    : logging_extension.py
"""
import logging
import os.path

from concurrent_log_handler import ConcurrentTimedRotatingFileHandler
from flask import Flask


def init_app(app: Flask):
    """日志记录器初始化"""
    # 1.根据不同的环境配置logging根处理器的日志级别
    is_development = app.debug or os.getenv("FLASK_ENV") == "development"
    level = logging.DEBUG if is_development else logging.WARNING
    logging.getLogger().setLevel(level)

    # 2.设置日志存储的文件夹，如果不存在则创建
    log_folder = app.config.get("LOG_FOLDER") or os.path.join("storage", "log")
    if not os.path.isabs(log_folder):
        log_folder = os.path.join(os.getcwd(), log_folder)
    os.makedirs(log_folder, exist_ok=True)

    # 3.设置日志的格式，并且让日志每天更新一次，多进程部署时共享同一个文件
    handler = ConcurrentTimedRotatingFileHandler(
        os.path.join(log_folder, "app.log"),
        when="midnight",
        interval=1,
        backupCount=int(app.config.get("LOG_BACKUP_COUNT", 30)),
        encoding="utf-8",
    )
    formatter = logging.Formatter(
        "[%(asctime)s.%(msecs)03d] %(filename)s -> %(funcName)s line:%(lineno)d [%(levelname)s]: %(message)s"
    )
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logging.getLogger().addHandler(handler)

    # 4.在开发环境下同时将日志输出到控制台
    if is_development:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logging.getLogger().addHandler(console_handler)
