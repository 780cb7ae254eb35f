"""
日志配置

命令行入口调用，库代码本身只通过模块级 logger 输出。
"""

import logging
import sys
from typing import Optional


LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def setup_logging(level: str = "WARNING") -> None:
    """配置根日志处理器，重复调用时只替换本函数安装的处理器"""
    global _handler

    root = logging.getLogger()
    root.setLevel(level.upper())

    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(_handler)
