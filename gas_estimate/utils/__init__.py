"""
工具模块

结果格式化和日志配置。
"""

from .formatters import format_results, format_probe_line
from .log import setup_logging

__all__ = ["format_results", "format_probe_line", "setup_logging"]
