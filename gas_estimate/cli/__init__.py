"""
命令行接口模块

提供命令行工具，依次估算合约表中的调用并输出结果。
"""

from .commands import main

__all__ = ["main"]
