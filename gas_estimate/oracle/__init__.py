"""
预言机模块

定义估算器与执行环境之间的探测接口，并提供用于测试的查表实现。
"""

from .base import Oracle, ProbeOutcome, ProbeStatus
from .table import (
    ContractSpecs,
    TableOracle,
    CONTRACT_SPECS,
    create_table_oracle,
    list_supported_contracts,
    parse_contract_definition,
)

__all__ = [
    # 接口
    "Oracle",
    "ProbeOutcome",
    "ProbeStatus",

    # 查表实现
    "ContractSpecs",
    "TableOracle",
    "CONTRACT_SPECS",
    "create_table_oracle",
    "list_supported_contracts",
    "parse_contract_definition",
]
