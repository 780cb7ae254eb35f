"""
查表预言机实现

用静态表代替真实的合约执行：每个工作单元记录实际消耗量和所需上限。
"""

from dataclasses import dataclass
from typing import Dict, Any, Hashable, Iterable, List, Optional, Tuple

from ..errors import UnknownWorkUnitError
from .base import Oracle, ProbeOutcome


@dataclass(frozen=True)
class ContractSpecs:
    """合约调用规格"""
    used: int  # 成功执行后报告的消耗量
    required: int  # 执行成功所需的最小上限


# 内置的测试合约表
CONTRACT_SPECS: Dict[str, ContractSpecs] = {
    "contract-0": ContractSpecs(used=24000, required=24000),
    "contract-1": ContractSpecs(used=30000, required=100000),  # 大量退款，消耗远低于所需
    "contract-2": ContractSpecs(used=23000, required=28000),
    "contract-3": ContractSpecs(used=1400000, required=1750000),
}


class TableOracle(Oracle):
    """查表预言机"""

    def __init__(self, contracts: Optional[Dict[Hashable, ContractSpecs]] = None):
        self.contracts: Dict[Hashable, ContractSpecs] = dict(
            CONTRACT_SPECS if contracts is None else contracts
        )

    def probe(self, work_id: Hashable, limit: int) -> ProbeOutcome:
        specs = self.get_specs(work_id)
        if limit >= specs.required:
            return ProbeOutcome.success(specs.used)
        return ProbeOutcome.exhausted(limit)

    def get_specs(self, work_id: Hashable) -> ContractSpecs:
        try:
            return self.contracts[work_id]
        except KeyError:
            raise UnknownWorkUnitError(work_id) from None

    def register(self, work_id: Hashable, specs: ContractSpecs) -> None:
        """注册（或覆盖）一个工作单元"""
        self.contracts[work_id] = specs

    def work_ids(self) -> List[Hashable]:
        return list(self.contracts.keys())


def create_table_oracle(extra: Optional[Iterable[str]] = None,
                        include_builtin: bool = True) -> TableOracle:
    """
    创建查表预言机

    Args:
        extra: 额外的合约定义，格式为 "name:used:required"
        include_builtin: 是否包含内置合约表

    Returns:
        查表预言机实例
    """
    oracle = TableOracle(CONTRACT_SPECS if include_builtin else {})
    for definition in extra or ():
        name, specs = parse_contract_definition(definition)
        oracle.register(name, specs)
    return oracle


def parse_contract_definition(definition: str) -> Tuple[str, ContractSpecs]:
    """解析 "name:used:required" 格式的合约定义"""
    parts = definition.split(":")
    if len(parts) != 3 or not parts[0]:
        raise ValueError(
            f"Invalid contract definition {definition!r}, expected NAME:USED:REQUIRED"
        )
    name, used, required = parts
    try:
        specs = ContractSpecs(used=int(used), required=int(required))
    except ValueError:
        raise ValueError(f"Non-integer amounts in contract definition {definition!r}") from None
    if specs.used < 0 or specs.required < 0:
        raise ValueError(f"Negative amounts in contract definition {definition!r}")
    if specs.used > specs.required:
        raise ValueError(
            f"Contract {name!r} uses more than it requires ({specs.used} > {specs.required})"
        )
    return name, specs


def list_supported_contracts() -> Dict[str, Dict[str, Any]]:
    """列出内置合约"""
    return {
        name: {"used": specs.used, "required": specs.required}
        for name, specs in CONTRACT_SPECS.items()
    }
