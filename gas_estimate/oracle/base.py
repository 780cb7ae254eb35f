"""
预言机基础定义

预言机负责以给定的gas上限执行一个工作单元，并报告成功或耗尽。
估算器只依赖这里定义的接口。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable


class ProbeStatus(Enum):
    """探测结果状态"""
    SUCCESS = "ok"
    EXHAUSTED = "oog"  # out of gas


@dataclass(frozen=True)
class ProbeOutcome:
    """单次探测结果"""
    status: ProbeStatus
    consumed: int  # 成功时 <= 上限，耗尽时等于上限

    @property
    def succeeded(self) -> bool:
        return self.status is ProbeStatus.SUCCESS

    @classmethod
    def success(cls, consumed: int) -> "ProbeOutcome":
        return cls(ProbeStatus.SUCCESS, consumed)

    @classmethod
    def exhausted(cls, limit: int) -> "ProbeOutcome":
        return cls(ProbeStatus.EXHAUSTED, limit)

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status.value, "consumed": self.consumed}


class Oracle(ABC):
    """
    预言机接口

    约定：对同一工作单元，若上限 L 成功，则任何 L' >= L 都成功（单调性）。
    估算器的正确性依赖这一约定。
    """

    @abstractmethod
    def probe(self, work_id: Hashable, limit: int) -> ProbeOutcome:
        """
        以给定上限执行工作单元

        Args:
            work_id: 工作单元标识，原样传入
            limit: gas上限

        Returns:
            探测结果
        """
        pass
