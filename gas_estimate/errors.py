"""
异常定义

估算过程中可能出现的错误类型。
正常的 "上限内无法满足" 结果不是异常，调用方通过结果状态判断。
"""

from typing import Any, Dict, Optional


class EstimationError(Exception):
    """估算相关错误的基类"""


class MonotonicityViolation(EstimationError):
    """
    搜索区间收敛到单点后仍然耗尽

    说明预言机违反了单调性约定，或搜索状态已被破坏。
    属于不可恢复的错误，当前估算立即中止。
    """

    def __init__(self, work_id: Any, state: Optional[Dict[str, Any]] = None):
        self.work_id = work_id
        self.state = state or {}
        super().__init__(
            f"Monotonicity violated for work unit {work_id!r}: "
            f"limit {self.state.get('mid')} exhausted inside bracket "
            f"[{self.state.get('low')}, {self.state.get('high')}]"
        )


class OracleContractError(EstimationError):
    """预言机返回的消耗量超出了探测上限"""

    def __init__(self, work_id: Any, limit: int, consumed: int):
        self.work_id = work_id
        self.limit = limit
        self.consumed = consumed
        super().__init__(
            f"Oracle reported consumption {consumed} for limit {limit} "
            f"on work unit {work_id!r}"
        )


class UnknownWorkUnitError(EstimationError, KeyError):
    """查表预言机中不存在的工作单元"""

    def __init__(self, work_id: Any):
        self.work_id = work_id
        super().__init__(f"Unknown work unit: {work_id}")

    def __str__(self) -> str:
        return self.args[0]
