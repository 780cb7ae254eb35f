"""
gas上限估算器

通过反复探测预言机，自适应地二分搜索让工作单元执行成功的最小gas上限。

搜索分两个阶段：
- 预热：先在最大上限处探测一次，成功后根据实际消耗量跳到一个较小的探测点；
- 二分：在 [low, high] 区间内对半收缩，直到区间宽度不超过 high 的一定比例。

返回的上限总是某次成功探测过的值，且与真实最小值的相对误差不超过容差。
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, List, Optional

from ..config.settings import Settings, get_settings
from ..errors import MonotonicityViolation, OracleContractError
from ..oracle.base import Oracle, ProbeOutcome, ProbeStatus
from .priming import PrimingStrategy, create_priming_strategy

logger = logging.getLogger(__name__)


@dataclass
class SearchState:
    """单次估算的搜索状态"""
    low: int  # 已知（或假定）不足的最大上限
    mid: int  # 下一次探测的上限
    high: int  # 已知足够的最小上限，未确认前为最大上限
    iterations: int = 0
    confirmed: bool = False  # 是否已观察到成功

    @property
    def width(self) -> int:
        return self.high - self.low

    def to_dict(self) -> Dict[str, Any]:
        return {
            "low": self.low,
            "mid": self.mid,
            "high": self.high,
            "iterations": self.iterations,
            "confirmed": self.confirmed,
        }


@dataclass(frozen=True)
class ProbeRecord:
    """一次探测的快照，区间为探测前的值"""
    work_id: Hashable
    iteration: int
    low: int
    mid: int
    high: int
    status: ProbeStatus
    consumed: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "work_id": self.work_id,
            "iteration": self.iteration,
            "low": self.low,
            "mid": self.mid,
            "high": self.high,
            "status": self.status.value,
            "consumed": self.consumed,
        }


@dataclass
class EstimationResult:
    """估算结果"""
    work_id: Hashable
    iterations: int
    limit: int
    status: ProbeStatus
    probes: List[ProbeRecord] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status is ProbeStatus.SUCCESS

    def to_dict(self, include_probes: bool = False) -> Dict[str, Any]:
        result = {
            "work_id": self.work_id,
            "iterations": self.iterations,
            "limit": self.limit,
            "status": self.status.value,
        }
        if include_probes:
            result["probes"] = [probe.to_dict() for probe in self.probes]
        return result


TraceCallback = Callable[[ProbeRecord], None]


class GasEstimator:
    """gas上限估算器主类"""

    def __init__(self, oracle: Oracle,
                 settings: Optional[Settings] = None,
                 priming_strategy: Optional[PrimingStrategy] = None,
                 trace: Optional[TraceCallback] = None):
        """
        Args:
            oracle: 预言机
            settings: 配置，默认使用全局设置
            priming_strategy: 预热策略，默认按配置创建
            trace: 每次探测后调用的回调，用于输出进度
        """
        settings = settings or get_settings()

        self.oracle = oracle
        self.min_limit = settings.min_limit
        self.max_limit = settings.max_limit
        self.tolerance_divisor = settings.tolerance_divisor
        self.verify_limit = settings.verify_limit
        self.priming_strategy = priming_strategy or create_priming_strategy(
            settings.priming_strategy, multiplier=settings.priming_multiplier
        )
        self.trace = trace

    def estimate(self, work_id: Hashable) -> EstimationResult:
        """
        估算工作单元所需的最小gas上限

        Args:
            work_id: 工作单元标识

        Returns:
            估算结果；上限内无法成功时状态为 EXHAUSTED，上限为最大上限

        Raises:
            MonotonicityViolation: 区间收敛到单点后仍然耗尽
            OracleContractError: 预言机报告的消耗量超出探测上限
        """
        state = SearchState(low=self.min_limit, mid=self.max_limit, high=self.max_limit)
        probes: List[ProbeRecord] = []

        while True:
            outcome = self._probe(work_id, state, probes)

            if outcome.succeeded:
                self._on_success(state, outcome)
            else:
                self._check_contradiction(work_id, state)
                if not state.confirmed:
                    # 最大上限也不够
                    logger.info("%s: exhausted at ceiling %d after %d probes",
                                work_id, state.high, state.iterations)
                    return EstimationResult(work_id, state.iterations, state.high,
                                            ProbeStatus.EXHAUSTED, probes)
                self._on_exhausted(state)

            if self._converged(state):
                break

        if self.verify_limit:
            self._verify(work_id, state, probes)

        logger.info("%s: limit %d after %d probes", work_id, state.high, state.iterations)
        return EstimationResult(work_id, state.iterations, state.high,
                                ProbeStatus.SUCCESS, probes)

    def _probe(self, work_id: Hashable, state: SearchState,
               probes: List[ProbeRecord]) -> ProbeOutcome:
        """在 state.mid 处探测一次并记录"""
        outcome = self.oracle.probe(work_id, state.mid)
        state.iterations += 1

        if outcome.succeeded and not 0 <= outcome.consumed <= state.mid:
            raise OracleContractError(work_id, state.mid, outcome.consumed)
        if not outcome.succeeded and outcome.consumed != state.mid:
            logger.warning("%s: exhausted probe at %d reported consumption %d",
                           work_id, state.mid, outcome.consumed)

        record = ProbeRecord(work_id, state.iterations, state.low, state.mid, state.high,
                             outcome.status, outcome.consumed)
        probes.append(record)
        logger.debug("probe %s[%dx, low: %d, mid: %d, high: %d] => %s: used %d",
                     work_id, record.iteration, record.low, record.mid, record.high,
                     outcome.status.value, outcome.consumed)
        if self.trace is not None:
            self.trace(record)
        return outcome

    def _on_success(self, state: SearchState, outcome: ProbeOutcome) -> None:
        # 只有第一次探测（在最大上限处）属于预热
        priming = state.iterations == 1
        state.high = state.mid
        state.confirmed = True

        if priming:
            # 消耗量本身证明至少需要这么多
            state.low = max(outcome.consumed, state.low)
            proposed = self.priming_strategy.next_probe(outcome.consumed, state.low, state.high)
            state.mid = max(state.low, min(proposed, state.high))
        else:
            state.mid = state.low + (state.high - state.low) // 2

    def _on_exhausted(self, state: SearchState) -> None:
        state.low = state.mid
        state.mid = state.mid + (state.high - state.mid) // 2

    def _check_contradiction(self, work_id: Hashable, state: SearchState) -> None:
        """耗尽点不低于已确认足够的上限时，单调性不成立"""
        collapsed = state.low == state.high
        above_confirmed = state.confirmed and state.mid >= state.high
        if collapsed or above_confirmed:
            logger.error("%s: limit %d exhausted but was confirmed sufficient (state %s)",
                         work_id, state.mid, state.to_dict())
            raise MonotonicityViolation(work_id, state.to_dict())

    def _converged(self, state: SearchState) -> bool:
        return (state.width * self.tolerance_divisor <= state.high
                or state.width <= 1)

    def _verify(self, work_id: Hashable, state: SearchState,
                probes: List[ProbeRecord]) -> None:
        """把区间收缩到 [high, high] 再探测一次"""
        state.low = state.mid = state.high
        outcome = self._probe(work_id, state, probes)
        if not outcome.succeeded:
            self._check_contradiction(work_id, state)
