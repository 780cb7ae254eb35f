"""
预热策略

第一次探测（在最大上限处）成功后，用实际消耗量选择下一次探测点。
真实所需通常远低于上限，直接跳到消耗量附近可以省掉大量二分步骤。
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Type


class PrimingStrategy(ABC):
    """预热策略基类"""

    name: str = ""

    @abstractmethod
    def next_probe(self, consumed: int, low: int, high: int) -> int:
        """
        选择预热成功后的下一个探测点

        Args:
            consumed: 最大上限处的实际消耗量
            low: 当前下界（已提升到消耗量）
            high: 当前上界（即最大上限）

        Returns:
            下一个探测上限，估算器会将其限制在 [low, high] 内
        """
        pass


class ConsumptionMultipleStrategy(PrimingStrategy):
    """按消耗量倍数跳转，不超过区间中点"""

    name = "consumption"

    def __init__(self, multiplier: int = 3):
        if multiplier < 1:
            raise ValueError(f"multiplier must be at least 1, got {multiplier}")
        self.multiplier = multiplier

    def next_probe(self, consumed: int, low: int, high: int) -> int:
        return min(consumed * self.multiplier, low + (high - low) // 2)


class BisectionStrategy(PrimingStrategy):
    """不使用启发式，直接取中点"""

    name = "bisection"

    def __init__(self, **kwargs):
        pass

    def next_probe(self, consumed: int, low: int, high: int) -> int:
        return low + (high - low) // 2


_STRATEGIES: Dict[str, Type[PrimingStrategy]] = {
    ConsumptionMultipleStrategy.name: ConsumptionMultipleStrategy,
    BisectionStrategy.name: BisectionStrategy,
}


def register_priming_strategy(strategy_class: Type[PrimingStrategy]) -> None:
    """注册预热策略"""
    if not strategy_class.name:
        raise ValueError(f"Strategy {strategy_class.__name__} has no name")
    _STRATEGIES[strategy_class.name] = strategy_class


def create_priming_strategy(name: str, **kwargs) -> PrimingStrategy:
    """
    创建预热策略实例

    Args:
        name: 策略名称
        **kwargs: 策略参数

    Returns:
        策略实例
    """
    if name not in _STRATEGIES:
        raise ValueError(f"Unsupported priming strategy: {name}")
    return _STRATEGIES[name](**kwargs)


def list_priming_strategies() -> List[str]:
    """获取所有支持的预热策略"""
    return list(_STRATEGIES.keys())
