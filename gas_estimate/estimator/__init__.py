"""
估算引擎模块

提供核心的gas上限搜索算法和可替换的预热策略。
"""

from .base import GasEstimator, SearchState, ProbeRecord, EstimationResult
from .priming import (
    PrimingStrategy,
    ConsumptionMultipleStrategy,
    BisectionStrategy,
    create_priming_strategy,
    list_priming_strategies,
    register_priming_strategy,
)

__all__ = [
    "GasEstimator",
    "SearchState",
    "ProbeRecord",
    "EstimationResult",
    "PrimingStrategy",
    "ConsumptionMultipleStrategy",
    "BisectionStrategy",
    "create_priming_strategy",
    "list_priming_strategies",
    "register_priming_strategy",
]
