"""
gas-estimate: 合约调用gas上限估算工具

通过反复探测执行环境（预言机），自适应地搜索让合约调用成功的最小gas上限。
"""

__version__ = "0.1.0"

from .config.settings import Settings, get_settings
from .errors import EstimationError, MonotonicityViolation, OracleContractError, UnknownWorkUnitError
from .estimator.base import GasEstimator, SearchState, ProbeRecord, EstimationResult
from .estimator.priming import PrimingStrategy, ConsumptionMultipleStrategy, BisectionStrategy
from .oracle.base import Oracle, ProbeOutcome, ProbeStatus
from .oracle.table import ContractSpecs, TableOracle, create_table_oracle

__all__ = [
    "Settings",
    "get_settings",
    "EstimationError",
    "MonotonicityViolation",
    "OracleContractError",
    "UnknownWorkUnitError",
    "GasEstimator",
    "SearchState",
    "ProbeRecord",
    "EstimationResult",
    "PrimingStrategy",
    "ConsumptionMultipleStrategy",
    "BisectionStrategy",
    "Oracle",
    "ProbeOutcome",
    "ProbeStatus",
    "ContractSpecs",
    "TableOracle",
    "create_table_oracle",
]
