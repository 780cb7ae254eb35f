"""
pytest配置文件

定义测试的全局配置和fixture。
"""

import pytest
import sys
from pathlib import Path

# 添加项目根目录到Python路径
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from gas_estimate.config.settings import Settings, config_manager
from gas_estimate.oracle.base import Oracle, ProbeOutcome
from gas_estimate.oracle.table import TableOracle


class DriftingOracle(Oracle):
    """每次探测后所需上限都会上涨的预言机，违反单调性"""

    def __init__(self, required: int = 24000, step: int = 5000):
        self.required = required
        self.step = step
        self.calls = 0

    def probe(self, work_id, limit):
        self.calls += 1
        required = self.required
        self.required += self.step
        if limit >= required:
            return ProbeOutcome.success(required)
        return ProbeOutcome.exhausted(limit)


class RecordingOracle(Oracle):
    """记录探测序列的包装器"""

    def __init__(self, inner: Oracle):
        self.inner = inner
        self.limits = []

    def probe(self, work_id, limit):
        self.limits.append(limit)
        return self.inner.probe(work_id, limit)


@pytest.fixture(autouse=True)
def reset_settings():
    """每个测试使用默认全局设置"""
    config_manager.reset()
    yield
    config_manager.reset()


@pytest.fixture
def default_settings():
    """默认估算配置"""
    return Settings()


@pytest.fixture
def table_oracle():
    """内置合约表"""
    return TableOracle()


@pytest.fixture
def recording_oracle(table_oracle):
    """记录探测序列的内置合约表"""
    return RecordingOracle(table_oracle)


@pytest.fixture
def drifting_oracle():
    """所需上限持续上涨的预言机"""
    return DriftingOracle()
