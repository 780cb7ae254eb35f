#!/usr/bin/env python3
"""
测试全局设置
"""

import pytest
from pydantic import ValidationError

from gas_estimate.config.settings import Settings, config_manager, get_settings


class TestSettings:
    """测试设置校验"""

    def test_defaults(self):
        settings = Settings()
        assert settings.min_limit == 21000
        assert settings.max_limit == 15000000
        assert settings.tolerance_divisor == 10
        assert settings.tolerance == pytest.approx(0.1)
        assert settings.priming_strategy == "consumption"
        assert settings.verify_limit is False

    def test_floor_below_ceiling(self):
        with pytest.raises(ValidationError):
            Settings(min_limit=15000000, max_limit=15000000)

    @pytest.mark.parametrize("field, value", [
        ("min_limit", 0),
        ("max_limit", -1),
        ("tolerance_divisor", 0),
        ("priming_multiplier", 0),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            Settings(log_level="chatty")


class TestConfigManager:
    """测试配置管理器"""

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_update_settings(self):
        config_manager.update_settings(max_limit=30000000, tolerance_divisor=20)

        settings = get_settings()
        assert settings.max_limit == 30000000
        assert settings.tolerance_divisor == 20

    def test_update_validates_together(self):
        """同时移动上下限时不会因中间状态失败"""
        config_manager.update_settings(min_limit=20000000, max_limit=30000000)
        assert get_settings().min_limit == 20000000

    def test_update_rejects_invalid(self):
        with pytest.raises(ValidationError):
            config_manager.update_settings(min_limit=20000000)
        assert get_settings().min_limit == 21000

    def test_update_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown config parameter"):
            config_manager.update_settings(gas_price=1)

    def test_reset(self):
        config_manager.update_settings(verify_limit=True)
        config_manager.reset()
        assert get_settings().verify_limit is False
