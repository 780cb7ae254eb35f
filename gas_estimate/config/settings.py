"""
全局系统设置

定义估算器的下限、上限、收敛容差等配置参数和默认值。
"""

from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator


class Settings(BaseModel):
    """系统设置类"""

    # 搜索区间
    min_limit: int = Field(default=21000, gt=0, description="最小gas上限（任何调用的基础开销）")
    max_limit: int = Field(default=15000000, gt=0, description="最大gas上限（愿意尝试的上限）")

    # 收敛配置
    tolerance_divisor: int = Field(default=10, ge=1, description="区间宽度不超过 high/divisor 时停止")
    verify_limit: bool = Field(default=False, description="收敛后是否复测结果上限")

    # 预热阶段策略
    priming_strategy: str = Field(default="consumption", description="预热策略名称")
    priming_multiplier: int = Field(default=3, ge=1, description="消耗量倍数（consumption策略）")

    # 日志配置
    log_level: str = Field(default="WARNING", description="日志级别")

    # 输出配置
    default_output_format: str = Field(default="table", description="默认输出格式")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def check_bounds(self) -> "Settings":
        if self.min_limit >= self.max_limit:
            raise ValueError(
                f"min_limit ({self.min_limit}) must be lower than max_limit ({self.max_limit})"
            )
        return self

    @property
    def tolerance(self) -> float:
        """相对容差"""
        return 1.0 / self.tolerance_divisor


class ConfigManager:
    """配置管理器"""

    def __init__(self):
        self._settings: Optional[Settings] = None

    def get_settings(self) -> Settings:
        """获取设置实例（单例模式）"""
        if self._settings is None:
            self._settings = Settings()
        return self._settings

    def update_settings(self, **kwargs) -> Settings:
        """
        更新设置

        整体重新校验，避免先改下限再改上限时出现中间非法状态。
        """
        current = self.get_settings().model_dump()
        for key in kwargs:
            if key not in current:
                raise ValueError(f"Unknown config parameter: {key}")
        current.update(kwargs)
        self._settings = Settings(**current)
        return self._settings

    def reset(self) -> None:
        """恢复默认设置"""
        self._settings = None


# 全局配置管理器实例
config_manager = ConfigManager()


def get_settings() -> Settings:
    """获取全局设置"""
    return config_manager.get_settings()
