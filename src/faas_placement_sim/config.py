"""config.py

放置策略配置模型
"""

from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, model_validator


class PlacementConfig(BaseModel):
    warm_window: float = Field(5.0, ge=0, description="函数保持预热的时间窗口 (秒)")
    memory_fraction: float = Field(0.4, gt=0, le=1, description="每次调用占用的内存比例 (相对于主机标称内存)")
    warm_duration: float = Field(1.0, gt=0, description="热启动时的执行时长 (秒)")
    cold_duration: float = Field(2.0, gt=0, description="冷启动时的执行时长 (秒)")
    host_capacity: float = Field(1024, gt=0, description="主机内存容量 (MB)")
    initial_hosts: int = Field(2, ge=0, description="预先创建的主机数量")
    max_hosts: Optional[int] = Field(None, gt=0, description="主机数量上限，None 表示不限制")
    warm_order: Literal["insertion", "most_recent", "least_recent"] = Field(
        "insertion", description="热主机候选的遍历顺序"
    )
    cold_order: Literal["first_fit", "best_fit", "worst_fit"] = Field("first_fit", description="冷启动时主机的遍历顺序")

    @classmethod
    def from_yaml(cls, path: str) -> "PlacementConfig":
        """从 YAML 文件加载放置策略配置"""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    @model_validator(mode="after")
    def validate_host_limit(self) -> "PlacementConfig":
        if self.max_hosts is not None and self.max_hosts < self.initial_hosts:
            raise ValueError(f"主机数量上限 ({self.max_hosts}) 不能小于预先创建的主机数量 ({self.initial_hosts})")

        return self

    @property
    def memory_per_invocation(self) -> float:
        """每次调用需要占用的内存大小 (MB)"""
        return self.memory_fraction * self.host_capacity

    def duration(self, warm: bool) -> float:
        """根据启动类型返回执行时长"""
        return self.warm_duration if warm else self.cold_duration
