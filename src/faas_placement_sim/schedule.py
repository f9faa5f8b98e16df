"""schedule.py

函数调用执行计划
"""

from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field


class Invocation:
    """一次函数调用

    Args:
        invocation_id (int): 调用ID (在执行计划中的插入顺序)
        function_type (int): 函数类型，同类型的调用可以复用同一个预热的执行环境
        arrival_time (float): 调用到达时间
    """

    __slots__ = (
        "invocation_id",
        "function_type",
        "arrival_time",
        "host_id",
        "warm",
        "start_time",
        "end_time",
    )

    def __init__(self, invocation_id: int, function_type: int, arrival_time: float):
        if arrival_time < 0:
            raise ValueError(f"Arrival time ({arrival_time}) must be non-negative")

        self.invocation_id: int = invocation_id
        self.function_type: int = function_type
        self.arrival_time: float = arrival_time

        # 以下字段由放置引擎填写，且只填写一次
        self.host_id: Optional[int] = None
        self.warm: Optional[bool] = None
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def __repr__(self) -> str:
        return (
            f"Invocation(invocation_id={self.invocation_id}, function_type={self.function_type}, "
            f"arrival_time={self.arrival_time}, host_id={self.host_id}, warm={self.warm})"
        )

    def reset(self):
        """清除放置结果"""
        self.host_id = None
        self.warm = None
        self.start_time = None
        self.end_time = None

    @property
    def placed(self) -> bool:
        """调用是否已经被放置"""
        return self.host_id is not None

    @property
    def duration(self) -> Optional[float]:
        if self.start_time is None or self.end_time is None:
            return None
        return self.end_time - self.start_time

    def place(self, host_id: int, warm: bool, start_time: float, end_time: float):
        """记录调用的放置结果"""
        if self.placed:
            raise RuntimeError(f"Invocation {self.invocation_id} has already been placed on host {self.host_id}")
        if start_time < self.arrival_time:
            raise ValueError(f"Start time ({start_time}) cannot be earlier than arrival time ({self.arrival_time})")
        if end_time < start_time:
            raise ValueError(f"End time ({end_time}) cannot be earlier than start time ({start_time})")

        self.host_id = host_id
        self.warm = warm
        self.start_time = start_time
        self.end_time = end_time


class InvocationData(BaseModel):
    function_type: int = Field(..., ge=0, description="函数类型")
    arrival_time: float = Field(..., ge=0, description="调用到达时间")


class ScheduleData(BaseModel):
    invocations: list[InvocationData] = Field(..., description="调用列表 (按插入顺序)")


class ExecutionSchedule:
    """函数调用执行计划

    Args:
        pairs (Iterable[tuple[int, float]]): (函数类型, 到达时间) 列表
    """

    __slots__ = ("_invocations",)

    def __init__(self, pairs: Iterable[tuple[int, float]]):
        self._invocations: list[Invocation] = [
            Invocation(i, function_type, arrival_time) for i, (function_type, arrival_time) in enumerate(pairs)
        ]

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, float]]) -> "ExecutionSchedule":
        return cls(pairs)

    @classmethod
    def from_data(cls, data: ScheduleData) -> "ExecutionSchedule":
        return cls((inv.function_type, inv.arrival_time) for inv in data.invocations)

    @classmethod
    def from_yaml(cls, path: str) -> "ExecutionSchedule":
        """从 YAML 文件加载执行计划

        YAML 文件格式：

            invocations:
              - {function_type: 0, arrival_time: 0.0}
              - {function_type: 2, arrival_time: 3.0}
        """
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.from_data(ScheduleData(**(data or {})))

    def __len__(self) -> int:
        return len(self._invocations)

    def __getitem__(self, index: int) -> Invocation:
        return self._invocations[index]

    def __iter__(self):
        return iter(self._invocations)

    @property
    def invocations(self) -> tuple[Invocation, ...]:
        return tuple(self._invocations)

    @property
    def is_sorted(self) -> bool:
        """执行计划是否已按到达时间升序排列"""
        return all(a.arrival_time <= b.arrival_time for a, b in zip(self._invocations, self._invocations[1:]))

    def reset(self):
        """清除所有调用的放置结果"""
        for inv in self._invocations:
            inv.reset()

    def sort(self):
        """按到达时间升序排列 (稳定排序，到达时间相同的调用保持插入顺序)"""
        self._invocations.sort(key=lambda inv: inv.arrival_time)


def reference_schedule() -> ExecutionSchedule:
    """参考场景的执行计划

    - 时间 0 时到达函数类型 0 ~ 5 的 6 次调用
    - 时间 3.0 时再次调用函数类型 2
    - 时间 6.0 时再次调用函数类型 4
    """

    pairs = [(function_type, 0.0) for function_type in range(6)]
    pairs.append((2, 3.0))
    pairs.append((4, 6.0))
    return ExecutionSchedule(pairs)
