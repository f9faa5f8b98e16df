"""memory_ledger.py

基于区间事件的主机内存占用记录
"""

from enum import IntEnum
from typing import NamedTuple

from .host_pool import HostPool


class RecordKind(IntEnum):
    """内存记录类型

    - COMMIT: 调用开始时占用内存
    - RELEASE: 调用结束时释放内存
    """

    COMMIT = 0
    RELEASE = 1


class MemoryUsageRecord(NamedTuple):
    """主机的内存占用记录

    Attributes:
        timestamp (float): 时间戳
        amount (float): 占用或释放的内存大小 (MB)
        kind (RecordKind): 记录类型
    """

    timestamp: float
    amount: float
    kind: RecordKind


class MemoryLedger:
    """记录每台主机的内存占用和释放事件

    底层结构为一个字典，字典的键为主机 ID，值为该主机的内存记录列表。
    记录列表按插入顺序保存，不保证按时间戳有序，
    因此任意时间点的内存占用都通过遍历全部记录重新计算，而不是维护一个运行中的累计值。

    Args:
        host_pool (HostPool): 用于校验主机 ID 的主机池
    """

    __slots__ = (
        "_host_pool",
        "_records",
    )

    def __init__(self, host_pool: HostPool):
        self._host_pool = host_pool
        self._records: dict[int, list[MemoryUsageRecord]] = {}

    def reset(self):
        """删除所有主机的内存记录"""
        self._records.clear()

    def _append(self, host_id: int, record: MemoryUsageRecord):
        self._host_pool.check(host_id)

        if record.timestamp < 0:
            raise ValueError(f"Record timestamp ({record.timestamp}) must be non-negative")
        if record.amount <= 0:
            raise ValueError(f"Memory amount ({record.amount}) must be positive")

        self._records.setdefault(host_id, []).append(record)

    def commit(self, host_id: int, time: float, amount: float):
        """在指定时间占用主机内存

        本方法不检查主机容量，容量检查由调用方在调用之前完成。

        Args:
            host_id (int): 主机ID
            time (float): 占用开始时间
            amount (float): 占用的内存大小 (MB)
        """
        self._append(host_id, MemoryUsageRecord(time, amount, RecordKind.COMMIT))

    def release(self, host_id: int, time: float, amount: float):
        """在指定时间释放主机内存

        释放时间不早于对应的占用时间，由调用方保证。

        Args:
            host_id (int): 主机ID
            time (float): 释放时间
            amount (float): 释放的内存大小 (MB)
        """
        self._append(host_id, MemoryUsageRecord(time, amount, RecordKind.RELEASE))

    def occupancy_at(self, host_id: int, time: float) -> float:
        """获得主机在指定时间点的内存占用

        时间戳小于等于 time 的占用记录之和减去时间戳小于等于 time 的释放记录之和，结果不小于 0。

        Args:
            host_id (int): 主机ID
            time (float): 时间点

        Returns:
            float: 内存占用 (MB)
        """

        self._host_pool.check(host_id)

        total = 0.0
        for r in self._records.get(host_id, ()):
            if r.timestamp > time:
                continue
            if r.kind == RecordKind.COMMIT:
                total += r.amount
            else:
                total -= r.amount

        return max(0.0, total)

    def records(self, host_id: int) -> tuple[MemoryUsageRecord, ...]:
        """按插入顺序返回主机的全部内存记录"""
        self._host_pool.check(host_id)
        return tuple(self._records.get(host_id, ()))
