"""placement.py

函数调用放置引擎
"""

import logging
import math
from enum import IntEnum
from typing import NamedTuple, Optional

from .config import PlacementConfig
from .host_pool import Host, HostPool
from .memory_ledger import MemoryLedger
from .schedule import ExecutionSchedule, Invocation
from .strategies import COLD_ORDERS, WARM_ORDERS, ColdOrder, WarmOrder
from .warm_pool import WarmPoolTracker, is_warm

logger = logging.getLogger(__name__)


class HostLimitExceededError(RuntimeError):
    """主机数量达到上限，且没有任何已有主机能够容纳调用"""


class PlacementKind(IntEnum):
    """放置结果类型

    - WARM: 复用已有主机上预热的执行环境
    - COLD_EXISTING: 在已有主机上冷启动
    - COLD_NEW: 创建新主机并冷启动
    """

    WARM = 0
    COLD_EXISTING = 1
    COLD_NEW = 2


class PlacementDecision(NamedTuple):
    """一次调用的放置结果

    Attributes:
        invocation_id (int): 调用ID
        function_type (int): 函数类型
        host_id (int): 调用被放置到的主机ID
        kind (PlacementKind): 放置结果类型
        start_time (float): 开始执行的时间
        end_time (float): 执行完成的时间
        memory (float): 执行期间占用的内存大小 (MB)
    """

    invocation_id: int
    function_type: int
    host_id: int
    kind: PlacementKind
    start_time: float
    end_time: float
    memory: float

    @property
    def warm(self) -> bool:
        return self.kind == PlacementKind.WARM


class PlacementEngine:
    """Serverless 函数调用放置引擎

    按到达时间顺序逐个处理调用：

    1. 在执行过同类型函数且仍处于预热状态的主机中，选择第一台内存足够的主机 (热启动)
    2. 否则在所有已有主机中，选择第一台内存足够的主机 (冷启动)
    3. 否则创建一台新主机 (冷启动)

    Args:
        config (PlacementConfig | None): 放置策略配置，None 时使用默认配置
        warm_order (WarmOrder | None): 热主机候选的遍历顺序，None 时按 `config.warm_order` 选择
        cold_order (ColdOrder | None): 冷启动时主机的遍历顺序，None 时按 `config.cold_order` 选择
    """

    __slots__ = (
        "config",
        "host_pool",
        "ledger",
        "warm_pool",
        "decisions",
        "_warm_order",
        "_cold_order",
        "_current_time",
    )

    def __init__(
        self,
        config: Optional[PlacementConfig] = None,
        warm_order: Optional[WarmOrder] = None,
        cold_order: Optional[ColdOrder] = None,
    ):
        self.config: PlacementConfig = config if config is not None else PlacementConfig()
        self._warm_order: WarmOrder = warm_order if warm_order is not None else WARM_ORDERS[self.config.warm_order]
        self._cold_order: ColdOrder = cold_order if cold_order is not None else COLD_ORDERS[self.config.cold_order]

        self.host_pool = HostPool(self.config.initial_hosts, self.config.host_capacity)
        self.ledger = MemoryLedger(self.host_pool)
        self.warm_pool = WarmPoolTracker(self.host_pool)

        self.decisions: list[PlacementDecision] = []
        self._current_time: float = float("-inf")

    def reset(self):
        """恢复到只有预置主机、没有任何内存记录和预热记录的初始状态"""
        self.host_pool.reset()
        self.ledger.reset()
        self.warm_pool.reset()
        self.decisions.clear()
        self._current_time = float("-inf")

    def run(self, schedule: ExecutionSchedule) -> list[PlacementDecision]:
        """放置执行计划中的所有调用

        执行计划会先被 (稳定地) 按到达时间排序，引擎状态和调用的放置结果会被重置，
        因此对同一个执行计划重复调用本方法总能得到相同的结果。

        Args:
            schedule (ExecutionSchedule): 执行计划

        Returns:
            list[PlacementDecision]: 按处理顺序排列的放置结果
        """

        schedule.sort()
        schedule.reset()
        self.reset()

        for invocation in schedule:
            self.place(invocation)

        return list(self.decisions)

    def place(self, invocation: Invocation) -> PlacementDecision:
        """在调用到达时放置该调用

        Args:
            invocation (Invocation): 待放置的调用，其到达时间不能早于上一个已放置调用的到达时间

        Returns:
            PlacementDecision: 放置结果
        """

        if invocation.placed:
            raise RuntimeError(f"Invocation {invocation.invocation_id} has already been placed")

        current_time = invocation.arrival_time
        if current_time < self._current_time:
            raise ValueError(
                f"Invocations must be placed in arrival time order: {current_time} is earlier than {self._current_time}"
            )
        self._current_time = current_time

        memory = self.config.memory_per_invocation

        host_id = self._find_warm_host(invocation.function_type, current_time, memory)
        if host_id is not None:
            kind = PlacementKind.WARM
        else:
            host_id = self._find_cold_host(current_time, memory)
            if host_id is not None:
                kind = PlacementKind.COLD_EXISTING
            else:
                host_id = self._create_host()
                kind = PlacementKind.COLD_NEW

        warm = kind == PlacementKind.WARM
        start_time = current_time
        end_time = current_time + self.config.duration(warm)

        invocation.place(host_id, warm, start_time, end_time)

        # 开始时占用内存，结束时释放相同大小的内存
        self.ledger.commit(host_id, start_time, memory)
        self.ledger.release(host_id, end_time, memory)

        # 冷启动同样会刷新预热时间，使得之后同类型的调用可以在该主机上热启动
        self.warm_pool.record_use(invocation.function_type, host_id, current_time)

        decision = PlacementDecision(
            invocation_id=invocation.invocation_id,
            function_type=invocation.function_type,
            host_id=host_id,
            kind=kind,
            start_time=start_time,
            end_time=end_time,
            memory=memory,
        )
        self.decisions.append(decision)

        logger.debug(
            "Time %s: function %d (invocation %d) -> host %d (%s)",
            current_time,
            invocation.function_type,
            invocation.invocation_id,
            host_id,
            kind.name,
        )

        return decision

    def _admits(self, host: Host, time: float, memory: float) -> bool:
        """主机在指定时间点是否有足够的内存"""
        # 浮点累加会产生舍入误差，恰好占满容量时也应当允许放置
        required = self.ledger.occupancy_at(host.host_id, time) + memory
        return required <= host.capacity or math.isclose(required, host.capacity)

    def _find_warm_host(self, function_type: int, time: float, memory: float) -> Optional[int]:
        """寻找第一台预热且内存足够的主机，找不到时返回 None"""
        for host_id, last_use_time in self._warm_order(self.warm_pool.candidate_hosts(function_type)):
            if not is_warm(last_use_time, time, self.config.warm_window):
                continue

            if self._admits(self.host_pool[host_id], time, memory):
                logger.debug(
                    "Found warm host %d for function %d (last execution: %s, elapsed: %s)",
                    host_id,
                    function_type,
                    last_use_time,
                    time - last_use_time,
                )
                return host_id

            # 预热但内存不足的主机直接跳过，不会再被重试
            logger.debug("Found warm host %d for function %d but insufficient memory", host_id, function_type)

        return None

    def _find_cold_host(self, time: float, memory: float) -> Optional[int]:
        """寻找第一台内存足够的已有主机，找不到时返回 None"""
        hosts = self._cold_order(self.host_pool.hosts(), lambda host_id: self.ledger.occupancy_at(host_id, time))
        for host in hosts:
            if self._admits(host, time, memory):
                return host.host_id

        return None

    def _create_host(self) -> int:
        """创建一台标准容量的新主机"""
        max_hosts = self.config.max_hosts
        if max_hosts is not None and len(self.host_pool) >= max_hosts:
            raise HostLimitExceededError(f"Host limit ({max_hosts}) reached and no existing host has enough memory")

        host_id = self.host_pool.create_host(self.config.host_capacity)
        logger.info("Creating new host %d due to memory constraints", host_id)
        return host_id

    @property
    def hosts(self) -> tuple[Host, ...]:
        """当前主机池中的所有主机"""
        return self.host_pool.hosts()
