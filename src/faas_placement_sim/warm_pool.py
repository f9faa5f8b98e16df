"""warm_pool.py

函数预热状态跟踪
"""

from .host_pool import HostPool


def is_warm(last_use_time: float, current_time: float, warm_window: float) -> bool:
    """判断函数在主机上是否仍处于预热状态 (边界包含在内)"""
    return current_time - last_use_time <= warm_window


class WarmPoolTracker:
    """记录每种函数最近一次在各主机上执行的时间

    底层结构为一个两层字典：函数类型 -> (主机 ID -> 最近执行时间)。
    内层字典按主机首次执行该函数的顺序保存，同一主机的记录只会被覆盖，不会被删除。
    记录本身不表示当前是否预热，是否预热由 `is_warm` 根据时间窗口判断。

    Args:
        host_pool (HostPool): 用于校验主机 ID 的主机池
    """

    __slots__ = (
        "_host_pool",
        "_last_use",
    )

    def __init__(self, host_pool: HostPool):
        self._host_pool = host_pool
        self._last_use: dict[int, dict[int, float]] = {}

    def reset(self):
        """删除所有预热记录"""
        self._last_use.clear()

    def record_use(self, function_type: int, host_id: int, time: float):
        """记录函数在主机上的一次执行

        Args:
            function_type (int): 函数类型
            host_id (int): 主机ID
            time (float): 执行时间
        """
        self._host_pool.check(host_id)
        self._last_use.setdefault(function_type, {})[host_id] = time

    def candidate_hosts(self, function_type: int) -> list[tuple[int, float]]:
        """获得执行过该函数的所有主机及其最近执行时间 (按插入顺序)

        Args:
            function_type (int): 函数类型

        Returns:
            list[tuple[int, float]]: (主机 ID, 最近执行时间) 列表；函数从未执行过时返回空列表
        """
        return list(self._last_use.get(function_type, {}).items())

    def last_use(self, function_type: int, host_id: int) -> float | None:
        """获得函数在指定主机上的最近执行时间，从未执行过时返回 None"""
        self._host_pool.check(host_id)
        return self._last_use.get(function_type, {}).get(host_id)

    def warm_functions(self, host_id: int, time: float, warm_window: float) -> list[tuple[int, float]]:
        """获得指定时间点主机上仍处于预热状态的函数及其剩余预热时间

        剩余预热时间为 0 的函数虽然仍满足 `is_warm`，但不在结果中出现；最近执行时间晚于 time 的记录也会被忽略。

        Args:
            host_id (int): 主机ID
            time (float): 时间点
            warm_window (float): 预热时间窗口

        Returns:
            list[tuple[int, float]]: (函数类型, 剩余预热时间) 列表
        """

        self._host_pool.check(host_id)

        result: list[tuple[int, float]] = []
        for function_type, hosts in self._last_use.items():
            if host_id not in hosts:
                continue
            if hosts[host_id] > time:
                continue
            time_left = warm_window - (time - hosts[host_id])
            if time_left > 0:
                result.append((function_type, time_left))

        return result
