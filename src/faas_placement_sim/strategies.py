"""strategies.py

可替换的主机遍历顺序策略

放置引擎总是按策略返回的顺序选择第一台满足条件的主机，策略只决定遍历顺序。

- 热启动策略：输入 (主机 ID, 最近执行时间) 列表，返回排序后的列表
- 冷启动策略：输入主机列表和查询主机当前内存占用的函数，返回排序后的主机列表
"""

from typing import Callable, Sequence

from .host_pool import Host

WarmOrder = Callable[[Sequence[tuple[int, float]]], list[tuple[int, float]]]
ColdOrder = Callable[[Sequence[Host], Callable[[int], float]], list[Host]]


def insertion_order(candidates: Sequence[tuple[int, float]]) -> list[tuple[int, float]]:
    """按主机首次执行该函数的顺序"""
    return list(candidates)


def most_recent_first(candidates: Sequence[tuple[int, float]]) -> list[tuple[int, float]]:
    """最近执行时间越晚越优先"""
    return sorted(candidates, key=lambda c: -c[1])


def least_recent_first(candidates: Sequence[tuple[int, float]]) -> list[tuple[int, float]]:
    """最近执行时间越早越优先"""
    return sorted(candidates, key=lambda c: c[1])


def first_fit(hosts: Sequence[Host], occupancy: Callable[[int], float]) -> list[Host]:
    """按主机 ID 顺序"""
    return list(hosts)


def best_fit(hosts: Sequence[Host], occupancy: Callable[[int], float]) -> list[Host]:
    """剩余内存越少越优先，剩余内存相同时按主机 ID 顺序"""
    return sorted(hosts, key=lambda h: h.capacity - occupancy(h.host_id))


def worst_fit(hosts: Sequence[Host], occupancy: Callable[[int], float]) -> list[Host]:
    """剩余内存越多越优先，剩余内存相同时按主机 ID 顺序"""
    return sorted(hosts, key=lambda h: occupancy(h.host_id) - h.capacity)


WARM_ORDERS: dict[str, WarmOrder] = {
    "insertion": insertion_order,
    "most_recent": most_recent_first,
    "least_recent": least_recent_first,
}

COLD_ORDERS: dict[str, ColdOrder] = {
    "first_fit": first_fit,
    "best_fit": best_fit,
    "worst_fit": worst_fit,
}
