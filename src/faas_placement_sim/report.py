"""report.py

放置结果的文本报表与 JSON 导出
"""

from typing import Sequence

from .host_pool import Host
from .memory_ledger import MemoryLedger
from .placement import PlacementDecision
from .tools import pretty_json_dump
from .warm_pool import WarmPoolTracker


def format_decision(d: PlacementDecision) -> str:
    """单次放置结果的一行摘要"""
    start = "Warm start" if d.warm else "Cold start"
    return "Time: {} - {}: function {} (invocation {}) -> host {}, runs [{}, {}]".format(
        d.start_time, start, d.function_type, d.invocation_id, d.host_id, d.start_time, d.end_time
    )


def format_warm_status(time: float, hosts: Sequence[Host], warm_pool: WarmPoolTracker, warm_window: float) -> str:
    """指定时间点各主机上仍处于预热状态的函数表

    Args:
        time (float): 时间点
        hosts (Sequence[Host]): 主机列表
        warm_pool (WarmPoolTracker): 预热状态记录
        warm_window (float): 预热时间窗口

    Returns:
        str: 表格文本
    """

    border = "+------+-------------------+-------------------------+"
    lines = [
        "================ WARM FUNCTIONS STATUS ================",
        f"Current time: {time}",
        border,
        "| Host | Function Type     | Time Left Warm (sec)    |",
        border,
    ]

    for host in hosts:
        warm_functions = warm_pool.warm_functions(host.host_id, time, warm_window)
        if not warm_functions:
            lines.append(f"| {host.host_id:<4d} | {'None':<17s} | {'N/A':<23s} |")
            continue
        for function_type, time_left in warm_functions:
            lines.append(f"| {host.host_id:<4d} | {function_type:<17d} | {time_left:<23.2f} |")

    lines.append(border)
    return "\n".join(lines)


def format_memory_usage(time: float, hosts: Sequence[Host], ledger: MemoryLedger) -> str:
    """指定时间点各主机的内存占用表

    Args:
        time (float): 时间点
        hosts (Sequence[Host]): 主机列表
        ledger (MemoryLedger): 内存占用记录

    Returns:
        str: 表格文本
    """

    border = "+------+-------------------+------------------+"
    lines = [
        "================ HOST MEMORY USAGE ================",
        f"Current time: {time}",
        border,
        "| Host | Used Memory (MB)  | Total Memory (MB)|",
        border,
    ]

    for host in hosts:
        used = ledger.occupancy_at(host.host_id, time)
        percentage = used / host.capacity * 100
        lines.append(f"| {host.host_id:<4d} | {used:<17.2f} | {host.capacity:<16.2f} | ({percentage:.1f}%)")

    lines.append(border)
    return "\n".join(lines)


def dump_placements_json(path: str, decisions: Sequence[PlacementDecision], hosts: Sequence[Host], tab_size: int = 4):
    """将放置结果和主机列表写入 JSON 文件，数组中的每个对象占一行

    Args:
        path (str): 输出文件路径
        decisions (Sequence[PlacementDecision]): 放置结果
        hosts (Sequence[Host]): 主机列表
        tab_size (int): 缩进空格数
    """

    pretty_json_dump(
        path,
        tab_size,
        placements=[
            {
                "invocation_id": d.invocation_id,
                "function_type": d.function_type,
                "host_id": d.host_id,
                "kind": d.kind.name,
                "warm": d.warm,
                "start_time": d.start_time,
                "end_time": d.end_time,
                "memory": d.memory,
            }
            for d in decisions
        ],
        hosts=[{"host_id": h.host_id, "capacity": h.capacity} for h in hosts],
    )
