"""host_pool.py

主机及主机池建模
"""


class UnknownHostError(LookupError):
    """查询了从未创建过的主机"""

    def __init__(self, host_id: int):
        super().__init__(f"Host {host_id} has never been created")
        self.host_id = host_id


class Host:
    """主机 (虚拟机) 模型

    Args:
        host_id (int): 主机ID
        capacity (float): 主机内存容量 (MB)
    """

    __slots__ = (
        "host_id",
        "capacity",
    )

    def __init__(self, host_id: int, capacity: float):
        if capacity <= 0:
            raise ValueError(f"Host capacity must be positive: {capacity}")

        self.host_id: int = host_id
        self.capacity: float = capacity

    def __repr__(self) -> str:
        return f"Host(host_id={self.host_id}, capacity={self.capacity})"


class HostPool:
    """只增不减的主机注册表

    主机 ID 从 0 开始按创建顺序连续分配，因此预先创建 n 台主机后，新主机的 ID 从 n 开始。

    Args:
        initial_hosts (int): 预先创建的主机数量
        capacity (float): 预先创建的主机的内存容量 (MB)
    """

    __slots__ = (
        "initial_hosts",
        "capacity",
        "_hosts",
    )

    def __init__(self, initial_hosts: int, capacity: float):
        if initial_hosts < 0:
            raise ValueError(f"Initial host count must be non-negative: {initial_hosts}")

        self.initial_hosts: int = initial_hosts
        self.capacity: float = capacity
        self._hosts: list[Host] = []
        self.reset()

    def __len__(self) -> int:
        return len(self._hosts)

    def __contains__(self, host_id: int) -> bool:
        return 0 <= host_id < len(self._hosts)

    def __getitem__(self, host_id: int) -> Host:
        if host_id not in self:
            raise UnknownHostError(host_id)
        return self._hosts[host_id]

    def __iter__(self):
        return iter(self._hosts)

    def reset(self):
        """删除所有主机，并重新创建预置主机"""
        self._hosts = [Host(i, self.capacity) for i in range(self.initial_hosts)]

    def create_host(self, capacity: float) -> int:
        """创建一台新主机并加入主机池

        Args:
            capacity (float): 新主机的内存容量 (MB)

        Returns:
            int: 新主机的 ID
        """

        host_id = len(self._hosts)
        self._hosts.append(Host(host_id, capacity))
        return host_id

    def hosts(self) -> tuple[Host, ...]:
        """按主机 ID 顺序返回所有主机"""
        return tuple(self._hosts)

    def check(self, host_id: int):
        """检查主机是否存在，不存在时抛出 UnknownHostError"""
        if host_id not in self:
            raise UnknownHostError(host_id)
