from .config import PlacementConfig
from .host_pool import Host, HostPool, UnknownHostError
from .memory_ledger import MemoryLedger, MemoryUsageRecord, RecordKind
from .placement import HostLimitExceededError, PlacementDecision, PlacementEngine, PlacementKind
from .schedule import ExecutionSchedule, Invocation, reference_schedule
from .warm_pool import WarmPoolTracker, is_warm

__all__ = [
    "ExecutionSchedule",
    "Host",
    "HostLimitExceededError",
    "HostPool",
    "Invocation",
    "MemoryLedger",
    "MemoryUsageRecord",
    "PlacementConfig",
    "PlacementDecision",
    "PlacementEngine",
    "PlacementKind",
    "RecordKind",
    "UnknownHostError",
    "WarmPoolTracker",
    "is_warm",
    "reference_schedule",
]
