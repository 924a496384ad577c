"""Snapshot data model.

Every value here is built fresh by one collection pass, never mutated, and
dropped once it has been serialized. Nothing ties a record to earlier
snapshots: there is no history and no identity for a pid across requests.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

# Kernel task names are at most TASK_COMM_LEN - 1 characters.
NAME_MAX_LEN = 15


@dataclass(frozen=True, slots=True)
class CpuSample:
    """Cumulative time counters of one logical CPU, in nanoseconds."""

    user_ns: int
    system_ns: int
    idle_ns: int
    cpu_index: int = 0

    def __post_init__(self) -> None:
        if min(self.user_ns, self.system_ns, self.idle_ns) < 0:
            raise ValueError("CPU time counters must be non-negative")


@dataclass(frozen=True, slots=True)
class MemorySample:
    """System memory totals, in pages."""

    total: int
    free: int
    shared: int
    buffers: int

    def __post_init__(self) -> None:
        if min(self.total, self.free, self.shared, self.buffers) < 0:
            raise ValueError("memory page counts must be non-negative")
        if self.free > self.total:
            raise ValueError(f"free pages ({self.free}) exceed total pages ({self.total})")


@dataclass(frozen=True, slots=True)
class ProcessRecord:
    """One live process with a memory context.

    ``memory_kb`` is the total virtual size of the process, not its
    resident set.
    """

    name: str
    pid: int
    memory_kb: int

    def __post_init__(self) -> None:
        if self.pid <= 0:
            raise ValueError(f"pid must be positive, got {self.pid}")
        if self.memory_kb < 0:
            raise ValueError("memory_kb must be non-negative")
        if len(self.name) > NAME_MAX_LEN:
            object.__setattr__(self, "name", self.name[:NAME_MAX_LEN])


@dataclass(frozen=True, slots=True)
class Snapshot:
    cpu: CpuSample
    memory: MemorySample
    processes: tuple[ProcessRecord, ...]
    process_count: int
    page_size: int

    def __post_init__(self) -> None:
        if self.process_count != len(self.processes):
            raise ValueError(
                f"process_count ({self.process_count}) does not match "
                f"{len(self.processes)} process records"
            )
        if self.page_size <= 0:
            raise ValueError("page_size must be positive")

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible representation."""
        data = asdict(self)
        data["processes"] = [asdict(p) for p in self.processes]
        return data
