"""Base metric source interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import NamedTuple


class CpuTimes(NamedTuple):
    user_ns: int
    system_ns: int
    idle_ns: int


class MemoryPages(NamedTuple):
    total: int
    free: int
    shared: int
    buffers: int


class ProcessEntry(ABC):
    """A process as yielded by one pass over the process table.

    Both accessors may raise ``ProcessGone`` once the process has exited.
    """

    pid: int

    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def vm_pages(self) -> int | None:
        """Total virtual memory in pages, or None without a memory context."""
        ...


class MetricSource(ABC):
    """Read-only handle onto host CPU, memory and process accounting.

    Implementations raise ``SourceUnavailable`` when a counter or the
    process table cannot be read at all.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Source name used in logs and on the command line."""
        ...

    @property
    @abstractmethod
    def page_size(self) -> int:
        """Bytes per page for memory_pages() and vm_pages()."""
        ...

    @abstractmethod
    def cpu_times(self, index: int) -> CpuTimes:
        ...

    @abstractmethod
    def memory_pages(self) -> MemoryPages:
        ...

    @abstractmethod
    def processes(self) -> Iterator[ProcessEntry]:
        """Walk the live process table once, in host enumeration order."""
        ...
