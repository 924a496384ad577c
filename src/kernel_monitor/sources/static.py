"""Fabricated metric source.

Holds fixed values in memory so snapshots can be produced without touching
host state.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from ..errors import ProcessGone, SourceUnavailable
from .base import CpuTimes, MemoryPages, MetricSource, ProcessEntry


class StaticProcess(ProcessEntry):
    """A fabricated process.

    ``vm_pages=None`` models a task without a memory context. ``gone=True``
    models a process that exits after it was enumerated.
    """

    def __init__(
        self, pid: int, name: str, vm_pages: int | None = None, *, gone: bool = False
    ) -> None:
        self.pid = pid
        self._name = name
        self._vm_pages = vm_pages
        self.gone = gone

    def name(self) -> str:
        if self.gone:
            raise ProcessGone(self.pid)
        return self._name

    def vm_pages(self) -> int | None:
        if self.gone:
            raise ProcessGone(self.pid)
        return self._vm_pages


class StaticSource(MetricSource):
    def __init__(
        self,
        cpus: Sequence[CpuTimes],
        memory: MemoryPages,
        processes: Sequence[StaticProcess] = (),
        *,
        page_size: int = 4096,
        available: bool = True,
    ) -> None:
        self.cpus = list(cpus)
        self.memory = memory
        self.process_table = list(processes)
        self.available = available
        self._page_size = page_size

    @property
    def name(self) -> str:
        return "static"

    @property
    def page_size(self) -> int:
        return self._page_size

    def _check(self) -> None:
        if not self.available:
            raise SourceUnavailable("static source marked unavailable")

    def cpu_times(self, index: int) -> CpuTimes:
        self._check()
        if not 0 <= index < len(self.cpus):
            raise SourceUnavailable(f"CPU {index} not present (source has {len(self.cpus)})")
        return self.cpus[index]

    def memory_pages(self) -> MemoryPages:
        self._check()
        return self.memory

    def processes(self) -> Iterator[ProcessEntry]:
        self._check()
        return iter(list(self.process_table))
