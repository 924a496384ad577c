"""Core snapshot collection logic."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .config import settings
from .errors import ProcessGone
from .models import CpuSample, MemorySample, ProcessRecord, Snapshot
from .sources.base import MetricSource

log = logging.getLogger(__name__)


class SnapshotCollector:
    """Builds one Snapshot per call from an injected metric source.

    The collector holds no per-pass state, so one instance can serve
    concurrent requests. Source reads are not coordinated with each other:
    the result is a weakly-consistent view of a system that keeps changing
    while it is walked.
    """

    def __init__(self, source: MetricSource, *, cpu_index: int | None = None) -> None:
        self.source = source
        self.cpu_index = settings.cpu_index if cpu_index is None else cpu_index

    def collect(self) -> Snapshot:
        """Collect a complete snapshot.

        Raises:
            SourceUnavailable: a metric source could not be read at all.
                No partial snapshot is produced.
        """
        cpu = self._collect_cpu()
        memory = self._collect_memory()

        processes: list[ProcessRecord] = []
        count = 0
        for record in self._collect_processes():
            processes.append(record)
            count += 1

        return Snapshot(
            cpu=cpu,
            memory=memory,
            processes=tuple(processes),
            process_count=count,
            page_size=self.source.page_size,
        )

    def _collect_cpu(self) -> CpuSample:
        times = self.source.cpu_times(self.cpu_index)
        return CpuSample(
            user_ns=times.user_ns,
            system_ns=times.system_ns,
            idle_ns=times.idle_ns,
            cpu_index=self.cpu_index,
        )

    def _collect_memory(self) -> MemorySample:
        pages = self.source.memory_pages()
        # Totals and free are separate reads; free can overtake a stale total.
        return MemorySample(
            total=pages.total,
            free=min(pages.free, pages.total),
            shared=pages.shared,
            buffers=pages.buffers,
        )

    def _collect_processes(self) -> Iterator[ProcessRecord]:
        page_size = self.source.page_size
        for entry in self.source.processes():
            # pid 0 is the idle/kernel task on macOS and Windows, not a process.
            if entry.pid <= 0:
                continue
            try:
                vm_pages = entry.vm_pages()
                if vm_pages is None:
                    continue
                name = entry.name()
            except ProcessGone:
                log.debug("process exited during collection", extra={"pid": entry.pid})
                continue
            yield ProcessRecord(name=name, pid=entry.pid, memory_kb=vm_pages * page_size // 1024)
