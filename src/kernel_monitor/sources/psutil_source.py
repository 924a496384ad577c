"""psutil-backed metric source."""

from __future__ import annotations

from collections.abc import Iterator

import psutil

from ..config import settings
from ..errors import ProcessGone, SourceUnavailable
from .base import CpuTimes, MemoryPages, MetricSource, ProcessEntry

_NS_PER_SECOND = 1_000_000_000


def _seconds_to_ns(seconds: float) -> int:
    return int(round(seconds * _NS_PER_SECOND))


def _clean_name(name: str) -> str:
    # psutil decodes with surrogateescape; undecodable bytes become U+FFFD.
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


class PsutilProcess(ProcessEntry):
    def __init__(self, proc: psutil.Process, page_size: int) -> None:
        self._proc = proc
        self._page_size = page_size
        self.pid = proc.pid

    def name(self) -> str:
        info = getattr(self._proc, "info", None) or {}
        name = info.get("name")
        if name:
            return _clean_name(name)
        try:
            return _clean_name(self._proc.name())
        except psutil.NoSuchProcess as e:
            raise ProcessGone(self.pid) from e
        except psutil.AccessDenied:
            return "?"

    def vm_pages(self) -> int | None:
        try:
            vms = self._proc.memory_info().vms
        except psutil.ZombieProcess:
            return None  # exited, address space already released
        except psutil.NoSuchProcess as e:
            raise ProcessGone(self.pid) from e
        except psutil.AccessDenied:
            return None

        # Kernel threads report an empty address space.
        if not vms:
            return None
        return vms // self._page_size


class PsutilSource(MetricSource):
    """Portable source built on psutil."""

    def __init__(self, page_size: int | None = None) -> None:
        self._page_size = page_size or settings.page_size

    @property
    def name(self) -> str:
        return "psutil"

    @property
    def page_size(self) -> int:
        return self._page_size

    def cpu_times(self, index: int) -> CpuTimes:
        try:
            per_cpu = psutil.cpu_times(percpu=True)
        except (OSError, psutil.Error) as e:
            raise SourceUnavailable(f"CPU time accounting unavailable: {e}") from e

        if not 0 <= index < len(per_cpu):
            raise SourceUnavailable(f"CPU {index} not present (host has {len(per_cpu)})")

        times = per_cpu[index]
        return CpuTimes(
            user_ns=_seconds_to_ns(times.user),
            system_ns=_seconds_to_ns(times.system),
            idle_ns=_seconds_to_ns(times.idle),
        )

    def memory_pages(self) -> MemoryPages:
        try:
            vm = psutil.virtual_memory()
        except (OSError, psutil.Error) as e:
            raise SourceUnavailable(f"memory accounting unavailable: {e}") from e

        # shared/buffers only exist on some platforms
        return MemoryPages(
            total=vm.total // self._page_size,
            free=vm.free // self._page_size,
            shared=getattr(vm, "shared", 0) // self._page_size,
            buffers=getattr(vm, "buffers", 0) // self._page_size,
        )

    def processes(self) -> Iterator[ProcessEntry]:
        try:
            for proc in psutil.process_iter(["name"]):
                yield PsutilProcess(proc, self._page_size)
        except (OSError, psutil.Error) as e:
            raise SourceUnavailable(f"process table unavailable: {e}") from e
