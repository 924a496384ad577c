"""Linux /proc metric source.

Reads the same kernel counters the ``sysinfo`` and ``kcpustat`` interfaces
expose, through their procfs renderings:

- ``/proc/stat``      per-CPU time in USER_HZ ticks
- ``/proc/meminfo``   MemTotal / MemFree / Shmem / Buffers in kB
- ``/proc/<pid>/statm`` first field is ``total_vm`` in pages
- ``/proc/<pid>/comm``  task name
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from ..config import settings
from ..errors import ProcessGone, SourceUnavailable
from .base import CpuTimes, MemoryPages, MetricSource, ProcessEntry

_NS_PER_SECOND = 1_000_000_000

# /proc/stat cpu line: cpuN user nice system idle iowait irq softirq ...
_USER, _SYSTEM, _IDLE = 1, 3, 4


def _clock_ticks() -> int:
    try:
        ticks = os.sysconf("SC_CLK_TCK")
    except (AttributeError, ValueError, OSError):
        return 100
    return ticks if ticks > 0 else 100


def _parse_meminfo(text: str) -> dict[str, int]:
    """Parse /proc/meminfo into {field: kB}."""
    result: dict[str, int] = {}
    for line in text.splitlines():
        parts = line.split(":")
        if len(parts) != 2:
            continue
        val_parts = parts[1].strip().split()
        try:
            result[parts[0].strip()] = int(val_parts[0])
        except (ValueError, IndexError):
            continue
    return result


class ProcfsProcess(ProcessEntry):
    def __init__(self, path: Path, pid: int) -> None:
        self._path = path
        self.pid = pid

    def name(self) -> str:
        try:
            return (self._path / "comm").read_text(errors="replace").rstrip("\n")
        except (FileNotFoundError, ProcessLookupError) as e:
            raise ProcessGone(self.pid) from e
        except OSError:
            return "?"

    def vm_pages(self) -> int | None:
        try:
            statm = (self._path / "statm").read_text()
        except (FileNotFoundError, ProcessLookupError) as e:
            raise ProcessGone(self.pid) from e
        except OSError:
            return None

        fields = statm.split()
        if not fields:
            # Process exited while the file was being read.
            raise ProcessGone(self.pid)
        size = int(fields[0])
        # Kernel threads and zombies have no address space.
        return size or None


class ProcfsSource(MetricSource):
    """Source reading a procfs mount directly (Linux only)."""

    def __init__(
        self,
        root: str | Path = "/proc",
        *,
        page_size: int | None = None,
        clock_ticks: int | None = None,
    ) -> None:
        self._root = Path(root)
        self._page_size = page_size or settings.page_size
        self._clock_ticks = clock_ticks or _clock_ticks()

    @property
    def name(self) -> str:
        return "procfs"

    @property
    def page_size(self) -> int:
        return self._page_size

    def _read(self, name: str) -> str:
        path = self._root / name
        try:
            return path.read_text()
        except OSError as e:
            raise SourceUnavailable(f"cannot read {path}: {e}") from e

    def cpu_times(self, index: int) -> CpuTimes:
        label = f"cpu{index}"
        for line in self._read("stat").splitlines():
            fields = line.split()
            if not fields or fields[0] != label:
                continue
            try:
                ticks = [int(fields[i]) for i in (_USER, _SYSTEM, _IDLE)]
            except (ValueError, IndexError) as e:
                raise SourceUnavailable(f"malformed {label} line in stat: {line!r}") from e
            user, system, idle = (t * _NS_PER_SECOND // self._clock_ticks for t in ticks)
            return CpuTimes(user_ns=user, system_ns=system, idle_ns=idle)

        raise SourceUnavailable(f"CPU {index} not present in {self._root / 'stat'}")

    def memory_pages(self) -> MemoryPages:
        meminfo = _parse_meminfo(self._read("meminfo"))
        if "MemTotal" not in meminfo or "MemFree" not in meminfo:
            raise SourceUnavailable(f"MemTotal/MemFree missing from {self._root / 'meminfo'}")

        def pages(key: str) -> int:
            return meminfo.get(key, 0) * 1024 // self._page_size

        return MemoryPages(
            total=pages("MemTotal"),
            free=pages("MemFree"),
            shared=pages("Shmem"),
            buffers=pages("Buffers"),
        )

    def processes(self) -> Iterator[ProcessEntry]:
        try:
            entries = os.listdir(self._root)
        except OSError as e:
            raise SourceUnavailable(f"cannot list {self._root}: {e}") from e

        return (
            ProcfsProcess(self._root / entry, int(entry)) for entry in entries if entry.isdigit()
        )
