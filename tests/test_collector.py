"""Tests for the snapshot collector."""

from __future__ import annotations

import logging

import pytest

from kernel_monitor.collector import SnapshotCollector
from kernel_monitor.errors import SourceUnavailable
from kernel_monitor.sources import CpuTimes, MemoryPages, PsutilSource, StaticProcess, StaticSource


# ── helpers ──────────────────────────────────────────────────────────


def _make_source(processes: list[StaticProcess] | None = None, **kwargs) -> StaticSource:
    if processes is None:
        processes = [StaticProcess(1, "init", vm_pages=2560)]
    return StaticSource(
        cpus=[CpuTimes(100, 50, 850), CpuTimes(7, 8, 9)],
        memory=kwargs.pop("memory", MemoryPages(total=1000, free=400, shared=10, buffers=5)),
        processes=processes,
        **kwargs,
    )


# ── tests ────────────────────────────────────────────────────────────


def test_collect_reference_scenario() -> None:
    snap = SnapshotCollector(_make_source(), cpu_index=0).collect()

    assert (snap.cpu.user_ns, snap.cpu.system_ns, snap.cpu.idle_ns) == (100, 50, 850)
    assert snap.memory.total == 1000
    assert snap.memory.free == 400
    assert snap.memory.shared == 10
    assert snap.memory.buffers == 5
    assert len(snap.processes) == 1
    rec = snap.processes[0]
    assert (rec.name, rec.pid, rec.memory_kb) == ("init", 1, 10240)
    assert snap.process_count == 1
    assert snap.page_size == 4096


def test_collect_skips_vanished_process(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)
    source = _make_source(
        [
            StaticProcess(1, "init", vm_pages=2560),
            StaticProcess(42, "short-lived", vm_pages=100, gone=True),
            StaticProcess(77, "bash", vm_pages=10),
        ]
    )

    snap = SnapshotCollector(source, cpu_index=0).collect()

    assert [p.pid for p in snap.processes] == [1, 77]
    assert snap.process_count == 2
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_collect_skips_processes_without_memory_context(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG)
    source = _make_source(
        [
            StaticProcess(2, "kthreadd", vm_pages=None),
            StaticProcess(1, "init", vm_pages=2560),
            StaticProcess(3, "rcu_gp", vm_pages=None),
        ]
    )

    snap = SnapshotCollector(source, cpu_index=0).collect()

    assert [p.name for p in snap.processes] == ["init"]
    assert snap.process_count == 1
    assert caplog.records == []


def test_collect_no_processes() -> None:
    snap = SnapshotCollector(_make_source([]), cpu_index=0).collect()
    assert snap.processes == ()
    assert snap.process_count == 0


def test_collect_preserves_enumeration_order() -> None:
    source = _make_source([StaticProcess(pid, f"p{pid}", vm_pages=1) for pid in (50, 3, 19, 7)])
    snap = SnapshotCollector(source, cpu_index=0).collect()
    assert [p.pid for p in snap.processes] == [50, 3, 19, 7]


def test_collect_uses_source_page_size() -> None:
    source = _make_source([StaticProcess(5, "app", vm_pages=10)], page_size=16384)
    snap = SnapshotCollector(source, cpu_index=0).collect()
    assert snap.processes[0].memory_kb == 160
    assert snap.page_size == 16384


def test_collect_samples_configured_cpu() -> None:
    snap = SnapshotCollector(_make_source(), cpu_index=1).collect()
    assert (snap.cpu.user_ns, snap.cpu.system_ns, snap.cpu.idle_ns) == (7, 8, 9)
    assert snap.cpu.cpu_index == 1


def test_collect_unknown_cpu_is_unavailable() -> None:
    with pytest.raises(SourceUnavailable):
        SnapshotCollector(_make_source(), cpu_index=8).collect()


def test_collect_clamps_racing_free_count() -> None:
    source = _make_source(memory=MemoryPages(total=100, free=120, shared=0, buffers=0))
    snap = SnapshotCollector(source, cpu_index=0).collect()
    assert snap.memory.free == snap.memory.total == 100


def test_collect_source_unavailable() -> None:
    source = _make_source(available=False)
    with pytest.raises(SourceUnavailable) as exc_info:
        SnapshotCollector(source, cpu_index=0).collect()
    assert exc_info.value.code == "source_unavailable"


def test_collect_process_table_unavailable() -> None:
    class _NoProcessTable(StaticSource):
        def processes(self):
            raise SourceUnavailable("process table gone")

    source = _NoProcessTable(
        cpus=[CpuTimes(1, 1, 1)],
        memory=MemoryPages(total=10, free=5, shared=0, buffers=0),
    )
    with pytest.raises(SourceUnavailable):
        SnapshotCollector(source, cpu_index=0).collect()


def test_collect_is_stateless_between_calls() -> None:
    source = _make_source()
    collector = SnapshotCollector(source, cpu_index=0)
    first = collector.collect()

    source.process_table.append(StaticProcess(9, "late", vm_pages=1))
    second = collector.collect()

    assert first.process_count == 1
    assert second.process_count == 2


def test_collect_live_host() -> None:
    snap = SnapshotCollector(PsutilSource(), cpu_index=0).collect()

    assert snap.process_count == len(snap.processes)
    assert 0 <= snap.memory.free <= snap.memory.total
    assert all(p.pid > 0 for p in snap.processes)


def test_collect_skips_pid_zero() -> None:
    source = _make_source(
        [StaticProcess(0, "idle", vm_pages=10), StaticProcess(1, "init", vm_pages=2560)]
    )

    snap = SnapshotCollector(source, cpu_index=0).collect()

    assert [p.pid for p in snap.processes] == [1]
    assert snap.process_count == 1
