"""Metric sources."""

from __future__ import annotations

from .base import CpuTimes, MemoryPages, MetricSource, ProcessEntry
from .procfs import ProcfsSource
from .psutil_source import PsutilSource
from .static import StaticProcess, StaticSource

__all__ = [
    "CpuTimes",
    "MemoryPages",
    "MetricSource",
    "ProcessEntry",
    "ProcfsSource",
    "PsutilSource",
    "StaticProcess",
    "StaticSource",
    "get_source",
]


def get_source(name: str, *, page_size: int | None = None) -> MetricSource:
    """Get a host metric source by name."""
    sources: dict[str, type[PsutilSource] | type[ProcfsSource]] = {
        "psutil": PsutilSource,
        "procfs": ProcfsSource,
    }

    if name not in sources:
        raise ValueError(f"Unknown source: {name}. Available: {', '.join(sources.keys())}")

    return sources[name](page_size=page_size)
