"""
kernel_monitor

Point-in-time system snapshot service: CPU time counters, memory totals and
the live process table, rendered as one fixed-layout text report per read.
"""

from __future__ import annotations

from .collector import SnapshotCollector
from .endpoint import SnapshotEndpoint, SnapshotStream
from .formatters import serialize

__all__ = [
    "SnapshotCollector",
    "SnapshotEndpoint",
    "SnapshotStream",
    "__version__",
    "serialize",
]

__version__ = "1.0.0"
