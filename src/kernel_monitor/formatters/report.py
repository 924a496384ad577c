"""Fixed-layout text report.

The layout is read by scraping clients: column widths, labels and section
order must not change.
"""

from __future__ import annotations

from ..models import Snapshot
from .base import BaseFormatter

REPORT_TITLE = "Linux Kernel Monitor"
REPORT_VERSION = "1.0.0"

_BANNER = "=" * 43
_RULE = "-" * 43


def _row(name: object, pid: object, memory: object) -> str:
    return f"{name!s:<20} {pid!s:<8} {memory!s:<12}"


class ReportFormatter(BaseFormatter):
    """Format snapshot as the text report served by the endpoint."""

    def __init__(self, page_size: int | None = None) -> None:
        self.page_size = page_size

    def _megabytes(self, pages: int, page_size: int) -> int:
        return pages * page_size // (1024 * 1024)

    def format(self, snapshot: Snapshot) -> str:
        page_size = self.page_size or snapshot.page_size
        cpu = snapshot.cpu
        mem = snapshot.memory

        lines: list[str] = [
            _BANNER,
            f"     {REPORT_TITLE} v{REPORT_VERSION}",
            _BANNER,
            "",
            f"CPU Statistics (CPU {cpu.cpu_index}):",
            f"  User Time:   {cpu.user_ns} ns",
            f"  System Time: {cpu.system_ns} ns",
            f"  Idle Time:   {cpu.idle_ns} ns",
            "",
            "Memory Statistics:",
            f"  Total RAM:   {mem.total} pages ({self._megabytes(mem.total, page_size)} MB)",
            f"  Free RAM:    {mem.free} pages ({self._megabytes(mem.free, page_size)} MB)",
            f"  Shared RAM:  {mem.shared} pages",
            f"  Buffer RAM:  {mem.buffers} pages",
            "",
            "Process Information:",
            _row("Name", "PID", "Memory (KB)"),
            _RULE,
        ]

        for proc in snapshot.processes:
            lines.append(_row(proc.name, proc.pid, proc.memory_kb))

        lines.append("")
        lines.append(f"Total Processes: {snapshot.process_count}")

        return "\n".join(lines) + "\n"


def serialize(snapshot: Snapshot) -> str:
    """Render *snapshot* as report text."""
    return ReportFormatter().format(snapshot)
