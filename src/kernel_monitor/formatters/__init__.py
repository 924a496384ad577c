"""Output formatters."""

from __future__ import annotations

from .base import BaseFormatter
from .json_fmt import JsonFormatter
from .report import ReportFormatter, serialize

__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "ReportFormatter",
    "get_formatter",
    "serialize",
]


def get_formatter(fmt: str) -> BaseFormatter:
    """Get formatter by name."""
    formatters: dict[str, type[BaseFormatter]] = {
        "text": ReportFormatter,
        "json": JsonFormatter,
    }

    if fmt not in formatters:
        raise ValueError(f"Unknown format: {fmt}. Available: {', '.join(formatters.keys())}")

    return formatters[fmt]()
