"""Local snapshot command handler."""

from __future__ import annotations

import argparse

from ..collector import SnapshotCollector
from ..errors import MalformedRequest
from ..formatters import get_formatter
from ..sources import MetricSource, get_source
from ..utils import output_text


def build_source(name: str) -> MetricSource:
    try:
        return get_source(name)
    except ValueError as e:
        raise MalformedRequest(str(e)) from e


def cmd_snapshot(args: argparse.Namespace) -> int:
    """Collect once in this process and print the report."""
    try:
        formatter = get_formatter(args.format)
    except ValueError as e:
        raise MalformedRequest(str(e)) from e

    collector = SnapshotCollector(build_source(args.source), cpu_index=args.cpu)
    output_text(formatter.format(collector.collect()), args.output)
    return 0
