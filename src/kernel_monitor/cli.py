"""CLI interface for the kernel-monitor snapshot service."""

from __future__ import annotations

import argparse
import sys

from .commands.serve import cmd_read, cmd_serve
from .commands.snapshot import cmd_snapshot
from .commands.version import cmd_version
from .config import settings
from .errors import MonitorError
from .logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="kernel-monitor",
        description="Point-in-time CPU, memory and process snapshots",
    )

    # Global options
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    def add_source_args(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--source",
            choices=["psutil", "procfs"],
            default=settings.source,
            help=f"Metric source (default: {settings.source})",
        )
        p.add_argument(
            "--cpu",
            type=int,
            default=settings.cpu_index,
            help=f"Logical CPU index to sample (default: {settings.cpu_index})",
        )

    def add_socket_arg(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--socket",
            "-s",
            type=str,
            default=settings.socket_path,
            help=f"Endpoint socket path (default: {settings.socket_path})",
        )

    # serve command
    p_serve = subparsers.add_parser(
        "serve",
        help="Serve a fresh snapshot to every reader of a local socket",
    )
    add_source_args(p_serve)
    add_socket_arg(p_serve)
    p_serve.set_defaults(func=cmd_serve)

    # snapshot command
    p_snapshot = subparsers.add_parser(
        "snapshot",
        help="Collect a single snapshot in this process",
    )
    add_source_args(p_snapshot)
    p_snapshot.add_argument(
        "--format",
        "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    p_snapshot.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )
    p_snapshot.set_defaults(func=cmd_snapshot)

    # read command
    p_read = subparsers.add_parser(
        "read",
        help="Print the raw report from a running server",
    )
    add_socket_arg(p_read)
    p_read.set_defaults(func=cmd_read)

    # version command
    p_version = subparsers.add_parser(
        "version",
        help="Show version",
    )
    p_version.set_defaults(func=cmd_version)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        raise SystemExit(cmd_version(args))

    if not args.command:
        parser.print_help()
        raise SystemExit(0)

    try:
        rc = int(args.func(args))
    except MonitorError as e:
        sys.stderr.write(f"Error: {e.message}\n")
        raise SystemExit(e.exit_code) from None

    raise SystemExit(rc)
