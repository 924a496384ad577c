"""Endpoint server and raw reader command handlers."""

from __future__ import annotations

import argparse
import signal
import sys
from typing import Any

from ..collector import SnapshotCollector
from ..endpoint import SnapshotEndpoint
from ..server import EndpointServer, read_endpoint
from .snapshot import build_source

# Graceful shutdown flag
_shutdown_requested = False


def _signal_handler(signum: int, frame: Any) -> None:
    global _shutdown_requested
    _shutdown_requested = True
    sys.stderr.write("\n[kernel-monitor] Shutdown requested, exiting gracefully...\n")


def cmd_serve(args: argparse.Namespace) -> int:
    """Serve snapshots on a local socket until interrupted."""
    global _shutdown_requested
    _shutdown_requested = False

    collector = SnapshotCollector(build_source(args.source), cpu_index=args.cpu)
    server = EndpointServer(SnapshotEndpoint(collector), args.socket)

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    # handle_request() returns after this many seconds without a connection,
    # so the shutdown flag is checked regularly.
    server.timeout = 0.5
    try:
        while not _shutdown_requested:
            server.handle_request()
    finally:
        server.server_close()

    return 0


def cmd_read(args: argparse.Namespace) -> int:
    """Print one raw report from a running server."""
    sys.stdout.write(read_endpoint(args.socket))
    sys.stdout.flush()
    return 0
