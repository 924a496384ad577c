"""Local Unix socket exposure of the snapshot endpoint.

Every accepted connection counts as one open of the endpoint: the server
collects, writes the report and hangs up. It never reads from the peer.
"""

from __future__ import annotations

import contextlib
import logging
import os
import socket
import socketserver
import stat

from .config import settings
from .endpoint import SnapshotEndpoint
from .errors import EndpointInUse, SourceReadFailure, SourceUnavailable

log = logging.getLogger(__name__)

CHUNK_SIZE = 4096


class _SnapshotHandler(socketserver.StreamRequestHandler):
    server: EndpointServer

    def handle(self) -> None:
        try:
            stream = self.server.endpoint.open()
        except SourceUnavailable as e:
            log.warning("collection_failed", extra={"code": e.code, "path": self.server.path})
            return

        sent = 0
        with stream:
            try:
                while True:
                    chunk = stream.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    self.wfile.write(chunk)
                    sent += len(chunk)
            except (BrokenPipeError, ConnectionResetError):
                log.debug("client_disconnected", extra={"path": self.server.path, "bytes": sent})
                return

        log.debug("served", extra={"path": self.server.path, "bytes": sent})


def _is_live_socket(path: str) -> bool:
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        try:
            sock.connect(path)
        except OSError:
            return False
    return True


def _clear_socket_path(path: str) -> None:
    """Remove a socket file left behind by a server that is gone."""
    try:
        mode = os.stat(path).st_mode
    except FileNotFoundError:
        return

    if not stat.S_ISSOCK(mode):
        raise EndpointInUse(f"{path} exists and is not a socket")
    if _is_live_socket(path):
        raise EndpointInUse(f"another server is already listening on {path}")
    os.unlink(path)


class EndpointServer(socketserver.ThreadingUnixStreamServer):
    """Threaded server: one thread, one collection per connection."""

    daemon_threads = True

    def __init__(
        self,
        endpoint: SnapshotEndpoint,
        path: str | os.PathLike[str] | None = None,
        *,
        mode: int | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.path = os.fspath(path or settings.socket_path)
        _clear_socket_path(self.path)
        super().__init__(self.path, _SnapshotHandler)
        os.chmod(self.path, settings.socket_mode if mode is None else mode)
        log.info("listening", extra={"path": self.path})

    def server_close(self) -> None:
        super().server_close()
        with contextlib.suppress(FileNotFoundError):
            os.unlink(self.path)
        log.info("closed", extra={"path": self.path})


def read_endpoint(
    path: str | os.PathLike[str] | None = None,
    *,
    chunk_size: int = CHUNK_SIZE,
    timeout: float = 5.0,
) -> str:
    """Read one report from a served endpoint until end-of-data."""
    path = os.fspath(path or settings.socket_path)
    chunks: list[bytes] = []

    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.settimeout(timeout)
        try:
            sock.connect(path)
        except OSError as e:
            raise SourceUnavailable(f"cannot open {path}: {e.strerror or e}") from e

        try:
            while True:
                chunk = sock.recv(chunk_size)
                if not chunk:
                    break
                chunks.append(chunk)
        except OSError as e:
            raise SourceReadFailure(f"failed to read from {path}: {e}") from e

    if not chunks:
        raise SourceUnavailable(f"{path} returned no data; the server could not collect")

    return b"".join(chunks).decode("utf-8")
