from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field

DEFAULT_PAGE_SIZE = 4096
SOCKET_NAME = "kernel_monitor.sock"


def _get_str(name: str, default: str) -> str:
    return os.getenv(name, default)


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_octal(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw, 8)
    except ValueError:
        return default


def host_page_size() -> int:
    """Page size of the running host in bytes."""
    try:
        size = os.sysconf("SC_PAGE_SIZE")
    except (AttributeError, ValueError, OSError):
        return DEFAULT_PAGE_SIZE
    return size if size > 0 else DEFAULT_PAGE_SIZE


def default_socket_path() -> str:
    runtime_dir = os.getenv("XDG_RUNTIME_DIR") or tempfile.gettempdir()
    return os.path.join(runtime_dir, SOCKET_NAME)


def _page_size() -> int:
    size = _get_int("KMON_PAGE_SIZE", 0)
    return size if size > 0 else host_page_size()


def _cpu_index() -> int:
    index = _get_int("KMON_CPU_INDEX", 0)
    return index if index >= 0 else 0


@dataclass(frozen=True, slots=True)
class Settings:
    socket_path: str = field(
        default_factory=lambda: _get_str("KMON_SOCKET_PATH", default_socket_path())
    )
    socket_mode: int = field(default_factory=lambda: _get_octal("KMON_SOCKET_MODE", 0o666))
    source: str = field(default_factory=lambda: _get_str("KMON_SOURCE", "psutil"))

    # Only one logical CPU is sampled; there is no aggregate across cores.
    cpu_index: int = field(default_factory=_cpu_index)
    page_size: int = field(default_factory=_page_size)


settings = Settings()
