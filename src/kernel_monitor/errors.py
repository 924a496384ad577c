from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True, slots=True)
class MonitorError(Exception):
    """A controlled, user-facing error.

    Use this for unreadable metric sources, failed endpoint reads, bad CLI input.
    """

    message: str

    code: ClassVar[str] = "monitor_error"
    exit_code: ClassVar[int] = 1

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


class SourceUnavailable(MonitorError):
    """A metric source (or the endpoint behind it) cannot be read at all."""

    code = "source_unavailable"


class SourceReadFailure(MonitorError):
    """Reading failed after the endpoint was opened successfully."""

    code = "source_read_failure"


class EndpointInUse(MonitorError):
    """The endpoint path is taken by another server or by a non-socket file."""

    code = "endpoint_in_use"


class MalformedRequest(MonitorError):
    """Invalid input from the command line."""

    code = "malformed_request"
    exit_code = 2


class ProcessGone(Exception):
    """A process vanished between enumeration and inspection."""

    def __init__(self, pid: int) -> None:
        super().__init__(pid)
        self.pid = pid
