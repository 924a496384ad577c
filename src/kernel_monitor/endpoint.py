"""Single-shot readable endpoint over collected snapshots."""

from __future__ import annotations

import io

from .collector import SnapshotCollector
from .errors import SourceReadFailure
from .formatters import BaseFormatter, ReportFormatter


class SnapshotStream(io.RawIOBase):
    """Read-only stream over the report text of one collection.

    Seeking repositions within the cached text; it never collects again.
    """

    def __init__(self, data: bytes) -> None:
        super().__init__()
        self._buffer = io.BytesIO(data)
        self.size = len(data)

    def _check_open(self) -> None:
        if self.closed:
            raise SourceReadFailure("snapshot stream is closed")

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def readinto(self, b) -> int:  # type: ignore[override]
        self._check_open()
        return self._buffer.readinto(b)

    def read(self, size: int | None = -1) -> bytes:
        self._check_open()
        return self._buffer.read(size)

    def readall(self) -> bytes:
        return self.read()

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_open()
        return self._buffer.seek(offset, whence)

    def tell(self) -> int:
        self._check_open()
        return self._buffer.tell()

    def getvalue(self) -> bytes:
        self._check_open()
        return self._buffer.getvalue()

    def close(self) -> None:
        if not self.closed:
            self._buffer.close()
        super().close()


class SnapshotEndpoint:
    """Each open() runs one fresh collection and returns its own stream.

    Streams share nothing: two opens never see each other's text.
    """

    def __init__(
        self, collector: SnapshotCollector, formatter: BaseFormatter | None = None
    ) -> None:
        self.collector = collector
        self.formatter = formatter or ReportFormatter()

    def open(self) -> SnapshotStream:
        """Collect and serialize a snapshot.

        Raises:
            SourceUnavailable: collection failed; no stream is created.
        """
        snapshot = self.collector.collect()
        return SnapshotStream(self.formatter.format(snapshot).encode("utf-8"))
