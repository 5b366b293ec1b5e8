"""
Write side of the multi-volume stream.

``MultiWriter`` splits whatever it is given across volumes of fixed capacity,
asking its pool for the next volume whenever the current one is full.
"""

from __future__ import annotations

from typing import Optional

from ..dto import Segment
from ..ports import SegmentWriterPool
from .base import MultiStream


class MultiWriter(MultiStream):
    """
    Continuous writer over segments supplied by a SegmentWriterPool.

    An empty pool (``None``) is fine as long as the caller feeds segments
    through ``add_segment``.
    """

    _verb = "write"

    def __init__(self, pool: Optional[SegmentWriterPool] = None) -> None:
        super().__init__(pool)

    def writable(self) -> bool:
        return True

    def write(self, data) -> int:
        """
        Write ``data`` across as many volumes as needed; return bytes written.

        The stream advances to the next volume exactly when the current one
        reaches its capacity. Errors raised after part of ``data`` landed come
        wrapped in PartialTransferError carrying that count.
        """
        return self._transfer(memoryview(data).cast("B"))

    def flush(self) -> None:
        """Flush every segment handle that is still open."""
        self._check_open()
        for segment in self._segments[: self._cursor + 1]:
            handle = segment.handle
            if not getattr(handle, "closed", False) and hasattr(handle, "flush"):
                handle.flush()

    def _move(self, segment: Segment, chunk: memoryview) -> int:
        n = segment.handle.write(chunk)
        # buffered files may return None for a complete write
        return len(chunk) if n is None else n
