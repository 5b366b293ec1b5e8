"""
Read side of the multi-volume stream.

``MultiReader`` behaves like a plain binary file opened for reading: callers
use ``readinto``/``read`` and never see where one volume ends and the next
begins, unless a volume's own handle reports end of stream or fails.
"""

from __future__ import annotations

import io
from typing import Optional

from ..dto import Segment
from ..errors import PartialTransferError, PoolExhaustedError
from ..ports import SegmentReaderPool
from .base import MultiStream

# Failures that, hit exactly at a segment boundary, mean the volume set ended
_END_OF_SET = (PoolExhaustedError, FileNotFoundError)


class MultiReader(MultiStream):
    """
    Continuous reader over segments supplied by a SegmentReaderPool.

    Parameters
    ----------
    pool : Optional[SegmentReaderPool]
        Source of further segments once the manually added ones (if any)
        are consumed. ``None`` means manual segments only.
    """

    _verb = "read"

    def __init__(self, pool: Optional[SegmentReaderPool] = None) -> None:
        super().__init__(pool)

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        """
        Fill ``buffer`` from the current segment onwards; return bytes read.

        A short count means the current volume's handle hit end of stream.
        Errors raised after some bytes were already read come wrapped in
        PartialTransferError carrying that count.
        """
        return self._transfer(memoryview(buffer).cast("B"))

    def read(self, size: Optional[int] = -1) -> bytes:
        """Read up to ``size`` bytes; a negative or None size reads to the end."""
        if size is None or size < 0:
            return self.readall()
        buf = bytearray(size)
        n = self.readinto(buf)
        return bytes(buf[:n])

    def readall(self) -> bytes:
        """
        Read until end of stream.

        End of stream is either a zero-byte read, or no next volume at a
        segment boundary: the pool is exhausted or the next file is missing.
        Before any segment was acquired the same failures propagate.
        """
        out = bytearray()
        while True:
            buf = bytearray(io.DEFAULT_BUFFER_SIZE)
            try:
                n = self.readinto(buf)
            except _END_OF_SET:
                # only a boundary after at least one segment ends the set
                if not self.segment_count:
                    raise
                break
            except PartialTransferError as exc:
                if not isinstance(exc.__cause__, _END_OF_SET):
                    raise
                out += buf[:exc.transferred]
                break
            if n == 0:
                break
            out += buf[:n]
        return bytes(out)

    def _move(self, segment: Segment, chunk: memoryview) -> int:
        handle = segment.handle
        readinto = getattr(handle, "readinto", None)
        if readinto is not None:
            n = readinto(chunk)
            return 0 if n is None else n
        data = handle.read(len(chunk))
        if len(data) <= len(chunk):
            chunk[:len(data)] = data
        return len(data)
