"""
Cursor and segment bookkeeping shared by MultiReader and MultiWriter.

A stream owns an append-only list of Segments and a cursor that only moves
forward. Each transfer is served by the segment under the cursor; when that
segment fills up the cursor advances, and when it runs past the known
segments the pool is asked for one more.

Subclasses supply ``_move(segment, chunk)``, the single primitive that moves
bytes between one segment handle and one slice of the caller's buffer.
"""

from __future__ import annotations

import logging
from typing import IO, List, Optional, Union

from ..dto import Segment, StreamState
from ..errors import (
    MultiVolumeError,
    OutOfCapacityError,
    PartialTransferError,
    PoolExhaustedError,
)
from ..ports import SegmentReaderPool, SegmentWriterPool

logger = logging.getLogger(__name__)

Pool = Union[SegmentReaderPool, SegmentWriterPool]


class MultiStream:
    """
    Single-cursor stream over an ordered list of capacity-bounded segments.

    Segments come either from ``pool`` (lazily, one at a time) or from
    ``add_segment`` calls made by the caller; both may be mixed, manual
    segments being consumed first.
    """

    _verb = "transfer"

    def __init__(self, pool: Optional[Pool] = None) -> None:
        self._pool = pool
        self._segments: List[Segment] = []
        self._cursor = 0
        self._state = StreamState.ACTIVE
        self._closed = False

    # --- introspection ---

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def state(self) -> StreamState:
        return self._state

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    @property
    def segments(self) -> List[Segment]:
        return list(self._segments)

    @property
    def closed(self) -> bool:
        return self._closed

    # --- segment acquisition ---

    def add_segment(self, handle: IO[bytes], capacity: int) -> Segment:
        """Append a caller-owned segment; it is never closed by this stream."""
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        segment = Segment(handle=handle, capacity=capacity)
        self._segments.append(segment)
        if self._state is StreamState.EXHAUSTED:
            self._state = StreamState.ACTIVE
        return segment

    def add_segment_from_pool(self) -> Segment:
        """
        Pull one more segment from the pool and append it.

        Pool exhaustion (or having no pool) is terminal for the stream. Any
        other failure leaves the state untouched so the call can be retried.
        """
        if self._pool is None:
            self._state = StreamState.EXHAUSTED
            raise PoolExhaustedError("no segment pool configured")
        try:
            segment = self._pool.next_segment()
        except PoolExhaustedError:
            self._state = StreamState.EXHAUSTED
            raise
        self._segments.append(segment)
        logger.debug("Acquired segment #%d (capacity=%d)", len(self._segments) - 1, segment.capacity)
        return segment

    def _current_segment(self) -> Segment:
        if self._state is StreamState.BROKEN:
            raise OutOfCapacityError("stream is out of capacity")
        if self._cursor >= len(self._segments):
            if self._state is StreamState.EXHAUSTED:
                raise PoolExhaustedError("segment pool exhausted")
            self.add_segment_from_pool()
        return self._segments[self._cursor]

    # --- transfer loop ---

    def _move(self, segment: Segment, chunk: memoryview) -> int:
        raise NotImplementedError

    def _move_checked(self, segment: Segment, chunk: memoryview) -> int:
        if not len(chunk):
            return 0
        n = self._move(segment, chunk)
        if n < 0 or n > len(chunk):
            self._state = StreamState.BROKEN
            raise OutOfCapacityError(
                f"segment #{self._cursor} reported {n} bytes for a {len(chunk)}-byte {self._verb}"
            )
        segment.transferred += n
        return n

    def _transfer(self, view: memoryview) -> int:
        """
        Move ``view`` through as many segments as it takes.

        Mirrors one call of the underlying handle per segment visited:
        - request < remaining: one call, whatever it returns is the result;
        - request == remaining: one call, advance if the segment filled up;
        - request > remaining: a call bounded to ``remaining``, advance if
          full, then keep going with the rest of the buffer.
        """
        self._check_open()
        total = 0
        while True:
            try:
                segment = self._current_segment()
                wanted = len(view) - total
                remaining = segment.remaining
                if wanted < remaining:
                    return total + self._move_checked(segment, view[total:])
                n = self._move_checked(segment, view[total:total + remaining])
            except (MultiVolumeError, OSError, ValueError) as exc:
                if total == 0:
                    raise
                raise PartialTransferError(
                    f"{self._verb} failed across segment #{self._cursor}", total
                ) from exc

            total += n
            if segment.full:
                self._cursor += 1
                logger.debug("Segment #%d full, advancing", self._cursor - 1)
            if wanted == remaining:
                return total
            if n == 0 and remaining > 0:
                # end of stream (read) or a stalled handle (write)
                return total

    # --- lifecycle ---

    def _check_open(self) -> None:
        if self._closed:
            raise ValueError("I/O operation on closed stream")

    def close(self) -> None:
        """Close the pool (and with it the last pooled handle); manual segments stay open."""
        if self._closed:
            return
        self._closed = True
        if self._pool is not None:
            self._pool.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
            return
        # keep the in-flight error; a pool with nothing open cannot close cleanly
        try:
            self.close()
        except MultiVolumeError as close_exc:
            logger.debug("Ignoring pool close failure after %s: %s", exc_type.__name__, close_exc)
