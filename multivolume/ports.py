"""
Pool interfaces (Ports) consumed by the multi-volume streams.

A pool lazily hands out the next Segment in sequence. Streams depend only on
these protocols, so tests and callers can plug in in-memory pools as easily
as the file-backed ones.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .dto import Segment


@runtime_checkable
class SegmentReaderPool(Protocol):
    """Supplies readable segments, in order, until exhausted."""

    def next_segment(self) -> Segment:
        """
        Return the next readable Segment.

        Raises PoolExhaustedError when no further segment exists. Any other
        failure MUST leave the pool able to retry the same segment.
        """
        ...

    def close(self) -> None:
        """Release whatever handle the pool still holds."""
        ...


@runtime_checkable
class SegmentWriterPool(Protocol):
    """Supplies writable segments, in order, until exhausted."""

    def next_segment(self) -> Segment:
        """Return the next writable Segment; same failure contract as the reader pool."""
        ...

    def close(self) -> None:
        """Flush and release the handle of the last segment produced."""
        ...
