"""
Data Transfer Objects shared by streams and pools.

Kept free of any file-system logic: a Segment only records how far a stream
has progressed through one capacity-bounded handle.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import IO


class StreamState(Enum):
    """Lifecycle of a multi-volume stream."""

    ACTIVE = "active"
    EXHAUSTED = "exhausted"  # pool gave out; only a manually added segment revives it
    BROKEN = "broken"        # capacity invariant violated; never recovered


# === Segment (mutable while the cursor sits on it) ===
@dataclass
class Segment:
    """One capacity-bounded unit of the stream, usually one volume file."""
    handle: IO[bytes]
    capacity: int
    transferred: int = 0     # consumed (read side) or produced (write side)

    @property
    def remaining(self) -> int:
        return self.capacity - self.transferred

    @property
    def full(self) -> bool:
        return self.transferred == self.capacity
