"""Pytest configuration and in-memory fixtures for multivolume tests."""

from __future__ import annotations

import io
from typing import Iterable, List

import pytest

from multivolume.dto import Segment
from multivolume.errors import PoolExhaustedError


class MemoryReaderPool:
    """Reader pool handing out one BytesIO per payload."""

    def __init__(self, payloads: Iterable[bytes]) -> None:
        self.payloads: List[bytes] = list(payloads)
        self.counter = 0
        self.calls = 0
        self.closed = False
        self.handles: List[io.BytesIO] = []

    def next_segment(self) -> Segment:
        self.calls += 1
        if self.counter >= len(self.payloads):
            raise PoolExhaustedError("memory pool exhausted")
        payload = self.payloads[self.counter]
        self.counter += 1
        handle = io.BytesIO(payload)
        self.handles.append(handle)
        return Segment(handle=handle, capacity=len(payload))

    def close(self) -> None:
        self.closed = True


class MemoryWriterPool:
    """Writer pool handing out an empty BytesIO per configured capacity."""

    def __init__(self, capacities: Iterable[int]) -> None:
        self.capacities: List[int] = list(capacities)
        self.counter = 0
        self.calls = 0
        self.closed = False
        self.handles: List[io.BytesIO] = []

    def next_segment(self) -> Segment:
        self.calls += 1
        if self.counter >= len(self.capacities):
            raise PoolExhaustedError("memory pool exhausted")
        capacity = self.capacities[self.counter]
        self.counter += 1
        handle = io.BytesIO()
        self.handles.append(handle)
        return Segment(handle=handle, capacity=capacity)

    def close(self) -> None:
        self.closed = True

    def contents(self) -> List[bytes]:
        return [h.getvalue() for h in self.handles]


class FailingHandle(io.RawIOBase):
    """Handle whose every read and write raises the given OSError."""

    def __init__(self, error: OSError) -> None:
        self.error = error

    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        raise self.error

    def write(self, b) -> int:
        raise self.error


class OverReportingHandle:
    """Handle claiming to move one byte more than it was asked for."""

    def read(self, n: int) -> bytes:
        return b"x" * (n + 1)

    def write(self, b) -> int:
        return len(b) + 1


class ReadOnlyMethodHandle:
    """Handle exposing ``read`` but not ``readinto``."""

    def __init__(self, data: bytes) -> None:
        self._buf = io.BytesIO(data)

    def read(self, n: int) -> bytes:
        return self._buf.read(n)


@pytest.fixture
def payload() -> bytes:
    return bytes(range(256)) * 4 + b"tail-of-the-stream"
