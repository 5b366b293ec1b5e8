"""
Error kinds raised by multi-volume streams and their segment pools.

Underlying I/O failures (open, stat, read, write, fsync, close, mkdir) are not
wrapped: they surface as the original ``OSError``. Only failures that happen
after some bytes already moved within the same call are wrapped, in
``PartialTransferError``, so the byte count is never lost.
"""

from __future__ import annotations


class MultiVolumeError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class OutOfCapacityError(MultiVolumeError):
    """The stream is in the broken state and cannot be used again."""


class PoolExhaustedError(MultiVolumeError):
    """
    No more segments are available.

    Raised when no pool is configured, the maximum segment count is reached,
    a volume index falls outside the configured range, or a write pool is
    closed with no file open.
    """


class PoolConstructionError(MultiVolumeError):
    """Invalid pool configuration (empty naming fields, zero count or capacity)."""


class PartialTransferError(MultiVolumeError):
    """
    A read or write failed after part of the request was already transferred.

    Attributes:
        transferred -- bytes moved by the failing call before the error
        __cause__   -- the original error (pool exhaustion, OSError, ...)
    """

    def __init__(self, message: str, transferred: int) -> None:
        self.transferred = transferred
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.message} (transferred={self.transferred})"
