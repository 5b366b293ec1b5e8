"""
Filesystem-backed writer pool.

Creates (or reopens) the volumes of a set one after another, each with the
same fixed capacity. The target directory is created before the first volume.
"""

from __future__ import annotations

import logging
import os

from ..config import WriterPoolConfig
from ..dto import Segment
from ..errors import PoolExhaustedError
from ..ports import SegmentWriterPool
from .file_pool import FilePool, build_config

logger = logging.getLogger(__name__)

# Owner read/write/execute, for the directory and every volume file
VOLUME_MODE = 0o700


class FileWriterPool(FilePool, SegmentWriterPool):
    """
    Produce writable segments of ``capacity`` bytes each.

    Existing volume files are opened read-write without truncation, so
    bytes past the newly written data survive from a previous run.
    """

    def __init__(
        self,
        directory: str | os.PathLike,
        name: str,
        extension: str,
        short_extension: str,
        max_segments: int,
        capacity: int,
    ) -> None:
        config = build_config(
            WriterPoolConfig,
            directory=os.fspath(directory),
            name=name,
            extension=extension,
            short_extension=short_extension,
            max_segments=max_segments,
            capacity=capacity,
        )
        super().__init__(config)

    @classmethod
    def from_config(cls, config: WriterPoolConfig) -> "FileWriterPool":
        return cls(
            config.directory,
            config.name,
            config.extension,
            config.short_extension,
            config.max_segments,
            config.capacity,
        )

    @property
    def capacity(self) -> int:
        return self._config.capacity

    def next_segment(self) -> Segment:
        """Create or reopen the next volume for writing."""
        index = self._claim_index()
        if index == 0:
            try:
                os.makedirs(self._config.directory, mode=VOLUME_MODE, exist_ok=True)
            except OSError:
                self._rollback()
                raise
        path = self._resolve(index)

        self._release_active()
        try:
            fd = os.open(path, os.O_RDWR | os.O_CREAT, VOLUME_MODE)
        except OSError:
            self._rollback()
            raise
        try:
            handle = os.fdopen(fd, "r+b")
        except Exception:
            os.close(fd)
            self._rollback()
            raise

        self._active = handle
        logger.debug("Opened volume #%d for writing: %s", index, path)
        return Segment(handle=handle, capacity=self._config.capacity)

    def close(self) -> None:
        """
        Flush the last volume to stable storage and close it.

        Raises PoolExhaustedError when no volume is open: nothing was ever
        produced, or the pool was already closed.
        """
        if self._active is None:
            raise PoolExhaustedError("no open volume to close")
        handle = self._active
        self._active = None
        try:
            handle.flush()
            os.fsync(handle.fileno())
        finally:
            handle.close()
        logger.debug("Closed volume set '%s' after %d volume(s)", self._config.name, self._counter)
