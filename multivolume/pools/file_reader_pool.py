"""
Filesystem-backed reader pool.

Opens the volumes of an existing set one after another. Nothing about a
volume's size is configured: each segment's capacity is whatever size the
file has on disk when it is opened.
"""

from __future__ import annotations

import logging
import os

from ..config import PoolConfig
from ..dto import Segment
from ..ports import SegmentReaderPool
from .file_pool import FilePool, build_config

logger = logging.getLogger(__name__)


class FileReaderPool(FilePool, SegmentReaderPool):
    """
    Produce readable segments from ``<directory>/<name>.<extension>``,
    ``<name>.<short_extension>001``, ... in order.

    Parameters
    ----------
    directory, name, extension, short_extension : str
        Location and naming of the volume set; all must be non-empty.
    max_segments : int
        Number of volumes the set may have (>= 1); fixes the number width.
    """

    def __init__(
        self,
        directory: str | os.PathLike,
        name: str,
        extension: str,
        short_extension: str,
        max_segments: int,
    ) -> None:
        config = build_config(
            PoolConfig,
            directory=os.fspath(directory),
            name=name,
            extension=extension,
            short_extension=short_extension,
            max_segments=max_segments,
        )
        super().__init__(config)

    @classmethod
    def from_config(cls, config: PoolConfig) -> "FileReaderPool":
        return cls(
            config.directory,
            config.name,
            config.extension,
            config.short_extension,
            config.max_segments,
        )

    def next_segment(self) -> Segment:
        """Open the next volume for reading; its file size becomes the capacity."""
        index = self._claim_index()
        path = self._resolve(index)

        self._release_active()
        try:
            handle = open(path, "rb")
        except OSError:
            self._rollback()
            raise
        try:
            capacity = os.fstat(handle.fileno()).st_size
        except OSError:
            handle.close()
            self._rollback()
            raise

        self._active = handle
        logger.debug("Opened volume #%d for reading: %s (%d bytes)", index, path, capacity)
        return Segment(handle=handle, capacity=capacity)

    def close(self) -> None:
        """Close the volume still open, if any; closing twice is harmless."""
        self._release_active()
