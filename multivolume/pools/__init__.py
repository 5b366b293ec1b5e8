"""File-backed segment pools and the volume naming scheme."""

from __future__ import annotations

from .file_reader_pool import FileReaderPool
from .file_writer_pool import FileWriterPool
from .naming import VolumeNaming, digit_width

__all__ = ["FileReaderPool", "FileWriterPool", "VolumeNaming", "digit_width"]
