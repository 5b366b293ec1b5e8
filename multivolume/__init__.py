"""
multivolume: one continuous byte stream over a set of fixed-size volumes.

Public API (stable):
- MultiReader, MultiWriter              (continuous streams)
- SegmentReaderPool, SegmentWriterPool  (pool interfaces)
- FileReaderPool, FileWriterPool        (filesystem-backed pools)
- VolumeNaming                          (volume file naming scheme)
- PoolConfig, WriterPoolConfig          (configuration)
- Segment, StreamState                  (DTOs)
- errors: MultiVolumeError, OutOfCapacityError, PoolExhaustedError,
          PoolConstructionError, PartialTransferError
"""

from __future__ import annotations

# Configuration
from .config import PoolConfig, WriterPoolConfig

# DTOs
from .dto import Segment, StreamState

# Errors
from .errors import (
    MultiVolumeError,
    OutOfCapacityError,
    PartialTransferError,
    PoolConstructionError,
    PoolExhaustedError,
)

# Ports
from .ports import SegmentReaderPool, SegmentWriterPool

# Adapters
from .pools import FileReaderPool, FileWriterPool, VolumeNaming

# Streams
from .stream import MultiReader, MultiWriter

__version__ = "0.1.0"

__all__ = [
    "PoolConfig",
    "WriterPoolConfig",
    "Segment",
    "StreamState",
    "MultiVolumeError",
    "OutOfCapacityError",
    "PartialTransferError",
    "PoolConstructionError",
    "PoolExhaustedError",
    "SegmentReaderPool",
    "SegmentWriterPool",
    "FileReaderPool",
    "FileWriterPool",
    "VolumeNaming",
    "MultiReader",
    "MultiWriter",
]
