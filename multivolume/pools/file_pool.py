"""
State shared by the file-backed volume pools.

A pool walks the volume indices 0..max_segments-1 exactly once, in order,
keeping at most one volume file open: the previous file is closed before the
next one is opened. Every failed acquisition rolls the counter back, so a
retry goes for the same index instead of skipping it.
"""

from __future__ import annotations

import logging
from typing import IO, Optional, Type, TypeVar

from pydantic import ValidationError

from ..config import PoolConfig
from ..errors import PoolConstructionError, PoolExhaustedError
from .naming import VolumeNaming

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=PoolConfig)


def build_config(model: Type[C], **fields) -> C:
    """Validate pool settings, turning pydantic failures into PoolConstructionError."""
    try:
        return model(**fields)
    except ValidationError as exc:
        raise PoolConstructionError(f"could not create pool: {exc.error_count()} invalid field(s)") from exc


class FilePool:
    """Counter, naming and single active handle common to both pool kinds."""

    def __init__(self, config: PoolConfig) -> None:
        self._config = config
        self._naming = VolumeNaming.from_config(config)
        self._counter = 0
        self._active: Optional[IO[bytes]] = None

    @property
    def config(self) -> PoolConfig:
        return self._config

    @property
    def naming(self) -> VolumeNaming:
        return self._naming

    @property
    def counter(self) -> int:
        """Number of volumes produced so far."""
        return self._counter

    @property
    def active_file(self) -> Optional[IO[bytes]]:
        return self._active

    def path_for(self, index: int) -> str:
        return self._naming.path_for(index)

    def _claim_index(self) -> int:
        """Reserve the next index; the caller must ``_rollback()`` if it cannot use it."""
        self._counter += 1
        if self._counter > self._config.max_segments:
            self._counter -= 1
            raise PoolExhaustedError(
                f"all {self._config.max_segments} volumes of '{self._config.name}' used"
            )
        return self._counter - 1

    def _rollback(self) -> None:
        self._counter -= 1

    def _resolve(self, index: int) -> str:
        try:
            return self._naming.path_for(index)
        except PoolExhaustedError:
            self._rollback()
            raise

    def _release_active(self) -> None:
        if self._active is not None:
            self._active.close()
            self._active = None
