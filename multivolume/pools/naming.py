"""
Volume naming scheme.

The layout on disk must be bit-exact so any other tool reading or writing the
same volume set agrees on it:

  index 0      -> <name>.<extension>
  index i > 0  -> <name>.<short_extension><i zero-padded to `digits`>

where ``digits = floor(log10(max_segments - 1)) + 1``. For max_segments=150
that is 3 digits: ``base.ext``, ``base.vol001`` ... ``base.vol149``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List

from ..config import PoolConfig
from ..errors import PoolExhaustedError


def digit_width(max_segments: int) -> int:
    """
    Number of decimal digits used for volume numbers.

    Equal to ``floor(log10(max_segments - 1)) + 1`` computed without floating
    point; a single-volume set still gets one digit.
    """
    return len(str(max(max_segments - 1, 0)))


@dataclass(frozen=True)
class VolumeNaming:
    """Maps a zero-based volume index to a path inside ``directory``."""
    directory: str
    name: str
    extension: str
    short_extension: str
    max_segments: int

    @classmethod
    def from_config(cls, config: PoolConfig) -> "VolumeNaming":
        return cls(
            directory=config.directory,
            name=config.name,
            extension=config.extension,
            short_extension=config.short_extension,
            max_segments=config.max_segments,
        )

    @property
    def digits(self) -> int:
        return digit_width(self.max_segments)

    def file_name(self, index: int) -> str:
        """
        Return the bare file name of volume ``index``.

        Raises PoolExhaustedError for an index the pool could never produce,
        before anything touches the file system.
        """
        if index < 0 or index >= self.max_segments:
            raise PoolExhaustedError(
                f"volume index {index} outside 0..{self.max_segments - 1}"
            )
        if index == 0:
            return f"{self.name}.{self.extension}"
        return f"{self.name}.{self.short_extension}{index:0{self.digits}d}"

    def path_for(self, index: int) -> str:
        return os.path.join(self.directory, self.file_name(index))

    def existing_paths(self, stop_at_gap: bool = True) -> List[str]:
        """
        Paths of the volumes present on disk, in index order.

        By default the scan stops at the first missing index, which is what a
        join can read; ``stop_at_gap=False`` walks every index up to the limit.
        """
        paths: List[str] = []
        for index in range(self.max_segments):
            path = self.path_for(index)
            if not os.path.isfile(path):
                if stop_at_gap:
                    break
                continue
            paths.append(path)
        return paths
