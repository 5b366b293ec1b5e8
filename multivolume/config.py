"""
Configuration schema for file-backed volume pools, plus process settings.

Pool configuration is validated once, at construction: an invalid pool never
exists. Process-level knobs (logging) are read from the environment.
"""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PoolConfig(BaseModel):
    """
    Where the volumes of one set live and how they are named.

    Volume 0 is ``<name>.<extension>``; volume i > 0 is
    ``<name>.<short_extension><i zero-padded>``.
    """

    model_config = ConfigDict(frozen=True)

    # === Location ===
    directory: str = Field(
        min_length=1,
        description="Directory holding the volume files.",
    )

    # === Naming ===
    name: str = Field(
        min_length=1,
        description="Base name shared by every volume of the set.",
    )
    extension: str = Field(
        min_length=1,
        description="Extension of the first volume (index 0).",
    )
    short_extension: str = Field(
        min_length=1,
        description="Extension prefix of the numbered volumes (index >= 1).",
    )

    # === Limits ===
    max_segments: int = Field(
        ge=1,
        description="Maximum number of volumes; also fixes the number width.",
    )


class WriterPoolConfig(PoolConfig):
    """Pool configuration for writing: every volume gets the same capacity."""

    capacity: int = Field(
        ge=1,
        description="Bytes per volume.",
    )


class RuntimeConfig:
    """Process settings (safe defaults, overridable via environment)."""

    # Logging
    LOG_LEVEL = os.getenv("MULTIVOLUME_LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = os.getenv("MULTIVOLUME_LOG_FILE") or None

    # Copy loop
    COPY_CHUNK_SIZE = int(os.getenv("MULTIVOLUME_COPY_CHUNK_SIZE", str(1024 * 1024)))  # 1 MiB
