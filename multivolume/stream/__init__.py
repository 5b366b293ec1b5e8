"""Multi-volume streams: one continuous byte stream over many segments."""

from __future__ import annotations

from .base import MultiStream
from .reader import MultiReader
from .writer import MultiWriter

__all__ = ["MultiStream", "MultiReader", "MultiWriter"]
