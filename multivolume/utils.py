"""
Utility helpers: logging config and human-readable volume sizes.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"

# SI suffixes first so "MB" is not read as "M" followed by junk
_SI = {"KB": 1000, "MB": 1000**2, "GB": 1000**3, "TB": 1000**4}
_BINARY = {"K": 1024, "M": 1024**2, "G": 1024**3, "T": 1024**4}


def ensure_dirs(*paths: Path) -> None:
    """Ensure each directory exists."""
    for p in paths:
        p.mkdir(parents=True, exist_ok=True)


def init_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the package logger: console, plus a rotating file when asked."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = logging.getLogger("multivolume")
    logger.setLevel(log_level)
    logger.propagate = False  # avoid duplicate logs if root has handlers

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Console
    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(ch)

    # File (rotating)
    if log_file:
        path = Path(log_file)
        ensure_dirs(path.parent)
        fh = RotatingFileHandler(path, maxBytes=1_000_000, backupCount=5)
        fh.setLevel(log_level)
        fh.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(fh)

    return logger


def parse_size(value: str) -> int:
    """
    Parse a volume size such as ``650M``, ``4G``, ``700MiB``, ``10KB`` or ``512``.

    K/M/G/T (optionally followed by ``iB``) are binary multiples, KB/MB/GB/TB
    are decimal ones, a bare number (or a ``B`` suffix) is bytes.

    Raises ValueError on anything else, including sizes below one byte.
    """
    if not value or not value.strip():
        raise ValueError("empty size")
    text = value.strip()
    upper = text.upper()

    multiplier = 1
    number = text
    for suffix, mult in _SI.items():
        if upper.endswith(suffix):
            multiplier, number = mult, text[: -len(suffix)]
            break
    else:
        for suffix, mult in _BINARY.items():
            if upper.endswith(suffix + "IB"):
                multiplier, number = mult, text[: -len(suffix) - 2]
                break
            if upper.endswith(suffix):
                multiplier, number = mult, text[: -len(suffix)]
                break
        else:
            if upper.endswith("B"):
                number = text[:-1]

    try:
        size = int(float(number.strip()) * multiplier)
    except (ValueError, OverflowError):
        raise ValueError(f"invalid size: {value!r}") from None
    if size < 1:
        raise ValueError(f"size must be at least one byte: {value!r}")
    return size


def format_size(size: int) -> str:
    """Format a byte count the way ``parse_size`` reads it back."""
    for suffix, mult in (("G", 1024**3), ("M", 1024**2), ("K", 1024)):
        if size >= mult and size % mult == 0:
            return f"{size // mult}{suffix}"
    return f"{size}B"
