"""
Command-line front end: split a file into volumes, join volumes back, list a set.

Examples:
  multivolume split backup.tar out/ --name backup --ext tar --volume-size 650M
  multivolume join out/ --name backup --ext tar -o restored.tar
  multivolume list out/ --name backup --ext tar
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional, Sequence

from tqdm import tqdm

from .config import PoolConfig, RuntimeConfig
from .errors import MultiVolumeError, PartialTransferError
from .pools import FileReaderPool, FileWriterPool, VolumeNaming
from .pools.file_pool import build_config
from .stream import MultiReader, MultiWriter
from .utils import format_size, init_logging, parse_size

logger = logging.getLogger("multivolume.cli")


def _naming(args: argparse.Namespace) -> VolumeNaming:
    config = build_config(
        PoolConfig,
        directory=args.directory,
        name=args.name,
        extension=args.ext,
        short_extension=args.short_ext,
        max_segments=args.max_volumes,
    )
    return VolumeNaming.from_config(config)


def _clear_volumes(paths: List[str]) -> None:
    for path in paths:
        os.remove(path)
        logger.info("Removed old volume %s", path)


# =========================
# Commands
# =========================

def split(args: argparse.Namespace) -> int:
    naming = _naming(args)
    # stale volumes past a gap would still look like part of the new set
    existing = naming.existing_paths(stop_at_gap=False)
    if existing:
        if not args.overwrite:
            logger.error("Volume set already exists (%s); use --overwrite to replace it", existing[0])
            return 1
        _clear_volumes(existing)

    pool = FileWriterPool(
        args.directory, args.name, args.ext, args.short_ext, args.max_volumes, args.volume_size
    )
    total = os.path.getsize(args.source)
    with open(args.source, "rb") as src, MultiWriter(pool) as writer:
        # an empty source still yields an (empty) first volume
        writer.add_segment_from_pool()
        with tqdm(total=total, unit="B", unit_scale=True, desc="split", disable=args.quiet) as pbar:
            while True:
                chunk = src.read(args.chunk_size)
                if not chunk:
                    break
                written = writer.write(chunk)
                if written != len(chunk):
                    raise PartialTransferError("short write into volume set", written)
                pbar.update(written)
        count = writer.segment_count

    print(f"[+] Wrote {total} bytes into {count} volume(s) of {format_size(args.volume_size)} in {args.directory}")
    return 0


def join(args: argparse.Namespace) -> int:
    naming = _naming(args)
    paths = naming.existing_paths()
    if not paths:
        logger.error("No volumes named %s found in %s", naming.file_name(0), args.directory)
        return 1
    total = sum(os.path.getsize(p) for p in paths)

    pool = FileReaderPool(args.directory, args.name, args.ext, args.short_ext, args.max_volumes)
    buf = bytearray(args.chunk_size)
    view = memoryview(buf)
    with MultiReader(pool) as reader, open(args.output, "wb") as dst:
        with tqdm(total=total, unit="B", unit_scale=True, desc="join", disable=args.quiet) as pbar:
            left = total
            while left:
                n = reader.readinto(view[: min(len(buf), left)])
                if n == 0:
                    raise MultiVolumeError(f"volume set ended {left} bytes early")
                dst.write(view[:n])
                left -= n
                pbar.update(n)

    print(f"[+] Wrote {args.output} ({total} bytes from {len(paths)} volume(s))")
    return 0


def list_volumes(args: argparse.Namespace) -> int:
    naming = _naming(args)
    paths = naming.existing_paths()
    for path in paths:
        print(f"{path}\t{os.path.getsize(path)}")
    if not paths:
        logger.warning("No volumes named %s found in %s", naming.file_name(0), args.directory)
    return 0


# =========================
# CLI
# =========================

def _add_naming_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--name", "-n", required=True, help="Base name of the volume files.")
    p.add_argument("--ext", default="bin", help="Extension of the first volume.")
    p.add_argument("--short-ext", default="vol", help="Extension prefix of numbered volumes.")
    p.add_argument("--max-volumes", type=int, default=1000,
                   help="Maximum number of volumes (fixes the number width).")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="multivolume", description="Split and join multi-volume file sets.")
    ap.add_argument("--log-level", default=RuntimeConfig.LOG_LEVEL, help="Logging level.")
    ap.add_argument("--log-file", default=RuntimeConfig.LOG_FILE, help="Optional rotating log file.")
    ap.add_argument("--chunk-size", type=parse_size, default=RuntimeConfig.COPY_CHUNK_SIZE,
                    help="Bytes copied per call.")
    ap.add_argument("--quiet", "-q", action="store_true", help="Hide progress bars.")
    sub = ap.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("split", help="Split a file into fixed-size volumes.")
    sp.add_argument("source", help="File to split.")
    sp.add_argument("directory", help="Directory receiving the volumes.")
    _add_naming_args(sp)
    sp.add_argument("--volume-size", "-s", type=parse_size, required=True, help="Size per volume, e.g. 650M.")
    sp.add_argument("--overwrite", action="store_true", help="Replace an existing volume set.")
    sp.set_defaults(func=split)

    jp = sub.add_parser("join", help="Join a volume set back into one file.")
    jp.add_argument("directory", help="Directory holding the volumes.")
    _add_naming_args(jp)
    jp.add_argument("--output", "-o", required=True, help="Output file path.")
    jp.set_defaults(func=join)

    lp = sub.add_parser("list", help="List the volumes of a set.")
    lp.add_argument("directory", help="Directory holding the volumes.")
    _add_naming_args(lp)
    lp.set_defaults(func=list_volumes)

    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    init_logging(args.log_level, args.log_file)
    try:
        return args.func(args)
    except (MultiVolumeError, OSError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
