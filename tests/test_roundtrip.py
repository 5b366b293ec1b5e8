from __future__ import annotations

import itertools
import os

import pytest

from multivolume import (
    FileReaderPool,
    FileWriterPool,
    MultiReader,
    MultiWriter,
    PartialTransferError,
    PoolExhaustedError,
    VolumeNaming,
)

CAPACITY = 64
MAX_VOLUMES = 40


def _write(directory, data: bytes, sizes) -> int:
    pool = FileWriterPool(directory, "stream", "dat", "v", MAX_VOLUMES, CAPACITY)
    with MultiWriter(pool) as writer:
        offset = 0
        for size in itertools.cycle(sizes):
            if offset >= len(data):
                break
            offset += writer.write(data[offset:offset + size])
        return writer.segment_count


def _read(directory, total: int, sizes) -> bytes:
    pool = FileReaderPool(directory, "stream", "dat", "v", MAX_VOLUMES)
    out = bytearray()
    with MultiReader(pool) as reader:
        for size in itertools.cycle(sizes):
            if len(out) >= total:
                break
            buf = bytearray(min(size, total - len(out)))
            n = reader.readinto(buf)
            assert n > 0
            out += buf[:n]
    return bytes(out)


@pytest.mark.parametrize(
    "write_sizes, read_sizes",
    [
        ((1,), (1000,)),
        ((7, 64, 65), (13,)),
        ((200,), (64, 1, 127)),
        ((1000,), (63, 64, 65)),
    ],
)
def test_round_trip_any_buffer_sizes(tmp_path, payload, write_sizes, read_sizes):
    volumes = _write(tmp_path, payload, write_sizes)

    assert volumes == -(-len(payload) // CAPACITY)
    assert _read(tmp_path, len(payload), read_sizes) == payload


def test_volume_sizes_on_disk(tmp_path, payload):
    _write(tmp_path, payload, (100,))
    naming = VolumeNaming(str(tmp_path), "stream", "dat", "v", MAX_VOLUMES)
    paths = naming.existing_paths()
    sizes = [os.path.getsize(p) for p in paths]

    assert paths[0].endswith("stream.dat")
    assert paths[1].endswith("stream.v01")
    assert all(s == CAPACITY for s in sizes[:-1])
    assert sum(sizes) == len(payload)


def test_exact_multiple_creates_no_empty_trailing_volume(tmp_path):
    data = b"z" * (CAPACITY * 3)
    assert _write(tmp_path, data, (CAPACITY * 3,)) == 3

    naming = VolumeNaming(str(tmp_path), "stream", "dat", "v", MAX_VOLUMES)
    assert len(naming.existing_paths()) == 3


def test_readall_stops_at_end_of_volume_set(tmp_path, payload):
    _write(tmp_path, payload, (333,))

    with MultiReader(FileReaderPool(tmp_path, "stream", "dat", "v", MAX_VOLUMES)) as reader:
        assert reader.read() == payload


def test_write_past_max_volumes(tmp_path):
    pool = FileWriterPool(tmp_path, "small", "dat", "v", 2, 4)
    writer = MultiWriter(pool)

    with pytest.raises(PartialTransferError) as info:
        writer.write(b"0123456789")
    assert info.value.transferred == 8
    assert isinstance(info.value.__cause__, PoolExhaustedError)
    assert pool.counter == 2
    writer.close()

    assert (tmp_path / "small.dat").read_bytes() == b"0123"
    assert (tmp_path / "small.v1").read_bytes() == b"4567"


def test_read_all_of_missing_volume_set_fails(tmp_path):
    reader = MultiReader(FileReaderPool(tmp_path / "nope", "stream", "dat", "v", MAX_VOLUMES))

    with pytest.raises(FileNotFoundError):
        reader.read()
    reader.close()


def test_with_block_keeps_directory_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_bytes(b"")
    pool = FileWriterPool(blocker / "sub", "stream", "dat", "v", MAX_VOLUMES, CAPACITY)

    with pytest.raises(OSError):
        with MultiWriter(pool) as writer:
            writer.write(b"abc")
    assert pool.counter == 0
