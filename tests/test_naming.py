from __future__ import annotations

import os

import pytest

from multivolume import PoolExhaustedError, VolumeNaming
from multivolume.pools.naming import digit_width


def _naming(tmp_path, max_segments: int = 150) -> VolumeNaming:
    return VolumeNaming(
        directory=str(tmp_path),
        name="base",
        extension="ext",
        short_extension="vol",
        max_segments=max_segments,
    )


@pytest.mark.parametrize(
    "max_segments, digits",
    [(1, 1), (2, 1), (10, 1), (11, 2), (100, 2), (101, 3), (150, 3), (1000, 3), (1001, 4)],
)
def test_digit_width(max_segments, digits):
    assert digit_width(max_segments) == digits


def test_names_for_150_volumes(tmp_path):
    naming = _naming(tmp_path)

    assert naming.file_name(0) == "base.ext"
    assert naming.file_name(1) == "base.vol001"
    assert naming.file_name(2) == "base.vol002"
    assert naming.file_name(149) == "base.vol149"
    with pytest.raises(PoolExhaustedError):
        naming.file_name(150)
    with pytest.raises(PoolExhaustedError):
        naming.file_name(-1)


def test_path_for_joins_directory(tmp_path):
    naming = _naming(tmp_path, max_segments=11)
    assert naming.path_for(7) == os.path.join(str(tmp_path), "base.vol07")


def test_out_of_range_rejected_without_touching_disk(tmp_path):
    naming = _naming(tmp_path / "missing", max_segments=3)
    with pytest.raises(PoolExhaustedError):
        naming.path_for(3)
    assert not (tmp_path / "missing").exists()


def test_existing_paths_stops_at_first_gap(tmp_path):
    naming = _naming(tmp_path, max_segments=20)
    for index in (0, 1, 2, 4):
        (tmp_path / naming.file_name(index)).write_bytes(b"x")

    assert naming.existing_paths() == [naming.path_for(i) for i in range(3)]
    assert naming.existing_paths(stop_at_gap=False) == [naming.path_for(i) for i in (0, 1, 2, 4)]


def test_existing_paths_empty(tmp_path):
    assert _naming(tmp_path).existing_paths() == []
