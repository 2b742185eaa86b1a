from __future__ import annotations

from pathlib import Path

import pytest

from conftest import write_jpeg, write_png
from image_props.config import AppConfig
from image_props.models.image_model import MetadataRefinement
from image_props.services.tag_reader import (
    NullTagReader,
    PiexifTagReader,
    bits_to_depth,
    build_tag_reader,
    resolution_to_dpi,
)


class TestResolutionToDpi:
    @pytest.mark.parametrize(
        "value, expected",
        [((300, 1), 300), ((720, 10), 72), ((5, 2), 3), (96, 96), ((300, 0), None), ((0, 1), None), ("x", None)],
    )
    def test_values(self, value, expected):
        assert resolution_to_dpi(value) == expected


class TestBitsToDepth:
    @pytest.mark.parametrize(
        "value, expected",
        [((8, 8, 8), 24), ((8, 8, 8, 8), 32), (16, 16), ([1], 1), ((), None), (None, None)],
    )
    def test_values(self, value, expected):
        assert bits_to_depth(value) == expected


class TestPiexifTagReader:
    def test_reads_both_tags(self, tmp_path: Path):
        data = write_jpeg(tmp_path / "a.jpg", x_resolution=(240, 1), bits_per_sample=(8, 8, 8, 8)).read_bytes()
        assert PiexifTagReader().read(data) == MetadataRefinement(dpi=240, color_depth=32)

    def test_no_exif_block(self, tmp_path: Path):
        data = write_jpeg(tmp_path / "a.jpg").read_bytes()
        assert PiexifTagReader().read(data).is_empty()

    def test_non_jpeg_data(self, tmp_path: Path):
        data = write_png(tmp_path / "a.png").read_bytes()
        assert PiexifTagReader().read(data).is_empty()

    def test_broken_jpeg_segments(self):
        assert PiexifTagReader().read(b"\xff\xd8\xff\xe1").is_empty()


class TestBuildTagReader:
    def test_enabled(self):
        assert isinstance(build_tag_reader(AppConfig()), PiexifTagReader)

    def test_disabled(self):
        reader = build_tag_reader(AppConfig(read_exif=False))
        assert isinstance(reader, NullTagReader)
        assert reader.read(b"\xff\xd8").is_empty()
