from __future__ import annotations

import pytest

from conftest import FakeFile
from image_props.services.format_sniffer import file_extension, is_image


class TestIsImage:
    @pytest.mark.parametrize(
        "name",
        ["a.jpg", "b.jpeg", "c.png", "d.gif", "e.bmp", "f.tiff", "g.tif", "h.webp", "A.JPG", "Photo.JpEg"],
    )
    def test_accepts_known_extensions(self, name: str):
        assert is_image(name) is True

    @pytest.mark.parametrize(
        "name",
        ["notes.txt", "archive.zip", "README", "image.svg", "movie.mp4", "png", "scan.jpg.bak", ""],
    )
    def test_rejects_everything_else(self, name: str):
        assert is_image(name) is False

    def test_uses_file_handle_name(self):
        assert is_image(FakeFile("HOLIDAY.PNG")) is True
        assert is_image(FakeFile("holiday.heic")) is False


class TestFileExtension:
    def test_lowercases_last_suffix(self):
        assert file_extension("Archive.Tar.GZ") == "gz"

    def test_empty_without_dot(self):
        assert file_extension("Makefile") == ""
