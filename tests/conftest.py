"""Shared fixtures: real image files generated with Pillow and in-memory fakes."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import piexif
import pytest
from PIL import Image

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,
    force=True,
)


def write_png(path: Path, size=(40, 30)) -> Path:
    Image.new("RGBA", size, (255, 0, 0, 128)).save(path, format="PNG")
    return path


def write_gif(path: Path, size=(16, 8)) -> Path:
    Image.new("P", size).save(path, format="GIF")
    return path


def write_jpeg(path: Path, size=(64, 48), x_resolution=None, bits_per_sample=None, noisy=False) -> Path:
    """JPEG with an optional EXIF block holding XResolution / BitsPerSample."""
    if noisy:
        img = Image.effect_noise(size, 80).convert("RGB")
    else:
        img = Image.new("RGB", size, (10, 200, 30))
    ifd0 = {}
    if x_resolution is not None:
        ifd0[piexif.ImageIFD.XResolution] = x_resolution
    if bits_per_sample is not None:
        ifd0[piexif.ImageIFD.BitsPerSample] = bits_per_sample
    if ifd0:
        exif = piexif.dump({"0th": ifd0, "Exif": {}, "GPS": {}, "1st": {}, "thumbnail": None})
        img.save(path, format="JPEG", exif=exif)
    else:
        img.save(path, format="JPEG")
    return path


class FakeFile:
    """In-memory FileHandle."""

    def __init__(self, name: str, data: bytes = b"", error: Optional[Exception] = None):
        self.name = name
        self._data = data
        self._error = error

    async def read_bytes(self) -> bytes:
        if self._error is not None:
            raise self._error
        return self._data


class FakeFileEntry:
    is_file = True
    is_directory = False

    def __init__(self, name: str, error: Optional[Exception] = None):
        self.name = name
        self._error = error

    async def get_file(self) -> FakeFile:
        if self._error is not None:
            raise self._error
        return FakeFile(self.name)


class FakeReader:
    def __init__(self, pages: List[list], error_after: Optional[int] = None, error: Optional[Exception] = None):
        self._pages = list(pages)
        self._error_after = error_after
        self._error = error or PermissionError("denied")
        self.calls = 0

    async def read_entries(self) -> list:
        self.calls += 1
        if self._error_after is not None and self.calls > self._error_after:
            raise self._error
        if not self._pages:
            return []
        return self._pages.pop(0)


class FakeDirectoryEntry:
    is_file = False
    is_directory = True

    def __init__(self, name: str, pages: List[list], error_after: Optional[int] = None,
                 error: Optional[Exception] = None):
        self.name = name
        self.reader = FakeReader(pages, error_after, error)

    def create_reader(self) -> FakeReader:
        return self.reader


class RecordingReporter:
    """ProgressReporter that keeps every event in order."""

    def __init__(self):
        self.events: list = []

    def started(self, run_id, total):
        self.events.append(("started", total))

    def record_ready(self, run_id, record):
        self.events.append(("record", record.name))

    def progress(self, run_id, processed, total):
        self.events.append(("progress", processed, total))

    def completed(self, run_id, total):
        self.events.append(("completed", total))

    def no_images(self, run_id):
        self.events.append(("no_images",))


@pytest.fixture
def image_tree(tmp_path: Path) -> Path:
    """root/{a.png, notes.txt, sub/b.gif, sub/empty/}"""
    root = tmp_path / "root"
    (root / "sub" / "empty").mkdir(parents=True)
    write_png(root / "a.png")
    (root / "notes.txt").write_text("not an image")
    write_gif(root / "sub" / "b.gif")
    return root


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()
