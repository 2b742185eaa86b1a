from __future__ import annotations

from pathlib import Path

import pytest

from conftest import write_png
from image_props.services.local_fs import (
    LocalDirectoryEntry,
    LocalDirectoryHandle,
    LocalFile,
    LocalFileEntry,
    entry_for_path,
    parse_drop_data,
)


class TestLocalFile:
    @pytest.mark.asyncio
    async def test_reads_bytes(self, tmp_path: Path):
        path = tmp_path / "a.bin"
        path.write_bytes(b"abc")
        handle = LocalFile(path)
        assert handle.name == "a.bin"
        assert await handle.read_bytes() == b"abc"


class TestEntries:
    def test_entry_kind_follows_path(self, image_tree: Path):
        assert isinstance(entry_for_path(image_tree), LocalDirectoryEntry)
        assert isinstance(entry_for_path(image_tree / "a.png"), LocalFileEntry)

    @pytest.mark.asyncio
    async def test_reader_pages_until_empty(self, tmp_path: Path):
        for i in range(3):
            write_png(tmp_path / f"{i}.png")
        reader = LocalDirectoryEntry(tmp_path, page_size=2).create_reader()
        pages = [await reader.read_entries() for _ in range(3)]
        assert [[e.name for e in page] for page in pages] == [["0.png", "1.png"], ["2.png"], []]

    @pytest.mark.asyncio
    async def test_missing_file_entry_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            await LocalFileEntry(tmp_path / "nope.png").get_file()


class TestDirectoryHandle:
    @pytest.mark.asyncio
    async def test_values_report_kind(self, image_tree: Path):
        kinds = [(e.name, e.kind) async for e in LocalDirectoryHandle(image_tree).values()]
        assert kinds == [("a.png", "file"), ("notes.txt", "file"), ("sub", "directory")]


class TestParseDropData:
    def test_splits_braced_paths(self):
        class FakeTk:
            @staticmethod
            def splitlist(data):
                return ("/tmp/a b.png", "/tmp/c.gif", "")

        class FakeWidget:
            tk = FakeTk()

        assert parse_drop_data(FakeWidget(), "{/tmp/a b.png} /tmp/c.gif") == ["/tmp/a b.png", "/tmp/c.gif"]
