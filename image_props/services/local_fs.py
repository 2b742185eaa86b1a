"""Реализации источников файлов для локального диска.

Блокирующий ввод-вывод выполняется в пуле потоков (`asyncio.to_thread`),
чтобы точки ожидания пайплайна соответствовали реальным операциям с диском.
"""
from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import AsyncIterator, Iterable, List, Optional, Union

from image_props.models.file_model import Entry

DEFAULT_PAGE_SIZE = 100


class LocalFile:
    """Файл на диске как `FileHandle`."""
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.name = self.path.name

    async def read_bytes(self) -> bytes:
        return await asyncio.to_thread(self.path.read_bytes)

    def __repr__(self) -> str:
        return f"LocalFile({str(self.path)!r})"


class LocalFileEntry:
    is_file = True
    is_directory = False

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.name = self.path.name

    async def get_file(self) -> LocalFile:
        # resolution fails the same way a host would for a vanished file
        is_file = await asyncio.to_thread(self.path.is_file)
        if not is_file:
            raise FileNotFoundError(f"Файл не найден: {self.path}")
        return LocalFile(self.path)


class LocalDirectoryReader:
    """Отдаёт дочерние записи каталога страницами по `page_size` в порядке имён."""
    def __init__(self, path: Path, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self._path = path
        self._page_size = page_size
        self._children: Optional[List[Entry]] = None
        self._offset = 0

    async def read_entries(self) -> List[Entry]:
        if self._children is None:
            self._children = await asyncio.to_thread(self._list_children)
        page = self._children[self._offset:self._offset + self._page_size]
        self._offset += len(page)
        return page

    def _list_children(self) -> List[Entry]:
        with os.scandir(self._path) as it:
            names = sorted(it, key=lambda e: e.name)
        return [_entry_for_dirent(d, self._page_size) for d in names]


class LocalDirectoryEntry:
    is_file = False
    is_directory = True

    def __init__(self, path: Union[str, Path], page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.path = Path(path)
        self.name = self.path.name
        self._page_size = page_size

    def create_reader(self) -> LocalDirectoryReader:
        return LocalDirectoryReader(self.path, self._page_size)


def _entry_for_dirent(dirent: os.DirEntry, page_size: int) -> Entry:
    # symlinked directories are not entered, so a link to an ancestor cannot loop
    if dirent.is_dir(follow_symlinks=False):
        return LocalDirectoryEntry(dirent.path, page_size)
    return LocalFileEntry(dirent.path)


def entry_for_path(path: Union[str, Path], page_size: int = DEFAULT_PAGE_SIZE) -> Entry:
    """Оборачивает путь, полученный при перетаскивании, в запись файла или каталога."""
    p = Path(path)
    if p.is_dir():
        return LocalDirectoryEntry(p, page_size)
    return LocalFileEntry(p)


class LocalHandleEntry:
    def __init__(self, path: Path, kind: str) -> None:
        self.path = path
        self.name = path.name
        self.kind = kind

    async def get_file(self) -> LocalFile:
        return LocalFile(self.path)


class LocalDirectoryHandle:
    """Каталог, выбранный в диалоге: перечисляет только прямых потомков."""
    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.name = self.path.name

    async def values(self) -> AsyncIterator[LocalHandleEntry]:
        children = await asyncio.to_thread(self._list_children)
        for child in children:
            yield child

    def _list_children(self) -> List[LocalHandleEntry]:
        with os.scandir(self.path) as it:
            dirents = sorted(it, key=lambda e: e.name)
        return [
            LocalHandleEntry(Path(d.path), "directory" if d.is_dir() else "file")
            for d in dirents
        ]


def parse_drop_data(tk_app, data: str) -> List[str]:
    """Разбирает полезную нагрузку события <<Drop>> tkinterdnd2 в список путей.

    Пути с пробелами приходят в фигурных скобках; `splitlist` их снимает.
    """
    paths: List[str] = []
    for raw in tk_app.tk.splitlist(data):
        p = str(raw).strip().strip('"')
        if p:
            paths.append(p)
    return paths


def entries_for_paths(paths: Iterable[Union[str, Path]], page_size: int = DEFAULT_PAGE_SIZE) -> List[Entry]:
    return [entry_for_path(p, page_size) for p in paths]
