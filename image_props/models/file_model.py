"""Абстракции источников файлов: дескрипторы файлов и записи файловой системы.

Сервисы зависят только от этих протоколов; конкретные реализации для локального
диска находятся в `image_props.services.local_fs`, а тесты подставляют свои.
"""
from __future__ import annotations

from typing import AsyncIterator, List, Protocol, Union


class FileHandle(Protocol):
    """Ссылка на файл: имя и содержимое, читаемое по требованию."""
    name: str

    async def read_bytes(self) -> bytes:
        ...


class FileEntry(Protocol):
    name: str
    is_file: bool
    is_directory: bool

    async def get_file(self) -> FileHandle:
        ...


class DirectoryReader(Protocol):
    async def read_entries(self) -> List["Entry"]:
        """Следующая страница дочерних записей; пустой список — конец перечисления."""
        ...


class DirectoryEntry(Protocol):
    name: str
    is_file: bool
    is_directory: bool

    def create_reader(self) -> DirectoryReader:
        ...


Entry = Union[FileEntry, DirectoryEntry]


class HandleEntry(Protocol):
    """Дочерний элемент каталога, выбранного через диалог ("file" | "directory")."""
    name: str
    kind: str

    async def get_file(self) -> FileHandle:
        ...


class DirectoryHandle(Protocol):
    name: str

    def values(self) -> AsyncIterator[HandleEntry]:
        ...
