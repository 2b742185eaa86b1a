"""Сбор файлов изображений из списка файлов, перетащенных записей или каталога.

Принципы:
- SRP: только обход и фильтрация; метаданные не читаются.
- Ошибки отдельных записей не прерывают обход: такая запись даёт ноль файлов.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Sequence, Union

from image_props.models.file_model import DirectoryEntry, DirectoryHandle, Entry, FileHandle
from image_props.services.format_sniffer import is_image

logger = logging.getLogger(__name__)


class TreeCollector:
    async def collect(self, inputs: Union[Sequence[FileHandle], Sequence[Entry], DirectoryHandle]) -> List[FileHandle]:
        """Выбирает режим обхода по виду входных данных.

        Returns:
            Упорядоченный список файлов-изображений; пустой список означает
            «изображения не найдены».
        """
        if hasattr(inputs, "values") and not isinstance(inputs, (list, tuple)):
            return await self.collect_directory(inputs)  # type: ignore[arg-type]
        items = list(inputs)  # type: ignore[arg-type]
        if any(hasattr(item, "is_directory") for item in items):
            return await self.collect_entries(items)
        return self.collect_files(items)

    def collect_files(self, files: Iterable[FileHandle]) -> List[FileHandle]:
        return [f for f in files if is_image(f)]

    async def collect_entries(self, entries: Iterable[Entry]) -> List[FileHandle]:
        """Обходит записи в глубину с явным стеком вместо рекурсии.

        Дети каталога кладутся на стек в обратном порядке, поэтому файлы
        выдаются в том же порядке, что и при рекурсивном обходе.
        """
        files: List[FileHandle] = []
        stack: List[Entry] = list(reversed(list(entries)))
        while stack:
            entry = stack.pop()
            if entry.is_file:
                files.extend(await self._resolve_file_entry(entry))  # type: ignore[arg-type]
            elif entry.is_directory:
                children = await self._read_all_entries(entry)  # type: ignore[arg-type]
                stack.extend(reversed(children))
        return files

    async def collect_directory(self, handle: DirectoryHandle) -> List[FileHandle]:
        """Только прямые потомки каталога; подкаталоги не обходятся."""
        files: List[FileHandle] = []
        try:
            async for child in handle.values():
                if child.kind != "file":
                    continue
                try:
                    file = await child.get_file()
                except Exception as exc:  # host adapters may raise more than OSError
                    logger.error("Error reading file %s: %s", child.name, exc)
                    continue
                if is_image(file):
                    files.append(file)
        except Exception as exc:
            logger.error("Error reading directory %s: %s", handle.name, exc)
        return files

    # ---- Helpers ----
    async def _resolve_file_entry(self, entry) -> List[FileHandle]:
        try:
            file = await entry.get_file()
        except Exception as exc:
            logger.error("Error reading file %s: %s", entry.name, exc)
            return []
        return [file] if is_image(file) else []

    async def _read_all_entries(self, entry: DirectoryEntry) -> List[Entry]:
        """Запрашивает страницы, пока хост не вернёт пустую."""
        children: List[Entry] = []
        try:
            reader = entry.create_reader()
            while True:
                batch = await reader.read_entries()
                if not batch:
                    break
                children.extend(batch)
        except Exception as exc:
            logger.error("Error reading directory %s: %s", entry.name, exc)
        return children
