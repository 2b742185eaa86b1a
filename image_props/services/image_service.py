"""Извлечение свойств изображения: размеры, DPI, глубина цвета, формат.

Принципы:
- SRP: класс отвечает только за заполнение `ImageRecord` для одного файла.
- DIP: ридер EXIF внедряется снаружи (`TagReader`), его может и не быть.
- Ошибки не выходят наружу: при сбое поля остаются со значениями по умолчанию.
"""
from __future__ import annotations

import asyncio
import io
import logging
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from image_props.models.file_model import FileHandle
from image_props.models.image_model import ImageRecord, MetadataRefinement
from image_props.services.format_sniffer import file_extension
from image_props.services.tag_reader import NullTagReader, TagReader

logger = logging.getLogger(__name__)

# extension -> fixed refinement; jpeg additionally consults the tag reader
FORMAT_DEFAULTS = {
    "jpg": MetadataRefinement(compression="JPEG"),
    "jpeg": MetadataRefinement(compression="JPEG"),
    "png": MetadataRefinement(compression="PNG", color_depth=32),
    "gif": MetadataRefinement(compression="GIF", color_depth=8),
    "bmp": MetadataRefinement(compression="BMP"),
    "webp": MetadataRefinement(compression="WebP"),
    "tif": MetadataRefinement(compression="TIFF"),
    "tiff": MetadataRefinement(compression="TIFF"),
}
EXIF_EXTENSIONS = ("jpg", "jpeg")


def probe_dimensions(data: bytes) -> Tuple[int, int]:
    """Декодирует изображение и возвращает его натуральные размеры.

    Raises:
        ValueError: если данные не распознаны как изображение.
        OSError: если файл повреждён или обрезан.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return img.size
    except UnidentifiedImageError as exc:
        raise ValueError("Файл не является изображением") from exc


class MetadataExtractor:
    def __init__(self, tag_reader: Optional[TagReader] = None) -> None:
        self._tag_reader: TagReader = tag_reader or NullTagReader()

    async def extract(self, file: FileHandle) -> ImageRecord:
        """Возвращает запись для файла; никогда не выбрасывает исключений.

        Args:
            file: Дескриптор файла (имя и содержимое).

        Returns:
            `ImageRecord`, заполненный настолько, насколько удалось: сбой
            определения размеров и сбой чтения тегов независимы друг от друга.
        """
        record = ImageRecord(name=file.name)

        data: Optional[bytes] = None
        try:
            data = await file.read_bytes()
        except OSError as exc:
            logger.warning("Error reading %s: %s", file.name, exc)

        if data is not None:
            try:
                width, height = await asyncio.to_thread(probe_dimensions, data)
                record = record.merged(MetadataRefinement(width=width, height=height))
            except Exception as exc:  # decoder plugins raise more than OSError
                logger.warning("Failed to load image %s: %s", file.name, exc)

        ext = file_extension(file.name)
        defaults = FORMAT_DEFAULTS.get(ext)
        if defaults is None:
            return record
        record = record.merged(defaults)

        if ext in EXIF_EXTENSIONS and data is not None:
            record = record.merged(await self._read_tags(file.name, data))
        return record

    async def _read_tags(self, name: str, data: bytes) -> MetadataRefinement:
        try:
            refinement = await asyncio.to_thread(self._tag_reader.read, data)
        except Exception as exc:  # third-party decoder, any failure keeps defaults
            logger.warning("Failed to read tags of %s: %s", name, exc)
            return MetadataRefinement()
        # only resolution and bit depth are taken from tags
        return MetadataRefinement(dpi=refinement.dpi, color_depth=refinement.color_depth)
