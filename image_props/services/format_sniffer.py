"""Распознавание изображений по расширению имени файла."""
from __future__ import annotations

from typing import Union

from image_props.models.file_model import FileHandle

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".tif", ".webp")


def _name_of(file: Union[FileHandle, str]) -> str:
    return file if isinstance(file, str) else file.name


def is_image(file: Union[FileHandle, str]) -> bool:
    """True, если имя оканчивается на одно из известных расширений (без учёта регистра)."""
    return _name_of(file).lower().endswith(IMAGE_EXTENSIONS)


def file_extension(name: str) -> str:
    """Расширение в нижнем регистре без точки; пустая строка, если точки нет."""
    _stem, dot, ext = name.rpartition(".")
    return ext.lower() if dot else ""
