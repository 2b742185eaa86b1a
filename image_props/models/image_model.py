"""Модели данных для строк таблицы свойств изображений.

Принципы:
- SRP: только структура данных, без логики извлечения.
- Чистый код: неизменяемость (`frozen=True`); уточнения применяются через `merged`.
"""
from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Optional

DEFAULT_DPI = 72
DEFAULT_COLOR_DEPTH = 24
UNKNOWN_COMPRESSION = "N/A"


@dataclass(frozen=True)
class MetadataRefinement:
    """Частичное обновление записи: `None` означает «поле не известно»."""
    width: Optional[int] = None
    height: Optional[int] = None
    dpi: Optional[int] = None
    color_depth: Optional[int] = None
    compression: Optional[str] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))


@dataclass(frozen=True)
class ImageRecord:
    """Неизменяемая строка результата для одного файла.

    Fields:
        name: Имя исходного файла (с расширением).
        width: Ширина, px; 0, если размеры получить не удалось.
        height: Высота, px; 0, если размеры получить не удалось.
        dpi: Разрешение; 72, если не найдено в метаданных.
        color_depth: Глубина цвета в битах.
        compression: Метка формата или "N/A".
    """
    name: str
    width: int = 0
    height: int = 0
    dpi: int = DEFAULT_DPI
    color_depth: int = DEFAULT_COLOR_DEPTH
    compression: str = UNKNOWN_COMPRESSION

    def merged(self, refinement: MetadataRefinement) -> "ImageRecord":
        """Возвращает копию, в которую перенесены только заданные поля уточнения."""
        changes = {
            f.name: getattr(refinement, f.name)
            for f in fields(refinement)
            if getattr(refinement, f.name) is not None
        }
        if not changes:
            return self
        return replace(self, **changes)
