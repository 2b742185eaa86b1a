"""Чтение EXIF-тегов (разрешение, биты на канал) для уточнения записи.

Ридер внедряется в `MetadataExtractor` как необязательная возможность:
`PiexifTagReader` — доступен, `NullTagReader` — недоступен.
"""
from __future__ import annotations

import logging
import struct
from typing import Any, Optional, Protocol

import piexif

from image_props.config import AppConfig
from image_props.models.image_model import MetadataRefinement

logger = logging.getLogger(__name__)

JPEG_SOI = b"\xff\xd8"


class TagReader(Protocol):
    def read(self, data: bytes) -> MetadataRefinement:
        ...


class NullTagReader:
    """Ридер для окружений без поддержки EXIF: никогда ничего не уточняет."""
    def read(self, data: bytes) -> MetadataRefinement:
        return MetadataRefinement()


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def resolution_to_dpi(value: Any) -> Optional[int]:
    """Переводит значение XResolution в DPI.

    Рациональное число `(num, den)` с нулевым знаменателем считается
    некорректным; одиночное число трактуется как `num / 1`.
    """
    if isinstance(value, (tuple, list)):
        if len(value) != 2:
            return None
        numerator, denominator = value
    else:
        numerator, denominator = value, 1
    try:
        numerator, denominator = int(numerator), int(denominator)
    except (TypeError, ValueError):
        return None
    if numerator <= 0 or denominator <= 0:
        return None
    dpi = _round_half_up(numerator, denominator)
    return dpi if dpi > 0 else None


def bits_to_depth(value: Any) -> Optional[int]:
    """BitsPerSample: сумма по каналам для нескольких значений, иначе само значение."""
    try:
        if isinstance(value, (tuple, list)):
            depth = sum(int(v) for v in value)
        else:
            depth = int(value)
    except (TypeError, ValueError):
        return None
    return depth if depth > 0 else None


class PiexifTagReader:
    def read(self, data: bytes) -> MetadataRefinement:
        if not data.startswith(JPEG_SOI):
            logger.warning("EXIF decode skipped: data is not a JPEG stream")
            return MetadataRefinement()
        try:
            exif = piexif.load(data)
        except (piexif.InvalidImageDataError, ValueError, IndexError, struct.error) as exc:
            logger.warning("EXIF decode failed: %s", exc)
            return MetadataRefinement()

        ifd0 = exif.get("0th") or {}
        dpi = None
        depth = None
        if piexif.ImageIFD.XResolution in ifd0:
            dpi = resolution_to_dpi(ifd0[piexif.ImageIFD.XResolution])
        if piexif.ImageIFD.BitsPerSample in ifd0:
            depth = bits_to_depth(ifd0[piexif.ImageIFD.BitsPerSample])
        return MetadataRefinement(dpi=dpi, color_depth=depth)


def build_tag_reader(config: AppConfig) -> TagReader:
    return PiexifTagReader() if config.read_exif else NullTagReader()
