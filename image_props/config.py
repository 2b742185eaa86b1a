"""Настройки приложения.

Значения по умолчанию заданы в `AppConfig`; необязательный YAML-файл
переопределяет отдельные ключи.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "IMAGE_PROPS_CONFIG"


class ConfigError(ValueError):
    """Файл настроек не читается или содержит неверные ключи."""


@dataclass(frozen=True)
class AppConfig:
    window_title: str = "Image Properties"
    idle_prompt: str = "Upload JPG Images"
    status_reset_ms: int = 3000
    poll_interval_ms: int = 50
    directory_page_size: int = 100
    read_exif: bool = True
    log_level: str = "INFO"


def load_config(path: Optional[str | Path] = None) -> AppConfig:
    """Загружает настройки из YAML поверх значений по умолчанию.

    Args:
        path: Путь до YAML-файла. Если не указан, берётся из переменной
            окружения `IMAGE_PROPS_CONFIG`; если нет и её — возвращаются умолчания.

    Raises:
        ConfigError: если файл не найден, не разбирается или содержит
            неизвестные ключи либо значения неверного типа.
    """
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return AppConfig()

    config_path = Path(path)
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise ConfigError(f"Не удалось прочитать настройки: {config_path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Некорректный YAML в {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Ожидался словарь настроек в {config_path}")

    defaults = AppConfig()
    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Неизвестные ключи настроек: {', '.join(unknown)}")

    for key, value in data.items():
        expected = type(getattr(defaults, key))
        # bool is a subclass of int: reject it for numeric keys
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ConfigError(f"Ключ {key!r} должен иметь тип {expected.__name__}")

    config = replace(defaults, **data)
    if config.directory_page_size < 1:
        raise ConfigError("directory_page_size должен быть положительным")
    logger.info("Loaded config from %s", config_path)
    return config
