# === FILE: site_robots/config.py ===
"""
Модуль конфигурации разбора robots.txt и запросов к нему.
Схема описана моделью Pydantic, значения загружаются из YAML или JSON.
"""
from __future__ import annotations

import errno
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from site_robots.logger import configure


class RobotsConfig(BaseModel):
    """Настройки, общие для всех разобранных документов."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_agent: str = Field("*", min_length=1, description="User-Agent для запросов без явного агента.")
    default_port: str = Field("80", pattern=r"^\d+$", description="Порт для URL без явного порта.")
    log_level: str = Field("WARNING", description="Уровень логирования пакета.")
    log_file: Optional[Path] = Field(None, description="Файл логов (только консоль, если не задан).")

    @field_validator("log_level", mode="before")
    def _check_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.upper()
            if not isinstance(logging.getLevelName(v), int):
                raise ValueError(f"Неизвестный уровень логирования: {v}")
        return v


DEFAULT_CONFIG = RobotsConfig()


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> RobotsConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект RobotsConfig.
    При path=None возвращает настройки по умолчанию, при отсутствии файла бросает FileNotFoundError.
    """
    if path is None:
        return DEFAULT_CONFIG

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return RobotsConfig(**data)
    except ValidationError:
        raise


def apply_logging(config: RobotsConfig) -> logging.Logger:
    """Настраивает логгер пакета по значениям *config*."""
    return configure(level=config.log_level, log_file=config.log_file)
