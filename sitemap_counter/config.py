# === FILE: sitemap_counter/config.py ===
"""
Модуль для загрузки и валидации конфигурации SitemapCounter.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36"
)


class CounterConfig(BaseModel):
    """Конфигурация для одного запуска подсчёта URL."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(15.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")
    follow_redirects: bool = Field(True, description="Следовать HTTP-редиректам.")
    snippet_length: int = Field(
        500, ge=0, description="Сколько символов ответа показывать в режиме отладки."
    )
    debug: bool = Field(False, description="Подробный диагностический вывод.")

    @field_validator("user_agent", mode="before")
    def _strip_user_agent(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    def with_debug(self, enabled: bool) -> CounterConfig:
        """Возвращает копию конфигурации с изменённым флагом отладки."""
        if enabled == self.debug:
            return self
        return self.model_copy(update={"debug": enabled})


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


def load_config(path: Union[str, Path, None]) -> CounterConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CounterConfig.
    Без пути возвращает конфигурацию по умолчанию.
    При отсутствии файла бросает FileNotFoundError.
    """
    if path is None:
        return CounterConfig()

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

    return CounterConfig(**data)


__all__ = ["CounterConfig", "DEFAULT_USER_AGENT", "load_config"]
