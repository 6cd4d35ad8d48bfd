# === FILE: site_cache/config.py ===
"""
Модуль для загрузки и валидации конфигурации SiteCache.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union
from urllib.parse import urlsplit

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from site_cache.errors import ConfigError

DEFAULT_PROXY_URL = "socks5://localhost:20170"
PROXY_SCHEMES = ("socks4", "socks5", "socks5h", "http")


class CacheConfig(BaseModel):
    """Process-wide settings for one cache-or-fetch run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    proxy_url: str = Field(DEFAULT_PROXY_URL, description="Proxy for all outgoing requests.")
    data_dir: Path = Field(Path("data"), description="Root directory of the page cache.")
    timeout: Optional[float] = Field(
        None, gt=0, description="Total request timeout in seconds; None disables it."
    )

    @field_validator("proxy_url")
    @classmethod
    def _check_proxy_url(cls, v: str) -> str:
        parts = urlsplit(v)
        if parts.scheme.lower() not in PROXY_SCHEMES:
            raise ValueError(
                f"unsupported proxy scheme {parts.scheme!r}, expected one of {', '.join(PROXY_SCHEMES)}"
            )
        try:
            port = parts.port
        except ValueError as exc:
            raise ValueError(f"invalid proxy port in {v!r}") from exc
        if not parts.hostname or port is None:
            raise ValueError(f"proxy URL {v!r} must include host and port")
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def build_config(**values: Any) -> CacheConfig:
    """Validates *values* into a CacheConfig, raising ConfigError on failure."""
    try:
        return CacheConfig(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CacheConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CacheConfig.
    Без пути использует configs/default.yaml, если он есть, иначе значения по умолчанию.
    Непустые *overrides* (например, из CLI) имеют приоритет над файлом.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_yaml(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise ConfigError(f"Файл конфигурации не найден: {path_obj}")

        suffix = path_obj.suffix.lower()
        if suffix in (".yaml", ".yml"):
            data = _read_yaml(path_obj)
        elif suffix == ".json":
            data = _read_json(path_obj)
        else:
            raise ConfigError(f"Неподдерживаемый формат конфига: {suffix}")

    data.update({k: v for k, v in overrides.items() if v is not None})
    return build_config(**data)
