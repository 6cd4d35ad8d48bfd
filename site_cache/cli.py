# === FILE: site_cache/cli.py ===
#!/usr/bin/env python3
"""
Точка входа SiteCache: загрузить одну страницу из кэша или через прокси.

Аргументы:
  URL                 Адрес страницы (http/https)

Опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --data-dir DIR      Корень дискового кэша (override data_dir)
  --proxy URL         SOCKS-прокси (override proxy_url)
  --log-level LEVEL   Уровень логирования (TRACE, DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stdout, если не указан)
  --version, -v       Показать версию SiteCache

При успехе ничего не печатает; при ошибке выводит сообщение в stderr и завершает с кодом 1.

Пример:
  site-cache --log-level TRACE "https://example.com/a b"
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from site_cache import __version__
from site_cache.config import load_config
from site_cache.engine import from_url
from site_cache.errors import SiteCacheError
from site_cache.logger import configure as configure_logging

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def _error_chain(exc: BaseException) -> str:
    parts = []
    while exc is not None:
        parts.append(f"{type(exc).__name__}: {exc}")
        exc = exc.__cause__
    return "\n  caused by: ".join(parts)


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCache, version %(version)s')
@click.argument('url')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--data-dir', 'data_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Корень дискового кэша (override data_dir)'
)
@click.option(
    '--proxy', 'proxy_url',
    default=None,
    help='URL прокси, например socks5://localhost:20170 (override proxy_url)'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stdout, если не указан)'
)
def cli(url, config_path, data_dir, proxy_url, log_level, log_file):
    """Загрузить URL из кэша или через прокси и сохранить в кэш."""
    configure_logging(level=log_level, log_file=log_file)
    try:
        cfg = load_config(config_path, data_dir=data_dir, proxy_url=proxy_url)
    except SiteCacheError as e:
        print_error(f'Ошибка загрузки конфигурации: {_error_chain(e)}')

    try:
        asyncio.run(from_url(url, cfg))
    except (SiteCacheError, OSError, ValidationError) as e:
        print_error(f'Error: {_error_chain(e)}')


if __name__ == "__main__":
    cli()
