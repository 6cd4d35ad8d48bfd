# cli.py

"""
Точка входа для запуска SiteCache без установки пакета.

Функционал:
- Парсинг аргумента URL и опций (config, data-dir, proxy, логирование)
- Загрузка конфигурации (Pydantic)
- Загрузка страницы из кэша или через SOCKS5-прокси

Пример запуска:
    python cli.py --config configs/default.yaml https://example.com/
"""
from site_cache.cli import cli


if __name__ == '__main__':
    cli()
