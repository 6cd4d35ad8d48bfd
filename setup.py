# setup.py
from setuptools import setup, find_packages

setup(
    name="site_cache",
    version="0.1.0",
    description="Кэш страниц SiteCache: загрузка одной страницы через SOCKS5-прокси с сохранением на диск",
    packages=find_packages(include=["site_cache", "site_cache.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "aiohttp-socks>=0.8",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "tldextract>=3.4",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-cache=site_cache.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
