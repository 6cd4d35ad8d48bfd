# File: site_cache/crawler/__init__.py
"""site_cache.crawler: модели страниц, дисковый кэш и загрузчик через прокси."""
