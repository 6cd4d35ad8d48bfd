# site_cache/__init__.py
"""
SiteCache package initializer.
Defines package version; the CLI lives in :mod:`site_cache.cli`.
"""
__version__ = "0.1.0"
