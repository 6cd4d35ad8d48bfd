# site_cache/errors.py
"""
Exception hierarchy for SiteCache.

Filesystem failures are not wrapped: they surface as the built-in
:class:`OSError` (``IOError``) raised by the standard library.
"""
from __future__ import annotations

__all__ = (
    "SiteCacheError",
    "UrlParseError",
    "DomainError",
    "NetworkError",
    "DecodeError",
    "JsonError",
    "ConfigError",
)


class SiteCacheError(Exception):
    """Base class for every error raised by site_cache."""


class UrlParseError(SiteCacheError, ValueError):
    """The URL is not an absolute http(s) URL with a host."""


class DomainError(SiteCacheError, ValueError):
    """The URL host has no registrable domain (bare IP, localhost, unknown suffix)."""


class NetworkError(SiteCacheError):
    """The request could not be sent or its response could not be received."""


class DecodeError(SiteCacheError, ValueError):
    """Bytes could not be decoded as text (response body or cached file)."""


class JsonError(SiteCacheError, ValueError):
    """Cached metadata is not valid JSON or does not match the Page schema."""


class ConfigError(SiteCacheError, ValueError):
    """Configuration file is missing, malformed, or fails validation."""
