# site_cache/crawler/cache.py
"""
On-disk page cache: ``<data_dir>/<domain>/<encoded-url>.metadata.json`` plus
the sibling ``.content.html`` body file.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from site_cache import storage
from site_cache.crawler.models import Page
from site_cache.errors import DecodeError, JsonError
from site_cache.logger import logger
from site_cache.utils import EncodedUrl, encode_url, extract_domain

__all__ = ("CacheKey", "cache_key", "load_page", "store_page")

METADATA_SUFFIX = ".metadata.json"
CONTENT_SUFFIX = ".content.html"


@dataclass(frozen=True, slots=True)
class CacheKey:
    """The (domain, encoded URL) pair naming the two cache files of a URL."""

    data_dir: Path
    domain: str
    encoded_url: EncodedUrl

    @property
    def metadata_path(self) -> Path:
        return self.data_dir / self.domain / f"{self.encoded_url}{METADATA_SUFFIX}"

    @property
    def content_path(self) -> Path:
        return self.data_dir / self.domain / f"{self.encoded_url}{CONTENT_SUFFIX}"


def cache_key(url: str, data_dir: Union[str, Path] = "data") -> CacheKey:
    """Derives the cache key of an already normalised *url*.

    Raises DomainError when the host has no registrable domain.
    """
    return CacheKey(Path(data_dir), extract_domain(url), encode_url(url))


def load_page(key: CacheKey) -> Optional[Page]:
    """Returns the cached Page for *key*, or None if either file is unusable."""
    try:
        metadata = storage.read(key.metadata_path)
        content = storage.read(key.content_path)
        return Page.from_metadata(metadata, content)
    except (OSError, DecodeError, JsonError) as exc:
        logger.debug("cache miss: %s (%s)", key.metadata_path, exc)
        return None


def store_page(key: CacheKey, page: Page) -> None:
    """Writes the body first, then the metadata record."""
    storage.write(key.content_path, page.content)
    storage.write(key.metadata_path, page.metadata_json())
