# File: site_cache/engine.py
"""site_cache.engine: cache-or-fetch для одного URL (CacheHit / LiveFetch)."""

from __future__ import annotations

from typing import Optional

from aiohttp import ClientSession

from site_cache.config import CacheConfig
from site_cache.crawler.cache import cache_key, load_page, store_page
from site_cache.crawler.fetcher import Fetcher, build_session
from site_cache.crawler.models import Page
from site_cache.logger import logger
from site_cache.utils import normalize_url

__all__ = ["from_url"]


async def from_url(
    url: str,
    config: Optional[CacheConfig] = None,
    session: Optional[ClientSession] = None,
) -> Page:
    """Returns the Page for *url*, from the cache if present, else fetched and cached.

    A stale cache entry is never revalidated. When *session* is given it is
    used as is and left open; otherwise a proxied session is created for
    this call and closed before returning.
    """
    config = config or CacheConfig()
    url = normalize_url(url)
    key = cache_key(url, config.data_dir)

    cached = load_page(key)
    if cached is not None:
        logger.debug("cache hit: %s", url)
        return cached

    if session is None:
        async with build_session(config) as own_session:
            result = await Fetcher(own_session).fetch(url)
    else:
        result = await Fetcher(session).fetch(url)

    page = Page(
        url=url,
        domain=key.domain,
        status=result.status,
        content_type=result.content_type,
        etag=result.etag,
        last_modified=result.last_modified,
        len=len(result.text.encode("utf-8")),
        content=result.text,
    )
    store_page(key, page)
    return page
