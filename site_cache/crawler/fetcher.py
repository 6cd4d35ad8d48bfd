# site_cache/crawler/fetcher.py
"""
Fetcher module: a single proxied HTTP GET, no retries and no rate limiting.
"""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from aiohttp import ClientError, ClientSession, ClientTimeout
from aiohttp_socks import ProxyConnector, ProxyConnectionError, ProxyError, ProxyTimeoutError

from site_cache.config import CacheConfig
from site_cache.errors import ConfigError, DecodeError, NetworkError
from site_cache.logger import logger


@dataclass(slots=True)
class FetchResult:
    """Status, selected headers and decoded body of one response."""

    url: str
    status: int
    content_type: Optional[str]
    etag: Optional[str]
    last_modified: Optional[str]
    text: str


def build_session(config: CacheConfig) -> ClientSession:
    """Creates a ClientSession that routes all traffic through ``config.proxy_url``.

    ``socks5h://`` is SOCKS5 with host names resolved by the proxy.
    """
    proxy_url = config.proxy_url
    scheme, sep, rest = proxy_url.partition("://")
    rdns = scheme.lower() == "socks5h"
    if rdns:
        proxy_url = f"socks5{sep}{rest}"
    try:
        connector = ProxyConnector.from_url(proxy_url, rdns=rdns or None)
    except ValueError as exc:
        raise ConfigError(f"Invalid proxy URL {config.proxy_url!r}: {exc}") from exc
    return ClientSession(connector=connector, timeout=ClientTimeout(total=config.timeout))


class Fetcher:
    """Issues one GET per call on a caller-owned session."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> FetchResult:
        """
        GET *url* and read the whole body as text.

        Raises NetworkError if the request fails and DecodeError if the body
        cannot be decoded.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                status = resp.status
                content_type = resp.headers.get("Content-Type")
                etag = resp.headers.get("ETag")
                last_modified = resp.headers.get("Last-Modified")

                logger.info(
                    "request: url=%s status=%s content_type=%s etag=%s last_modified=%s",
                    url,
                    status,
                    content_type or "",
                    etag or "",
                    last_modified or "",
                )

                try:
                    text = await resp.text()
                except (UnicodeDecodeError, LookupError) as exc:
                    raise DecodeError(f"Cannot decode response body of {url}: {exc}") from exc
        except (ClientError, asyncio.TimeoutError, ProxyError, ProxyConnectionError, ProxyTimeoutError) as exc:
            raise NetworkError(f"Request to {url} failed: {exc}") from exc

        return FetchResult(url, status, content_type, etag, last_modified, text)
