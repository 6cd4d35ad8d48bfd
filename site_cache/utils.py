# File: site_cache/utils.py
"""site_cache.utils: нормализация URL, регистрируемый домен и percent-encoding ключа кэша."""

from __future__ import annotations

import ipaddress
from functools import lru_cache
from typing import Sequence
from urllib.parse import urlsplit, urlunsplit

import tldextract

from site_cache.errors import DomainError, UrlParseError
from site_cache.logger import logger

__all__: Sequence[str] = (
    "EncodedUrl",
    "normalize_url",
    "extract_domain",
    "encode_url",
)

_SAFE_SYMBOLS = frozenset("-_.~")


class EncodedUrl(str):
    """A URL that has already been percent-encoded by :func:`encode_url`."""

    __slots__ = ()


@lru_cache(maxsize=1)
def _extractor() -> tldextract.TLDExtract:
    # bundled public suffix snapshot only (private section included), no HTTP fetch of the list
    return tldextract.TLDExtract(suffix_list_urls=(), include_psl_private_domains=True)


def normalize_url(url: str) -> str:
    """Parses *url* and returns its normalised form.

    Scheme and host are lower-cased and an empty path becomes ``/``.
    Characters such as spaces are left as they are.
    """
    try:
        parsed = urlsplit(url.strip())
        hostname = parsed.hostname
        parsed.port  # raises ValueError for a non-numeric port
    except ValueError as exc:
        raise UrlParseError(f"Invalid URL {url!r}: {exc}") from exc

    scheme = parsed.scheme.lower()
    if scheme not in ("http", "https") or not hostname:
        raise UrlParseError(f"Invalid URL {url!r}: expected an absolute http(s) URL")

    netloc = parsed.netloc
    userinfo, sep, hostport = netloc.rpartition("@")
    netloc = f"{userinfo}{sep}{hostport.lower()}"

    normalized = urlunsplit((scheme, netloc, parsed.path or "/", parsed.query, parsed.fragment))
    logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def extract_domain(url: str) -> str:
    """Returns the registrable domain of *url*'s host.

    ``www.example.co.uk`` → ``example.co.uk``. Raises
    :class:`~site_cache.errors.DomainError` for IP addresses and hosts
    without a known public suffix.
    """
    try:
        host = urlsplit(url).hostname
    except ValueError as exc:
        raise DomainError(f"Cannot parse host of {url!r}: {exc}") from exc
    if not host:
        raise DomainError(f"URL {url!r} has no host")

    try:
        ipaddress.ip_address(host)
    except ValueError:
        pass
    else:
        raise DomainError(f"Host {host!r} is an IP address, not a registrable domain")

    ext = _extractor()(host)
    if not ext.domain or not ext.suffix:
        raise DomainError(f"Host {host!r} has no registrable domain")
    return f"{ext.domain}.{ext.suffix}"


def encode_url(url: str) -> EncodedUrl:
    """Percent-encodes *url* for use as a file name.

    ASCII letters and digits, ``- _ . ~`` and every non-ASCII character are
    kept; any other ASCII character becomes ``%xx`` (lower-case hex). A
    literal ``%`` is escaped too, so encoding a plain string that was already
    encoded changes it again. Passing an :class:`EncodedUrl` raises
    :class:`TypeError`.
    """
    if isinstance(url, EncodedUrl):
        raise TypeError("URL is already percent-encoded")

    out = []
    for ch in url:
        if not ch.isascii() or ch.isalnum() or ch in _SAFE_SYMBOLS:
            out.append(ch)
        else:
            out.append(f"%{ord(ch):02x}")
    return EncodedUrl("".join(out))
