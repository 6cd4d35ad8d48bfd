# File: tests/conftest.py
from __future__ import annotations

import asyncio
import socket
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import ClientSession, TCPConnector, web
from aiohttp.abc import AbstractResolver

from site_cache.config import CacheConfig
from site_cache.logger import logger

#: ETag / Last-Modified sent by the "/page" handler
PAGE_ETAG = '"abc123"'
PAGE_LAST_MODIFIED = "Wed, 21 Oct 2015 07:28:00 GMT"
PAGE_BODY = "<html><body>Привет, мир</body></html>"


class StaticResolver(AbstractResolver):
    """Resolves every host name to 127.0.0.1:*port* (the local test server)."""

    def __init__(self, port: int) -> None:
        self._port = port

    async def resolve(self, host, port=0, family=socket.AF_INET):
        return [
            {
                "hostname": host,
                "host": "127.0.0.1",
                "port": self._port,
                "family": socket.AF_INET,
                "proto": 0,
                "flags": socket.AI_NUMERICHOST,
            }
        ]

    async def close(self) -> None:
        pass


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


@pytest.fixture()
def cache_config(tmp_path: Path) -> CacheConfig:
    """Config whose cache lives under a temporary directory."""
    return CacheConfig(data_dir=tmp_path / "data")


@pytest.fixture()
def propagate_logs(monkeypatch):
    """Let caplog see records of the project logger (it does not propagate by default)."""
    monkeypatch.setattr(logger, "propagate", True)


@pytest_asyncio.fixture
async def page_server(unused_tcp_port: int) -> AsyncIterator[web.Application]:
    """Local HTTP server; ``app["hits"]`` lists the request paths it served."""
    app = web.Application()
    app["hits"] = []

    @web.middleware
    async def count_hits(request, handler):
        app["hits"].append(request.path)
        return await handler(request)

    app.middlewares.append(count_hits)

    async def handle_page(_):
        return web.Response(
            text=PAGE_BODY,
            content_type="text/html",
            headers={"ETag": PAGE_ETAG, "Last-Modified": PAGE_LAST_MODIFIED},
        )

    async def handle_plain(_):
        return web.Response(text="plain body", content_type="text/plain")

    async def handle_missing(_):
        return web.Response(status=404, text="not here", content_type="text/html")

    async def handle_denied(_):
        return web.Response(status=999, reason="Request denied", text="", content_type="text/html")

    async def handle_binary(_):
        return web.Response(body=b"\xff\xfe\xfa\x00", content_type="text/html", charset="utf-8")

    app.router.add_get("/page", handle_page)
    app.router.add_get("/plain", handle_plain)
    app.router.add_get("/missing", handle_missing)
    app.router.add_get("/binary", handle_binary)
    app.router.add_get("/denied", handle_denied)

    app["port"] = unused_tcp_port
    async for _ in _serve_app(app, unused_tcp_port):
        yield app


@pytest_asyncio.fixture
async def session(page_server: web.Application) -> AsyncIterator[ClientSession]:
    """Client session that sends every host name to ``page_server``."""
    connector = TCPConnector(resolver=StaticResolver(page_server["port"]))
    async with ClientSession(connector=connector) as s:
        yield s


async def _pipe(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
    try:
        while data := await reader.read(65536):
            writer.write(data)
            await writer.drain()
    except ConnectionError:
        pass
    finally:
        writer.close()


@pytest_asyncio.fixture
async def socks_proxy(page_server: web.Application) -> AsyncIterator[dict]:
    """Minimal SOCKS5 relay (no auth, CONNECT only) in front of ``page_server``.

    Every CONNECT goes to the local page server; ``proxy["requested"]``
    records the (host, port) targets clients asked for.
    """
    requested: list[tuple[str, int]] = []

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        _, nmethods = await reader.readexactly(2)
        await reader.readexactly(nmethods)
        writer.write(b"\x05\x00")
        await writer.drain()

        _, _, _, atyp = await reader.readexactly(4)
        if atyp == 1:
            host = socket.inet_ntoa(await reader.readexactly(4))
        elif atyp == 3:
            size = (await reader.readexactly(1))[0]
            host = (await reader.readexactly(size)).decode("idna")
        else:
            host = socket.inet_ntop(socket.AF_INET6, await reader.readexactly(16))
        port = int.from_bytes(await reader.readexactly(2), "big")
        requested.append((host, port))

        up_reader, up_writer = await asyncio.open_connection("127.0.0.1", page_server["port"])
        writer.write(b"\x05\x00\x00\x01" + socket.inet_aton("127.0.0.1") + page_server["port"].to_bytes(2, "big"))
        await writer.drain()
        await asyncio.gather(_pipe(reader, up_writer), _pipe(up_reader, writer))

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    try:
        yield {"url": f"socks5h://127.0.0.1:{port}", "requested": requested}
    finally:
        server.close()
