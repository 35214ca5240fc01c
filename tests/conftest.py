# File: tests/conftest.py
from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import Dict

import pytest
import pytest_asyncio
from aiohttp import web

from sitemap_counter.config import CounterConfig

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def urlset_xml(urls: Iterable[str]) -> str:
    """Build a leaf sitemap listing *urls*."""
    body = "".join(f"<url><loc>{u}</loc></url>" for u in urls)
    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="{SITEMAP_NS}">{body}</urlset>'


def sitemapindex_xml(locs: Iterable[str]) -> str:
    """Build a sitemap index referencing *locs*."""
    body = "".join(f"<sitemap><loc>{loc}</loc></sitemap>" for loc in locs)
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>'
        f'<sitemapindex xmlns="{SITEMAP_NS}">{body}</sitemapindex>'
    )


def xml_handler(text: str) -> Handler:
    async def handle(_):
        return web.Response(text=text, content_type="application/xml")

    return handle


@pytest.fixture()
def config() -> CounterConfig:
    """
    Return a CounterConfig with a short timeout for tests.
    """
    return CounterConfig(timeout=2.0, user_agent="TestAgent/1.0")


@pytest_asyncio.fixture
async def serve(unused_tcp_port: int) -> AsyncIterator[Callable[[Dict[str, Handler]], Awaitable[str]]]:
    """Start an aiohttp app with the given GET routes, yield its base URL factory, clean up."""
    runners: list[web.AppRunner] = []

    async def _serve(routes: Dict[str, Handler]) -> str:
        app = web.Application()
        for path, handler in routes.items():
            app.router.add_get(path, handler)
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", unused_tcp_port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{unused_tcp_port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()
