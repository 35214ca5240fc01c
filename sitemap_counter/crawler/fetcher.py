# sitemap_counter/crawler/fetcher.py
"""
Fetcher module: plain GET requests for sitemap documents with a fixed timeout.

One :class:`aiohttp.ClientSession` is shared for the whole run, so cookies set
by the server survive between the index and its child sitemaps. There is no
retry: any transport problem is reported as :class:`TransportFailure`.
"""
from __future__ import annotations

import asyncio
from types import TracebackType
from typing import Optional, Type

from aiohttp import ClientError, ClientSession, ClientTimeout, CookieJar

from sitemap_counter.config import CounterConfig
from sitemap_counter.crawler.models import FetchedDocument
from sitemap_counter.errors import EncodingFailure, TransportFailure
from sitemap_counter.logger import logger
from sitemap_counter.utils import normalize_xml_content, snippet


class Fetcher:
    """Retrieves sitemap documents and returns their normalized text."""

    def __init__(self, config: CounterConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> Fetcher:
        if self._session is None:
            self._session = ClientSession(
                headers={"User-Agent": self.config.user_agent},
                timeout=ClientTimeout(total=self.config.timeout),
                cookie_jar=CookieJar(unsafe=True),
            )
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise RuntimeError("Fetcher must be used as 'async with Fetcher(config) as fetcher'")
        return self._session

    async def fetch(self, url: str) -> str:
        """Fetch *url* and return its normalized text content."""
        document = await self.fetch_document(url)
        return document.content

    async def fetch_document(self, url: str) -> FetchedDocument:
        """
        Fetch *url* and wrap the normalized content in :class:`FetchedDocument`.

        Raises TransportFailure on timeout, connection error or non-2xx status,
        EncodingFailure when the body is not valid UTF-8.
        """
        try:
            async with self.session.get(
                url,
                headers={"User-Agent": self.config.user_agent},
                allow_redirects=self.config.follow_redirects,
            ) as resp:
                if not 200 <= resp.status < 300:
                    raise TransportFailure(url, f"HTTP status {resp.status}", status=resp.status)
                body = await resp.read()
        except asyncio.TimeoutError as exc:
            raise TransportFailure(url, f"Request timed out after {self.config.timeout}s") from exc
        except ClientError as exc:
            raise TransportFailure(url, f"Request failed: {exc}") from exc

        try:
            text = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise EncodingFailure(url, "Response body is not valid UTF-8") from exc

        if self.config.debug:
            logger.debug("Fetched content length: %d", len(body))
            logger.debug("Fetched content snippet: %s", snippet(text, self.config.snippet_length))
            logger.debug("Fetched sitemap content. Proceeding to clean XML and parse document...")

        return FetchedDocument(url=url, content=normalize_xml_content(text), size=len(body))
