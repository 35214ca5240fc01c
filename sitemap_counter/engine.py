# File: sitemap_counter/engine.py
"""sitemap_counter.engine: оркестрация подсчёта URL по индексу и дочерним sitemap."""

from __future__ import annotations

import asyncio
from typing import Optional, Sequence

from sitemap_counter.aggregator import UrlCountReport
from sitemap_counter.config import CounterConfig
from sitemap_counter.crawler.fetcher import Fetcher
from sitemap_counter.logger import logger
from sitemap_counter.parser.sitemap_parser import count_urls, extract_sitemaps

__all__ = ["CountObserver", "run_count", "start_count"]


class CountObserver:
    """Наблюдатель за ходом подсчёта. По умолчанию ничего не делает."""

    def sitemap_found(self, found: int) -> None:
        """Вызывается для каждой ссылки на дочерний sitemap при разборе индекса."""

    def sitemaps_discovered(self, sitemap_urls: Sequence[str]) -> None:
        """Вызывается один раз, когда известен список листовых sitemap."""

    def sitemap_counted(self, sitemap_url: str, count: int) -> None:
        """Вызывается после обработки каждого листового sitemap."""


async def start_count(
    root_url: str,
    config: CounterConfig,
    observer: Optional[CountObserver] = None,
    fetcher: Optional[Fetcher] = None,
) -> UrlCountReport:
    """
    Загружает корневой sitemap, находит дочерние и считает URL в каждом.

    Любая ошибка загрузки или разбора прерывает весь запуск.

    Parameters
    ----------
    root_url : str
        URL sitemap или sitemap-index.
    config : CounterConfig
        Настройки HTTP-клиента и отладки.
    observer : CountObserver, optional
        Получает уведомления о прогрессе (например, для progress bar).
    fetcher : Fetcher, optional
        Уже открытый Fetcher; иначе создаётся собственный на время запуска.

    Returns
    -------
    UrlCountReport
        Количество URL по каждому sitemap.
    """
    observer = observer or CountObserver()
    if fetcher is None:
        async with Fetcher(config) as own_fetcher:
            return await _count(root_url, config, observer, own_fetcher)
    return await _count(root_url, config, observer, fetcher)


async def _count(
    root_url: str, config: CounterConfig, observer: CountObserver, fetcher: Fetcher
) -> UrlCountReport:
    root = await fetcher.fetch_document(root_url)

    if config.debug:
        logger.debug("Starting sitemap extraction from main sitemap content...")
    sitemap_urls = extract_sitemaps(root.content, on_found=observer.sitemap_found)
    if config.debug:
        logger.debug("Completed sitemap extraction. Found %d sitemaps.", len(sitemap_urls))

    report = UrlCountReport(root_url=root_url, is_index=bool(sitemap_urls))
    if not sitemap_urls:
        # Не индекс: корневой документ сам является листовым sitemap
        sitemap_urls = [root_url]
    observer.sitemaps_discovered(sitemap_urls)

    for sitemap_url in sitemap_urls:
        if config.debug:
            logger.debug("Processing sitemap: %s", sitemap_url)
        document = await fetcher.fetch_document(sitemap_url) if report.is_index else root
        count = count_urls(document.content)
        if config.debug:
            logger.debug("Finished URL count. Found %d URLs.", count)
            logger.debug(
                "Sitemap %s has %d URLs (content size: %d bytes)", sitemap_url, count, document.size
            )
        report.record(sitemap_url, count)
        observer.sitemap_counted(sitemap_url, count)

    return report


def run_count(
    root_url: str, config: CounterConfig, observer: Optional[CountObserver] = None
) -> UrlCountReport:
    """Синхронная обёртка над :func:`start_count` для CLI."""
    logger.info("Counting URLs in %s", root_url)
    return asyncio.run(start_count(root_url, config, observer))
