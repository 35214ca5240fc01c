# sitemap_counter/crawler/models.py
"""
Data models for the SitemapCounter fetcher.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class FetchedDocument:
    """Normalized text of one fetched sitemap and the size of the raw body in bytes."""

    url: str
    content: str
    size: int
