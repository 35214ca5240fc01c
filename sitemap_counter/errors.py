# sitemap_counter/errors.py
"""
Exception hierarchy for SitemapCounter.

Every failure is fatal for the run: the CLI reports it and exits non-zero.
"""
from __future__ import annotations

from typing import Optional

__all__ = (
    "SitemapCounterError",
    "FetchError",
    "TransportFailure",
    "EncodingFailure",
    "ParseError",
)


class SitemapCounterError(Exception):
    """Base class for all errors raised while counting sitemap URLs."""


class FetchError(SitemapCounterError):
    """A document could not be retrieved."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url


class TransportFailure(FetchError):
    """Request did not complete: connection error, timeout or non-2xx status."""

    def __init__(self, url: str, message: str, status: Optional[int] = None) -> None:
        super().__init__(url, message)
        self.status = status


class EncodingFailure(FetchError):
    """Response body is not valid UTF-8."""


class ParseError(SitemapCounterError):
    """The XML tag stream is malformed."""
