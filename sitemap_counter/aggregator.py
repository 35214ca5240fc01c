# File: sitemap_counter/aggregator.py
"""sitemap_counter.aggregator: Модель итогового отчёта по количеству URL в sitemap."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(slots=True)
class UrlCountReport:
    """Количество URL для каждого обработанного sitemap.

    Ключ: URL sitemap; повторный URL перезаписывает прежнее значение.
    """

    root_url: str
    is_index: bool = False
    counts: Dict[str, int] = field(default_factory=dict)

    def record(self, sitemap_url: str, count: int) -> None:
        self.counts[sitemap_url] = count

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def lines(self) -> List[str]:
        """Строки отчёта в формате ``<url> - <count> URLs`` в порядке обработки."""
        return [f"{url} - {count} URLs" for url, count in self.counts.items()]


__all__ = ["UrlCountReport"]
