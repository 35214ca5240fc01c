# File: sitemap_counter/parser/sitemap_parser.py
"""sitemap_counter.parser.sitemap_parser: потоковый разбор sitemap и sitemap-index.

Оба сканера работают поверх одного event-driven парсера lxml (parser target):
дерево не строится, отслеживается только вложенность ``<parent><loc>``.

Пример:
```python
from sitemap_counter.parser.sitemap_parser import count_urls, extract_sitemaps

children = extract_sitemaps(index_xml)   # ["https://example.com/a.xml", ...]
total = count_urls(urlset_xml)           # 42
```
"""

from __future__ import annotations

import enum
from typing import Callable, List, Optional

from lxml import etree

from sitemap_counter.errors import ParseError

__all__ = ["LocScanner", "ScanState", "count_urls", "extract_sitemaps", "scan_locs"]


class ScanState(enum.Enum):
    OUTSIDE = "outside"
    IN_PARENT = "in_parent"
    IN_LOC = "in_loc"


def _local_name(tag: str) -> str:
    """Имя тега без пространства имён: ``{ns}loc`` -> ``loc``."""
    return tag.rsplit("}", 1)[-1]


class LocScanner:
    """Parser target, вызывающий ``on_loc`` для первого текстового узла каждого ``<loc>`` внутри ``parent_tag``.

    libxml2 отдаёт текст кусками (например, отдельно для каждой ссылки на сущность),
    поэтому куски копятся до ближайшей разметки и только тогда образуют текстовый узел.
    """

    def __init__(self, parent_tag: str, on_loc: Callable[[str], None]) -> None:
        self.parent_tag = parent_tag
        self.state = ScanState.OUTSIDE
        self._on_loc = on_loc
        self._text: List[str] = []

    def start(self, tag: str, attrib) -> None:
        self._flush_text()
        name = _local_name(tag)
        if name == self.parent_tag:
            self.state = ScanState.IN_PARENT
        elif name == "loc" and self.state is ScanState.IN_PARENT:
            self.state = ScanState.IN_LOC

    def end(self, tag: str) -> None:
        self._flush_text()
        name = _local_name(tag)
        if name == self.parent_tag:
            self.state = ScanState.OUTSIDE
        elif name == "loc" and self.state is ScanState.IN_LOC:
            # пустой <loc/>: ничего не учитываем
            self.state = ScanState.IN_PARENT

    def data(self, text: str) -> None:
        if self.state is ScanState.IN_LOC:
            self._text.append(text)

    def comment(self, text: str) -> None:
        self._flush_text()

    def pi(self, target: str, data: Optional[str] = None) -> None:
        self._flush_text()

    def close(self) -> None:
        self._flush_text()

    def _flush_text(self) -> None:
        if not self._text:
            return
        value = "".join(self._text).strip()
        self._text.clear()
        # <loc> из одних пробелов не считается ссылкой, даже в count_urls
        if self.state is not ScanState.IN_LOC or not value:
            return
        self._on_loc(value)
        # остальные текстовые узлы этого <loc> игнорируются
        self.state = ScanState.IN_PARENT


def scan_locs(document: str, parent_tag: str, on_loc: Callable[[str], None]) -> None:
    """Прогоняет документ через :class:`LocScanner`.

    Документ проверяется целиком: после normalize_xml_content голый "&" в любом
    элементе (например, в <image:title>) делает его некорректным, а не только в <loc>.

    Raises:
        ParseError: документ пустой или не является корректным XML.
    """
    if not document.strip():
        raise ParseError("Malformed XML: document is empty")

    # текст уже декодирован как UTF-8, объявление encoding= в документе игнорируется
    parser = etree.XMLParser(
        target=LocScanner(parent_tag, on_loc), encoding="utf-8", huge_tree=True
    )
    try:
        parser.feed(document.encode("utf-8"))
        parser.close()
    except etree.XMLSyntaxError as exc:
        raise ParseError(f"Malformed XML: {exc}") from exc


def extract_sitemaps(
    document: str, on_found: Optional[Callable[[int], None]] = None
) -> List[str]:
    """Возвращает URL дочерних sitemap (``<sitemap><loc>``) в порядке следования.

    Пустой список означает, что документ не является sitemap-index.
    ``on_found`` получает текущее число найденных ссылок.
    """
    sitemaps: List[str] = []

    def _collect(url: str) -> None:
        sitemaps.append(url)
        if on_found is not None:
            on_found(len(sitemaps))

    scan_locs(document, "sitemap", _collect)
    return sitemaps


def count_urls(document: str) -> int:
    """Считает ``<loc>`` внутри ``<url>``; текст ссылок не сохраняется."""
    count = 0

    def _increment(_url: str) -> None:
        nonlocal count
        count += 1

    scan_locs(document, "url", _increment)
    return count
