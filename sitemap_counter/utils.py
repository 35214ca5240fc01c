# File: sitemap_counter/utils.py
"""sitemap_counter.utils: Утилиты для подготовки содержимого sitemap перед разбором."""

from __future__ import annotations

from typing import Sequence, Tuple

__all__: Sequence[str] = ("XML_ENTITY_REPLACEMENTS", "normalize_xml_content", "snippet")

# Порядок важен: &amp; обрабатывается последним, поэтому "&amp;lt;" -> "&lt;".
XML_ENTITY_REPLACEMENTS: Tuple[Tuple[str, str], ...] = (
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&amp;", "&"),
)


def normalize_xml_content(raw: str) -> str:
    """Заменяет базовые XML-сущности (по одному проходу на сущность) и обрезает пробелы."""
    content = raw
    for entity, char in XML_ENTITY_REPLACEMENTS:
        content = content.replace(entity, char)
    return content.strip()


def snippet(text: str, length: int) -> str:
    """Первые ``length`` символов текста для отладочного вывода."""
    return text[: max(length, 0)]
