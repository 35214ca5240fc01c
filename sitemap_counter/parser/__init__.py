"""Парсеры документов sitemap."""
