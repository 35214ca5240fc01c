#!/usr/bin/env python3
# === FILE: sitemap_counter/cli.py ===
"""
Точка входа для запуска SitemapCounter через командную строку.

Использование:
  sitemap-counter [OPTIONS] SITEMAP_URL [--debug]

Аргументы:
  SITEMAP_URL         URL sitemap или sitemap-index
  MODE                Необязательный второй аргумент; "debug" включает отладку

Опции:
  --debug, -d         Подробный диагностический вывод
  --config PATH       Путь к YAML/JSON-конфигу (таймаут, User-Agent, ...)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только stderr, если не указан)
  --version, -v       Показать версию SitemapCounter

Пример:
  sitemap-counter https://example.com/sitemap_index.xml --debug
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

import click
from pydantic import ValidationError

from sitemap_counter import __version__
from sitemap_counter.aggregator import UrlCountReport
from sitemap_counter.config import load_config
from sitemap_counter.engine import CountObserver, run_count
from sitemap_counter.errors import SitemapCounterError
from sitemap_counter.logger import configure

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])

_DEBUG_MODES = ("debug", "--debug", "-d")


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


class ProgressBarObserver(CountObserver):
    """Показывает click progress bar: один шаг на каждый обработанный sitemap."""

    def __init__(self) -> None:
        self._bar = None
        self._status = ""

    def sitemap_found(self, found: int) -> None:
        self._status = f"Counting URLs: {found}"
        click.echo(f"\r{self._status}", nl=False, err=True)

    def sitemaps_discovered(self, sitemap_urls: Sequence[str]) -> None:
        if self._status:
            click.echo("\r" + " " * len(self._status) + "\r", nl=False, err=True)
            self._status = ""
        self._bar = click.progressbar(
            length=len(sitemap_urls),
            label="sitemaps",
            fill_char="#",
            empty_char="-",
            show_pos=True,
            show_eta=True,
            file=click.get_text_stream("stderr"),
        )
        self._bar.render_progress()

    def sitemap_counted(self, sitemap_url: str, count: int) -> None:
        if self._bar is not None:
            self._bar.update(1)

    def close(self) -> None:
        if self._bar is not None:
            self._bar.render_finish()
            self._bar = None


def print_report(report: UrlCountReport) -> None:
    click.echo("\n📊 Results:")
    for line in report.lines():
        click.echo(f"  {line}")
    click.echo(f"\n📈 Total URLs found: {report.total}")


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapCounter, version %(version)s')
@click.argument('sitemap_url')
@click.argument('mode', required=False)
@click.option('--debug', '-d', 'debug', is_flag=True, help='Подробный диагностический вывод')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только stderr, если не указан)'
)
def cli(
    sitemap_url: str,
    mode: Optional[str],
    debug: bool,
    config_path: Optional[Path],
    log_level: str,
    log_file: Optional[Path],
):
    """Считает URL в SITEMAP_URL и во всех sitemap, на которые он ссылается."""
    try:
        cfg = load_config(config_path)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    debug = debug or cfg.debug or (mode is not None and mode.lower() in _DEBUG_MODES)
    cfg = cfg.with_debug(debug)
    configure(
        level='DEBUG' if debug else log_level,
        log_file=str(log_file) if log_file else None,
    )

    click.echo(f'🌐 Fetching main sitemap from {sitemap_url}')
    observer = ProgressBarObserver()
    try:
        report = run_count(sitemap_url, cfg, observer)
    except SitemapCounterError as e:
        print_error(f'Ошибка при подсчёте URL: {e}')
    finally:
        observer.close()

    print_report(report)


# expose these names at module level for test monkey-patching
cli.run_count = run_count

if __name__ == "__main__":
    cli()
