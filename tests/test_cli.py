"""Тесты для CLI (`sitemap_counter.cli`) с использованием click.testing.CliRunner.
Проверяют вывод отчёта, режим отладки, `--version`, а также обработку ошибок.
"""
import importlib
import json

import pytest
from click.testing import CliRunner
from sitemap_counter.aggregator import UrlCountReport
from sitemap_counter.cli import cli
from sitemap_counter.errors import ParseError, TransportFailure

# sitemap_counter/__init__.py rebinds the package attribute `cli` to the click
# Command, so fetch the real module object for monkeypatching.
cli_module = importlib.import_module("sitemap_counter.cli")


@pytest.fixture(autouse=True)
def patch_run_count(monkeypatch):
    """Патчим run_count, чтобы CLI не ходил в сеть."""
    calls = []

    def fake_run_count(root_url, cfg, observer=None):
        calls.append((root_url, cfg))
        children = ["http://example.com/a.xml", "http://example.com/b.xml"]
        report = UrlCountReport(root_url=root_url, is_index=True)
        if observer is not None:
            for found in range(1, len(children) + 1):
                observer.sitemap_found(found)
            observer.sitemaps_discovered(children)
        for url, count in zip(children, (5, 7)):
            report.record(url, count)
            if observer is not None:
                observer.sitemap_counted(url, count)
        return report

    monkeypatch.setattr(cli_module, "run_count", fake_run_count)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "SitemapCounter" in result.output


def test_prints_per_sitemap_lines_and_total(patch_run_count):
    runner = CliRunner()
    result = runner.invoke(cli, ["http://example.com/index.xml"])
    assert result.exit_code == 0
    assert "Fetching main sitemap from http://example.com/index.xml" in result.output
    assert "  http://example.com/a.xml - 5 URLs" in result.output
    assert "  http://example.com/b.xml - 7 URLs" in result.output
    assert "Total URLs found: 12" in result.output
    root_url, cfg = patch_run_count[0]
    assert root_url == "http://example.com/index.xml"
    assert cfg.debug is False


@pytest.mark.parametrize("extra", [["--debug"], ["debug"], ["-d"]])
def test_debug_flag_enables_debug(patch_run_count, extra):
    runner = CliRunner()
    result = runner.invoke(cli, ["http://example.com/index.xml", *extra])
    assert result.exit_code == 0
    _, cfg = patch_run_count[0]
    assert cfg.debug is True


def test_unrelated_second_argument_is_ignored(patch_run_count):
    runner = CliRunner()
    result = runner.invoke(cli, ["http://example.com/index.xml", "verbose"])
    assert result.exit_code == 0
    _, cfg = patch_run_count[0]
    assert cfg.debug is False


@pytest.mark.parametrize("args", [[], ["a", "b", "c"]])
def test_wrong_argument_count_is_usage_error(args):
    runner = CliRunner()
    result = runner.invoke(cli, args)
    assert result.exit_code != 0
    assert "Usage:" in result.output


def test_config_file_is_applied(tmp_path, patch_run_count):
    cfg_file = tmp_path / "config.json"
    cfg_file.write_text(json.dumps({"timeout": 3, "user_agent": "Agent/1.0"}), encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "http://example.com/index.xml"])
    assert result.exit_code == 0
    _, cfg = patch_run_count[0]
    assert cfg.timeout == 3
    assert cfg.user_agent == "Agent/1.0"


def test_invalid_config_file(tmp_path):
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("timeout: -5", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["--config", str(cfg_file), "http://example.com/index.xml"])
    assert result.exit_code == 1
    assert "Ошибка загрузки конфигурации" in result.output


@pytest.mark.parametrize(
    "error",
    [
        TransportFailure("http://example.com/index.xml", "HTTP status 500", status=500),
        ParseError("Malformed XML: unclosed tag"),
    ],
)
def test_counting_failure_exits_non_zero(monkeypatch, error):
    def failing(root_url, cfg, observer=None):
        raise error

    monkeypatch.setattr(cli_module, "run_count", failing)
    runner = CliRunner()
    result = runner.invoke(cli, ["http://example.com/index.xml"])
    assert result.exit_code == 1
    assert "Ошибка при подсчёте URL" in result.output
    assert "Total URLs found" not in result.output


def test_shows_running_count_while_reading_index():
    runner = CliRunner()
    result = runner.invoke(cli, ["http://example.com/index.xml"])
    assert result.exit_code == 0
    assert "\rCounting URLs: 1" in result.output
    assert "\rCounting URLs: 2" in result.output
