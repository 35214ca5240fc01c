from sitemap_counter.cli import cli

cli()
