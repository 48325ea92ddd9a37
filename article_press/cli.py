#!/usr/bin/env python3
"""
CLI interface for article-press - save a web article as Markdown or EPUB.

This module provides the command-line interface using the Click framework.
"""

import sys
import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .config import Config, get_config, set_config
from .exceptions import ArticlePressError
from .exporter import ArticleExporter, options_from_config

err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    if not verbose:
        # trafilatura logs extraction misses at WARNING
        logging.getLogger("trafilatura").setLevel(logging.ERROR)


def fail(message: str) -> None:
    """Report a fatal error on stderr and exit with status 1."""
    err_console.print(message, markup=False, highlight=False, soft_wrap=True)
    sys.exit(1)


@click.command(help="Save a web article as a Markdown file or an EPUB e-book")
@click.version_option(version=__version__, prog_name="article-press")
@click.option("-url", "--url", "url",
              help="Full URL of the article to download (required)")
@click.option("-out", "--out", "output_dir",
              type=click.Path(file_okay=False),
              help="Directory where the output file will be saved  [default: .]")
@click.option("-format", "--format", "output_format",
              type=click.Choice(['epub', 'markdown', 'md'], case_sensitive=False),
              help="Output format  [default: epub]")
@click.option("--no-images", is_flag=True,
              help="Do not embed images in the EPUB")
@click.option("-c", "--config", "config_file",
              type=click.Path(exists=True, dir_okay=False, readable=True),
              help="Path to custom configuration file")
@click.option("-v", "--verbose", is_flag=True,
              help="Enable verbose output")
@click.pass_context
def main(ctx, url: Optional[str], output_dir: Optional[str],
         output_format: Optional[str], no_images: bool,
         config_file: Optional[str], verbose: bool):
    """Main CLI entry point."""
    configure_logging(verbose)

    if not url or not url.strip():
        err_console.print("error: -url flag is required", markup=False, highlight=False)
        click.echo(ctx.get_usage(), err=True)
        ctx.exit(1)

    if config_file:
        set_config(Config(config_file))
    config = get_config()

    try:
        options = options_from_config(
            config,
            output_dir=output_dir,
            output_format=output_format,
            include_images=False if no_images else None,
        )
    except ValueError as e:
        fail(f"error: {e}")

    if verbose:
        err_console.print(f"[blue]Converting:[/blue] {escape(url)}")
        err_console.print(f"[blue]Options:[/blue] {escape(str(options.to_dict()))}")

    try:
        result = ArticleExporter(options=options, config=config).export(url)
    except ArticlePressError as e:
        fail(e.describe())

    if verbose:
        err_console.print(f"[blue]Title:[/blue] {escape(result.article.title)}")
        err_console.print(f"[blue]Extractor:[/blue] {result.article.extractor_used}")
        err_console.print(f"[blue]Word count:[/blue] {result.article.word_count:,}")
    if verbose and result.report is not None:
        err_console.print(
            f"[blue]Images:[/blue] {len(result.report.localized)} embedded, "
            f"{len(result.report.skipped)} skipped"
        )

    click.echo(str(result.path))


if __name__ == "__main__":
    main()
