"""
Export pipeline for article-press.

Runs one article through fetch, extraction, image localization (EPUB only)
and serialization, and writes the artifact to disk.
"""

import os
import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

from .config import get_config
from .exceptions import WriteError
from .extractors.extractor_factory import ExtractorFactory
from .extractors.fetcher import Fetcher
from .extractors.url_validator import URLValidator
from .models import Article, ExportOptions, ExportResult, LocalizationReport
from .processors.epub_builder import EpubBuilder
from .processors.image_localizer import ImageLocalizer
from .processors.markdown_converter import MarkdownConverter
from .utils import build_output_path, ensure_directory, title_or_fallback

logger = logging.getLogger(__name__)

def normalize_format(name: str) -> str:
    """Map user-facing format names ('md', 'EPUB', ...) to 'markdown' or 'epub'."""
    name = (name or 'epub').strip().lower()
    if name in ('md', 'markdown'):
        return 'markdown'
    if name == 'epub':
        return 'epub'
    raise ValueError(f"unsupported output format: {name}")


def options_from_config(config=None, **overrides) -> ExportOptions:
    """
    Build export options from configuration defaults.

    Keyword arguments that are not None take precedence over the config.
    """
    config = config if config is not None else get_config()
    defaults = config.get_default_options()

    data = {
        'output_dir': defaults.get('output_dir', '.'),
        'output_format': normalize_format(defaults.get('format', 'epub')),
        'include_images': defaults.get('include_images', True),
        'fallback_title': defaults.get('fallback_title', 'Untitled Article'),
        'author': config.get('epub.author', 'Unknown Author'),
    }
    data.update({key: value for key, value in overrides.items() if value is not None})
    data['output_format'] = normalize_format(data['output_format'])

    return ExportOptions.from_dict(data)


def atomic_write(path: Path, writer: Callable[[Path], object]) -> Path:
    """
    Produce ``path`` through a temporary sibling file.

    ``writer`` receives the temporary path. The file is renamed into place
    only if ``writer`` returns normally; otherwise it is removed, so no
    partial artifact is left behind.

    Raises:
        WriteError: If the temporary file cannot be written or moved
    """
    partial = path.with_name(path.name + '.part')
    try:
        writer(partial)
        os.replace(partial, path)
    except (OSError, UnicodeError) as e:
        _discard(partial)
        raise WriteError(f"{path}: {e}") from e
    except BaseException:
        _discard(partial)
        raise
    return path


def _discard(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Could not remove partial file %s: %s", path, e)


class ArticleExporter:
    """
    Converts one web article into a Markdown file or an EPUB package.

    Every step after URL validation is linear and fatal on failure, except
    per-image failures during localization, which only skip that image.
    """

    def __init__(self, options: Optional[ExportOptions] = None, config=None,
                 fetcher: Optional[Fetcher] = None,
                 extractor: Optional[ExtractorFactory] = None):
        """
        Initialize the exporter.

        Args:
            options: Export options (built from config defaults if None)
            config: Configuration (global config if None)
            fetcher: Fetcher for the page and its images
            extractor: Extractor chain
        """
        self.config = config if config is not None else get_config()
        self.options = options if options is not None else options_from_config(self.config)
        self.fetcher = fetcher if fetcher is not None else Fetcher()
        self.extractor = extractor if extractor is not None else ExtractorFactory(self.config)
        self.validator = URLValidator()

    def export(self, url: str) -> ExportResult:
        """
        Fetch, extract and write the article at ``url``.

        Args:
            url: Article URL

        Returns:
            ExportResult with the artifact path

        Raises:
            ArticlePressError: On any fatal failure; no artifact is written
        """
        url = self.validator.require_valid_url(url)
        article = self.extract(url)

        title = title_or_fallback(article.title, self.options.fallback_title)
        article = replace(article, title=title)

        try:
            output_dir = ensure_directory(Path(self.options.output_dir).expanduser())
        except OSError as e:
            raise WriteError(f"cannot create output directory {self.options.output_dir}: {e}") from e

        path = build_output_path(title, output_dir, self.options.extension)

        if self.options.output_format == 'markdown':
            self._write_markdown(article, path)
            report = None
        else:
            report = self._write_epub(article, path)

        logger.info("Saved %s", path)
        return ExportResult(path=path, article=article, report=report)

    def extract(self, url: str) -> Article:
        """Fetch the page and extract its article."""
        page = self.fetcher.fetch(url)
        return self.extractor.extract(page.data, url)

    def localize(self, article: Article) -> LocalizationReport:
        """Localize the article's images, rewriting its content in place."""
        localizer = ImageLocalizer(self.fetcher)
        report = localizer.localize(article.content, article.url)
        article.content = report.content

        for skipped in report.skipped:
            logger.info("Image not embedded (%s): %s", skipped.reason, skipped.original_url)
        return report

    def _write_markdown(self, article: Article, path: Path) -> None:
        markdown = MarkdownConverter().article_to_markdown(article)
        atomic_write(path, lambda target: target.write_text(markdown, encoding='utf-8'))

    def _write_epub(self, article: Article, path: Path) -> LocalizationReport:
        if self.options.include_images:
            report = self.localize(article)
        else:
            report = LocalizationReport(content=article.content)

        epub_config = self.config.get_epub_config()
        builder = EpubBuilder(
            author=self.options.author,
            language=epub_config.get('language', 'en'),
        )
        book = builder.build(article, resources=report.resources)
        atomic_write(path, lambda target: builder.write(book, target))
        return report
