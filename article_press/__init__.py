"""
article-press - save web articles as Markdown files or EPUB e-books.

Fetches a single article, extracts its readable content, and writes it out
as Markdown text or a single-chapter EPUB with the article's images embedded.
"""

__version__ = "1.0.0"

from .models import Article, ExportOptions, ExportResult

__all__ = ["Article", "ExportOptions", "ExportResult", "__version__"]
