"""
Error taxonomy for article-press.

Every fatal failure of the pipeline is one of these. The CLI reports each
once, as ``<prefix>: <message>``, and exits with status 1.
"""

from typing import Optional


class ArticlePressError(Exception):
    """Base class for fatal pipeline errors."""

    prefix = "error"

    def describe(self) -> str:
        """One-line message with the contextual prefix."""
        return f"{self.prefix}: {self}"


class URLValidationError(ArticlePressError):
    """The source URL is not a usable http(s) URL."""

    prefix = "invalid URL provided"


class FetchError(ArticlePressError):
    """Network failure or non-200 response."""

    prefix = "failed to fetch URL"

    def __init__(self, message: str, url: Optional[str] = None,
                 status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ExtractionError(ArticlePressError):
    """No article-like content could be identified."""

    prefix = "failed to parse article"


class ConversionError(ArticlePressError):
    """HTML to Markdown conversion failed."""

    prefix = "failed to convert article to Markdown"


class PackagingError(ArticlePressError):
    """The EPUB container could not be assembled or written."""

    prefix = "failed to build EPUB"


class WriteError(ArticlePressError):
    """The output artifact could not be written to disk."""

    prefix = "failed to write output"
