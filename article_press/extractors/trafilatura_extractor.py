"""
Trafilatura-based content extractor for article-press.

Secondary extractor, tried when readability cannot find the article.
"""

import logging
from typing import Optional, Union

import trafilatura

from ..exceptions import ExtractionError
from ..models import Article
from .readability_extractor import body_html

logger = logging.getLogger(__name__)


class TrafilaturaExtractor:
    """
    Content extractor using the Trafilatura library.

    Trafilatura keeps text structure and, with ``include_images``, the
    article's ``<img>`` tags, so its HTML output can go through the same
    localization and serialization steps as readability's.
    """

    name = "trafilatura"

    def extract(self, html: Union[bytes, str], base_url: str) -> Article:
        """
        Extract the article from a page.

        Args:
            html: Raw page HTML
            base_url: URL the page was fetched from

        Returns:
            Article whose title may be empty

        Raises:
            ExtractionError: If trafilatura finds no main content
        """
        if not html or not html.strip():
            raise ExtractionError("page is empty")

        extracted_html = trafilatura.extract(
            html,
            url=base_url,
            include_comments=False,
            include_tables=True,
            include_images=True,
            include_formatting=True,
            include_links=True,
            output_format='html',
        )

        if not extracted_html or not extracted_html.strip():
            raise ExtractionError("no article content found")

        title, author = self._extract_metadata(html, base_url)
        content = body_html(extracted_html).strip()

        logger.debug("trafilatura extracted %d characters, title %r", len(content), title)

        return Article(
            title=title,
            content=content,
            url=base_url,
            author=author,
            extractor_used=self.name,
        )

    def _extract_metadata(self, html: Union[bytes, str], base_url: str):
        """Return (title, author) from the page metadata, empty title if absent."""
        metadata = trafilatura.extract_metadata(html, default_url=base_url)
        if metadata is None:
            return "", None

        title: Optional[str] = getattr(metadata, 'title', None)
        author: Optional[str] = getattr(metadata, 'author', None)
        return (title or "").strip(), author
