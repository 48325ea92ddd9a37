"""
Readability-based content extractor for article-press.

This module isolates the main article content and title from a full page
using the readability-lxml library.
"""

import logging
from typing import Union

from bs4 import BeautifulSoup
from readability import Document
from readability.readability import Unparseable

from ..exceptions import ExtractionError
from ..models import Article

logger = logging.getLogger(__name__)

# readability-lxml's title when the page has none
_NO_TITLE = "[no-title]"


def body_html(document_html: str) -> str:
    """
    Return the inner HTML of ``<body>``, or the whole markup if there is none.

    Args:
        document_html: HTML document or fragment

    Returns:
        HTML fragment
    """
    soup = BeautifulSoup(document_html, 'html.parser')
    body = soup.body
    if body is not None:
        return body.decode_contents()
    return str(soup)


class ReadabilityExtractor:
    """
    Content extractor using readability-lxml.

    Readability scores the page's blocks by content density and drops the
    surrounding navigation, ads and sidebars. Relative links in the result
    are made absolute against the page URL.
    """

    name = "readability"

    def extract(self, html: Union[bytes, str], base_url: str) -> Article:
        """
        Extract the article from a page.

        Args:
            html: Raw page HTML
            base_url: URL the page was fetched from

        Returns:
            Article whose title may be empty

        Raises:
            ExtractionError: If no article-like content block is found
        """
        if not html or not html.strip():
            raise ExtractionError("page is empty")

        try:
            doc = Document(html, url=base_url)
            summary = doc.summary()
            title = doc.title()
        except Unparseable as e:
            raise ExtractionError(f"no article content found: {e}") from e
        except ValueError as e:
            # lxml rejects some inputs outright (e.g. XML declarations in str input)
            raise ExtractionError(f"could not parse page HTML: {e}") from e

        content = body_html(summary).strip()
        if not content or not BeautifulSoup(content, 'html.parser').get_text(strip=True):
            raise ExtractionError("no article content found")

        if title == _NO_TITLE:
            title = ""

        logger.debug("readability extracted %d characters, title %r", len(content), title)

        return Article(
            title=(title or "").strip(),
            content=content,
            url=base_url,
            extractor_used=self.name,
        )
