"""
Markdown conversion for article-press.

This module turns extracted article HTML into Markdown text using
markdownify, with a small cleanup pass over the result.
"""

import re
import logging

from bs4 import BeautifulSoup
from markdownify import MarkdownConverter as BaseMarkdownConverter

from ..exceptions import ConversionError
from ..models import Article

logger = logging.getLogger(__name__)

# Elements whose text content never belongs in the article body
_DROPPED_ELEMENTS = ('script', 'style', 'noscript', 'template', 'iframe', 'form', 'button')

# Inline emphasis that renders as bare markers when it has no text
_EMPHASIS_ELEMENTS = ('strong', 'b', 'em', 'i')

# Fenced code blocks, kept verbatim by the cleanup pass
_FENCED_BLOCK = re.compile(r'(^```.*?^```[ \t]*$)', re.DOTALL | re.MULTILINE)


class MarkdownConverter(BaseMarkdownConverter):
    """
    Article HTML to Markdown converter.

    Headings become ATX ``#`` headings, list items use ``-`` bullets, and
    anything markdownify has no mapping for degrades to its text.

    markdownify dispatches on ``convert_<tag>`` method names, so public
    helpers here must not use that prefix with a tag name.
    """

    def __init__(self, **options):
        """Initialize the Markdown converter."""
        options.setdefault('heading_style', 'atx')
        options.setdefault('bullets', '-')
        options.setdefault('code_language', '')
        options.setdefault('newline_style', 'backslash')
        super().__init__(**options)

        self.cleanup_patterns = [
            # Runs of blank lines
            (r'\n[ \t]*\n(?:[ \t]*\n)+', '\n\n'),
            # Links with neither text nor target
            (r'\[\s*\]\(\s*\)', ''),
        ]

    def convert_article_content(self, content: str) -> str:
        """
        Convert article HTML content to Markdown.

        Args:
            content: HTML fragment to convert

        Returns:
            Markdown text, without a title header

        Raises:
            ConversionError: If the HTML cannot be converted
        """
        if not content or not content.strip():
            return ""

        try:
            soup = BeautifulSoup(content, 'html.parser')
            for element in soup.find_all(_DROPPED_ELEMENTS):
                element.decompose()
            for element in soup.find_all(_EMPHASIS_ELEMENTS):
                if not element.get_text(strip=True) and not element.find('img'):
                    element.decompose()
            markdown = self.convert(str(soup))
        except Exception as e:
            raise ConversionError(str(e) or e.__class__.__name__) from e

        return self._postprocess_markdown(markdown)

    def article_to_markdown(self, article: Article) -> str:
        """Convert an article's (non-localized) content to Markdown."""
        return self.convert_article_content(article.content)

    def _postprocess_markdown(self, markdown: str) -> str:
        """Apply cleanup patterns outside fenced code and trim the result."""
        parts = _FENCED_BLOCK.split(markdown)
        # split() with one group alternates prose and fenced blocks
        for index in range(0, len(parts), 2):
            parts[index] = self._clean_prose(parts[index])
        return ''.join(parts).strip() + '\n'

    def _clean_prose(self, text: str) -> str:
        for pattern, replacement in self.cleanup_patterns:
            text = re.sub(pattern, replacement, text)
        return '\n'.join(line.rstrip() for line in text.split('\n'))
