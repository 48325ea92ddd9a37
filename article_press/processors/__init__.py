"""
Document processing modules for article-press.

This package contains the image localizer and the Markdown and EPUB
serializers.
"""

from .epub_builder import EpubBuilder
from .image_localizer import ImageLocalizer
from .markdown_converter import MarkdownConverter

__all__ = ["EpubBuilder", "ImageLocalizer", "MarkdownConverter"]
