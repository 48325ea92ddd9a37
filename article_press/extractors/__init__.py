"""
Fetching and content extraction modules for article-press.

This package contains the HTTP fetcher and the extractors that isolate
the main article content from a page.
"""

from .fetcher import Fetcher
from .extractor_factory import ExtractorFactory
from .readability_extractor import ReadabilityExtractor
from .trafilatura_extractor import TrafilaturaExtractor
from .url_validator import URLValidator

__all__ = [
    "Fetcher",
    "ExtractorFactory",
    "ReadabilityExtractor",
    "TrafilaturaExtractor",
    "URLValidator",
]
