"""
Extractor factory for article-press.

This module manages the content extractors, trying the primary extractor
first and the fallback extractor only when the primary fails.
"""

import logging
from enum import Enum
from typing import List, Optional, Union

from .readability_extractor import ReadabilityExtractor
from .trafilatura_extractor import TrafilaturaExtractor
from ..config import get_config
from ..exceptions import ExtractionError
from ..models import Article

logger = logging.getLogger(__name__)


class ExtractorType(Enum):
    """Available extractor types."""
    READABILITY = "readability"
    TRAFILATURA = "trafilatura"


class ExtractorFactory:
    """
    Factory for managing content extractors with fallback.

    The first extractor that returns an article wins. If every extractor
    fails, the combined reasons are raised as one :class:`ExtractionError`.
    """

    def __init__(self, config=None):
        """Initialize the extractor factory."""
        self.config = config if config is not None else get_config()
        self.extractor_config = self.config.get_extractor_config()

        primary = self.extractor_config.get('primary', 'readability')
        fallback = self.extractor_config.get('fallback', 'trafilatura')

        self.extractors = self._setup_extractors(primary, fallback)

        self._extractor_cache = {}

    def _setup_extractors(self, primary: Optional[str],
                          fallback: Optional[str]) -> List[ExtractorType]:
        """
        Set up the extractor order based on configuration.

        Args:
            primary: Primary extractor name
            fallback: Fallback extractor name, or 'none' to disable

        Returns:
            List of extractor types in order of preference
        """
        extractors = [self._get_extractor_type(primary) or ExtractorType.READABILITY]

        fallback_type = self._get_extractor_type(fallback)
        if fallback_type and fallback_type not in extractors:
            extractors.append(fallback_type)

        return extractors

    @staticmethod
    def _get_extractor_type(extractor_name: Optional[str]) -> Optional[ExtractorType]:
        """
        Convert extractor name to ExtractorType.

        Args:
            extractor_name: Name of the extractor

        Returns:
            ExtractorType or None if not found
        """
        if not extractor_name:
            return None
        try:
            return ExtractorType(str(extractor_name).lower())
        except ValueError:
            return None

    def _get_extractor(self, extractor_type: ExtractorType):
        """Get an extractor instance, using the cache."""
        if extractor_type not in self._extractor_cache:
            if extractor_type == ExtractorType.READABILITY:
                self._extractor_cache[extractor_type] = ReadabilityExtractor()
            elif extractor_type == ExtractorType.TRAFILATURA:
                self._extractor_cache[extractor_type] = TrafilaturaExtractor()

        return self._extractor_cache[extractor_type]

    def extract(self, html: Union[bytes, str], base_url: str) -> Article:
        """
        Extract the article using the first extractor that succeeds.

        Args:
            html: Raw page HTML
            base_url: URL the page was fetched from

        Returns:
            The extracted Article

        Raises:
            ExtractionError: If every configured extractor fails
        """
        failures = []

        for extractor_type in self.extractors:
            extractor = self._get_extractor(extractor_type)
            try:
                return extractor.extract(html, base_url)
            except ExtractionError as e:
                logger.debug("%s extractor failed: %s", extractor_type.value, e)
                failures.append(f"{extractor_type.value}: {e}")

        raise ExtractionError("; ".join(failures) or "no extractor configured")

    def get_available_extractors(self) -> List[str]:
        """
        Get list of configured extractor names, in the order they are tried.

        Returns:
            List of extractor names
        """
        return [extractor.value for extractor in self.extractors]
