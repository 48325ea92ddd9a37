"""
Data models for article-press.

This module contains the core data structures that flow through the
fetch, extraction, localization and serialization pipeline.
"""

from pathlib import Path
from typing import List, Optional, Union
from dataclasses import dataclass, field


@dataclass
class Article:
    """
    Represents an extracted article.

    Produced once by an extractor. Only ``content`` is rewritten afterwards,
    and only the ``src`` attributes of its images.
    """

    title: str
    content: str
    url: str
    author: Optional[str] = None
    extractor_used: Optional[str] = None

    @property
    def word_count(self) -> int:
        """Rough word count of the content, markup included."""
        return len(self.content.split()) if self.content else 0


@dataclass
class FetchedResource:
    """Body and headers of a successful (HTTP 200) GET."""

    url: str
    data: bytes
    content_type: str = ""
    status_code: int = 200


@dataclass
class ResourceRef:
    """
    An image that was fetched and stored for embedding in the package.

    ``local_name`` is unique within one localization pass.
    """

    original_url: str
    resolved_url: str
    local_name: str
    data: bytes
    content_type: str = ""
    path: Optional[Path] = None

    @property
    def media_type(self) -> str:
        """Media type declared for the packaged image."""
        declared = self.content_type.split(';')[0].strip().lower()
        if declared.startswith('image/'):
            return declared

        suffix = Path(self.local_name).suffix.lower()
        return {
            '.jpg': 'image/jpeg',
            '.png': 'image/png',
            '.gif': 'image/gif',
            '.webp': 'image/webp',
            '.svg': 'image/svg+xml',
        }.get(suffix, 'application/octet-stream')


@dataclass
class Localized:
    """An image whose reference now points at the packaged copy."""

    ref: ResourceRef
    package_path: str

    @property
    def original_url(self) -> str:
        return self.ref.original_url


@dataclass
class Skipped:
    """An image left untouched, with the reason it was not localized."""

    original_url: str
    reason: str


LocalizationResult = Union[Localized, Skipped]


@dataclass
class LocalizationReport:
    """
    Outcome of one localization pass.

    ``results`` holds one entry per ``<img>`` tag, in document order.
    """

    content: str
    results: List[LocalizationResult] = field(default_factory=list)

    @property
    def localized(self) -> List[Localized]:
        return [r for r in self.results if isinstance(r, Localized)]

    @property
    def skipped(self) -> List[Skipped]:
        return [r for r in self.results if isinstance(r, Skipped)]

    @property
    def resources(self) -> List[ResourceRef]:
        """Resources to embed, in the order they were named."""
        return [r.ref for r in self.localized]


@dataclass
class ExportOptions:
    """
    Options for one export run.

    Contains the settings that control where and how an article is written.
    """

    output_dir: str = "."
    output_format: str = "epub"
    include_images: bool = True
    fallback_title: str = "Untitled Article"
    author: str = "Unknown Author"

    @property
    def extension(self) -> str:
        """File extension for the chosen output format."""
        return ".md" if self.output_format == "markdown" else ".epub"

    def to_dict(self) -> dict:
        """Convert options to dictionary."""
        return {
            'output_dir': self.output_dir,
            'output_format': self.output_format,
            'include_images': self.include_images,
            'fallback_title': self.fallback_title,
            'author': self.author,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'ExportOptions':
        """Create ExportOptions from dictionary."""
        return cls(
            output_dir=data.get('output_dir', "."),
            output_format=data.get('output_format', "epub"),
            include_images=data.get('include_images', True),
            fallback_title=data.get('fallback_title', "Untitled Article"),
            author=data.get('author', "Unknown Author"),
        )


@dataclass
class ExportResult:
    """Result of a successful export."""

    path: Path
    article: Article
    report: Optional[LocalizationReport] = None

    @property
    def image_count(self) -> int:
        """Number of images embedded in the artifact."""
        return len(self.report.localized) if self.report else 0
