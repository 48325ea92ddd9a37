"""
Image localization for article-press.

Downloads the images an article references and rewrites each ``<img src>``
to point at the copy that will be embedded in the EPUB package.
"""

import logging
import posixpath
import tempfile
from pathlib import Path
from typing import Optional, Tuple, Union
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from ..exceptions import FetchError
from ..extractors.fetcher import Fetcher
from ..models import FetchedResource, Localized, LocalizationReport, ResourceRef, Skipped

logger = logging.getLogger(__name__)

# Ordered (substring, extension) pairs; first match on the content type wins.
CONTENT_TYPE_EXTENSIONS: Tuple[Tuple[str, str], ...] = (
    ('jpeg', '.jpg'),
    ('jpg', '.jpg'),
    ('png', '.png'),
    ('gif', '.gif'),
    ('webp', '.webp'),
    ('svg', '.svg'),
)

DEFAULT_EXTENSION = '.img'
IMAGE_DIR = 'images'


def extension_for(content_type: Optional[str], url: str) -> str:
    """
    Pick a file extension for a downloaded image.

    The declared content type is checked against
    :data:`CONTENT_TYPE_EXTENSIONS` case-insensitively. Failing that, the
    suffix of the URL path is used as-is; failing that, ``.img``.

    Args:
        content_type: Value of the response's Content-Type header
        url: Absolute URL the image was fetched from

    Returns:
        Extension including the leading dot
    """
    declared = (content_type or '').lower()
    for needle, extension in CONTENT_TYPE_EXTENSIONS:
        if needle in declared:
            return extension

    suffix = posixpath.splitext(urlparse(url).path)[1]
    if suffix and suffix != '.':
        return suffix

    return DEFAULT_EXTENSION


def image_name(index: int, extension: str) -> str:
    """``image_001.jpg`` style name for the ``index``-th localized image."""
    return f"image_{index:03d}{extension}"


class ImageLocalizer:
    """
    Best-effort image localizer.

    Images are processed one at a time in document order. An image that
    cannot be resolved, fetched or stored is left untouched and recorded
    as :class:`Skipped`; it never aborts the pass. Names are assigned only
    to images that succeed, so they stay gapless.
    """

    def __init__(self, fetcher: Optional[Fetcher] = None,
                 temp_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the image localizer.

        Args:
            fetcher: Fetcher used for image downloads (a new one if None)
            temp_dir: Where image bytes are stored until packaging. A fresh
                directory under the system temp location is created on
                first use if None. Stored files are not cleaned up.
        """
        self.fetcher = fetcher if fetcher is not None else Fetcher()
        self._temp_dir = Path(temp_dir) if temp_dir is not None else None

    @property
    def temp_dir(self) -> Path:
        if self._temp_dir is None:
            self._temp_dir = Path(tempfile.mkdtemp(prefix='article_press_'))
        return self._temp_dir

    def localize(self, content: str, source_url: str) -> LocalizationReport:
        """
        Localize every image in an article's content.

        Args:
            content: Article HTML fragment
            source_url: URL the article was fetched from

        Returns:
            LocalizationReport with the rewritten content and one result per
            ``<img>`` tag
        """
        soup = BeautifulSoup(content, 'html.parser')
        report = LocalizationReport(content=content)
        counter = 1

        for img in soup.find_all('img'):
            result = self._localize_one(img.get('src'), source_url, counter)
            report.results.append(result)

            if isinstance(result, Localized):
                img['src'] = result.package_path
                counter += 1
            else:
                logger.debug("Skipping image %r: %s", result.original_url, result.reason)

        if report.localized:
            report.content = soup.decode()

        logger.debug(
            "Localized %d of %d images", len(report.localized), len(report.results)
        )
        return report

    def _localize_one(self, src: Optional[str], source_url: str, index: int):
        """Resolve, fetch and store one image; return Localized or Skipped."""
        original = (src or '').strip()
        if not original:
            return Skipped(original_url=src or '', reason="empty src")

        resolved = self._resolve(original, source_url)
        if resolved is None:
            return Skipped(original_url=original, reason="unresolvable URL")

        try:
            fetched = self.fetcher.fetch(resolved)
        except FetchError as e:
            return Skipped(original_url=original, reason=str(e))

        ref = self._make_ref(original, resolved, fetched, index)

        try:
            ref.path = self._store(ref)
        except OSError as e:
            return Skipped(original_url=original, reason=f"could not store image: {e}")

        return Localized(ref=ref, package_path=f"{IMAGE_DIR}/{ref.local_name}")

    @staticmethod
    def _resolve(src: str, source_url: str) -> Optional[str]:
        """Resolve ``src`` against the article URL; None unless http(s)."""
        try:
            resolved = urljoin(source_url, src)
            parsed = urlparse(resolved)
        except ValueError:
            return None

        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            return None
        return resolved

    @staticmethod
    def _make_ref(original: str, resolved: str, fetched: FetchedResource,
                  index: int) -> ResourceRef:
        extension = extension_for(fetched.content_type, resolved)
        return ResourceRef(
            original_url=original,
            resolved_url=resolved,
            local_name=image_name(index, extension),
            data=fetched.data,
            content_type=fetched.content_type,
        )

    def _store(self, ref: ResourceRef) -> Path:
        """Write the image bytes to the temp directory."""
        path = self.temp_dir / ref.local_name
        path.write_bytes(ref.data)
        return path
