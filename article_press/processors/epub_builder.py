"""
EPUB packaging for article-press.

Builds a single-chapter e-book from an article and the images the
localizer stored for it, using ebooklib.
"""

import logging
import uuid
from html import escape
from pathlib import Path
from typing import Iterable, Optional, Union

from ebooklib import epub

from ..exceptions import PackagingError, WriteError
from ..models import Article, ResourceRef
from .image_localizer import IMAGE_DIR

logger = logging.getLogger(__name__)

CHAPTER_FILE = 'chapter.xhtml'
DEFAULT_AUTHOR = 'Unknown Author'
DEFAULT_CHAPTER_TITLE = 'Article'


def wrap_html(body: str, title: str = '') -> str:
    """Wrap an HTML fragment in a minimal UTF-8 document shell."""
    return (
        '<html><head><meta charset="utf-8"/>'
        f'<title>{escape(title)}</title></head><body>'
        f'{body}'
        '</body></html>'
    )


class LocalEpubImage(epub.EpubImage):
    """
    Image item whose bytes stay on disk until the book is written.

    Falls back to in-memory content when no path is set.
    """

    def __init__(self, uid: str, file_name: str, media_type: str,
                 path: Optional[Path] = None):
        super().__init__()
        self.id = uid
        self.file_name = file_name
        self.media_type = media_type
        self.path = path

    def get_content(self, default=b""):
        if self.path is not None:
            return Path(self.path).read_bytes()
        return super().get_content(default)


class EpubBuilder:
    """
    Assembles and writes EPUB packages.

    The author is a fixed placeholder; extractors rarely find a reliable one.
    """

    def __init__(self, author: str = DEFAULT_AUTHOR, language: str = 'en'):
        self.author = author or DEFAULT_AUTHOR
        self.language = language or 'en'

    def build(self, article: Article, content: Optional[str] = None,
              resources: Iterable[ResourceRef] = ()) -> epub.EpubBook:
        """
        Build the book object.

        Args:
            article: Article supplying title and source URL
            content: Localized content (defaults to ``article.content``)
            resources: Localized images to embed

        Returns:
            The assembled ebooklib book

        Raises:
            PackagingError: If the package cannot be assembled
        """
        title = article.title.strip() or DEFAULT_CHAPTER_TITLE
        body = article.content if content is None else content

        try:
            book = epub.EpubBook()
            book.set_identifier(self._identifier(article.url))
            book.set_title(title)
            book.set_language(self.language)
            book.add_author(self.author)
            if article.url:
                book.add_metadata('DC', 'source', article.url)

            for ref in resources:
                book.add_item(self._image_item(ref))

            chapter = epub.EpubHtml(
                title=title,
                file_name=CHAPTER_FILE,
                lang=self.language,
            )
            chapter.content = wrap_html(body, title)
            book.add_item(chapter)

            book.toc = (epub.Link(CHAPTER_FILE, title, 'chapter'),)
            book.add_item(epub.EpubNcx())
            book.add_item(epub.EpubNav())
            book.spine = ['nav', chapter]
        except (ValueError, TypeError, AttributeError) as e:
            raise PackagingError(str(e)) from e

        return book

    def write(self, book: epub.EpubBook, path: Union[str, Path]) -> Path:
        """
        Write the book to ``path``.

        Raises:
            WriteError: If the file cannot be written
            PackagingError: If ebooklib cannot serialize the package
        """
        path = Path(path)
        # epub.write_epub() swallows IOError, so drive the writer directly
        writer = epub.EpubWriter(str(path), book, {})
        try:
            writer.process()
            writer.write()
        except OSError as e:
            raise WriteError(f"{path}: {e}") from e
        except Exception as e:
            raise PackagingError(str(e) or e.__class__.__name__) from e

        logger.debug("Wrote EPUB %s", path)
        return path

    @staticmethod
    def _identifier(url: str) -> str:
        return f"urn:uuid:{uuid.uuid5(uuid.NAMESPACE_URL, url or 'article-press')}"

    @staticmethod
    def _image_item(ref: ResourceRef) -> LocalEpubImage:
        stem = Path(ref.local_name).stem
        item = LocalEpubImage(
            path=ref.path,
            uid=stem,
            file_name=f"{IMAGE_DIR}/{ref.local_name}",
            media_type=ref.media_type,
        )
        if ref.path is None:
            item.content = ref.data
        return item
