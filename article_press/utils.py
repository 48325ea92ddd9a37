"""
Utility functions for article-press.

Filename handling and small path helpers shared by the exporter and the CLI.
"""

import re
from pathlib import Path
from typing import Union

# Characters rejected by common filesystems, plus ASCII control characters.
_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1F]')
_SEPARATOR_RUNS = re.compile(r'[\s_]+')


def sanitize_filename(name: str) -> str:
    """
    Derive a filesystem-safe name from an article title.

    Surrounding whitespace is trimmed, illegal characters become ``_``, and
    any run of whitespace and/or underscores collapses to a single ``_``.
    Never fails; an empty or blank title yields ``""`` or ``"_"``, so callers
    should substitute a fallback title first.

    Args:
        name: The raw title

    Returns:
        A name safe to use as a file stem
    """
    name = name.strip()
    name = _ILLEGAL_CHARS.sub('_', name)
    return _SEPARATOR_RUNS.sub('_', name)


def title_or_fallback(title: str, fallback: str) -> str:
    """Return ``title`` unless it is blank, else ``fallback``."""
    if title and title.strip():
        return title
    return fallback


def build_output_path(title: str, output_dir: Union[str, Path], extension: str) -> Path:
    """
    Build the artifact path for a title.

    Args:
        title: Non-blank article title
        output_dir: Destination directory
        extension: File extension (with or without leading dot)

    Returns:
        ``<output_dir>/<sanitized-title><extension>``
    """
    if extension and not extension.startswith('.'):
        extension = f'.{extension}'
    return Path(output_dir) / f"{sanitize_filename(title)}{extension}"


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        Path object for the directory

    Raises:
        OSError: If directory cannot be created
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path
