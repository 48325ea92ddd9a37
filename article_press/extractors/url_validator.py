"""
URL validation for article-press extractors.

Normalizes the article URL given on the command line before anything is
fetched, and reports why a URL is unusable.
"""

from typing import Optional, Tuple
from urllib.parse import urlparse, urlunparse

from ..exceptions import URLValidationError


class URLValidator:
    """
    URL validator with normalization.

    Only the shape of the URL is checked; whether it is reachable is left
    to the fetcher.
    """

    allowed_schemes = ('http', 'https')

    def validate_url(self, url: str) -> Tuple[str, Optional[str]]:
        """
        Validate and normalize a URL.

        Args:
            url: URL to validate

        Returns:
            Tuple of (normalized_url, error_message)
            If error_message is None, the URL is valid
        """
        normalized_url = self._normalize_url(url)
        if not normalized_url:
            return url, "Invalid URL format"

        parsed = urlparse(normalized_url)

        if parsed.scheme not in self.allowed_schemes:
            return normalized_url, f"Unsupported URL scheme: {parsed.scheme}"

        if not parsed.netloc:
            return normalized_url, "URL missing domain"

        return normalized_url, None

    def require_valid_url(self, url: str) -> str:
        """
        Return the normalized URL or raise.

        Raises:
            URLValidationError: If the URL cannot be used as an article source
        """
        normalized_url, error_message = self.validate_url(url)
        if error_message:
            raise URLValidationError(f"{error_message}: {url!r}")
        return normalized_url

    def _normalize_url(self, url: str) -> Optional[str]:
        """
        Normalize a URL to a standard format.

        Args:
            url: URL to normalize

        Returns:
            Normalized URL or None if invalid
        """
        if not url or not isinstance(url, str):
            return None

        url = url.strip()
        if not url:
            return None

        # Add scheme if missing
        if '://' not in url:
            if url.startswith('//'):
                url = 'https:' + url
            else:
                url = 'https://' + url

        try:
            parsed = urlparse(url)
        except ValueError:
            return None

        if not parsed.netloc:
            return None

        # Host names are case-insensitive, credentials are not
        userinfo, at, host = parsed.netloc.rpartition('@')

        return urlunparse((
            parsed.scheme.lower(),
            userinfo + at + host.lower(),
            parsed.path,
            parsed.params,
            parsed.query,
            ''  # Fragments never reach the server
        ))
