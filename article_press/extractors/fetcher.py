"""
HTTP fetcher for article-press.

One GET per call through a shared ``requests`` session. No retries; the
default redirect policy applies; the whole body is buffered in memory.
"""

import logging
from typing import Optional

import requests
from requests.exceptions import RequestException

from ..config import get_config
from ..exceptions import FetchError
from ..models import FetchedResource

logger = logging.getLogger(__name__)


class Fetcher:
    """
    Retrieves raw bytes from a URL.

    Only HTTP 200 counts as success. Every other status, and every
    network-level failure, raises :class:`FetchError`.
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None,
                 user_agent: Optional[str] = None):
        """
        Initialize the fetcher.

        Args:
            session: Session to issue requests with (a new one if None)
            timeout: Request timeout in seconds (uses config value if None,
                which by default means no timeout)
            user_agent: User agent string (uses config default if None)
        """
        fetcher_config = get_config().get_fetcher_config()

        self.timeout = timeout if timeout is not None else fetcher_config.get('timeout')
        self.user_agent = user_agent or fetcher_config.get('user_agent', 'article-press/1.0.0')

        self.session = session if session is not None else requests.Session()
        self.session.headers.update({
            'User-Agent': self.user_agent,
        })

    def fetch(self, url: str) -> FetchedResource:
        """
        Issue a single GET and buffer the body.

        Args:
            url: Absolute URL to fetch

        Returns:
            FetchedResource with the body and declared content type

        Raises:
            FetchError: On a network failure or any status other than 200
        """
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except RequestException as e:
            raise FetchError(f"request to {url} failed: {e}", url=url) from e

        try:
            if response.status_code != 200:
                raise FetchError(
                    f"unexpected HTTP status: {response.status_code}",
                    url=url,
                    status_code=response.status_code,
                )

            try:
                data = response.content
            except RequestException as e:
                raise FetchError(f"reading body of {url} failed: {e}", url=url) from e
        finally:
            response.close()

        return FetchedResource(
            url=url,
            data=data,
            content_type=response.headers.get('Content-Type', ''),
            status_code=response.status_code,
        )
