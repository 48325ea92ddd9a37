"""Shared fixtures: an in-memory HTTP session and an isolated configuration."""

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from article_press.config import Config, set_config
from article_press.extractors.fetcher import Fetcher


ARTICLE_PAGE = """
<html>
<head><title>My Post</title></head>
<body>
  <nav><a href="/">Home</a> <a href="/about">About</a> <a href="/archive">Archive</a></nav>
  <div id="sidebar"><ul><li><a href="/a">Related one</a></li><li><a href="/b">Related two</a></li></ul></div>
  <article class="post-content">
    <h2>An introduction</h2>
    <p>This is the first paragraph of a long article about sailing along the coast,
    written with enough words that a content extractor treats it as the main body of the page.</p>
    <p>Look at this picture <img src="/img/a.jpg" alt="a boat"> of the harbour at dawn, with its
    fishing boats, gulls, and the old lighthouse standing at the end of the stone pier.</p>
    <p>The second paragraph keeps going, describing the wind, the tides, and the long afternoons,
    because readability scores blocks of text with commas, length, and paragraph density.</p>
    <p>A third paragraph closes the story, noting how the light changes in the evening and how,
    after a long day, the harbour grows quiet again, until the next morning brings the boats back.</p>
  </article>
  <footer><p>Copyright notice</p></footer>
</body>
</html>
"""


class FakeResponse:
    def __init__(self, status_code=200, content=b"", content_type=""):
        self.status_code = status_code
        self.content = content
        self.headers = CaseInsensitiveDict()
        if content_type:
            self.headers["Content-Type"] = content_type
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    """
    Stands in for ``requests.Session``.

    ``routes`` maps a URL to a FakeResponse or to an exception to raise.
    Unknown URLs answer 404.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.headers = CaseInsensitiveDict()
        self.calls = []

    def add(self, url, content=b"", status_code=200, content_type=""):
        self.routes[url] = FakeResponse(status_code, content, content_type)

    def get(self, url, timeout=None):
        self.calls.append(url)
        route = self.routes.get(url)
        if route is None:
            return FakeResponse(404)
        if isinstance(route, Exception):
            raise route
        return route


@pytest.fixture(autouse=True)
def isolated_config(tmp_path):
    """Use built-in defaults only, never a config file from the machine running the tests."""
    config = Config(str(tmp_path / "missing-config.yml"))
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def fetcher(session):
    return Fetcher(session=session)


@pytest.fixture
def article_site(session):
    """A reachable article page with one relative image."""
    session.add(
        "https://example.com/posts/my-post",
        ARTICLE_PAGE.encode("utf-8"),
        content_type="text/html; charset=utf-8",
    )
    session.add("https://example.com/img/a.jpg", b"\xff\xd8\xff\xe0jpegdata", content_type="image/jpeg")
    return session


@pytest.fixture
def connection_error():
    return requests.exceptions.ConnectionError("connection refused")
