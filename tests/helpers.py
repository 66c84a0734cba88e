"""In-memory documentation site standing in for requests.Session."""

import threading
from typing import Dict, List, Tuple, Union


BASE = "https://docs.redhat.com/en/documentation/openshift_container_platform"

Page = Union[str, int, Exception]


def doc_url(version: str, document: str = "disconnected_environments",
            page: str = "index", fmt: str = "html-single", anchor: str = "") -> str:
    """Build a documentation URL for tests."""
    url = f"{BASE}/{version}/{fmt}/{document}/{page}"
    if anchor:
        url += "#" + anchor
    return url


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code: int, content: bytes = b""):
        self.status_code = status_code
        self.content = content
        self.closed = False

    def close(self):
        self.closed = True


class FakeSession:
    """Serve pages from a dict keyed by URL.

    Values are HTML strings (HTTP 200), integer status codes, or exceptions
    raised on every request. Unknown URLs answer 404.
    """

    def __init__(self, pages: Dict[str, Page] = None, head_error: Exception = None):
        self.pages = pages or {}
        self.head_error = head_error
        self.calls: List[Tuple[str, str]] = []
        self._lock = threading.Lock()

    def _respond(self, method: str, url: str) -> FakeResponse:
        with self._lock:
            self.calls.append((method, url))
        page = self.pages.get(url, 404)
        if isinstance(page, Exception):
            raise page
        if isinstance(page, int):
            return FakeResponse(page)
        return FakeResponse(200, page.encode("utf-8"))

    def head(self, url, timeout=None, allow_redirects=True):
        if self.head_error is not None:
            with self._lock:
                self.calls.append(("HEAD", url))
            raise self.head_error
        return self._respond("HEAD", url)

    def get(self, url, timeout=None, allow_redirects=True):
        return self._respond("GET", url)

    def methods_for(self, url: str) -> List[str]:
        return [method for method, called in self.calls if called == url]
