"""
Existence probing for documentation pages and in-page anchors.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import requests
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

from ocp_doc_checker.common import create_session, logger
from ocp_doc_checker.config import CheckerConfig


class ProbeError(Exception):
    """Base error for probes that could not reach a verdict."""


class AnchorParseError(ProbeError):
    """Fetched page could not be parsed for anchors."""


class UnexpectedStatus(ProbeError):
    """Server answered with a status outside the 2xx-3xx and >=400 ranges."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"Unexpected HTTP status {status_code} for {url}")
        self.status_code = status_code


class ProbeCancelled(ProbeError):
    """Probe was aborted by a cancellation signal."""


@dataclass
class ProbeOutcome:
    """Outcome of a single URL probe."""
    exists: bool
    has_anchor: bool
    anchor_exists: bool = False
    error: Optional[Exception] = None


def split_fragment(url: str) -> Tuple[str, str]:
    """Split a URL into (base, fragment) at the first '#'."""
    base, _, fragment = url.partition("#")
    return base, fragment


def anchor_in_html(markup, anchor: str) -> bool:
    """
    Check if an anchor exists in HTML markup.

    Matches any element whose ``id`` equals the anchor, or any ``<a>``
    element whose ``name`` equals it. Comparison is exact and case-sensitive.

    Raises:
        AnchorParseError: If the markup cannot be parsed at all
    """
    try:
        soup = BeautifulSoup(markup, "html.parser")
    except ParserRejectedMarkup as e:
        raise AnchorParseError(f"Failed to parse HTML: {e}") from e

    if soup.find(attrs={"id": anchor}) is not None:
        return True
    return soup.find("a", attrs={"name": anchor}) is not None


class Prober:
    """Probe documentation URLs for page and anchor existence.

    A probe makes up to ``max_attempts`` attempts. Before attempt ``k``
    (counting from zero) it waits ``k * backoff_step`` seconds. HTTP status
    codes of 400 and above are a definitive "not found" and end the probe
    immediately; transport errors, unparseable pages and unexpected status
    codes are retried.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        config: Optional[CheckerConfig] = None,
        sleep: Optional[Callable[[float], None]] = None,
        cancel_event: Optional[threading.Event] = None,
    ):
        self.config = config or CheckerConfig()
        self.session = session or create_session(self.config)
        self.timeout = self.config.timeout
        self.max_attempts = self.config.max_attempts
        self.backoff_step = self.config.backoff_step
        self._sleep = sleep
        self.cancel_event = cancel_event

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait before the given zero-based attempt."""
        return attempt * self.backoff_step

    def _wait(self, delay: float) -> None:
        if delay <= 0:
            return
        if self._sleep is not None:
            self._sleep(delay)
        elif self.cancel_event is not None:
            self.cancel_event.wait(delay)
        else:
            time.sleep(delay)

    def _fetch(self, url: str, need_body: bool) -> requests.Response:
        """Issue HEAD, or GET when the body is needed or HEAD fails."""
        if need_body:
            return self.session.get(url, timeout=self.timeout, allow_redirects=True)
        try:
            return self.session.head(url, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            logger.debug(f"HEAD failed for {url} ({e}), retrying with GET")
            return self.session.get(url, timeout=self.timeout, allow_redirects=True)

    def probe(self, url: str) -> ProbeOutcome:
        """
        Check if a URL exists and, when it has a fragment, if the anchor exists.

        Args:
            url: URL to probe, optionally with a #fragment

        Returns:
            ProbeOutcome; ``error`` is set only when every attempt failed
            without a definitive answer
        """
        base_url, fragment = split_fragment(url)
        has_anchor = fragment != ""
        last_error: Optional[Exception] = None

        for attempt in range(self.max_attempts):
            if self.cancelled:
                return ProbeOutcome(False, has_anchor, False, ProbeCancelled(f"Probe of {url} cancelled"))

            if attempt > 0:
                delay = self.backoff_delay(attempt)
                logger.debug(f"Retrying {url} in {delay:g}s (attempt {attempt + 1}/{self.max_attempts})")
                self._wait(delay)
                if self.cancelled:
                    return ProbeOutcome(False, has_anchor, False, ProbeCancelled(f"Probe of {url} cancelled"))

            try:
                response = self._fetch(base_url, need_body=has_anchor)
            except requests.RequestException as e:
                last_error = e
                continue

            try:
                status = response.status_code
                if status >= 400:
                    logger.debug(f"{base_url}: HTTP {status}, page does not exist")
                    return ProbeOutcome(False, has_anchor, False, None)

                if status < 200:
                    last_error = UnexpectedStatus(status, base_url)
                    continue

                if not has_anchor:
                    return ProbeOutcome(True, False, False, None)

                try:
                    anchor_exists = anchor_in_html(response.content, fragment)
                except AnchorParseError as e:
                    last_error = e
                    continue

                return ProbeOutcome(True, True, anchor_exists, None)
            finally:
                response.close()

        logger.warning(f"Giving up on {url} after {self.max_attempts} attempts: {last_error}")
        return ProbeOutcome(False, has_anchor, False, last_error)
