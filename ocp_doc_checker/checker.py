"""
Check orchestration: parse a documentation URL, probe newer versions and
build the outdated verdict.
"""

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, Optional, Tuple

import requests

from ocp_doc_checker.common import create_session, logger
from ocp_doc_checker.config import CheckerConfig
from ocp_doc_checker.models import (
    BatchReport,
    CheckReport,
    DocumentReference,
    VersionProbeResult,
)
from ocp_doc_checker.parser import DocURLError, build_url, parse_doc_url
from ocp_doc_checker.prober import Prober, ProbeCancelled, ProbeOutcome
from ocp_doc_checker.versions import candidate_versions, get_version_key


class Checker:
    """Check OCP documentation URLs against newer releases."""

    def __init__(
        self,
        config: Optional[CheckerConfig] = None,
        session: Optional[requests.Session] = None,
        prober: Optional[Prober] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.config = config or CheckerConfig()
        self._cancel_event = threading.Event()
        if prober is None:
            prober = Prober(
                session=session or create_session(self.config),
                config=self.config,
                sleep=sleep,
                cancel_event=self._cancel_event,
            )
        elif prober.cancel_event is None:
            prober.cancel_event = self._cancel_event
        self.prober = prober

    @property
    def known_versions(self) -> List[str]:
        return list(self.config.known_versions)

    def cancel(self) -> None:
        """Abort in-flight and pending probes."""
        logger.info("Cancellation requested")
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def parse(self, raw_url: str) -> DocumentReference:
        """Parse a URL using this checker's site settings."""
        return parse_doc_url(raw_url, self.config.doc_host, self.config.doc_path_prefix)

    def get_newer_versions(self, current_version: str) -> List[str]:
        """Known versions newer than the given one, ascending."""
        return candidate_versions(current_version, self.config.known_versions, self.config.comparator)

    def _probe_version(
        self, reference: DocumentReference, version: str
    ) -> Tuple[VersionProbeResult, bool]:
        """Probe one candidate; returns the result and whether it was cancelled."""
        url = build_url(reference, version)
        try:
            outcome = self.prober.probe(url)
        except Exception as e:
            # A single candidate must not abort the check
            logger.error(f"Probe of {url} failed unexpectedly: {e}")
            outcome = ProbeOutcome(False, reference.has_anchor, False, e)

        result = VersionProbeResult(
            version=version,
            url=url,
            exists=outcome.exists,
            has_anchor=outcome.has_anchor,
            anchor_exists=outcome.anchor_exists,
            error=str(outcome.error) if outcome.error else None,
        )
        return result, isinstance(outcome.error, ProbeCancelled)

    def check(self, raw_url: str) -> CheckReport:
        """
        Check whether a documentation URL is outdated.

        Args:
            raw_url: Versioned OCP documentation URL

        Returns:
            CheckReport with newer valid versions in ascending order

        Raises:
            DocURLError: If the URL is not a checkable documentation URL
        """
        reference = self.parse(raw_url)
        versions = self.get_newer_versions(reference.version)

        logger.debug(f"Checking {raw_url}: {len(versions)} newer version(s) to probe")

        results: List[VersionProbeResult] = []
        cancelled = False

        if versions:
            with ThreadPoolExecutor(max_workers=min(self.config.max_workers, len(versions))) as executor:
                futures = {
                    executor.submit(self._probe_version, reference, version): version
                    for version in versions
                }
                for future in as_completed(futures):
                    result, was_cancelled = future.result()
                    if was_cancelled:
                        cancelled = True
                        continue
                    results.append(result)

        cancelled = cancelled or self.cancelled

        # Completion order is arbitrary, report order is ascending
        key = get_version_key(self.config.comparator)
        results.sort(key=lambda r: key(r.version))

        report = CheckReport.from_results(reference, results, cancelled=cancelled)
        if report.is_outdated:
            logger.info(f"{raw_url} is outdated: latest valid version is {report.latest_version}")
        return report

    def check_many(
        self,
        urls: Iterable[str],
        progress: Optional[Callable[[int, int, str], None]] = None,
    ) -> BatchReport:
        """
        Check several URLs; a fatal error for one URL does not stop the rest.

        Args:
            urls: URLs to check
            progress: Optional callback (index, total, url) called before each check

        Returns:
            BatchReport with one CheckReport per checkable URL and the errors
        """
        urls = list(urls)
        batch = BatchReport()

        for index, url in enumerate(urls, start=1):
            if self.cancelled:
                break
            if progress:
                progress(index, len(urls), url)
            try:
                batch.results.append(self.check(url))
            except DocURLError as e:
                logger.error(f"Error checking URL {url}: {e}")
                batch.errors[url] = str(e)

        return batch
