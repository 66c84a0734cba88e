"""
Parsing of versioned OCP documentation URLs.

A documentation URL has the shape::

    https://docs.redhat.com/en/documentation/openshift_container_platform/4.17/html-single/<document>/<page>#<anchor>

Only the version segment changes between releases of the same document, so
a parsed reference can be re-targeted at any other version with
:func:`build_url`.
"""

import re
from typing import Tuple
from urllib.parse import urlparse

from ocp_doc_checker.config import DOC_HOST, DOC_PATH_PREFIX
from ocp_doc_checker.models import DocumentReference


VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)$")


class DocURLError(ValueError):
    """Base error for URLs that cannot be checked."""


class NotTargetSite(DocURLError):
    """URL host is not the documentation site."""


class MalformedPath(DocURLError):
    """URL path does not match the versioned documentation layout."""


class InvalidVersion(DocURLError):
    """Version string is not of the form major.minor."""


def _path_pattern(path_prefix: str) -> re.Pattern:
    """Build the path regex for a product prefix like /en/documentation/<product>."""
    product = path_prefix.rstrip("/").rsplit("/", 1)[-1]
    return re.compile(
        rf"^(?P<prefix>(?:/[^/]+)*/{re.escape(product)})"
        r"/(?P<version>\d+\.\d+)"
        r"/(?P<format>[^/]+)"
        r"/(?P<document>[^/]+)"
        r"/(?P<page>[^/]+)/?$"
    )


def parse_version(version: str) -> Tuple[int, int]:
    """
    Split a 'major.minor' version string into integers.

    Raises:
        InvalidVersion: If the string is not two dot-separated integers
    """
    match = VERSION_PATTERN.match(version.strip()) if isinstance(version, str) else None
    if not match:
        raise InvalidVersion(f"Invalid version: {version!r}")
    return int(match.group(1)), int(match.group(2))


def is_target_host(hostname: str, doc_host: str = DOC_HOST) -> bool:
    """Check if a hostname belongs to the documentation site."""
    hostname = (hostname or "").lower()
    doc_host = doc_host.lower()
    return hostname == doc_host or hostname.endswith("." + doc_host)


def parse_doc_url(
    raw_url: str,
    doc_host: str = DOC_HOST,
    path_prefix: str = DOC_PATH_PREFIX,
) -> DocumentReference:
    """
    Parse a documentation URL into its components.

    Args:
        raw_url: URL to parse
        doc_host: Expected documentation host
        path_prefix: Documentation path prefix; its last segment names the product

    Returns:
        DocumentReference for the URL

    Raises:
        NotTargetSite: Host is not the documentation site
        MalformedPath: Path does not match .../<major>.<minor>/<format>/<document>/<page>
    """
    try:
        parsed = urlparse(raw_url.strip())
        hostname = parsed.hostname
    except ValueError as e:
        raise MalformedPath(f"Invalid URL {raw_url!r}: {e}") from e

    if parsed.scheme not in ("http", "https") or not is_target_host(hostname, doc_host):
        raise NotTargetSite(f"Not a {doc_host} documentation URL: {raw_url}")

    match = _path_pattern(path_prefix).match(parsed.path)
    if not match:
        raise MalformedPath(f"URL does not match expected OCP documentation format: {raw_url}")

    version = match.group("version")
    return DocumentReference(
        base_url=f"{parsed.scheme}://{parsed.netloc}",
        version=version,
        major_minor=parse_version(version),
        format=match.group("format"),
        document=match.group("document"),
        page=match.group("page"),
        # An empty fragment and a missing one both mean "no anchor"
        anchor=parsed.fragment,
        original_url=raw_url,
        path_prefix=match.group("prefix"),
    )


def build_url(reference: DocumentReference, version: str) -> str:
    """Build the URL of the same document and anchor at another version."""
    parse_version(version)
    return reference.build_url(version)
