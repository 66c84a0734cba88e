"""
Candidate version enumeration.

Two orderings are available. ``tuple`` compares ``(major, minor)``
lexicographically. ``float`` reproduces the legacy ``major + minor / 100``
key, which stops ordering correctly once a minor version reaches 100
(4.100 sorts equal to 5.0).
"""

from typing import Callable, Iterable, List, Tuple, Union

from ocp_doc_checker.config import Comparator
from ocp_doc_checker.parser import InvalidVersion, parse_version

VersionKey = Union[Tuple[int, int], float]


def tuple_key(version: str) -> Tuple[int, int]:
    """Ordering key comparing (major, minor) lexicographically."""
    return parse_version(version)


def float_key(version: str) -> float:
    """Legacy ordering key: major + minor / 100."""
    major, minor = parse_version(version)
    return major + minor / 100.0


def get_version_key(comparator: Union[Comparator, str] = Comparator.TUPLE) -> Callable[[str], VersionKey]:
    """Get the key function for a comparator name."""
    if Comparator(comparator) == Comparator.FLOAT:
        return float_key
    return tuple_key


def candidate_versions(
    current: str,
    known: Iterable[str],
    comparator: Union[Comparator, str] = Comparator.TUPLE,
) -> List[str]:
    """
    Get the known versions strictly newer than the current one.

    Args:
        current: Version of the document being checked (e.g. "4.17")
        known: Known release versions, in any order
        comparator: Ordering scheme ("tuple" or "float")

    Returns:
        Newer versions sorted ascending. Unparseable entries of ``known`` are
        skipped; an unparseable ``current`` yields an empty list.
    """
    key = get_version_key(comparator)
    try:
        current_key = key(current)
    except InvalidVersion:
        return []

    newer = []
    seen = set()
    for version in known:
        try:
            version_key = key(version)
        except InvalidVersion:
            continue
        if version_key > current_key and version_key not in seen:
            seen.add(version_key)
            newer.append((version_key, version.strip()))

    newer.sort(key=lambda item: item[0])
    return [version for _, version in newer]


def is_newer(version: str, than: str, comparator: Union[Comparator, str] = Comparator.TUPLE) -> bool:
    """Check if one version is strictly newer than another."""
    key = get_version_key(comparator)
    return key(version) > key(than)
