"""Tests for candidate version enumeration, covering both comparators."""

import pytest

from ocp_doc_checker.config import Comparator, DEFAULT_KNOWN_VERSIONS
from ocp_doc_checker.versions import (
    candidate_versions,
    float_key,
    get_version_key,
    is_newer,
    tuple_key,
)

KNOWN = [f"4.{minor}" for minor in range(10, 20)]


class TestCandidateVersions:
    """Tests for candidate_versions with the default tuple comparator."""

    def test_newer_only(self):
        """Test only strictly newer versions are returned."""
        assert candidate_versions("4.17", KNOWN) == ["4.18", "4.19"]

    def test_latest_has_no_candidates(self):
        """Test the newest known version has nothing newer."""
        assert candidate_versions("4.19", KNOWN) == []

    def test_sorted_ascending(self):
        """Test unordered input comes back ascending."""
        known = ["4.19", "4.11", "5.0", "4.9", "4.15"]
        assert candidate_versions("4.10", known) == ["4.11", "4.15", "4.19", "5.0"]

    def test_minor_ten_after_nine(self):
        """Test 4.10 sorts after 4.9, not between 4.1 and 4.2."""
        assert candidate_versions("4.9", ["4.10", "4.2", "4.1"]) == ["4.10"]

    def test_skips_unparseable_known(self):
        """Test bad entries in the known list are ignored."""
        known = ["4.18", "latest", "4", "4.19.1", "", "4.19"]
        assert candidate_versions("4.17", known) == ["4.18", "4.19"]

    def test_unparseable_current(self):
        """Test an unparseable current version yields no candidates."""
        assert candidate_versions("dev", KNOWN) == []

    def test_duplicates_collapsed(self):
        """Test repeated versions are probed once."""
        assert candidate_versions("4.17", ["4.18", "4.18", "4.19"]) == ["4.18", "4.19"]

    def test_monotonic(self):
        """Test every result is newer and results strictly ascend."""
        for current in ["4.9", "4.12", "4.20", "3.11"]:
            result = candidate_versions(current, DEFAULT_KNOWN_VERSIONS)
            keys = [tuple_key(v) for v in result]
            assert all(k > tuple_key(current) for k in keys)
            assert keys == sorted(set(keys))

    def test_known_not_mutated(self):
        """Test the caller's list is left untouched."""
        known = ["4.19", "4.18"]
        candidate_versions("4.17", known)
        assert known == ["4.19", "4.18"]


class TestComparators:
    """Tests pinning the tuple and legacy float orderings."""

    def test_keys(self):
        assert tuple_key("4.17") == (4, 17)
        assert float_key("4.17") == pytest.approx(4.17)

    def test_get_version_key(self):
        assert get_version_key("tuple") is tuple_key
        assert get_version_key(Comparator.FLOAT) is float_key

    def test_agree_below_minor_100(self):
        """Test both orderings agree for realistic version numbers."""
        for current in ["4.9", "4.10", "4.17", "4.99"]:
            assert candidate_versions(current, KNOWN, "tuple") == candidate_versions(current, KNOWN, "float")

    def test_float_breaks_at_minor_100(self):
        """Test the legacy float key treats 4.100 as equal to 5.0."""
        assert float_key("4.100") == float_key("5.0")
        assert candidate_versions("4.100", ["5.0"], Comparator.TUPLE) == ["5.0"]
        assert candidate_versions("4.100", ["5.0"], Comparator.FLOAT) == []

    def test_float_collapses_colliding_keys(self):
        """Test versions with equal float keys are only probed once."""
        assert candidate_versions("4.99", ["4.100", "5.0"], Comparator.TUPLE) == ["4.100", "5.0"]
        assert len(candidate_versions("4.99", ["4.100", "5.0"], Comparator.FLOAT)) == 1

    def test_is_newer(self):
        assert is_newer("4.18", "4.17") is True
        assert is_newer("4.17", "4.17") is False
        assert is_newer("4.100", "5.0", "float") is False
        assert is_newer("5.0", "4.100", "tuple") is True
