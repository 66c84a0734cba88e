"""Tests for fixer module."""

from ocp_doc_checker.checker import Checker
from ocp_doc_checker.config import CheckerConfig
from ocp_doc_checker.fixer import apply_fixes, replace_in_file
from ocp_doc_checker.models import CheckReport, URLLocation, VersionProbeResult
from ocp_doc_checker.parser import parse_doc_url
from ocp_doc_checker.scanner import scan_path

from tests.helpers import FakeSession, doc_url


OLD = doc_url("4.17", anchor="sec")
NEW = doc_url("4.19", anchor="sec")


def outdated_report(url=OLD, versions=("4.18", "4.19")):
    ref = parse_doc_url(url)
    results = [
        VersionProbeResult(version=v, url=ref.build_url(v), exists=True, has_anchor=True, anchor_exists=True)
        for v in versions
    ]
    return CheckReport.from_results(ref, results)


class TestReplaceInFile:
    """Tests for replace_in_file."""

    def test_replaces_all_occurrences(self, tmp_path):
        f = tmp_path / "a.md"
        f.write_text(f"[one]({OLD})\n[two]({OLD})\n")
        assert replace_in_file(f, OLD, NEW) == 2
        assert f.read_text() == f"[one]({NEW})\n[two]({NEW})\n"

    def test_untouched_when_absent(self, tmp_path):
        f = tmp_path / "a.md"
        f.write_text("no links")
        mtime = f.stat().st_mtime_ns
        assert replace_in_file(f, OLD, NEW) == 0
        assert f.stat().st_mtime_ns == mtime

    def test_keeps_line_endings_and_mode(self, tmp_path):
        f = tmp_path / "a.txt"
        f.write_bytes(f"{OLD}\r\nnext\r\n".encode())
        f.chmod(0o640)
        replace_in_file(f, OLD, NEW)
        assert f.read_bytes() == f"{NEW}\r\nnext\r\n".encode()
        assert f.stat().st_mode & 0o777 == 0o640

    def test_no_temp_files_left(self, tmp_path):
        f = tmp_path / "a.md"
        f.write_text(OLD)
        replace_in_file(f, OLD, NEW)
        assert [p.name for p in tmp_path.iterdir()] == ["a.md"]

    def test_longer_url_with_same_prefix_untouched(self, tmp_path):
        bare_old, bare_new = doc_url("4.17"), doc_url("4.19")
        anchored = doc_url("4.17", anchor="mirroring")
        f = tmp_path / "a.md"
        f.write_text(f"[page]({bare_old})\n[section]({anchored})\n{bare_old}/next\n")

        assert replace_in_file(f, bare_old, bare_new) == 1
        assert f.read_text() == f"[page]({bare_new})\n[section]({anchored})\n{bare_old}/next\n"

    def test_trailing_punctuation_still_replaced(self, tmp_path):
        f = tmp_path / "a.txt"
        f.write_text(f"Read {OLD}. Then {OLD}")
        assert replace_in_file(f, OLD, NEW) == 2
        assert f.read_text() == f"Read {NEW}. Then {NEW}"

    def test_non_utf8_bytes_preserved(self, tmp_path):
        f = tmp_path / "latin1.md"
        f.write_bytes("caf\u00e9 ".encode("latin-1") + OLD.encode() + b"\n")
        assert replace_in_file(f, OLD, NEW) == 1
        assert f.read_bytes() == "caf\u00e9 ".encode("latin-1") + NEW.encode() + b"\n"


class TestApplyFixes:
    """Tests for apply_fixes."""

    def test_fixes_every_file(self, tmp_path):
        a = tmp_path / "a.md"
        b = tmp_path / "b.adoc"
        a.write_text(f"see {OLD}\n")
        b.write_text(f"{OLD}[link] and {OLD}[again]\n")
        locations = [URLLocation(url=OLD, files=[str(a), str(b)])]

        fixes = apply_fixes([outdated_report()], locations)

        assert {f.path: f.replacements for f in fixes} == {str(a): 1, str(b): 2}
        assert all(f.new_version == "4.19" and f.old_version == "4.17" for f in fixes)
        assert OLD not in a.read_text()
        assert NEW in b.read_text()

    def test_up_to_date_reports_skipped(self, tmp_path):
        a = tmp_path / "a.md"
        a.write_text(OLD)
        current = CheckReport.from_results(parse_doc_url(OLD), [])
        fixes = apply_fixes([current], [URLLocation(url=OLD, files=[str(a)])])
        assert fixes == []
        assert a.read_text() == OLD

    def test_missing_file_does_not_stop_others(self, tmp_path):
        good = tmp_path / "good.md"
        good.write_text(OLD)
        missing = tmp_path / "gone.md"
        locations = [URLLocation(url=OLD, files=[str(missing), str(good)])]

        fixes = apply_fixes([outdated_report()], locations)

        errors = [f for f in fixes if f.error]
        assert [f.path for f in errors] == [str(missing)]
        assert good.read_text() == NEW

    def test_unknown_url_ignored(self, tmp_path):
        fixes = apply_fixes([outdated_report()], [URLLocation(url="other", files=["x.md"])])
        assert fixes == []

    def test_anchored_link_keeps_version_without_anchor(self, tmp_path):
        """Fixing a bare link must not move its anchored sibling to a version lacking the anchor."""
        bare = doc_url("4.17")
        anchored = doc_url("4.17", anchor="mirroring")
        doc = tmp_path / "a.md"
        doc.write_text(f"[page]({bare})\n[section]({anchored})\n")
        session = FakeSession({doc_url("4.19"): "<html><body><p>moved</p></body></html>"})
        checker = Checker(CheckerConfig(known_versions=["4.17", "4.19"]), session=session, sleep=lambda d: None)

        locations = scan_path(tmp_path)
        batch = checker.check_many([loc.url for loc in locations])
        outdated = {r.original_url: r.is_outdated for r in batch.results}
        assert outdated == {bare: True, anchored: False}

        fixes = apply_fixes(batch.results, locations)

        assert [(f.old_url, f.replacements) for f in fixes] == [(bare, 1)]
        assert doc.read_text() == f"[page]({doc_url('4.19')})\n[section]({anchored})\n"
