"""
Rewriting outdated documentation URLs in files.
"""

import os
import stat
import tempfile
from pathlib import Path
from typing import Dict, Iterable, List

from ocp_doc_checker.common import logger
from ocp_doc_checker.models import CheckReport, FixResult, URLLocation
from ocp_doc_checker.scanner import FILE_ENCODING, FILE_ERRORS, exact_url_pattern


def write_atomic(path: Path, content: str) -> None:
    """Replace a file's content in one step, keeping its permissions."""
    mode = stat.S_IMODE(path.stat().st_mode)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="") as f:
            f.write(content)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def replace_in_file(path: Path, old_url: str, new_url: str) -> int:
    """
    Replace every occurrence of old_url with new_url in a file.

    Longer URLs that merely start with old_url, such as the same page with
    an anchor, are left alone.

    Returns:
        Number of replacements made (the file is untouched when 0)
    """
    with open(path, encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="") as f:
        content = f.read()

    updated, count = exact_url_pattern(old_url).subn(lambda m: new_url, content)
    if count:
        write_atomic(path, updated)
    return count


def apply_fixes(
    reports: Iterable[CheckReport],
    locations: Iterable[URLLocation],
) -> List[FixResult]:
    """
    Point outdated URLs at their latest valid version in every file containing them.

    Each file is rewritten independently; an error on one file is recorded
    in its FixResult and does not stop the others.

    Args:
        reports: Check reports; only outdated ones are fixed
        locations: Where each URL was found

    Returns:
        One FixResult per (URL, file) pair that was attempted
    """
    files_by_url: Dict[str, List[str]] = {loc.url: loc.files for loc in locations}
    results: List[FixResult] = []

    for report in reports:
        latest = report.latest
        if not report.is_outdated or latest is None:
            continue

        for file_path in files_by_url.get(report.original_url, []):
            result = FixResult(
                path=file_path,
                old_url=report.original_url,
                new_url=latest.url,
                old_version=report.original_version,
                new_version=latest.version,
            )
            try:
                result.replacements = replace_in_file(Path(file_path), report.original_url, latest.url)
            except OSError as e:
                logger.error(f"Error updating {file_path}: {e}")
                result.error = str(e)
            else:
                if result.replacements:
                    logger.info(f"Updated {file_path}: {report.original_version} -> {latest.version}")
            results.append(result)

    return results
