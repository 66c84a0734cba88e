"""
Scanning files and directories for embedded OCP documentation URLs.
"""

import os
import re
from pathlib import Path
from typing import Dict, List, Union

from ocp_doc_checker.common import logger
from ocp_doc_checker.config import SUPPORTED_EXTENSIONS
from ocp_doc_checker.models import URLLocation


URL_PATTERN = re.compile(
    r'https://docs\.redhat\.com/[^\s()\[\]"\'<>]*openshift_container_platform/\d+\.\d+/[^\s()\[\]"\'<>]*'
)

# Sentence punctuation that commonly trails a URL in prose
TRAILING_PUNCTUATION = ".,;:!?"

# A URL ends where extract_urls would stop reading it
URL_END = r'(?=[.,;:!?]*(?:[\s()\[\]"\'<>]|$))'

# Undecodable bytes survive a read/write round trip unchanged
FILE_ENCODING = "utf-8"
FILE_ERRORS = "surrogateescape"


def extract_urls(text: str) -> List[str]:
    """Extract OCP documentation URLs from text, in order of appearance."""
    return [m.rstrip(TRAILING_PUNCTUATION) for m in URL_PATTERN.findall(text)]


def exact_url_pattern(url: str) -> re.Pattern:
    """
    Match url only where it is a whole URL, not the start of a longer one.

    `.../index` does not match inside `.../index#section` or `.../index/next`.
    """
    return re.compile(re.escape(url) + URL_END)


def scan_file(path: Union[str, Path]) -> List[str]:
    """Return every OCP documentation URL found in a file."""
    with open(path, encoding=FILE_ENCODING, errors=FILE_ERRORS) as f:
        return extract_urls(f.read())


def is_supported_file(path: Union[str, Path]) -> bool:
    """Check if a file has an extension worth scanning."""
    return Path(path).suffix in SUPPORTED_EXTENSIONS


def scan_path(path: Union[str, Path]) -> List[URLLocation]:
    """
    Collect documentation URLs and the files they occur in.

    A directory is walked recursively and only files with a supported
    extension are read; a single file is scanned whatever its extension.

    Args:
        path: File or directory to scan

    Returns:
        One URLLocation per unique URL, sorted by URL

    Raises:
        FileNotFoundError: If the path does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No such file or directory: {path}")

    url_to_files: Dict[str, List[str]] = {}

    if path.is_dir():
        files = []
        for root, dirs, names in os.walk(path):
            dirs.sort()
            for name in sorted(names):
                if is_supported_file(name):
                    files.append(Path(root) / name)
    else:
        files = [path]

    for file_path in files:
        try:
            urls = scan_file(file_path)
        except OSError as e:
            logger.warning(f"Error scanning {file_path}: {e}")
            continue
        for url in urls:
            url_to_files.setdefault(url, []).append(str(file_path))

    return [URLLocation(url=url, files=files) for url, files in sorted(url_to_files.items())]
