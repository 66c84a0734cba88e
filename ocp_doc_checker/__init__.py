"""
ocp-doc-checker - Detect outdated OpenShift Container Platform documentation links.

This package provides tools for:
- Parsing versioned docs.redhat.com OCP documentation URLs
- Probing newer releases for the same page and anchor
- Reporting the newest valid version of each link
- Rewriting outdated links found in documentation files
"""

__version__ = "1.0.0"
__author__ = "OCP Doc Checker Team"

from ocp_doc_checker.config import CheckerConfig, DEFAULT_KNOWN_VERSIONS
from ocp_doc_checker.models import (
    BatchReport,
    CheckReport,
    DocumentReference,
    VersionProbeResult,
)
from ocp_doc_checker.parser import (
    DocURLError,
    MalformedPath,
    NotTargetSite,
    build_url,
    parse_doc_url,
)
from ocp_doc_checker.versions import candidate_versions
from ocp_doc_checker.prober import Prober
from ocp_doc_checker.checker import Checker

__all__ = [
    "__version__",
    "CheckerConfig",
    "DEFAULT_KNOWN_VERSIONS",
    "BatchReport",
    "CheckReport",
    "DocumentReference",
    "VersionProbeResult",
    "DocURLError",
    "MalformedPath",
    "NotTargetSite",
    "build_url",
    "parse_doc_url",
    "candidate_versions",
    "Prober",
    "Checker",
]
