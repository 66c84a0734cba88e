"""
Configuration constants and known version list for the OCP documentation checker.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional
import os


class Comparator(str, Enum):
    """Version ordering schemes."""
    TUPLE = "tuple"
    FLOAT = "float"


# Known OCP releases probed by default (can be overridden per checker)
DEFAULT_KNOWN_VERSIONS: List[str] = [
    "4.10", "4.11", "4.12", "4.13", "4.14",
    "4.15", "4.16", "4.17", "4.18", "4.19",
    "4.20",
]

DOC_HOST = "docs.redhat.com"
DOC_PATH_PREFIX = "/en/documentation/openshift_container_platform"

# Files scanned for embedded documentation URLs
SUPPORTED_EXTENSIONS = (".md", ".markdown", ".txt", ".adoc")


@dataclass
class CheckerConfig:
    """Settings for a checker instance."""

    # Documentation site
    doc_host: str = DOC_HOST
    doc_path_prefix: str = DOC_PATH_PREFIX
    known_versions: List[str] = field(default_factory=lambda: list(DEFAULT_KNOWN_VERSIONS))

    # Network settings
    timeout: int = 30
    max_attempts: int = 3
    backoff_step: float = 2.0  # seconds, multiplied by attempt number
    max_workers: int = 5
    user_agent: str = "ocp-doc-checker/1.0"

    comparator: Comparator = Comparator.TUPLE

    def __post_init__(self):
        """Normalize values coming from the environment or CLI."""
        self.known_versions = [v.strip() for v in self.known_versions if v and v.strip()]
        self.comparator = Comparator(self.comparator)
        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Create configuration from environment variables."""
        versions = os.getenv("OCP_DOC_CHECKER_VERSIONS")
        return cls(
            known_versions=split_versions(versions) if versions else list(DEFAULT_KNOWN_VERSIONS),
            timeout=int(os.getenv("OCP_DOC_CHECKER_TIMEOUT", "30")),
            max_attempts=int(os.getenv("OCP_DOC_CHECKER_RETRIES", "3")),
            max_workers=int(os.getenv("OCP_DOC_CHECKER_WORKERS", "5")),
            comparator=Comparator(os.getenv("OCP_DOC_CHECKER_COMPARATOR", "tuple")),
        )

    def with_versions(self, versions: Optional[List[str]]) -> "CheckerConfig":
        """Return a copy of this config probing a different version list."""
        if not versions:
            return self
        return CheckerConfig(
            doc_host=self.doc_host,
            doc_path_prefix=self.doc_path_prefix,
            known_versions=list(versions),
            timeout=self.timeout,
            max_attempts=self.max_attempts,
            backoff_step=self.backoff_step,
            max_workers=self.max_workers,
            user_agent=self.user_agent,
            comparator=self.comparator,
        )


def split_versions(value: str) -> List[str]:
    """Split a comma-separated version list like '4.18, 4.19'."""
    return [v.strip() for v in value.split(",") if v.strip()]
