"""
Data models for the OCP documentation checker using Pydantic for validation.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DocumentReference(BaseModel):
    """A parsed, versioned OCP documentation URL.

    Only the version segment differs between sibling URLs of the same
    document, so every other field is held fixed when re-targeting.
    """
    model_config = ConfigDict(frozen=True)

    base_url: str
    version: str
    major_minor: Tuple[int, int]
    format: str  # e.g. "html-single" or "html"
    document: str  # e.g. "disconnected_environments"
    page: str  # e.g. "index" for single-page format
    anchor: str = ""
    original_url: str = ""
    path_prefix: str = "/en/documentation/openshift_container_platform"

    @property
    def has_anchor(self) -> bool:
        """Check if the reference points to an in-page anchor."""
        return self.anchor != ""

    def build_url(self, version: str) -> str:
        """Build the sibling URL for another version."""
        url = f"{self.base_url}{self.path_prefix}/{version}/{self.format}/{self.document}/{self.page}"
        if self.anchor:
            url += "#" + self.anchor
        return url


class VersionProbeResult(BaseModel):
    """Result of probing one candidate version."""
    version: str
    url: str
    exists: bool = False
    has_anchor: bool = False
    anchor_exists: bool = False  # ignored when has_anchor is False
    error: Optional[str] = None
    checked_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_valid(self) -> bool:
        """A candidate is valid when the page exists and its anchor, if any, does too."""
        return self.exists and (not self.has_anchor or self.anchor_exists)

    @property
    def anchor_missing(self) -> bool:
        """Page exists but the requested anchor does not."""
        return self.exists and self.has_anchor and not self.anchor_exists

    @property
    def status_label(self) -> str:
        """Human-readable probe status."""
        if not self.exists:
            return "Not found"
        if not self.has_anchor:
            return "Found"
        if self.anchor_exists:
            return "Found (page + anchor)"
        return "Page found, anchor missing"


class CheckReport(BaseModel):
    """Aggregate outcome of checking one documentation URL."""
    original_url: str
    original_version: str
    latest_version: str
    is_outdated: bool = False
    newer_versions: List[VersionProbeResult] = Field(default_factory=list)
    all_results: List[VersionProbeResult] = Field(default_factory=list)
    cancelled: bool = False

    @classmethod
    def from_results(
        cls,
        reference: DocumentReference,
        results: List[VersionProbeResult],
        cancelled: bool = False,
    ) -> "CheckReport":
        """Build a report from probe results in ascending version order."""
        valid = [r for r in results if r.is_valid]
        return cls(
            original_url=reference.original_url,
            original_version=reference.version,
            latest_version=valid[-1].version if valid else reference.version,
            is_outdated=bool(valid),
            newer_versions=valid,
            all_results=list(results),
            cancelled=cancelled,
        )

    @property
    def latest(self) -> Optional[VersionProbeResult]:
        """Get the newest valid version, if any."""
        return self.newer_versions[-1] if self.newer_versions else None

    @property
    def missing_anchors(self) -> List[VersionProbeResult]:
        """Probed versions where the page exists but the anchor was not found."""
        return [r for r in self.all_results if r.anchor_missing]

    @property
    def errors(self) -> List[VersionProbeResult]:
        """Probed versions that ended with a transport or parse error."""
        return [r for r in self.all_results if r.error]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON report shape."""
        return {
            "original_url": self.original_url,
            "original_version": self.original_version,
            "latest_version": self.latest_version,
            "is_outdated": self.is_outdated,
            "newer_versions": [
                {"version": r.version, "url": r.url} for r in self.newer_versions
            ],
        }


class BatchReport(BaseModel):
    """Reports for a batch of URLs checked together."""
    results: List[CheckReport] = Field(default_factory=list)
    errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def total_count(self) -> int:
        return len(self.results)

    @property
    def outdated_count(self) -> int:
        return sum(1 for r in self.results if r.is_outdated)

    @property
    def uptodate_count(self) -> int:
        return self.total_count - self.outdated_count

    @property
    def has_outdated(self) -> bool:
        return self.outdated_count > 0

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the batch JSON report shape."""
        return {
            "total_count": self.total_count,
            "uptodate_count": self.uptodate_count,
            "outdated_count": self.outdated_count,
            "results": [r.to_dict() for r in self.results],
        }


class URLLocation(BaseModel):
    """A documentation URL and the files it appears in."""
    url: str
    files: List[str] = Field(default_factory=list)

    @field_validator("files")
    @classmethod
    def dedupe_files(cls, v: List[str]) -> List[str]:
        """Keep each file once, sorted."""
        return sorted(set(v))


class FixResult(BaseModel):
    """Outcome of rewriting one URL in one file."""
    path: str
    old_url: str
    new_url: str
    old_version: str
    new_version: str
    replacements: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None and self.replacements > 0
