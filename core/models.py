"""Evidence Integrity - Core Data Models
Domain records for collected social-media evidence, their fingerprints,
the verification audit trail and multi-video comparisons.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class Platform(str, Enum):
    """Platforms evidence can be collected from."""

    TWITTER = "twitter"
    FACEBOOK = "facebook"
    YOUTUBE = "youtube"
    OTHER = "other"


class EvidenceType(str, Enum):
    """Kinds of externally-hosted content."""

    POST = "post"
    IMAGE = "image"
    VIDEO = "video"
    COMMENT = "comment"
    PROFILE = "profile"


class EvidenceStatus(str, Enum):
    """Integrity status of an evidence record."""

    COLLECTED = "collected"
    VERIFIED = "verified"
    TAMPERED = "tampered"
    FLAGGED = "flagged"
    ARCHIVED = "archived"


class HashType(str, Enum):
    """What a fingerprint covers. Only CONTENT is produced today."""

    CONTENT = "content"
    METADATA = "metadata"
    THUMBNAIL = "thumbnail"
    FRAME_SAMPLE = "frame_sample"
    FULL_FILE = "full_file"


# Fields covered by the content fingerprint, in canonical order
CANONICAL_FIELDS = ("platform", "evidence_type", "url", "case_id")


class EvidenceDraft(BaseModel):
    """Evidence as submitted for collection, before an id is assigned."""

    platform: Platform
    evidence_type: EvidenceType
    url: str
    case_id: str
    collected_by: str
    content: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class EvidenceRecord(BaseModel):
    """Stored evidence. The canonical quadruple never changes after collection."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    platform: Platform
    evidence_type: EvidenceType
    url: str
    case_id: str
    status: EvidenceStatus = EvidenceStatus.COLLECTED
    collected_by: str | None = None
    collected_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    content: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def quadruple(self) -> tuple[str, str, str, str]:
        return (self.platform.value, self.evidence_type.value, self.url, self.case_id)


class FingerprintRecord(BaseModel):
    """A digest of one evidence item, appended and never mutated."""

    model_config = ConfigDict(frozen=True)

    id: UUID | None = None
    evidence_id: UUID
    algorithm: str
    hash_type: HashType = HashType.CONTENT
    hash_value: str
    computed_at: datetime = Field(default_factory=datetime.utcnow)


class VerificationLogEntry(BaseModel):
    """One verification attempt. Append-only audit trail."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    evidence_id: UUID
    verification_type: str = "content_hash"
    original_hash: str
    current_hash: str
    is_valid: bool
    discrepancies: dict[str, Any] | None = None
    verified_by: str
    verified_at: datetime = Field(default_factory=datetime.utcnow)


class ComparisonRecord(BaseModel):
    """A stored multi-video comparison request."""

    model_config = ConfigDict(frozen=True)

    id: UUID | None = None
    comparison_name: str
    video_ids: list[str]
    similarity_scores: dict[str, Any] | None = None
    flagged_duplicates: list[str] = Field(default_factory=list)
    created_by: str
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CollectionResult(BaseModel):
    """Returned to the caller after evidence is collected."""

    evidence_id: UUID
    hash: str
    algorithm: str


class VerificationResult(BaseModel):
    """Outcome of a verification that ran to completion."""

    evidence_id: UUID
    is_valid: bool
    original_hash: str
    current_hash: str
    discrepancies: dict[str, Any] | None = None
    status: EvidenceStatus


class ComparisonSummary(BaseModel):
    """Presentation view of a comparison."""

    comparison_name: str
    created_by: str
    video_ids: list[str]
    unique_video_ids: list[str]
    same_video: bool
    flagged_duplicates: list[str] = Field(default_factory=list)
    compared_at: datetime


class ComparisonResult(BaseModel):
    """Returned to the caller after a comparison is recorded."""

    comparison_id: UUID
    result: ComparisonSummary
