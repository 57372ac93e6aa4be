"""Evidence Integrity - Evidence Schemas"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from core.models import EvidenceStatus, EvidenceType, HashType, Platform


class EvidenceCollect(BaseModel):
    """Collection request. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    platform: Platform
    evidence_type: EvidenceType
    url: str = Field(..., min_length=1, max_length=4096)
    case_id: str = Field(..., min_length=1, max_length=100)
    content: str | None = None
    metadata: dict[str, Any] | None = None


class EvidenceVerify(BaseModel):
    """Verification request. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    evidence_id: UUID


class CollectionResponse(BaseModel):
    success: bool = True
    evidence_id: UUID
    hash: str
    algorithm: str


class VerificationResponse(BaseModel):
    evidence_id: UUID
    is_valid: bool
    original_hash: str
    current_hash: str
    discrepancies: dict[str, Any] | None = None
    status: EvidenceStatus


class EvidenceResponse(BaseModel):
    """Schema for evidence responses."""

    id: UUID
    platform: Platform
    evidence_type: EvidenceType
    url: str
    case_id: str
    status: EvidenceStatus
    collected_by: str | None = None
    collected_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    content: str | None = None
    metadata: dict[str, Any] | None = None

    class Config:
        from_attributes = True


class FingerprintResponse(BaseModel):
    id: UUID | None = None
    evidence_id: UUID
    algorithm: str
    hash_type: HashType
    hash_value: str
    computed_at: datetime

    class Config:
        from_attributes = True


class VerificationLogResponse(BaseModel):
    id: int | None = None
    evidence_id: UUID
    verification_type: str
    original_hash: str
    current_hash: str
    is_valid: bool
    discrepancies: dict[str, Any] | None = None
    verified_by: str
    verified_at: datetime

    class Config:
        from_attributes = True


class VerificationHistoryResponse(BaseModel):
    """Full verification audit trail of one evidence item."""

    evidence_id: UUID
    entries: list[VerificationLogResponse]
    total_entries: int
