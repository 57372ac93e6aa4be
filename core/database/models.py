"""
Evidence Integrity - Database Models
SQLAlchemy ORM tables for evidence, fingerprints, verification logs and
video comparisons. Supports PostgreSQL (production) and SQLite (testing).
"""
from datetime import datetime
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import (
    JSON, BigInteger, Boolean, Column, DateTime, Enum, ForeignKey, Index,
    Integer, String, Text, TypeDecorator, event, inspect,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.types import CHAR

from core.errors import ImmutableFieldError
from core.models import CANONICAL_FIELDS, EvidenceStatus, EvidenceType, HashType, Platform

Base = declarative_base()


class GUID(TypeDecorator):
    """Platform-independent GUID type.
    Uses PostgreSQL's UUID type when available, otherwise stores as CHAR(36).
    """
    impl = CHAR
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(PG_UUID(as_uuid=True))
        return dialect.type_descriptor(CHAR(36))

    def process_bind_param(self, value, dialect):
        if value is None or dialect.name == 'postgresql':
            return value
        return str(value)

    def process_result_value(self, value, dialect):
        if value is None or dialect.name == 'postgresql':
            return value
        return PyUUID(value)


class JSONType(TypeDecorator):
    """Platform-independent JSON type.
    Uses PostgreSQL's JSONB type when available, otherwise uses JSON.
    """
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            return dialect.type_descriptor(JSONB())
        return dialect.type_descriptor(JSON())


UUID = GUID

# SQLite only autoincrements INTEGER primary keys
AutoIncrementId = BigInteger().with_variant(Integer, "sqlite")


def _value_enum(enum_cls, name: str) -> Enum:
    """Store enum values ("youtube"), not member names ("YOUTUBE")."""
    return Enum(enum_cls, name=name, values_callable=lambda members: [m.value for m in members])


class Evidence(Base):
    """Collected reference to externally-hosted content."""
    __tablename__ = "evidence"

    id = Column(UUID(), primary_key=True, default=uuid4)

    # Canonicalized fields, immutable after collection
    platform = Column(_value_enum(Platform, "platform"), nullable=False)
    evidence_type = Column(_value_enum(EvidenceType, "evidence_type"), nullable=False)
    url = Column(Text, nullable=False)
    case_id = Column(String(100), nullable=False)

    # Descriptive, not covered by the fingerprint
    content = Column(Text)
    extra_data = Column("metadata", JSONType, default=dict)

    status = Column(_value_enum(EvidenceStatus, "evidence_status"), nullable=False,
                    default=EvidenceStatus.COLLECTED)
    collected_by = Column(String(255))

    collected_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    hashes = relationship("EvidenceHash", back_populates="evidence")
    verification_logs = relationship("VerificationLog", back_populates="evidence")

    __table_args__ = (
        Index('ix_evidence_case_status', 'case_id', 'status'),
        Index('ix_evidence_platform_created', 'platform', 'created_at'),
    )


@event.listens_for(Evidence, "before_update")
def _guard_canonical_fields(mapper, connection, target):
    state = inspect(target)
    changed = [name for name in CANONICAL_FIELDS if state.attrs[name].history.has_changes()]
    if changed:
        raise ImmutableFieldError(
            "Canonicalized evidence fields cannot be modified after collection",
            details={"evidence_id": str(target.id), "fields": changed},
        )


class EvidenceHash(Base):
    """Fingerprint of an evidence item. Never mutated."""
    __tablename__ = "evidence_hashes"

    id = Column(UUID(), primary_key=True, default=uuid4)
    evidence_id = Column(UUID(), ForeignKey("evidence.id"), nullable=False)

    hash_algorithm = Column(String(32), nullable=False)
    hash_type = Column(_value_enum(HashType, "hash_type"), nullable=False, default=HashType.CONTENT)
    hash_value = Column(String(128), nullable=False)
    computed_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    evidence = relationship("Evidence", back_populates="hashes")

    __table_args__ = (
        Index('ix_hashes_evidence_type', 'evidence_id', 'hash_type'),
        Index('ix_hashes_value', 'hash_value'),
    )


class VerificationLog(Base):
    """Append-only verification audit trail."""
    __tablename__ = "verification_logs"

    id = Column(AutoIncrementId, primary_key=True, autoincrement=True)
    evidence_id = Column(UUID(), ForeignKey("evidence.id"), nullable=False)

    verification_type = Column(String(50), nullable=False, default="content_hash")
    original_hash = Column(String(128), nullable=False)
    current_hash = Column(String(128), nullable=False)
    is_valid = Column(Boolean, nullable=False)
    discrepancies = Column(JSONType)

    verified_by = Column(String(255), nullable=False)
    verified_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    evidence = relationship("Evidence", back_populates="verification_logs")

    __table_args__ = (
        Index('ix_verification_evidence_time', 'evidence_id', 'verified_at'),
    )


class YouTubeComparison(Base):
    """Recorded multi-video comparison."""
    __tablename__ = "youtube_comparisons"

    id = Column(UUID(), primary_key=True, default=uuid4)
    comparison_name = Column(String(500), nullable=False)
    video_ids = Column(JSONType, nullable=False)

    similarity_scores = Column(JSONType)
    flagged_duplicates = Column(JSONType, default=list)

    created_by = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        Index('ix_comparisons_creator_created', 'created_by', 'created_at'),
    )
