"""
Evidence Integrity - Database Repository
SQLAlchemy implementation of the evidence ledger.
"""
from collections.abc import Awaitable, Callable
from typing import TypeVar
from uuid import UUID

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import NotFoundError, PersistenceError
from core.integrity.ledger import EvidenceLedger
from core.models import (
    ComparisonRecord,
    EvidenceDraft,
    EvidenceRecord,
    EvidenceStatus,
    FingerprintRecord,
    HashType,
    VerificationLogEntry,
)

from .models import Evidence, EvidenceHash, VerificationLog, YouTubeComparison

T = TypeVar('T')


def evidence_to_record(row: Evidence) -> EvidenceRecord:
    return EvidenceRecord(
        id=row.id,
        platform=row.platform,
        evidence_type=row.evidence_type,
        url=row.url,
        case_id=row.case_id,
        status=row.status,
        collected_by=row.collected_by,
        collected_at=row.collected_at,
        created_at=row.created_at,
        updated_at=row.updated_at,
        content=row.content,
        metadata=row.extra_data or {},
    )


def hash_to_record(row: EvidenceHash) -> FingerprintRecord:
    return FingerprintRecord(
        id=row.id,
        evidence_id=row.evidence_id,
        algorithm=row.hash_algorithm,
        hash_type=row.hash_type,
        hash_value=row.hash_value,
        computed_at=row.computed_at,
    )


def log_to_entry(row: VerificationLog) -> VerificationLogEntry:
    return VerificationLogEntry(
        id=row.id,
        evidence_id=row.evidence_id,
        verification_type=row.verification_type,
        original_hash=row.original_hash,
        current_hash=row.current_hash,
        is_valid=row.is_valid,
        discrepancies=row.discrepancies,
        verified_by=row.verified_by,
        verified_at=row.verified_at,
    )


def comparison_to_record(row: YouTubeComparison) -> ComparisonRecord:
    return ComparisonRecord(
        id=row.id,
        comparison_name=row.comparison_name,
        video_ids=list(row.video_ids or []),
        similarity_scores=row.similarity_scores,
        flagged_duplicates=list(row.flagged_duplicates or []),
        created_by=row.created_by,
        created_at=row.created_at,
    )


class SQLAlchemyLedger(EvidenceLedger):
    """Evidence ledger over one async session. Each write commits on its own."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _guard(self, operation: str, func: Callable[[], Awaitable[T]]) -> T:
        try:
            return await func()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(f"Ledger {operation} failed: {e}")
            raise PersistenceError(
                f"Ledger {operation} failed",
                details={"operation": operation, "error": type(e).__name__},
            ) from e

    async def _add(self, row):
        self.db.add(row)
        await self.db.commit()
        await self.db.refresh(row)
        return row

    async def _get_evidence_row(self, evidence_id: UUID) -> Evidence:
        result = await self.db.execute(
            select(Evidence)
            .where(Evidence.id == evidence_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError("Evidence not found", details={"evidence_id": str(evidence_id)})
        return row

    async def insert_evidence(self, draft: EvidenceDraft) -> EvidenceRecord:
        row = Evidence(
            platform=draft.platform,
            evidence_type=draft.evidence_type,
            url=draft.url,
            case_id=draft.case_id,
            content=draft.content,
            extra_data=draft.metadata,
            collected_by=draft.collected_by,
            status=EvidenceStatus.COLLECTED,
        )
        row = await self._guard("insert_evidence", lambda: self._add(row))
        return evidence_to_record(row)

    async def insert_fingerprint(self, record: FingerprintRecord) -> FingerprintRecord:
        row = EvidenceHash(
            evidence_id=record.evidence_id,
            hash_algorithm=record.algorithm,
            hash_type=record.hash_type,
            hash_value=record.hash_value,
            computed_at=record.computed_at,
        )
        if record.id is not None:
            row.id = record.id
        row = await self._guard("insert_fingerprint", lambda: self._add(row))
        return hash_to_record(row)

    async def get_evidence(self, evidence_id: UUID) -> EvidenceRecord:
        row = await self._guard("get_evidence", lambda: self._get_evidence_row(evidence_id))
        return evidence_to_record(row)

    async def get_content_fingerprint(self, evidence_id: UUID) -> FingerprintRecord:
        async def load():
            result = await self.db.execute(
                select(EvidenceHash)
                .where(
                    EvidenceHash.evidence_id == evidence_id,
                    EvidenceHash.hash_type == HashType.CONTENT,
                )
                .order_by(EvidenceHash.computed_at)
                .limit(1)
            )
            return result.scalar_one_or_none()

        row = await self._guard("get_content_fingerprint", load)
        if row is None:
            raise NotFoundError(
                "Content fingerprint not found", details={"evidence_id": str(evidence_id)}
            )
        return hash_to_record(row)

    async def insert_verification_log(self, entry: VerificationLogEntry) -> VerificationLogEntry:
        row = VerificationLog(
            evidence_id=entry.evidence_id,
            verification_type=entry.verification_type,
            original_hash=entry.original_hash,
            current_hash=entry.current_hash,
            is_valid=entry.is_valid,
            discrepancies=entry.discrepancies,
            verified_by=entry.verified_by,
            verified_at=entry.verified_at,
        )
        row = await self._guard("insert_verification_log", lambda: self._add(row))
        return log_to_entry(row)

    async def update_evidence_status(
        self, evidence_id: UUID, status: EvidenceStatus
    ) -> EvidenceRecord:
        async def update():
            row = await self._get_evidence_row(evidence_id)
            row.status = status
            await self.db.commit()
            await self.db.refresh(row)
            return row

        row = await self._guard("update_evidence_status", update)
        return evidence_to_record(row)

    async def insert_comparison(self, record: ComparisonRecord) -> ComparisonRecord:
        row = YouTubeComparison(
            comparison_name=record.comparison_name,
            video_ids=list(record.video_ids),
            similarity_scores=record.similarity_scores,
            flagged_duplicates=list(record.flagged_duplicates),
            created_by=record.created_by,
            created_at=record.created_at,
        )
        row = await self._guard("insert_comparison", lambda: self._add(row))
        return comparison_to_record(row)

    async def get_comparison(self, comparison_id: UUID) -> ComparisonRecord:
        async def load():
            result = await self.db.execute(
                select(YouTubeComparison).where(YouTubeComparison.id == comparison_id)
            )
            return result.scalar_one_or_none()

        row = await self._guard("get_comparison", load)
        if row is None:
            raise NotFoundError("Comparison not found", details={"comparison_id": str(comparison_id)})
        return comparison_to_record(row)

    async def list_fingerprints(self, evidence_id: UUID) -> list[FingerprintRecord]:
        async def load():
            result = await self.db.execute(
                select(EvidenceHash)
                .where(EvidenceHash.evidence_id == evidence_id)
                .order_by(EvidenceHash.computed_at)
            )
            return result.scalars().all()

        return [hash_to_record(row) for row in await self._guard("list_fingerprints", load)]

    async def list_verification_logs(self, evidence_id: UUID) -> list[VerificationLogEntry]:
        async def load():
            result = await self.db.execute(
                select(VerificationLog)
                .where(VerificationLog.evidence_id == evidence_id)
                .order_by(VerificationLog.verified_at, VerificationLog.id)
            )
            return result.scalars().all()

        return [log_to_entry(row) for row in await self._guard("list_verification_logs", load)]


# Factory function for dependency injection
def get_ledger(db: AsyncSession) -> SQLAlchemyLedger:
    """Get ledger instance bound to ``db``."""
    return SQLAlchemyLedger(db)
