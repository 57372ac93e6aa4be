"""Evidence Integrity - In-memory ledger for tests."""

from datetime import datetime
from uuid import UUID, uuid4

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


class InMemoryLedger(EvidenceLedger):
    """Dict-backed ledger. ``fail_on`` names operations that raise PersistenceError."""

    def __init__(self, fail_on: set[str] | None = None):
        self.evidence: dict[UUID, EvidenceRecord] = {}
        self.fingerprints: list[FingerprintRecord] = []
        self.logs: list[VerificationLogEntry] = []
        self.comparisons: dict[UUID, ComparisonRecord] = {}
        self.fail_on = fail_on or set()
        self.calls: list[str] = []

    def _call(self, operation: str):
        self.calls.append(operation)
        if operation in self.fail_on:
            raise PersistenceError(f"Ledger {operation} failed", details={"operation": operation})

    def tamper(self, evidence_id: UUID, **fields):
        """Change stored fields out-of-band, bypassing the ledger API."""
        self.evidence[evidence_id] = self.evidence[evidence_id].model_copy(update=fields)

    def drop_fingerprints(self, evidence_id: UUID):
        self.fingerprints = [f for f in self.fingerprints if f.evidence_id != evidence_id]

    async def insert_evidence(self, draft: EvidenceDraft) -> EvidenceRecord:
        self._call("insert_evidence")
        now = datetime.utcnow()
        record = EvidenceRecord(
            id=uuid4(),
            platform=draft.platform,
            evidence_type=draft.evidence_type,
            url=draft.url,
            case_id=draft.case_id,
            status=EvidenceStatus.COLLECTED,
            collected_by=draft.collected_by,
            collected_at=now,
            created_at=now,
            updated_at=now,
            content=draft.content,
            metadata=draft.metadata,
        )
        self.evidence[record.id] = record
        return record

    async def insert_fingerprint(self, record: FingerprintRecord) -> FingerprintRecord:
        self._call("insert_fingerprint")
        stored = record.model_copy(update={"id": record.id or uuid4()})
        self.fingerprints.append(stored)
        return stored

    async def get_evidence(self, evidence_id: UUID) -> EvidenceRecord:
        self._call("get_evidence")
        if evidence_id not in self.evidence:
            raise NotFoundError("Evidence not found", details={"evidence_id": str(evidence_id)})
        return self.evidence[evidence_id]

    async def get_content_fingerprint(self, evidence_id: UUID) -> FingerprintRecord:
        self._call("get_content_fingerprint")
        for record in self.fingerprints:
            if record.evidence_id == evidence_id and record.hash_type == HashType.CONTENT:
                return record
        raise NotFoundError("Content fingerprint not found")

    async def insert_verification_log(self, entry: VerificationLogEntry) -> VerificationLogEntry:
        self._call("insert_verification_log")
        stored = entry.model_copy(update={"id": len(self.logs) + 1})
        self.logs.append(stored)
        return stored

    async def update_evidence_status(self, evidence_id: UUID, status: EvidenceStatus) -> EvidenceRecord:
        self._call("update_evidence_status")
        record = await self.get_evidence(evidence_id)
        updated = record.model_copy(update={"status": status, "updated_at": datetime.utcnow()})
        self.evidence[evidence_id] = updated
        return updated

    async def insert_comparison(self, record: ComparisonRecord) -> ComparisonRecord:
        self._call("insert_comparison")
        stored = record.model_copy(update={"id": uuid4()})
        self.comparisons[stored.id] = stored
        return stored

    async def get_comparison(self, comparison_id: UUID) -> ComparisonRecord:
        self._call("get_comparison")
        if comparison_id not in self.comparisons:
            raise NotFoundError("Comparison not found")
        return self.comparisons[comparison_id]

    async def list_fingerprints(self, evidence_id: UUID) -> list[FingerprintRecord]:
        return [f for f in self.fingerprints if f.evidence_id == evidence_id]

    async def list_verification_logs(self, evidence_id: UUID) -> list[VerificationLogEntry]:
        return [e for e in self.logs if e.evidence_id == evidence_id]
