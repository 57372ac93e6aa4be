"""Evidence Integrity - Evidence Ledger Interface
Persistence operations the integrity core consumes. Implementations are
constructed per request and passed in explicitly.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from core.models import (
    ComparisonRecord,
    EvidenceDraft,
    EvidenceRecord,
    EvidenceStatus,
    FingerprintRecord,
    VerificationLogEntry,
)


class EvidenceLedger(ABC):
    """Append-only relationship between evidence and its fingerprint history.

    Every method raises ``PersistenceError`` when the backing store fails.
    """

    @abstractmethod
    async def insert_evidence(self, draft: EvidenceDraft) -> EvidenceRecord:
        """Store new evidence with status ``collected`` and assign its id."""

    @abstractmethod
    async def insert_fingerprint(self, record: FingerprintRecord) -> FingerprintRecord:
        """Store a fingerprint. Either the row is written in full or not at all."""

    @abstractmethod
    async def get_evidence(self, evidence_id: UUID) -> EvidenceRecord:
        """Load evidence; ``NotFoundError`` if absent."""

    @abstractmethod
    async def get_content_fingerprint(self, evidence_id: UUID) -> FingerprintRecord:
        """Earliest ``content`` fingerprint; ``NotFoundError`` if none exists."""

    @abstractmethod
    async def insert_verification_log(self, entry: VerificationLogEntry) -> VerificationLogEntry:
        """Append one verification attempt to the audit trail."""

    @abstractmethod
    async def update_evidence_status(
        self, evidence_id: UUID, status: EvidenceStatus
    ) -> EvidenceRecord:
        """Set the integrity status; ``NotFoundError`` if the evidence is absent."""

    @abstractmethod
    async def insert_comparison(self, record: ComparisonRecord) -> ComparisonRecord:
        """Store a comparison and assign its id."""

    @abstractmethod
    async def get_comparison(self, comparison_id: UUID) -> ComparisonRecord:
        """Load a comparison; ``NotFoundError`` if absent."""

    @abstractmethod
    async def list_fingerprints(self, evidence_id: UUID) -> list[FingerprintRecord]:
        """All fingerprints of an evidence item, oldest first."""

    @abstractmethod
    async def list_verification_logs(self, evidence_id: UUID) -> list[VerificationLogEntry]:
        """All verification attempts of an evidence item, oldest first."""
