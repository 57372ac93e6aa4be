"""Evidence Integrity - Verification State Machine
Re-derives an evidence item's fingerprint, compares it with the baseline
captured at collection, records the attempt and moves the integrity status.

Status graph driven here:

    collected -> verified | tampered
    verified  -> verified | tampered
    tampered  -> verified | tampered

``flagged`` and ``archived`` are set by manual review. Verification still
runs and is logged against them, but their status is left untouched.
"""

from typing import Any
from uuid import UUID

from core.config import integrity_settings
from core.errors import (
    MissingBaselineError,
    NotFoundError,
    UnsupportedAlgorithmError,
    UnusableBaselineError,
)
from core.integrity.canonical import canonicalize_record
from core.integrity.fingerprint import FingerprintEngine
from core.integrity.ledger import EvidenceLedger
from core.logging import get_logger
from core.models import EvidenceStatus, VerificationLogEntry, VerificationResult


TRANSITIONS: dict[EvidenceStatus, frozenset[EvidenceStatus]] = {
    EvidenceStatus.COLLECTED: frozenset({EvidenceStatus.VERIFIED, EvidenceStatus.TAMPERED}),
    EvidenceStatus.VERIFIED: frozenset({EvidenceStatus.VERIFIED, EvidenceStatus.TAMPERED}),
    EvidenceStatus.TAMPERED: frozenset({EvidenceStatus.VERIFIED, EvidenceStatus.TAMPERED}),
    EvidenceStatus.FLAGGED: frozenset(),
    EvidenceStatus.ARCHIVED: frozenset(),
}


def next_status(current: EvidenceStatus, is_valid: bool) -> EvidenceStatus | None:
    """Status after a verification, or None when ``current`` is externally managed."""
    target = EvidenceStatus.VERIFIED if is_valid else EvidenceStatus.TAMPERED
    if target in TRANSITIONS[current]:
        return target
    return None


def describe_mismatch(algorithm: str, original_hash: str, current_hash: str) -> dict[str, Any]:
    return {
        "hash": "Hash mismatch",
        "algorithm": algorithm,
        "expected": original_hash,
        "actual": current_hash,
    }


class VerificationStateMachine:
    """Runs verifications against one ledger."""

    def __init__(self, ledger: EvidenceLedger, verification_type: str | None = None):
        self.ledger = ledger
        self.verification_type = verification_type or integrity_settings.verification_type

    async def verify(self, evidence_id: UUID, verifier: str) -> VerificationResult:
        """Verify one evidence item.

        A mismatch is a normal result with ``is_valid`` false. Raises
        ``NotFoundError`` when the evidence is absent and
        ``MissingBaselineError`` when it was never fingerprinted or its
        baseline algorithm is no longer registered.
        """
        logger = get_logger()

        evidence = await self.ledger.get_evidence(evidence_id)
        canonical = canonicalize_record(evidence)

        try:
            baseline = await self.ledger.get_content_fingerprint(evidence_id)
        except NotFoundError:
            raise MissingBaselineError(
                "Original hash not found",
                details={"evidence_id": str(evidence_id)},
            ) from None

        # Recompute with the algorithm the baseline was produced by
        try:
            engine = FingerprintEngine.for_algorithm(baseline.algorithm)
        except UnsupportedAlgorithmError as e:
            raise UnusableBaselineError(
                "Original hash algorithm not supported",
                details={"evidence_id": str(evidence_id), **e.details},
            ) from e
        current_hash = engine.hash_canonical(canonical)
        original_hash = baseline.hash_value

        is_valid = original_hash == current_hash
        discrepancies = (
            None if is_valid else describe_mismatch(baseline.algorithm, original_hash, current_hash)
        )

        await self.ledger.insert_verification_log(
            VerificationLogEntry(
                evidence_id=evidence_id,
                verification_type=self.verification_type,
                original_hash=original_hash,
                current_hash=current_hash,
                is_valid=is_valid,
                discrepancies=discrepancies,
                verified_by=verifier,
            )
        )

        status = evidence.status
        target = next_status(evidence.status, is_valid)
        if target is not None:
            updated = await self.ledger.update_evidence_status(evidence_id, target)
            status = updated.status

        logger.audit(
            "evidence_verified",
            "evidence",
            str(evidence_id),
            actor=verifier,
            is_valid=is_valid,
            previous_status=evidence.status.value,
            status=status.value,
        )
        if not is_valid:
            logger.warning(
                "Evidence fingerprint mismatch",
                evidence_id=str(evidence_id),
                expected=original_hash,
                actual=current_hash,
            )

        return VerificationResult(
            evidence_id=evidence_id,
            is_valid=is_valid,
            original_hash=original_hash,
            current_hash=current_hash,
            discrepancies=discrepancies,
            status=status,
        )


async def verify_evidence(ledger: EvidenceLedger, evidence_id: UUID, verifier: str) -> VerificationResult:
    """Verify ``evidence_id`` against ``ledger``."""
    return await VerificationStateMachine(ledger).verify(evidence_id, verifier)
