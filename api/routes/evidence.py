"""Evidence Integrity - Evidence Routes
Collection, verification and the evidence audit trail.
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.auth import get_current_actor
from api.schemas.evidence import (
    CollectionResponse,
    EvidenceCollect,
    EvidenceResponse,
    EvidenceVerify,
    FingerprintResponse,
    VerificationHistoryResponse,
    VerificationLogResponse,
    VerificationResponse,
)
from core.database.repository import SQLAlchemyLedger, get_ledger
from core.database.session import get_db
from core.integrity import collect_evidence, verify_evidence


router = APIRouter(prefix="/evidence", tags=["Evidence"])


async def get_repo(db: AsyncSession = Depends(get_db)) -> SQLAlchemyLedger:
    return get_ledger(db)


@router.post("/collect", response_model=CollectionResponse, status_code=201)
async def collect(
    payload: EvidenceCollect,
    ledger: SQLAlchemyLedger = Depends(get_repo),
    actor: str = Depends(get_current_actor),
):
    """Collect evidence and fix its content fingerprint."""
    result = await collect_evidence(
        ledger,
        platform=payload.platform,
        evidence_type=payload.evidence_type,
        url=payload.url,
        case_id=payload.case_id,
        collector=actor,
        content=payload.content,
        metadata=payload.metadata,
    )
    return CollectionResponse(
        evidence_id=result.evidence_id,
        hash=result.hash,
        algorithm=result.algorithm,
    )


@router.post("/verify", response_model=VerificationResponse)
async def verify(
    payload: EvidenceVerify,
    ledger: SQLAlchemyLedger = Depends(get_repo),
    actor: str = Depends(get_current_actor),
):
    """Verify evidence against its collection-time fingerprint.

    A mismatch is reported with ``is_valid: false`` and a 200 status.
    """
    result = await verify_evidence(ledger, payload.evidence_id, actor)
    return VerificationResponse(**result.model_dump())


@router.get("/{evidence_id}", response_model=EvidenceResponse)
async def get_evidence(
    evidence_id: UUID,
    ledger: SQLAlchemyLedger = Depends(get_repo),
    actor: str = Depends(get_current_actor),
):
    """Get evidence by ID."""
    record = await ledger.get_evidence(evidence_id)
    return EvidenceResponse.model_validate(record)


@router.get("/{evidence_id}/fingerprints", response_model=list[FingerprintResponse])
async def list_fingerprints(
    evidence_id: UUID,
    ledger: SQLAlchemyLedger = Depends(get_repo),
    actor: str = Depends(get_current_actor),
):
    """List the fingerprints recorded for evidence."""
    await ledger.get_evidence(evidence_id)
    return [FingerprintResponse.model_validate(f) for f in await ledger.list_fingerprints(evidence_id)]


@router.get("/{evidence_id}/verifications", response_model=VerificationHistoryResponse)
async def list_verifications(
    evidence_id: UUID,
    ledger: SQLAlchemyLedger = Depends(get_repo),
    actor: str = Depends(get_current_actor),
):
    """Get the verification audit trail for evidence."""
    await ledger.get_evidence(evidence_id)
    entries = await ledger.list_verification_logs(evidence_id)
    return VerificationHistoryResponse(
        evidence_id=evidence_id,
        entries=[VerificationLogResponse.model_validate(e) for e in entries],
        total_entries=len(entries),
    )
