"""Evidence Integrity - Collection
Fixes the content fingerprint of a new evidence item at collection time.
"""

from typing import Any

from core.errors import ValidationError
from core.integrity.canonical import canonicalize
from core.integrity.fingerprint import FingerprintEngine
from core.integrity.ledger import EvidenceLedger
from core.logging import get_logger
from core.models import CollectionResult, EvidenceDraft, EvidenceType, HashType, Platform


def _require(name: str, value) -> str:
    if value is None or value == "":
        raise ValidationError(f"Missing required field: {name}", details={"field": name})
    if not isinstance(value, str):
        raise ValidationError(f"Field must be a string: {name}", details={"field": name})
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationError(
            f"Field is not valid Unicode text: {name}", details={"field": name}
        ) from None
    return value


def _member(enum_cls, name: str, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(_require(name, value))
    except ValueError:
        raise ValidationError(
            f"Unrecognized {name}: {value}",
            details={"field": name, "allowed": [m.value for m in enum_cls]},
        ) from None


def build_draft(
    platform,
    evidence_type,
    url,
    case_id,
    collector: str,
    content: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> EvidenceDraft:
    """Validate collection input and build the draft to be stored."""
    return EvidenceDraft(
        platform=_member(Platform, "platform", platform),
        evidence_type=_member(EvidenceType, "evidence_type", evidence_type),
        url=_require("url", url),
        case_id=_require("case_id", case_id),
        collected_by=_require("collected_by", collector),
        content=content,
        metadata=metadata or {},
    )


async def collect_evidence(
    ledger: EvidenceLedger,
    platform,
    evidence_type,
    url,
    case_id,
    collector: str,
    content: str | None = None,
    metadata: dict[str, Any] | None = None,
    engine: FingerprintEngine | None = None,
) -> CollectionResult:
    """Store evidence and its content fingerprint.

    Returns the assigned evidence id and the hex digest. Raises
    ``ValidationError`` for bad input and ``PersistenceError`` if the
    ledger write fails.
    """
    logger = get_logger()
    engine = engine or FingerprintEngine()
    draft = build_draft(platform, evidence_type, url, case_id, collector, content, metadata)

    canonical = canonicalize(draft.platform, draft.evidence_type, draft.url, draft.case_id)
    content_hash = engine.hash_canonical(canonical)

    with logger.timer("integrity.collect"):
        evidence = await ledger.insert_evidence(draft)
        fingerprint = await ledger.insert_fingerprint(
            engine.fingerprint(canonical, evidence.id, HashType.CONTENT)
        )

    logger.audit(
        "evidence_collected",
        "evidence",
        str(evidence.id),
        actor=collector,
        platform=draft.platform.value,
        case_id=draft.case_id,
        algorithm=fingerprint.algorithm,
        hash=content_hash,
    )

    return CollectionResult(
        evidence_id=evidence.id,
        hash=fingerprint.hash_value,
        algorithm=fingerprint.algorithm,
    )
