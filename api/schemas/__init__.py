"""Evidence Integrity - API Schemas
Pydantic models for request/response validation.
"""

from .comparisons import (
    ComparisonCreate,
    ComparisonResponse,
    ComparisonSummaryResponse,
)
from .evidence import (
    CollectionResponse,
    EvidenceCollect,
    EvidenceResponse,
    EvidenceVerify,
    FingerprintResponse,
    VerificationHistoryResponse,
    VerificationLogResponse,
    VerificationResponse,
)


__all__ = [
    "CollectionResponse",
    "ComparisonCreate",
    "ComparisonResponse",
    "ComparisonSummaryResponse",
    "EvidenceCollect",
    "EvidenceResponse",
    "EvidenceVerify",
    "FingerprintResponse",
    "VerificationHistoryResponse",
    "VerificationLogResponse",
    "VerificationResponse",
]
