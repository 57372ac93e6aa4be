"""Evidence Integrity - Integrity Core
Canonicalization, fingerprinting, verification and comparison.
"""

from .canonical import CanonicalForm, canonicalize, canonicalize_record
from .collection import build_draft, collect_evidence
from .comparison import compare_references, extract_video_id, normalize_references
from .fingerprint import ALGORITHMS, FingerprintEngine, digest, register_algorithm
from .ledger import EvidenceLedger
from .verification import TRANSITIONS, VerificationStateMachine, next_status, verify_evidence


__all__ = [
    "ALGORITHMS",
    "CanonicalForm",
    "EvidenceLedger",
    "FingerprintEngine",
    "TRANSITIONS",
    "VerificationStateMachine",
    "build_draft",
    "canonicalize",
    "canonicalize_record",
    "collect_evidence",
    "compare_references",
    "digest",
    "extract_video_id",
    "next_status",
    "normalize_references",
    "register_algorithm",
    "verify_evidence",
]
