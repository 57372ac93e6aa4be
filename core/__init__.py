"""Evidence Integrity Core Module"""

from .config import Config
from .errors import (
    InsufficientInputError,
    IntegrityError,
    MissingBaselineError,
    NotFoundError,
    PersistenceError,
    UnusableBaselineError,
    ValidationError,
)
from .models import EvidenceRecord, EvidenceStatus, FingerprintRecord, VerificationLogEntry


__all__ = [
    "Config",
    "EvidenceRecord",
    "EvidenceStatus",
    "FingerprintRecord",
    "InsufficientInputError",
    "IntegrityError",
    "MissingBaselineError",
    "NotFoundError",
    "PersistenceError",
    "UnusableBaselineError",
    "ValidationError",
    "VerificationLogEntry",
]
