"""Evidence Integrity - Error Taxonomy
Typed failures surfaced by the integrity core. Each carries a
machine-readable ``kind`` so the transport layer can map it to a status.
"""

from typing import Any


class IntegrityError(Exception):
    """Base class for every failure raised by the integrity core."""

    kind = "integrity"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Structured error value for the transport boundary."""
        return {
            "kind": self.kind,
            "message": self.message,
            "details": self.details or None,
        }


class ValidationError(IntegrityError):
    """Missing or malformed required field. Not retried."""

    kind = "validation"


class ImmutableFieldError(ValidationError):
    """Attempt to change a canonicalized field after collection."""


class UnsupportedAlgorithmError(ValidationError):
    """Digest algorithm is not registered with the fingerprint engine."""


class NotFoundError(IntegrityError):
    """Referenced evidence, fingerprint or comparison is absent."""

    kind = "not_found"


class MissingBaselineError(IntegrityError):
    """Evidence exists but has no content fingerprint to verify against."""

    kind = "missing_baseline"


class UnusableBaselineError(MissingBaselineError):
    """Stored baseline names a digest algorithm that is no longer registered."""


class InsufficientInputError(IntegrityError):
    """Comparator received fewer than two valid normalized identifiers."""

    kind = "insufficient_input"


class PersistenceError(IntegrityError):
    """The ledger failed to read or write."""

    kind = "persistence"
