"""Evidence Integrity - Fingerprint Engine
Content-addressed hashing of canonical forms.

The algorithm identifier is stored with every fingerprint so that
historical digests stay interpretable if the active scheme changes.
"""

import hashlib
from collections.abc import Callable
from uuid import UUID

from core.config import integrity_settings
from core.errors import UnsupportedAlgorithmError
from core.integrity.canonical import CanonicalForm
from core.models import FingerprintRecord, HashType


DEFAULT_ALGORITHM = "SHA-256"

# Identifier -> hashlib constructor
ALGORITHMS: dict[str, Callable] = {
    "SHA-256": hashlib.sha256,
    "SHA3-512": hashlib.sha3_512,
}


def register_algorithm(name: str, factory: Callable) -> None:
    """Make a digest scheme available under ``name``."""
    ALGORITHMS[name] = factory


class FingerprintEngine:
    """Applies one digest algorithm to canonical forms."""

    def __init__(self, algorithm: str | None = None):
        algorithm = algorithm or integrity_settings.hash_algorithm
        if algorithm not in ALGORITHMS:
            raise UnsupportedAlgorithmError(
                f"Unsupported hash algorithm: {algorithm}",
                details={"algorithm": algorithm, "supported": sorted(ALGORITHMS)},
            )
        self.algorithm = algorithm
        self._factory = ALGORITHMS[algorithm]

    @classmethod
    def for_algorithm(cls, algorithm: str) -> "FingerprintEngine":
        return cls(algorithm)

    def digest(self, data: bytes) -> str:
        """Lowercase hex digest of ``data``."""
        return self._factory(data).hexdigest().lower()

    def hash_canonical(self, canonical: CanonicalForm) -> str:
        return self.digest(canonical.to_bytes())

    def fingerprint(
        self,
        canonical: CanonicalForm,
        evidence_id: UUID,
        hash_type: HashType = HashType.CONTENT,
    ) -> FingerprintRecord:
        """Build a fingerprint record for ``evidence_id``."""
        return FingerprintRecord(
            evidence_id=evidence_id,
            algorithm=self.algorithm,
            hash_type=hash_type,
            hash_value=self.hash_canonical(canonical),
        )


def digest(data: bytes, algorithm: str = DEFAULT_ALGORITHM) -> str:
    """Hex digest of ``data`` with the named algorithm."""
    return FingerprintEngine(algorithm).digest(data)
