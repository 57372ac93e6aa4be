"""Evidence Integrity - Fingerprint Engine Tests"""

import hashlib
from uuid import uuid4

import pytest

from core.errors import UnsupportedAlgorithmError, ValidationError
from core.integrity.canonical import canonicalize
from core.integrity.fingerprint import ALGORITHMS, FingerprintEngine, digest, register_algorithm
from core.models import HashType


class TestFingerprintEngine:
    """Digest output and algorithm handling."""

    def test_default_is_sha256_lowercase_hex(self):
        engine = FingerprintEngine()
        assert engine.algorithm == "SHA-256"
        value = engine.digest(b"evidence")
        assert value == hashlib.sha256(b"evidence").hexdigest()
        assert value == value.lower()
        assert len(value) == 64

    def test_fixed_length_independent_of_input(self):
        engine = FingerprintEngine()
        assert len(engine.digest(b"")) == len(engine.digest(b"x" * 100_000)) == 64

    def test_worked_example_digest(self, youtube_evidence):
        canonical = canonicalize(**youtube_evidence)
        expected = hashlib.sha256(
            b'{"platform":"youtube","evidence_type":"video",'
            b'"url":"https://youtu.be/abc12345678","case_id":"CASE-1"}'
        ).hexdigest()
        assert FingerprintEngine().hash_canonical(canonical) == expected

    @pytest.mark.parametrize(
        "field,value",
        [
            ("platform", "twitter"),
            ("evidence_type", "post"),
            ("url", "https://youtu.be/zzz12345678"),
            ("case_id", "CASE-2"),
        ],
    )
    def test_single_field_change_changes_digest(self, youtube_evidence, field, value):
        engine = FingerprintEngine()
        original = engine.hash_canonical(canonicalize(**youtube_evidence))
        changed = engine.hash_canonical(canonicalize(**{**youtube_evidence, field: value}))
        assert original != changed

    def test_fingerprint_record_carries_algorithm(self, youtube_evidence):
        evidence_id = uuid4()
        record = FingerprintEngine().fingerprint(canonicalize(**youtube_evidence), evidence_id)
        assert record.evidence_id == evidence_id
        assert record.algorithm == "SHA-256"
        assert record.hash_type == HashType.CONTENT
        assert len(record.hash_value) == 64

    def test_sha3_registered(self):
        assert FingerprintEngine("SHA3-512").digest(b"a") == hashlib.sha3_512(b"a").hexdigest()

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(UnsupportedAlgorithmError) as exc_info:
            FingerprintEngine("CRC32")
        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.kind == "validation"

    def test_register_algorithm(self):
        register_algorithm("BLAKE2b", hashlib.blake2b)
        try:
            assert digest(b"a", "BLAKE2b") == hashlib.blake2b(b"a").hexdigest()
        finally:
            ALGORITHMS.pop("BLAKE2b", None)
