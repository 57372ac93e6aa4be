"""Evidence Integrity - Canonicalizer
Reduces an evidence record's immutable fields to one fixed byte sequence.

The serialization is a compact JSON object whose keys appear in the order
given by ``CANONICAL_FIELDS``. Each key and value is encoded on its own, so
the output never depends on a serializer's dict ordering or defaults.
"""

import json
import re
from dataclasses import dataclass
from enum import Enum

from core.models import CANONICAL_FIELDS, EvidenceRecord


@dataclass(frozen=True)
class CanonicalForm:
    """Deterministic serialization of (platform, evidence_type, url, case_id)."""

    text: str

    def to_bytes(self) -> bytes:
        return self.text.encode("utf-8")

    def __str__(self) -> str:
        return self.text


# A surrogate pair split across two code points, or a lone surrogate
_SURROGATES = re.compile(r"[\ud800-\udbff][\udc00-\udfff]|[\ud800-\udfff]")


def _fix_surrogate(match: re.Match) -> str:
    chars = match.group()
    if len(chars) == 2:
        high, low = (ord(c) for c in chars)
        return chr(0x10000 + ((high - 0xD800) << 10) + (low - 0xDC00))
    return f"\\u{ord(chars):04x}"


def _encode(value: str) -> str:
    """JSON string literal. Lone surrogates are escaped, so the text is always valid UTF-8."""
    return _SURROGATES.sub(_fix_surrogate, json.dumps(value, ensure_ascii=False))


def _plain(value) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def canonicalize(platform, evidence_type, url, case_id) -> CanonicalForm:
    """Build the canonical form of an evidence quadruple.

    Total over any four strings; enum members are reduced to their values.
    Enumeration membership is the caller's concern.
    """
    values = dict(
        zip(CANONICAL_FIELDS, (_plain(platform), _plain(evidence_type), _plain(url), _plain(case_id)))
    )
    members = ",".join(f"{_encode(name)}:{_encode(values[name])}" for name in CANONICAL_FIELDS)
    return CanonicalForm("{" + members + "}")


def canonicalize_record(record: EvidenceRecord) -> CanonicalForm:
    """Canonical form of a stored record's current quadruple."""
    return canonicalize(*record.quadruple)
