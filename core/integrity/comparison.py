"""Evidence Integrity - Multi-video Comparator
Normalizes YouTube references to video identifiers and records the
comparison. Identical identifiers are the only similarity signal.
"""

import re
from collections import Counter
from collections.abc import Iterable

from core.config import integrity_settings
from core.errors import InsufficientInputError, ValidationError
from core.integrity.ledger import EvidenceLedger
from core.logging import get_logger
from core.models import ComparisonRecord, ComparisonResult, ComparisonSummary


# watch?v=<id> and youtu.be/<id>
VIDEO_ID_PATTERN = re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([a-zA-Z0-9_-]{11})")


def extract_video_id(reference: str) -> str | None:
    if not isinstance(reference, str):
        return None
    match = VIDEO_ID_PATTERN.search(reference)
    return match.group(1) if match else None


def normalize_references(references: Iterable[str]) -> list[str]:
    """Video ids in input order. References that do not match are dropped."""
    ids = (extract_video_id(ref) for ref in references)
    return [video_id for video_id in ids if video_id]


def unique_in_order(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(ids))


def find_duplicates(ids: list[str]) -> list[str]:
    counts = Counter(ids)
    return [video_id for video_id in unique_in_order(ids) if counts[video_id] > 1]


def summarize(record: ComparisonRecord) -> ComparisonSummary:
    """Presentation view of a stored comparison."""
    unique_ids = unique_in_order(record.video_ids)
    return ComparisonSummary(
        comparison_name=record.comparison_name,
        created_by=record.created_by,
        video_ids=list(record.video_ids),
        unique_video_ids=unique_ids,
        same_video=len(unique_ids) == 1,
        flagged_duplicates=list(record.flagged_duplicates),
        compared_at=record.created_at,
    )


async def compare_references(
    ledger: EvidenceLedger,
    comparison_name: str,
    references: list[str],
    creator: str,
) -> ComparisonResult:
    """Record a comparison of at least two video references.

    Raises ``ValidationError`` for a missing name and
    ``InsufficientInputError`` when fewer than two valid identifiers remain.
    """
    minimum = integrity_settings.min_comparison_references

    if not isinstance(comparison_name, str) or comparison_name == "":
        raise ValidationError("comparison_name is required", details={"field": "comparison_name"})
    if not isinstance(references, list | tuple) or len(references) < minimum:
        raise InsufficientInputError(
            f"At least {minimum} YouTube URLs are required",
            details={"received": len(references) if isinstance(references, list | tuple) else 0},
        )

    video_ids = normalize_references(references)
    if len(video_ids) < minimum:
        raise InsufficientInputError(
            "Invalid YouTube URLs provided",
            details={"received": len(references), "valid": len(video_ids)},
        )

    record = await ledger.insert_comparison(
        ComparisonRecord(
            comparison_name=comparison_name,
            video_ids=video_ids,
            flagged_duplicates=find_duplicates(video_ids),
            created_by=creator,
        )
    )

    summary = summarize(record)
    get_logger().audit(
        "videos_compared",
        "comparison",
        str(record.id),
        actor=creator,
        videos=len(video_ids),
        same_video=summary.same_video,
    )
    return ComparisonResult(comparison_id=record.id, result=summary)
