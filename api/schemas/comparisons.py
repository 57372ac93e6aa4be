"""Evidence Integrity - Comparison Schemas"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ComparisonCreate(BaseModel):
    """Comparison request. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    comparison_name: str = Field(..., min_length=1, max_length=500)
    video_urls: list[str]


class ComparisonSummaryResponse(BaseModel):
    comparison_name: str
    created_by: str
    video_ids: list[str]
    unique_video_ids: list[str]
    same_video: bool
    flagged_duplicates: list[str]
    compared_at: datetime

    class Config:
        from_attributes = True


class ComparisonResponse(BaseModel):
    success: bool = True
    comparison_id: UUID
    result: ComparisonSummaryResponse
