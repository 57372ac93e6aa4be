"""Evidence Integrity - Comparison Routes"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.auth import get_current_actor
from api.schemas.comparisons import (
    ComparisonCreate,
    ComparisonResponse,
    ComparisonSummaryResponse,
)
from core.database.repository import SQLAlchemyLedger, get_ledger
from core.database.session import get_db
from core.integrity import compare_references
from core.integrity.comparison import summarize


router = APIRouter(prefix="/comparisons", tags=["Comparisons"])


async def get_repo(db: AsyncSession = Depends(get_db)) -> SQLAlchemyLedger:
    return get_ledger(db)


@router.post("", response_model=ComparisonResponse, status_code=201)
async def create_comparison(
    payload: ComparisonCreate,
    ledger: SQLAlchemyLedger = Depends(get_repo),
    actor: str = Depends(get_current_actor),
):
    """Compare YouTube videos by normalized identifier."""
    result = await compare_references(ledger, payload.comparison_name, payload.video_urls, actor)
    return ComparisonResponse(
        comparison_id=result.comparison_id,
        result=ComparisonSummaryResponse.model_validate(result.result),
    )


@router.get("/{comparison_id}", response_model=ComparisonResponse)
async def get_comparison(
    comparison_id: UUID,
    ledger: SQLAlchemyLedger = Depends(get_repo),
    actor: str = Depends(get_current_actor),
):
    """Get a stored comparison."""
    record = await ledger.get_comparison(comparison_id)
    return ComparisonResponse(
        comparison_id=record.id,
        result=ComparisonSummaryResponse.model_validate(summarize(record)),
    )
