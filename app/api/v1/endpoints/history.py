from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func, select

from app.dependencies import DbSessionDep
from app.models.database import Analysis
from app.models.schemas import (
    AnalysisDetailResponse,
    AnalysisHistoryItem,
    ErrorResponse,
    HistoryResponse,
)

router = APIRouter()

PREVIEW_LENGTH = 100


@router.get(
    "",
    response_model=HistoryResponse,
    summary="Get analysis history",
    description="Retrieve paginated history of previous attacks.",
)
async def get_history(
    db: DbSessionDep,
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
) -> HistoryResponse:
    """
    Get paginated analysis history.

    Results are ordered by creation date, most recent first.
    """
    total_result = await db.execute(select(func.count()).select_from(Analysis))
    total = total_result.scalar() or 0

    offset = (page - 1) * page_size
    query = (
        select(Analysis)
        .order_by(Analysis.created_at.desc(), Analysis.id.desc())
        .offset(offset)
        .limit(page_size)
    )
    result = await db.execute(query)

    items = [
        AnalysisHistoryItem(
            id=analysis.id,
            ciphertext_hash=analysis.ciphertext_hash,
            ciphertext_preview=analysis.ciphertext[:PREVIEW_LENGTH] + "..."
            if len(analysis.ciphertext) > PREVIEW_LENGTH
            else analysis.ciphertext,
            recovered_key=analysis.reduced_key,
            key_length=analysis.key_length,
            created_at=analysis.created_at,
        )
        for analysis in result.scalars().all()
    ]

    return HistoryResponse(
        items=items,
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/{analysis_id}",
    response_model=AnalysisDetailResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Analysis not found"},
    },
    summary="Get specific analysis",
    description="Retrieve details of a specific analysis by ID.",
)
async def get_analysis(
    analysis_id: int,
    db: DbSessionDep,
) -> AnalysisDetailResponse:
    """Get a specific analysis by ID."""
    result = await db.execute(select(Analysis).where(Analysis.id == analysis_id))
    analysis = result.scalar_one_or_none()

    if analysis is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Analysis with ID {analysis_id} not found",
        )

    return AnalysisDetailResponse.model_validate(analysis)
