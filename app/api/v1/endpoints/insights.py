from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.schemas.financial import InsightData, InsightGenerateRequest
from app.schemas.response import ApiResponse
from app.services.insight_service import InsightService
from app.services.llm import LLMService, get_llm_service

router = APIRouter()


async def get_insight_service(
    db: AsyncSession = Depends(get_db),
    llm_service: LLMService = Depends(get_llm_service)
) -> InsightService:
    return InsightService(db, llm_service)


@router.get("", response_model=ApiResponse)
async def list_insights(
    current_user: dict = Depends(get_current_user),
    service: InsightService = Depends(get_insight_service)
):
    insights = await service.list_insights(current_user["id"])
    return ApiResponse(
        success=True,
        message="Insights retrieved successfully",
        data=[InsightData(**insight) for insight in insights]
    )


@router.post("/generate", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def generate_insights(
    request: InsightGenerateRequest,
    current_user: dict = Depends(get_current_user),
    service: InsightService = Depends(get_insight_service)
):
    """Generate new insights from the transactions in a date range."""
    insights = await service.generate_insights(current_user, request.start_date, request.end_date)
    return ApiResponse(
        success=True,
        message="Insights generated successfully",
        data=[InsightData(**insight) for insight in insights]
    )


@router.delete("/{insight_id}", response_model=ApiResponse)
async def delete_insight(
    insight_id: int,
    current_user: dict = Depends(get_current_user),
    service: InsightService = Depends(get_insight_service)
):
    await service.delete_insight(insight_id, current_user["id"])
    return ApiResponse(success=True, message="Insight deleted successfully", data={})
