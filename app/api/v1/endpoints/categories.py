from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.database import get_db
from app.repositories.category_repository import CategoryRepository
from app.schemas.banking import CategoryData
from app.schemas.response import ApiResponse

router = APIRouter()


@router.get("", response_model=ApiResponse)
async def list_categories(db: AsyncSession = Depends(get_db)):
    """List the shared spending categories. No authentication required."""
    categories = await CategoryRepository(db).list_all()
    return ApiResponse(
        success=True,
        message="Categories retrieved successfully",
        data=[CategoryData(**category) for category in categories]
    )
