from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.constants import EmailTemplate
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.schemas.response import ApiResponse
from app.services.admin_service import AdminService
from app.services.llm import LLMService, get_llm_service

router = APIRouter()


async def get_admin_service(
    db: AsyncSession = Depends(get_db),
    llm_service: LLMService = Depends(get_llm_service)
) -> AdminService:
    return AdminService(db, llm_service)


@router.post("/test-email", response_model=ApiResponse)
async def test_email(
    template: EmailTemplate = Query(default=EmailTemplate.TEST),
    current_user: dict = Depends(get_current_user),
    service: AdminService = Depends(get_admin_service)
):
    """Send a sample of the chosen email template to the current user."""
    await service.send_test_email(current_user, template)
    return ApiResponse(
        success=True,
        message=f"Test email sent to {current_user['email']}",
        data={"template": template.value}
    )


@router.post("/test-llm", response_model=ApiResponse)
async def test_llm(
    current_user: dict = Depends(get_current_user),
    service: AdminService = Depends(get_admin_service)
):
    tip = await service.test_llm()
    return ApiResponse(success=True, message="LLM responded successfully", data={"response": tip})


@router.get("/test-database", response_model=ApiResponse)
async def test_database(
    current_user: dict = Depends(get_current_user),
    service: AdminService = Depends(get_admin_service)
):
    result = await service.test_database()
    return ApiResponse(
        success=result["connected"],
        message="Database connection successful" if result["connected"] else "Database connection failed",
        data=result
    )
