from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.constants import FinanceErrorDetails
from app.core.database import get_db
from app.core.dependencies import get_current_user
from app.core.handler import AppException
from app.schemas.banking import BankStatementData
from app.schemas.financial import InsightData
from app.schemas.response import ApiResponse
from app.services.llm import LLMService, get_llm_service
from app.services.statement_service import StatementService

router = APIRouter()

PDF_CONTENT_TYPES = {"application/pdf", "application/x-pdf"}


async def get_statement_service(
    db: AsyncSession = Depends(get_db),
    llm_service: LLMService = Depends(get_llm_service)
) -> StatementService:
    return StatementService(db, llm_service)


@router.get("", response_model=ApiResponse)
async def list_bank_statements(
    current_user: dict = Depends(get_current_user),
    service: StatementService = Depends(get_statement_service)
):
    statements = await service.list_statements(current_user["id"])
    return ApiResponse(
        success=True,
        message="Bank statements retrieved successfully",
        data=[BankStatementData(**statement) for statement in statements]
    )


@router.post("/upload", response_model=ApiResponse, status_code=status.HTTP_201_CREATED)
async def upload_bank_statement(
    file: UploadFile = File(...),
    current_user: dict = Depends(get_current_user),
    service: StatementService = Depends(get_statement_service)
):
    """
    Upload an HDFC or ICICI PDF statement.

    The transactions are stored against the matching bank account (created when
    new), categorized, and summarized into insights.
    """
    if file.content_type not in PDF_CONTENT_TYPES:
        raise AppException(message=FinanceErrorDetails.PDF_ONLY, status_code=400)

    content = await file.read(settings.max_upload_size_bytes + 1)
    if len(content) > settings.max_upload_size_bytes:
        raise AppException(
            message=FinanceErrorDetails.FILE_TOO_LARGE,
            status_code=400,
            data={"max_size_mb": settings.MAX_UPLOAD_SIZE_MB}
        )

    result = await service.upload_statement(current_user, file.filename or "statement.pdf", content)
    return ApiResponse(
        success=True,
        message="Bank statement processed successfully",
        data={
            "statement": BankStatementData(**result["statement"]),
            "transaction_count": result["transaction_count"],
            "insights": [InsightData(**insight) for insight in result["insights"]],
        }
    )


@router.delete("/{statement_id}", response_model=ApiResponse)
async def delete_bank_statement(
    statement_id: int,
    current_user: dict = Depends(get_current_user),
    service: StatementService = Depends(get_statement_service)
):
    await service.delete_statement(statement_id, current_user["id"])
    return ApiResponse(success=True, message="Bank statement deleted successfully", data={})
