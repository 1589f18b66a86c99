"""Pydantic schemas for request/response validation."""
from app.schemas.user import (
    UserLoginRequest,
    UserRegisterRequest,
    UserUpdateRequest,
    UserData,
    TokenResponse,
)
from app.schemas.banking import (
    BankAccountCreateRequest,
    BankAccountUpdateRequest,
    BankAccountData,
    BankStatementData,
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransactionData,
    CategoryData,
)
from app.schemas.financial import (
    GoalCreateRequest,
    GoalUpdateRequest,
    GoalData,
    GoalSuggestRequest,
    InsightData,
    InsightGenerateRequest,
)
from app.schemas.notification import (
    NotificationPreferenceData,
    NotificationPreferenceUpdateRequest,
)
from app.schemas.response import ApiResponse

__all__ = [
    # User schemas
    "UserLoginRequest",
    "UserRegisterRequest",
    "UserUpdateRequest",
    "UserData",
    "TokenResponse",
    # Banking schemas
    "BankAccountCreateRequest",
    "BankAccountUpdateRequest",
    "BankAccountData",
    "BankStatementData",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    "TransactionData",
    "CategoryData",
    # Goal and insight schemas
    "GoalCreateRequest",
    "GoalUpdateRequest",
    "GoalData",
    "GoalSuggestRequest",
    "InsightData",
    "InsightGenerateRequest",
    # Notification schemas
    "NotificationPreferenceData",
    "NotificationPreferenceUpdateRequest",
    # Response wrapper
    "ApiResponse",
]
