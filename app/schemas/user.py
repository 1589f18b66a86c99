from datetime import datetime
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
import re
from app.core.constants import AuthErrorDetails
from app.schemas.common import PartialUpdateRequest

EMAIL_PATTERN = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'


def _validate_password_strength(v: str) -> str:
    if len(v) < 8:
        raise ValueError(AuthErrorDetails.PASSWORD_TOO_SHORT)
    if not re.search(r'[A-Z]', v):
        raise ValueError(AuthErrorDetails.PASSWORD_MISSING_UPPERCASE)
    if not re.search(r'[a-z]', v):
        raise ValueError(AuthErrorDetails.PASSWORD_MISSING_LOWERCASE)
    if not re.search(r'[0-9]', v):
        raise ValueError(AuthErrorDetails.PASSWORD_MISSING_NUMBER)
    if not re.search(r'[^a-zA-Z0-9]', v):
        raise ValueError(AuthErrorDetails.PASSWORD_MISSING_SPECIAL)
    return v


class UserLoginRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')
    email: str
    password: str

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        return v


class UserRegisterRequest(BaseModel):
    """Request schema for registration."""
    model_config = ConfigDict(extra='forbid')
    name: str
    email: str
    password: str
    confirm_password: str
    currency: str = "INR"

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters long")
        return v

    @field_validator('email')
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = v.strip().lower()
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _validate_password_strength(v)

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v: str) -> str:
        v = v.strip().upper()
        if not re.fullmatch(r'[A-Z]{3}', v):
            raise ValueError("Currency must be a 3-letter ISO code")
        return v

    @model_validator(mode='after')
    def check_passwords_match(self):
        if self.password != self.confirm_password:
            raise ValueError(AuthErrorDetails.PASSWORDS_DONT_MATCH)
        return self


class UserUpdateRequest(PartialUpdateRequest):
    """Profile fields a user may change, including the onboarding salary."""
    non_nullable = ("name", "currency", "password")
    name: str | None = None
    currency: str | None = None
    monthly_salary: float | None = Field(default=None, ge=0)
    password: str | None = None

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip().upper()
        if not re.fullmatch(r'[A-Z]{3}', v):
            raise ValueError("Currency must be a 3-letter ISO code")
        return v

    @field_validator('password')
    @classmethod
    def validate_password(cls, v: str | None) -> str | None:
        return v if v is None else _validate_password_strength(v)


class UserData(BaseModel):
    model_config = ConfigDict(extra='ignore')
    id: int
    email: str
    name: str
    currency: str = "INR"
    monthly_salary: float | None = None
    created_at: datetime | None = None


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra='ignore')
    user: UserData
    access_token: str
    token_type: str = "bearer"
