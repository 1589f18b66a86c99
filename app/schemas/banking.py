"""Schemas for bank accounts, statements, transactions and categories."""
import datetime as dt
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from app.schemas.common import PartialUpdateRequest

TransactionTypeLiteral = Literal["credit", "debit"]


class BankAccountCreateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')
    name: str = Field(min_length=1, max_length=255)
    type: str = Field(min_length=1, max_length=50)
    account_number: Optional[str] = Field(default=None, max_length=64)
    balance: float = 0
    color: Optional[str] = Field(default=None, max_length=20)
    short_code: Optional[str] = Field(default=None, max_length=10)


class BankAccountUpdateRequest(PartialUpdateRequest):
    non_nullable = ("name", "type", "balance")
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    account_number: Optional[str] = Field(default=None, max_length=64)
    balance: Optional[float] = None
    color: Optional[str] = Field(default=None, max_length=20)
    short_code: Optional[str] = Field(default=None, max_length=10)


class BankAccountData(BaseModel):
    model_config = ConfigDict(extra='ignore')
    id: int
    name: str
    type: str
    account_number: Optional[str] = None
    balance: float
    color: Optional[str] = None
    short_code: Optional[str] = None
    created_at: Optional[dt.datetime] = None


class BankStatementData(BaseModel):
    model_config = ConfigDict(extra='ignore')
    id: int
    bank_account_id: Optional[int] = None
    file_name: str
    start_date: dt.date
    end_date: dt.date
    processed: bool
    uploaded_at: Optional[dt.datetime] = None


class TransactionCreateRequest(BaseModel):
    """Manual transaction entry; amount is the magnitude, type gives the direction."""
    model_config = ConfigDict(extra='forbid')
    date: dt.date
    description: str = Field(min_length=1)
    amount: float = Field(gt=0)
    type: TransactionTypeLiteral
    category: Optional[str] = Field(default=None, max_length=100)
    bank_account_id: Optional[int] = None
    reference: Optional[str] = Field(default=None, max_length=255)
    balance: Optional[float] = None

    @field_validator('description')
    @classmethod
    def strip_description(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Description cannot be empty")
        return v


class TransactionUpdateRequest(PartialUpdateRequest):
    non_nullable = ("date", "description", "amount", "type")
    date: Optional[dt.date] = None
    description: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[float] = Field(default=None, gt=0)
    type: Optional[TransactionTypeLiteral] = None
    category: Optional[str] = Field(default=None, max_length=100)
    reference: Optional[str] = Field(default=None, max_length=255)


class TransactionData(BaseModel):
    model_config = ConfigDict(extra='ignore')
    id: int
    bank_account_id: Optional[int] = None
    bank_statement_id: Optional[int] = None
    date: dt.date
    description: str
    category: Optional[str] = None
    amount: float
    signed_amount: float
    type: TransactionTypeLiteral
    reference: Optional[str] = None
    balance: Optional[float] = None


class CategoryData(BaseModel):
    model_config = ConfigDict(extra='ignore')
    id: int
    name: str
    color: str
    icon: str
    is_default: bool
