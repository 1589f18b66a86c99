"""Schemas for goals and insights."""
import datetime as dt
from typing import Literal, Optional, Any
from pydantic import BaseModel, ConfigDict, Field, model_validator
from app.schemas.common import PartialUpdateRequest

GoalStatusLiteral = Literal["active", "completed", "cancelled"]
InsightTypeLiteral = Literal["info", "warning", "success"]


class GoalCreateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')
    name: str = Field(min_length=1, max_length=255)
    target_amount: float
    current_amount: float = Field(default=0, ge=0)
    deadline: Optional[dt.date] = None
    description: Optional[str] = None
    status: GoalStatusLiteral = "active"


class GoalUpdateRequest(PartialUpdateRequest):
    non_nullable = ("name", "target_amount", "current_amount", "status")
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    target_amount: Optional[float] = None
    current_amount: Optional[float] = Field(default=None, ge=0)
    deadline: Optional[dt.date] = None
    description: Optional[str] = None
    status: Optional[GoalStatusLiteral] = None


class GoalData(BaseModel):
    model_config = ConfigDict(extra='ignore')
    id: int
    name: str
    target_amount: float
    current_amount: float
    progress_percentage: float
    deadline: Optional[dt.date] = None
    description: Optional[str] = None
    is_ai_generated: bool = False
    status: GoalStatusLiteral
    created_at: Optional[dt.datetime] = None


class GoalSuggestRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')
    save_goals: bool = False


class InsightData(BaseModel):
    model_config = ConfigDict(extra='ignore')
    id: int
    title: str
    description: str
    type: InsightTypeLiteral
    category: Optional[str] = None
    relevant_transactions: Optional[list[dict[str, Any]]] = None
    created_at: Optional[dt.datetime] = None


class InsightGenerateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')
    start_date: dt.date
    end_date: dt.date

    @model_validator(mode='after')
    def check_range(self):
        if self.start_date > self.end_date:
            raise ValueError("Start date must be on or before end date")
        return self
