from pydantic import BaseModel, ConfigDict
from app.schemas.common import PartialUpdateRequest


class NotificationPreferenceData(BaseModel):
    model_config = ConfigDict(extra='ignore')
    weekly_report: bool
    bank_statement_reminder: bool
    goal_progress: bool
    insights: bool


class NotificationPreferenceUpdateRequest(PartialUpdateRequest):
    non_nullable = ("weekly_report", "bank_statement_reminder", "goal_progress", "insights")
    weekly_report: bool | None = None
    bank_statement_reminder: bool | None = None
    goal_progress: bool | None = None
    insights: bool | None = None
