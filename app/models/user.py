"""User and notification preference SQLAlchemy models."""
from datetime import datetime, timezone
from sqlalchemy import String, Integer, Boolean, DateTime, ForeignKey, Numeric
from sqlalchemy.orm import Mapped, mapped_column
from app.core.database import Base


class User(Base):
    """Registered user; owns every other per-user row."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    currency: Mapped[str] = mapped_column(String(10), default="INR", nullable=False)
    monthly_salary: Mapped[float | None] = mapped_column(
        Numeric(14, 2, asdecimal=False), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def to_dict(self) -> dict:
        """Convert model to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "hashed_password": self.hashed_password,
            "currency": self.currency,
            "monthly_salary": self.monthly_salary,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"


class NotificationPreference(Base):
    """Which automated emails a user receives (one row per user)."""

    __tablename__ = "notification_preferences"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    weekly_report: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    bank_statement_reminder: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    goal_progress: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    insights: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "weekly_report": self.weekly_report,
            "bank_statement_reminder": self.bank_statement_reminder,
            "goal_progress": self.goal_progress,
            "insights": self.insights,
        }

    def __repr__(self) -> str:
        return f"<NotificationPreference(user_id={self.user_id})>"
