"""SQLAlchemy ORM models."""
from app.models.user import User, NotificationPreference
from app.models.banking import BankAccount, BankStatement, Transaction, Category
from app.models.financial import Goal, Insight

__all__ = [
    "User",
    "NotificationPreference",
    "BankAccount",
    "BankStatement",
    "Transaction",
    "Category",
    "Goal",
    "Insight",
]
