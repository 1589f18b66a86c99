from enum import StrEnum


class TransactionType(StrEnum):
    """Direction of money movement on a transaction."""
    CREDIT = "credit"
    DEBIT = "debit"


class GoalStatus(StrEnum):
    """Goal lifecycle status."""
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class InsightType(StrEnum):
    """Tone of a generated insight."""
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"


class BankType(StrEnum):
    """Banks whose statement layout the parser understands."""
    HDFC = "HDFC"
    ICICI = "ICICI"
    UNKNOWN = "UNKNOWN"


class EmailTemplate(StrEnum):
    """Email templates that can be sent from the admin test endpoint."""
    TEST = "test"
    WELCOME = "welcome"
    WEEKLY_REPORT = "weekly_report"
    UPLOAD_REMINDER = "upload_reminder"
    ANALYSIS_COMPLETE = "analysis_complete"
    GOAL_PROGRESS = "goal_progress"


# name, color, icon
DEFAULT_CATEGORIES: list[tuple[str, str, str]] = [
    ("Housing", "#6366f1", "home"),
    ("Transportation", "#0ea5e9", "car"),
    ("Food", "#f97316", "utensils"),
    ("Shopping", "#ec4899", "shopping-bag"),
    ("Entertainment", "#a855f7", "film"),
    ("Health", "#ef4444", "heart-pulse"),
    ("Education", "#14b8a6", "graduation-cap"),
    ("Personal Care", "#f472b6", "sparkles"),
    ("Travel", "#06b6d4", "plane"),
    ("Insurance", "#64748b", "shield"),
    ("Savings", "#22c55e", "piggy-bank"),
    ("Investments", "#16a34a", "trending-up"),
    ("Income", "#10b981", "wallet"),
    ("Gifts", "#e11d48", "gift"),
    ("Taxes", "#78716c", "receipt"),
    ("Miscellaneous", "#94a3b8", "circle-help"),
]

DEFAULT_CATEGORY_NAMES: list[str] = [name for name, _, _ in DEFAULT_CATEGORIES]
FALLBACK_CATEGORY = "Miscellaneous"


class AuthErrorDetails(StrEnum):
    """Authentication and authorization related error messages."""

    PASSWORD_TOO_SHORT = "Password must be at least 8 characters long"
    PASSWORD_MISSING_UPPERCASE = "Password must contain at least one uppercase letter"
    PASSWORD_MISSING_LOWERCASE = "Password must contain at least one lowercase letter"
    PASSWORD_MISSING_NUMBER = "Password must contain at least one number"
    PASSWORD_MISSING_SPECIAL = "Password must contain at least one special character"
    PASSWORDS_DONT_MATCH = "Passwords don't match"

    INVALID_CREDENTIALS = "Invalid email or password"
    EMAIL_ALREADY_EXISTS = "Email already in use"

    RATE_LIMIT_EXCEEDED_LOGIN = "Too many login attempts. Please try again later"
    RATE_LIMIT_EXCEEDED_REGISTER = "Too many registration attempts. Please try again later"

    TOKEN_INVALID = "Invalid or expired token"
    USER_NOT_FOUND = "User not found"


class FinanceErrorDetails(StrEnum):
    """Error messages for the finance resources."""

    BANK_ACCOUNT_NOT_FOUND = "Bank account not found"
    BANK_ACCOUNT_FORBIDDEN = "This bank account belongs to another user"
    STATEMENT_NOT_FOUND = "Bank statement not found"
    TRANSACTION_NOT_FOUND = "Transaction not found"
    GOAL_NOT_FOUND = "Goal not found"
    INSIGHT_NOT_FOUND = "Insight not found"
    INVALID_TARGET_AMOUNT = "Target amount must be greater than zero"
    INVALID_DATE_RANGE = "Start date must be on or before end date"
    INVALID_YEAR = "Year cannot be more than one year in the future"
    NO_TRANSACTIONS = "No transactions found for the selected period"
    NO_NEW_INSIGHTS = "No new insights could be generated"
    PDF_ONLY = "Only PDF files are allowed"
    FILE_TOO_LARGE = "File exceeds the maximum upload size"
    LLM_NOT_CONFIGURED = "LLM API key is not configured"
    LLM_REQUEST_FAILED = "LLM request failed"
    EMAIL_FAILED = "Failed to send email"


class GeneralErrorDetails(StrEnum):
    """General application error messages."""

    INTERNAL_SERVER_ERROR = "An internal server error occurred"
    BAD_REQUEST = "Invalid request"
    UNAUTHORIZED = "Authentication required"
    FORBIDDEN = "Access forbidden"
    NOT_FOUND = "Resource not found"
    RATE_LIMIT_EXCEEDED = "Too many requests. Please try again later"
    SERVICE_UNAVAILABLE = "Service temporarily unavailable"
