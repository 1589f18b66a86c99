from pydantic import Field, field_validator, model_validator, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional
import logging

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    ENVIRONMENT: Literal["dev", "prod"] = Field(default="dev", description="Application environment")
    LOG_LEVEL: str = Field(default="INFO", description="Root logging level")

    BASE_URL: str = Field(default="http://localhost:8000", description="Base URL for the API")
    FRONTEND_URL: str = Field(default="http://localhost:5173", description="Frontend URL for CORS and email links")

    SECRET_KEY: str = Field(default="secret-key", description="Secret key for JWT signing")
    ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24 * 7, description="Access token expiration in minutes")

    COOKIE_SECURE: bool = Field(default=True, description="Secure flag for cookies (HTTPS only)")
    COOKIE_SAME_SITE: Literal["lax", "strict", "none"] = Field(default="lax", description="SameSite policy for cookies")
    COOKIE_HTTP_ONLY: bool = Field(default=True, description="HttpOnly flag for cookies")

    # Database Configuration
    DB_HOST: str = Field(default="localhost", description="Database host")
    DB_PORT: int = Field(default=5432, description="Database port")
    DB_NAME: str = Field(default="finvue", description="Database name")
    DB_USER: str = Field(default="postgres", description="Database user")
    DB_PASSWORD: str = Field(default="", description="Database password")
    DATABASE_URL: Optional[str] = Field(default=None, description="Full database URL (overrides individual DB_* settings)")
    DB_POOL_SIZE: int = Field(default=5, description="Database connection pool size")
    DB_ECHO: bool = Field(default=False, description="Enable SQL query logging")
    DB_AUTO_CREATE_TABLES: bool = Field(default=False, description="Create tables on startup instead of relying on Alembic")

    LOGIN_RATE_LIMIT_PER_MINUTE: int = Field(default=5, description="Maximum login attempts per minute per IP")
    REGISTER_RATE_LIMIT_PER_HOUR: int = Field(default=3, description="Maximum registration attempts per hour per IP")

    # Email Configuration
    EMAIL_ENABLED: bool = Field(default=True, description="Disable to skip all outgoing email")
    EMAIL_PROVIDER: Literal["smtp", "resend"] = Field(default="smtp", description="Email provider: 'smtp' or 'resend'")
    EMAIL_FROM_ADDRESS: str = Field(default="noreply@finvue.app", description="Sender email address")
    EMAIL_FROM_NAME: str = Field(default="Finvue", description="From name displayed in emails")

    # SMTP Configuration (used when EMAIL_PROVIDER=smtp)
    EMAIL_HOST: str = Field(default="smtp.gmail.com", description="SMTP server host")
    EMAIL_PORT: int = Field(default=587, description="SMTP server port (465 uses implicit TLS)")
    EMAIL_USER: str | None = Field(default=None, description="SMTP username")
    EMAIL_PASSWORD: str | None = Field(default=None, description="SMTP password")
    EMAIL_TIMEOUT_SECONDS: int = Field(default=10, description="SMTP connection timeout")

    # Resend Configuration (used when EMAIL_PROVIDER=resend)
    RESEND_API_KEY: str | None = Field(default=None, description="Resend API key")

    # LLM Configuration (any OpenAI-compatible chat completion API)
    LLM_API_KEY: str | None = Field(default=None, description="API key for the chat completion provider")
    LLM_BASE_URL: str | None = Field(default="https://api.groq.com/openai/v1", description="Base URL of the OpenAI-compatible API")
    LLM_MODEL: str = Field(default="llama3-8b-8192", description="Chat completion model name")
    LLM_TIMEOUT_SECONDS: float = Field(default=30.0, description="Timeout for a single LLM request")

    # Statement uploads
    MAX_UPLOAD_SIZE_MB: int = Field(default=10, description="Maximum bank statement upload size in megabytes")

    @computed_field
    @property
    def database_url_computed(self) -> str:
        """
        Compute the database URL from individual settings or use DATABASE_URL if provided.

        Returns:
            str: async SQLAlchemy connection URL (asyncpg for Postgres, aiosqlite for SQLite)
        """
        if self.DATABASE_URL:
            url = self.DATABASE_URL
            if url.startswith("sqlite"):
                if not url.startswith("sqlite+aiosqlite://"):
                    url = url.replace("sqlite://", "sqlite+aiosqlite://", 1)
                return url
            if url.startswith("postgresql://"):
                url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
            elif not url.startswith("postgresql+asyncpg://"):
                url = f"postgresql+asyncpg://{url}"
            return url

        return f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    @property
    def max_upload_size_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024

    @property
    def llm_configured(self) -> bool:
        return bool(self.LLM_API_KEY)

    @field_validator("ACCESS_TOKEN_EXPIRE_MINUTES")
    @classmethod
    def validate_token_expiration(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Access token expiration must be at least 1 minute")
        return v

    @model_validator(mode="after")
    def set_environment_defaults(self):
        """Set environment-specific defaults and validations."""
        if self.ENVIRONMENT == "prod":
            if self.SECRET_KEY == "secret-key" or len(self.SECRET_KEY) < 32:
                raise ValueError(
                    "SECRET_KEY must be at least 32 characters long in production. "
                    "Set a strong secret key in your .env file."
                )
            if not self.BASE_URL.startswith("https://"):
                raise ValueError("BASE_URL must use HTTPS in production")

        # Less strict cookie settings in dev for local development
        if self.ENVIRONMENT == "dev" and self.COOKIE_SECURE is True:
            self.COOKIE_SECURE = False

        return self


settings = Settings()
