import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from app.api.v1.endpoints import (
    admin,
    analytics,
    auth,
    bank_accounts,
    bank_statements,
    categories,
    goals,
    health,
    insights,
    notifications,
    transactions,
    user_data,
    users,
)
from app.schemas.response import ApiResponse
from app.core.dependencies import limiter
from app.core.handler import (
    AppException,
    http_exception_handler,
    validation_exception_handler,
    app_exception_handler,
    general_exception_handler
)
from app.core.config import settings
from app.core.database import db_manager
from app.repositories.category_repository import CategoryRepository

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


async def seed_categories() -> None:
    """Insert the default categories that are missing; never blocks startup."""
    try:
        async with db_manager.session() as session:
            created = await CategoryRepository(session).seed_defaults()
            await session.commit()
        if created:
            logger.info(f"Seeded {created} default categories")
    except SQLAlchemyError as e:
        logger.warning(f"Could not seed default categories: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting up application...")

    try:
        db_manager.init(
            database_url=settings.database_url_computed,
            echo=settings.DB_ECHO,
            pool_size=settings.DB_POOL_SIZE
        )
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database: {e}")
        raise

    if settings.DB_AUTO_CREATE_TABLES:
        await db_manager.create_all()
    await seed_categories()

    yield

    logger.info("Shutting down application...")
    await db_manager.close()


app = FastAPI(
    title="Finvue API",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.limiter = limiter

app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(Exception, general_exception_handler)


app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(bank_accounts.router, prefix="/api/v1/bank-accounts", tags=["Bank Accounts"])
app.include_router(bank_statements.router, prefix="/api/v1/bank-statements", tags=["Bank Statements"])
app.include_router(transactions.router, prefix="/api/v1/transactions", tags=["Transactions"])
app.include_router(categories.router, prefix="/api/v1/categories", tags=["Categories"])
app.include_router(goals.router, prefix="/api/v1/goals", tags=["Goals"])
app.include_router(insights.router, prefix="/api/v1/insights", tags=["Insights"])
app.include_router(analytics.router, prefix="/api/v1/analytics", tags=["Analytics"])
app.include_router(
    notifications.preferences_router,
    prefix="/api/v1/notification-preferences",
    tags=["Notifications"]
)
app.include_router(notifications.notifications_router, prefix="/api/v1/notifications", tags=["Notifications"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])
app.include_router(user_data.router, prefix="/api/v1/user-data", tags=["User Data"])
app.include_router(health.router, prefix="/api/v1", tags=["Health"])


@app.get("/")
def root():
    """Root health check endpoint."""
    return ApiResponse(
        success=True,
        message="System operational",
        data={"status": "ok"}
    )
