"""Dependencies for FastAPI endpoints."""
import logging
from fastapi import Request, Depends, Cookie
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from slowapi import Limiter
from slowapi.util import get_remote_address
from limits import parse_many
from app.core.handler import AppException
from app.core.constants import AuthErrorDetails, GeneralErrorDetails
from app.core.config import settings
from app.core.security import decode_token
from app.core.database import get_db
from app.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

# auto_error=False so a cookie can stand in for the header
security = HTTPBearer(auto_error=False)

# Can be changed to Redis later: storage_uri="redis://localhost:6379"
limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")


def _hit_rate_limit(request: Request, rate_limit_str: str, message: str) -> None:
    app_limiter = request.app.state.limiter
    key = get_remote_address(request)
    rate_limit = parse_many(rate_limit_str)[0]

    if not app_limiter._limiter.hit(rate_limit, key):
        raise AppException(message=message, status_code=429)


async def check_login_rate_limit(request: Request) -> None:
    """Rate limit dependency for the login endpoint."""
    _hit_rate_limit(
        request,
        f"{settings.LOGIN_RATE_LIMIT_PER_MINUTE}/minute",
        AuthErrorDetails.RATE_LIMIT_EXCEEDED_LOGIN,
    )


async def check_register_rate_limit(request: Request) -> None:
    """Rate limit dependency for the register endpoint."""
    _hit_rate_limit(
        request,
        f"{settings.REGISTER_RATE_LIMIT_PER_HOUR}/hour",
        AuthErrorDetails.RATE_LIMIT_EXCEEDED_REGISTER,
    )


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    access_token: str | None = Cookie(None),
    db: AsyncSession = Depends(get_db)
) -> dict:
    """
    Resolve the authenticated user for a protected endpoint.

    Flow:
    1. Take the token from the Authorization bearer header, else the access_token cookie
    2. Verify signature and expiry, and require an access token carrying a user id
    3. Load the user row and attach it to request.state.user

    Every failure raises a 401 before the endpoint body runs.

    Returns:
        User dictionary (without touching any other table)
    """
    token = credentials.credentials if credentials else access_token
    if not token:
        raise AppException(
            message=GeneralErrorDetails.UNAUTHORIZED,
            status_code=401
        )

    try:
        payload = decode_token(token)
    except JWTError:
        raise AppException(
            message=AuthErrorDetails.TOKEN_INVALID,
            status_code=401
        )

    subject = payload.get("sub")
    if payload.get("type") != "access" or not subject or not str(subject).isdigit():
        raise AppException(
            message=AuthErrorDetails.TOKEN_INVALID,
            status_code=401
        )

    user = await UserRepository(db).get_by_id(int(subject))
    if not user:
        logger.warning(f"Token presented for missing user id={subject}")
        raise AppException(
            message=AuthErrorDetails.USER_NOT_FOUND,
            status_code=401
        )

    request.state.user = user
    return user
