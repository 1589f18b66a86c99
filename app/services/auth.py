import logging
from app.interfaces.user import IUserRepository
from app.repositories.notification_repository import NotificationPreferenceRepository
from app.core.security import (
    get_password_hash,
    create_access_token,
    verify_password
)
from app.core.handler import AppException
from app.core.constants import AuthErrorDetails
from app.services.email import send_welcome_email

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(
        self,
        user_repository: IUserRepository,
        preference_repository: NotificationPreferenceRepository
    ):
        self.user_repository = user_repository
        self.preference_repository = preference_repository

    def _generate_token(self, user_id: int) -> str:
        """Generate an access token whose subject is the user id."""
        return create_access_token({"sub": str(user_id)})

    @staticmethod
    def _public(user: dict) -> dict:
        return {k: v for k, v in user.items() if k != "hashed_password"}

    async def register_user(
        self,
        name: str,
        email: str,
        password: str,
        currency: str = "INR"
    ) -> dict:
        """Create a user with default notification preferences and send a welcome email.

        Args:
            name: User's full name
            email: Normalized email address
            password: Plain password (will be hashed)
            currency: Display currency code

        Returns:
            Dictionary with user and access_token

        Raises:
            AppException: If the email is already registered
        """
        existing = await self.user_repository.get_by_email(email)
        if existing:
            raise AppException(
                message=AuthErrorDetails.EMAIL_ALREADY_EXISTS,
                status_code=400,
                data={"email": email}
            )

        user = await self.user_repository.create({
            "name": name,
            "email": email,
            "hashed_password": get_password_hash(password),
            "currency": currency,
        })
        await self.preference_repository.get_or_create(user["id"])

        # Registration succeeds even when the welcome email does not go out
        if not await send_welcome_email(user):
            logger.warning(f"Welcome email not delivered to {email}")

        logger.info(f"Registered user id={user['id']}")
        return {"user": self._public(user), "access_token": self._generate_token(user["id"])}

    async def login_user(self, email: str, password: str) -> dict:
        """Check credentials and issue a token.

        Raises:
            AppException: 401 for an unknown email or a wrong password
        """
        user = await self.user_repository.get_by_email(email)
        if not user or not verify_password(password, user["hashed_password"]):
            raise AppException(
                message=AuthErrorDetails.INVALID_CREDENTIALS,
                status_code=401
            )

        return {"user": self._public(user), "access_token": self._generate_token(user["id"])}

    async def update_profile(self, user_id: int, values: dict) -> dict:
        """Apply a profile update; a new password is re-hashed before storage."""
        values = dict(values)
        password = values.pop("password", None)
        if password:
            values["hashed_password"] = get_password_hash(password)

        user = await self.user_repository.update(user_id, values)
        if not user:
            raise AppException(message=AuthErrorDetails.USER_NOT_FOUND, status_code=404)
        return self._public(user)
