from abc import ABC, abstractmethod
from typing import Optional


class IUserRepository(ABC):
    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[dict]:
        """Retrieve a user by primary key."""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[dict]:
        """Retrieve a user by email."""
        pass

    @abstractmethod
    async def create(self, user_data: dict) -> dict:
        """Insert a new user and return it."""
        pass

    @abstractmethod
    async def update(self, user_id: int, values: dict) -> Optional[dict]:
        """Update the given columns and return the refreshed user.

        Args:
            user_id: The id of the user
            values: Column values to set; unknown keys are ignored
        """
        pass
