from typing import Protocol

from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access.

    Implementations must enforce uniqueness of ``email`` and (when set)
    ``google_id`` at write time and raise ``DuplicateError`` subclasses.
    """
    async def create(
        self,
        email: str,
        full_name: str | None = None,
        password_hash: str | None = None,
        google_id: str | None = None,
        is_email_confirmed: bool = False,
        email_confirm_token: str | None = None,
    ) -> User:
        """Create a new user with a store-assigned id."""
        ...

    async def save(self, user: User) -> User:
        """Persist every field of an existing user. Return the stored User."""
        ...

    async def get_by_id(self, user_id: int) -> User | None:
        ...

    async def get_by_email(self, email: str) -> User | None:
        ...

    async def get_by_google_id(self, google_id: str) -> User | None:
        ...

    async def get_by_email_confirm_token(self, token: str) -> User | None:
        ...

    async def get_by_reset_password_token(self, token: str) -> User | None:
        ...
