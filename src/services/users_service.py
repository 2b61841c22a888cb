"""Users service: account lifecycle business rules.

Covers local and Google account creation, email confirmation, the password
reset token lifecycle and profile updates. Pure business logic with no HTTP
dependencies.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from domain.model.errors import (
    DuplicateEmailError,
    InvalidOrExpiredTokenError,
    InvalidTokenError,
    UserNotFoundError,
)
from domain.model.user import User
from port.user_repository import UserRepository
from services.credentials import hash_password

logger = logging.getLogger(__name__)

# Profile fields a user may change through update()
UPDATABLE_FIELDS = ('full_name',)


class UsersService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def create_local_user(
        self,
        email: str,
        password: str,
        full_name: str | None,
        confirm_token: str,
    ) -> User:
        """Create a password account awaiting email confirmation.

        Raises:
            DuplicateEmailError: email already registered
        """
        if await self.repo.get_by_email(email):
            raise DuplicateEmailError()

        user = await self.repo.create(
            email=email,
            full_name=full_name,
            password_hash=hash_password(password),
            is_email_confirmed=False,
            email_confirm_token=confirm_token,
        )
        logger.info("Local user created", extra={"userId": user.id, "email": email})
        return user

    async def create_google_user(self, email: str, google_id: str, full_name: str | None) -> User:
        """Return the user for a Google identity, linking or creating as needed.

        Lookup order: google_id (returned unchanged), then email (google_id is
        linked and the email counts as confirmed), then a new confirmed user
        without a password.
        """
        existing = await self.repo.get_by_google_id(google_id)
        if existing:
            return existing

        existing = await self.repo.get_by_email(email)
        if existing:
            existing.google_id = google_id
            existing.is_email_confirmed = True
            user = await self.repo.save(existing)
            logger.info("Google identity linked", extra={"userId": user.id, "email": email})
            return user

        user = await self.repo.create(
            email=email,
            full_name=full_name,
            google_id=google_id,
            is_email_confirmed=True,
        )
        logger.info("Google user created", extra={"userId": user.id, "email": email})
        return user

    async def mark_email_confirmed(self, token: str) -> User:
        """Confirm the email of the user holding ``token`` and clear the token.

        Raises:
            InvalidTokenError: no user holds this token
        """
        user = await self.repo.get_by_email_confirm_token(token)
        if not user:
            raise InvalidTokenError()

        user.is_email_confirmed = True
        user.email_confirm_token = None
        user = await self.repo.save(user)
        logger.info("Email confirmed", extra={"userId": user.id})
        return user

    async def set_reset_password_token(self, user: User, token: str, expires_at: datetime) -> User:
        user.reset_password_token = token
        user.reset_password_expires_at = expires_at
        return await self.repo.save(user)

    async def reset_password(self, token: str, new_password: str) -> User:
        """Apply ``new_password`` and consume the reset token in a single save.

        Raises:
            InvalidOrExpiredTokenError: unknown token, missing expiry, or expiry in the past
        """
        user = await self.repo.get_by_reset_password_token(token)
        now = datetime.now(timezone.utc)
        if (
            not user
            or user.reset_password_expires_at is None
            or user.reset_password_expires_at < now
        ):
            raise InvalidOrExpiredTokenError()

        user.password_hash = hash_password(new_password)
        user.reset_password_token = None
        user.reset_password_expires_at = None
        user = await self.repo.save(user)
        logger.info("Password reset", extra={"userId": user.id})
        return user

    async def find_by_email(self, email: str) -> User | None:
        return await self.repo.get_by_email(email)

    async def find_by_id(self, user_id: int) -> User | None:
        return await self.repo.get_by_id(user_id)

    async def update(self, user_id: int, changes: dict[str, Any]) -> User:
        """Apply only the profile fields present in ``changes``.

        Raises:
            UserNotFoundError: no user with this id
        """
        user = await self.find_by_id(user_id)
        if not user:
            raise UserNotFoundError()

        for field_name in UPDATABLE_FIELDS:
            if field_name in changes:
                setattr(user, field_name, changes[field_name])
        return await self.repo.save(user)
