"""In-memory implementation of UserRepository for testing."""

import itertools
from dataclasses import replace
from datetime import datetime, timezone

from domain.model.errors import DuplicateEmailError, DuplicateError
from domain.model.user import User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[int, User] = {}
        self._ids = itertools.count(1)

    # ── write operations ─────────────────────────────────────

    async def create(
        self,
        email: str,
        full_name: str | None = None,
        password_hash: str | None = None,
        google_id: str | None = None,
        is_email_confirmed: bool = False,
        email_confirm_token: str | None = None,
    ) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            id=next(self._ids),
            email=email,
            created_at=now,
            updated_at=now,
            full_name=full_name,
            password_hash=password_hash,
            google_id=google_id,
            is_email_confirmed=is_email_confirmed,
            email_confirm_token=email_confirm_token,
        )
        self._check_unique(user)
        self.store[user.id] = user
        return replace(user)

    async def save(self, user: User) -> User:
        self._check_unique(user)
        stored = replace(user, updated_at=datetime.now(timezone.utc))
        self.store[user.id] = stored
        return replace(stored)

    def _check_unique(self, user: User) -> None:
        """Mirror the unique indexes on email and google_id."""
        for other in self.store.values():
            if other.id == user.id:
                continue
            if other.email == user.email:
                raise DuplicateEmailError()
            if user.google_id and other.google_id == user.google_id:
                raise DuplicateError("Google account already linked")

    # ── read operations ──────────────────────────────────────

    async def get_by_id(self, user_id: int) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

    async def get_by_email(self, email: str) -> User | None:
        return self._find(email=email)

    async def get_by_google_id(self, google_id: str) -> User | None:
        return self._find(google_id=google_id)

    async def get_by_email_confirm_token(self, token: str) -> User | None:
        return self._find(email_confirm_token=token)

    async def get_by_reset_password_token(self, token: str) -> User | None:
        return self._find(reset_password_token=token)

    def _find(self, **criteria) -> User | None:
        for user in self.store.values():
            if all(getattr(user, k) == v for k, v in criteria.items()):
                return replace(user)
        return None
