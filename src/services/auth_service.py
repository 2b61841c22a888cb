"""Auth service: signup, login and token flows.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from datetime import datetime, timedelta, timezone

from domain.model.auth import AccessToken, EmailConfirmation, PasswordReset, SignupResult
from domain.model.errors import InvalidCredentialsError
from domain.model.user import User
from port.token_issuer import TokenIssuer
from services.credentials import generate_token, verify_password
from services.users_service import UsersService

logger = logging.getLogger(__name__)

RESET_TOKEN_TTL = timedelta(hours=1)


class AuthService:
    def __init__(self, users: UsersService, token_issuer: TokenIssuer):
        self.users = users
        self.token_issuer = token_issuer

    async def signup(self, email: str, password: str, full_name: str | None) -> SignupResult:
        """Register a local account with a fresh email confirmation token.

        Raises:
            DuplicateEmailError: email already registered
        """
        user = await self.users.create_local_user(email, password, full_name, generate_token())
        return SignupResult(id=user.id, email=user.email, full_name=user.full_name)

    async def login(self, email: str, password: str) -> AccessToken:
        """Authenticate by email and password.

        Google-only accounts have no password hash and never pass here.

        Raises:
            InvalidCredentialsError: unknown email, no password set, or wrong password
        """
        user = await self.users.find_by_email(email)
        if not user or not user.password_hash:
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        logger.info("User logged in", extra={"userId": user.id, "provider": "email"})
        return self._issue_access_token(user)

    async def confirm_email(self, token: str) -> EmailConfirmation:
        user = await self.users.mark_email_confirmed(token)
        return EmailConfirmation(
            id=user.id,
            email=user.email,
            is_email_confirmed=user.is_email_confirmed,
        )

    async def forgot_password(self, email: str) -> None:
        """Stamp a reset token valid for one hour.

        Unknown emails are a silent no-op so callers cannot enumerate accounts.
        """
        user = await self.users.find_by_email(email)
        if not user:
            logger.debug("Password reset requested for unknown email")
            return

        expires_at = datetime.now(timezone.utc) + RESET_TOKEN_TTL
        await self.users.set_reset_password_token(user, generate_token(), expires_at)
        logger.info("Password reset requested", extra={"userId": user.id})

    async def reset_password(self, token: str, new_password: str) -> PasswordReset:
        user = await self.users.reset_password(token, new_password)
        return PasswordReset(id=user.id, email=user.email)

    async def login_with_google(
        self,
        email: str,
        google_id: str,
        full_name: str | None = None,
    ) -> AccessToken:
        """Log in with a Google identity, creating or linking the account on first use."""
        user = await self.users.create_google_user(email, google_id, full_name or email)
        logger.info("User logged in", extra={"userId": user.id, "provider": "google"})
        return self._issue_access_token(user)

    # Google has no separate signup path: the first login creates the account.
    signup_with_google = login_with_google

    def _issue_access_token(self, user: User) -> AccessToken:
        payload = {"sub": str(user.id), "email": user.email}
        return AccessToken(access_token=self.token_issuer.issue(payload))
