"""Public-safe results of the authentication flows.

None of these carry password hashes or one-shot tokens.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SignupResult:
    id: int
    email: str
    full_name: str | None


@dataclass(frozen=True)
class AccessToken:
    access_token: str
    token_type: str = "bearer"


@dataclass(frozen=True)
class EmailConfirmation:
    id: int
    email: str
    is_email_confirmed: bool


@dataclass(frozen=True)
class PasswordReset:
    id: int
    email: str
