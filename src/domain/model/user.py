from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a user."""
    id: int
    email: str
    created_at: datetime
    updated_at: datetime
    full_name: str | None = None
    password_hash: str | None = None
    google_id: str | None = None
    is_email_confirmed: bool = False
    email_confirm_token: str | None = None
    reset_password_token: str | None = None
    reset_password_expires_at: datetime | None = None

    @property
    def provider(self) -> str:
        """'google' once linked to a Google identity, else 'email'."""
        return 'google' if self.google_id else 'email'
