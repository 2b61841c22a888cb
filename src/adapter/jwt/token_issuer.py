"""python-jose implementation of TokenIssuer."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRATION = timedelta(days=7)


class JoseTokenIssuer:
    """HS256 signer. Without a secret it signs nothing and accepts no token."""

    def __init__(
        self,
        secret_key: str | None,
        algorithm: str = DEFAULT_ALGORITHM,
        expires_in: timedelta = DEFAULT_EXPIRATION,
    ):
        self._secret_key = secret_key or None
        self.algorithm = algorithm
        self.expires_in = expires_in

    @property
    def configured(self) -> bool:
        return self._secret_key is not None

    def issue(self, payload: dict[str, Any]) -> str:
        """Sign payload as a JWT with iat/exp claims added."""
        if not self.configured:
            raise ValueError(
                "JWT_SECRET_KEY environment variable is required. "
                "Generate a secure key with: openssl rand -hex 32"
            )
        now = datetime.now(timezone.utc)
        claims = {**payload, "iat": now, "exp": now + self.expires_in}
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any] | None:
        """Verify JWT signature and expiry. Return claims or None."""
        if not self.configured:
            logger.warning("JWT verification skipped: JWT_SECRET_KEY is not set")
            return None
        try:
            return jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None
