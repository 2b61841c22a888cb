from typing import Any, Protocol


class TokenIssuer(Protocol):
    """Signs and verifies access tokens. The token string is opaque to callers."""

    def issue(self, payload: dict[str, Any]) -> str:
        """Return a signed token carrying ``payload`` (``sub``, ``email``)."""
        ...

    def verify(self, token: str) -> dict[str, Any] | None:
        """Return the payload of a valid token, or None."""
        ...
