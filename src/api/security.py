"""Bearer-token authentication dependencies."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_token_issuer, get_users_service
from domain.model.user import User
from port.token_issuer import TokenIssuer
from services.users_service import UsersService

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _subject_id(claims: dict) -> int | None:
    """Extract the integer user id from the ``sub`` claim."""
    try:
        return int(claims.get("sub"))
    except (TypeError, ValueError):
        return None


async def get_current_user_required(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    users: UsersService = Depends(get_users_service),
) -> User:
    """Get current authenticated user (required). Raises 401 if not authenticated."""
    if not credentials:
        raise _unauthorized("Not authenticated")

    claims = token_issuer.verify(credentials.credentials)
    user_id = _subject_id(claims) if claims else None
    if user_id is None:
        raise _unauthorized("Invalid authentication credentials")

    user = await users.find_by_id(user_id)
    if not user:
        logger.debug("Token subject no longer exists", extra={"userId": user_id})
        raise _unauthorized("User not found")

    return user
