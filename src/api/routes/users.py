"""User profile routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_users_service
from api.models import UserResponse, UserUpdateRequest
from api.security import get_current_user_required
from domain.model.errors import UserNotFoundError
from domain.model.user import User
from services.users_service import UsersService
from services.validation import validate_full_name

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user_required)):
    return UserResponse.from_domain(current_user)


@router.patch("/me", response_model=UserResponse)
async def update_profile(
    request: UserUpdateRequest,
    current_user: User = Depends(get_current_user_required),
    users: UsersService = Depends(get_users_service),
):
    """Update the caller's profile. Fields omitted from the body are left untouched."""
    changes = request.model_dump(exclude_unset=True)
    is_valid, error_msg = validate_full_name(changes.get('full_name'))
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_msg)

    try:
        user = await users.update(current_user.id, changes)
    except UserNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    logger.info("Profile updated", extra={"userId": user.id, "fields": sorted(changes)})
    return UserResponse.from_domain(user)
