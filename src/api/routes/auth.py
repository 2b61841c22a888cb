"""Authentication routes (signup, login, email confirmation, password reset, Google)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_auth_service
from api.models import (
    ConfirmEmailRequest,
    ConfirmEmailResponse,
    ForgotPasswordRequest,
    GoogleLoginRequest,
    LoginRequest,
    MessageResponse,
    ResetPasswordRequest,
    ResetPasswordResponse,
    SignupRequest,
    SignupResponse,
    TokenResponse,
    UserResponse,
)
from api.security import get_current_user_required
from domain.model.errors import (
    DuplicateEmailError,
    DuplicateError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from domain.model.user import User
from services.auth_service import AuthService
from services.validation import validate_full_name, validate_password, validate_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _require_valid(result: tuple[bool, str]) -> None:
    """Raise 400 with the validation message when ``result`` is invalid."""
    is_valid, error_msg = result
    if not is_valid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error_msg)


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, auth: AuthService = Depends(get_auth_service)):
    """Register a local account. The account starts unconfirmed.

    Raises:
        HTTPException: 409 if email already exists, 400 if validation fails
    """
    _require_valid(validate_password(request.password))
    _require_valid(validate_full_name(request.full_name))

    try:
        result = await auth.signup(request.email, request.password, request.full_name)
    except DuplicateEmailError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    logger.info("User registered", extra={"userId": result.id, "email": result.email})
    return SignupResponse(id=result.id, email=result.email, full_name=result.full_name)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Login with email and password and return an access token.

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    try:
        token = await auth.login(request.email, request.password)
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
    return TokenResponse(access_token=token.access_token, token_type=token.token_type)


@router.post("/confirm-email", response_model=ConfirmEmailResponse)
async def confirm_email(request: ConfirmEmailRequest, auth: AuthService = Depends(get_auth_service)):
    _require_valid(validate_token(request.token))
    try:
        result = await auth.confirm_email(request.token)
    except InvalidTokenError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ConfirmEmailResponse(
        id=result.id,
        email=result.email,
        is_email_confirmed=result.is_email_confirmed,
    )


@router.post("/forgot-password", response_model=MessageResponse, status_code=status.HTTP_202_ACCEPTED)
async def forgot_password(request: ForgotPasswordRequest, auth: AuthService = Depends(get_auth_service)):
    """Request a password reset. Responds identically whether or not the email exists."""
    await auth.forgot_password(request.email)
    return MessageResponse(message="If the account exists, a reset link has been issued")


@router.post("/reset-password", response_model=ResetPasswordResponse)
async def reset_password(request: ResetPasswordRequest, auth: AuthService = Depends(get_auth_service)):
    _require_valid(validate_token(request.token))
    _require_valid(validate_password(request.new_password))
    try:
        result = await auth.reset_password(request.token, request.new_password)
    except InvalidTokenError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ResetPasswordResponse(id=result.id, email=result.email)


async def _google(google_flow, request: GoogleLoginRequest) -> TokenResponse:
    _require_valid(validate_full_name(request.full_name))
    try:
        token = await google_flow(request.email, request.google_id, request.full_name)
    except DuplicateError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return TokenResponse(access_token=token.access_token, token_type=token.token_type)


@router.post("/google/login", response_model=TokenResponse)
async def google_login(request: GoogleLoginRequest, auth: AuthService = Depends(get_auth_service)):
    return await _google(auth.login_with_google, request)


@router.post("/google/signup", response_model=TokenResponse)
async def google_signup(request: GoogleLoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Same as /google/login: the first Google login creates the account."""
    return await _google(auth.signup_with_google, request)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user_required)):
    """Get current authenticated user info."""
    return UserResponse.from_domain(current_user)
