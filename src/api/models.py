"""Pydantic models for API request/response."""

from datetime import datetime
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field
from pydantic.networks import validate_email

from domain.model.product import Product
from domain.model.user import User


def _check_email(value: str) -> str:
    # Syntax check only; emails are matched as stored, so keep the original case
    if '<' in value:
        raise ValueError("value is not a valid email address")
    validate_email(value)
    return value


Email = Annotated[str, AfterValidator(_check_email)]


# ── auth ─────────────────────────────────────────────────────


class SignupRequest(BaseModel):
    """Request model for local signup."""
    email: Email
    password: str
    full_name: Optional[str] = None


class LoginRequest(BaseModel):
    """Request model for local login."""
    email: Email
    password: str


class GoogleLoginRequest(BaseModel):
    """Request model for Google login/signup (identity already verified upstream)."""
    email: Email
    google_id: str = Field(..., min_length=1)
    full_name: Optional[str] = None


class ConfirmEmailRequest(BaseModel):
    token: str


class ForgotPasswordRequest(BaseModel):
    email: Email


class ResetPasswordRequest(BaseModel):
    token: str
    new_password: str


class SignupResponse(BaseModel):
    id: int
    email: str
    full_name: Optional[str] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class ConfirmEmailResponse(BaseModel):
    id: int
    email: str
    is_email_confirmed: bool


class ResetPasswordResponse(BaseModel):
    id: int
    email: str


class MessageResponse(BaseModel):
    message: str


# ── users ────────────────────────────────────────────────────


class UserUpdateRequest(BaseModel):
    """Partial profile update; unset fields are left untouched."""
    full_name: Optional[str] = None


class UserResponse(BaseModel):
    """Public user profile (no password hash or tokens)."""
    id: int
    email: str
    full_name: Optional[str] = None
    is_email_confirmed: bool
    provider: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            email=user.email,
            full_name=user.full_name,
            is_email_confirmed=user.is_email_confirmed,
            provider=user.provider,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


# ── products ─────────────────────────────────────────────────


class ProductCreateRequest(BaseModel):
    name: str
    price: float
    description: Optional[str] = None
    stock: int = 0


class ProductUpdateRequest(BaseModel):
    """Partial product update; only fields sent by the client are applied."""
    name: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    stock: Optional[int] = None


class ProductResponse(BaseModel):
    id: int
    name: str
    price: float
    description: Optional[str] = None
    stock: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            name=product.name,
            price=product.price,
            description=product.description,
            stock=product.stock,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
