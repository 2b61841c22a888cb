"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class UserNotFoundError(NotFoundError):
    """No user with the requested id."""

    def __init__(self, message: str = "User not found"):
        super().__init__(message)


class ProductNotFoundError(NotFoundError):
    """No product with the requested id."""

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class DuplicateError(DomainError):
    """Entity with the same unique key already exists."""


class DuplicateEmailError(DuplicateError):
    """Email is already registered to another user."""

    def __init__(self, message: str = "Email already in use"):
        super().__init__(message)


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class InvalidCredentialsError(DomainError):
    """Email/password pair does not authenticate (deliberately vague)."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class InvalidTokenError(DomainError):
    """No user holds the presented one-shot token."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


class InvalidOrExpiredTokenError(InvalidTokenError):
    """Reset token is unknown, already consumed, or past its expiry."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)
