"""Input validation run by route handlers before calling services.

Each function returns ``(is_valid, error_message)``; the message is empty
when the input is valid.
"""

import math
import re
from typing import Any

PASSWORD_MIN_LENGTH = 8
FULL_NAME_MAX_LENGTH = 120
PRODUCT_NAME_MAX_LENGTH = 200


def validate_password(password: str) -> tuple[bool, str]:
    """Validate password strength."""
    if len(password) < PASSWORD_MIN_LENGTH:
        return False, f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
    if not re.search(r'[A-Z]', password):
        return False, "Password must contain at least one uppercase letter"
    if not re.search(r'[a-z]', password):
        return False, "Password must contain at least one lowercase letter"
    if not re.search(r'[0-9]', password):
        return False, "Password must contain at least one number"
    return True, ""


def validate_full_name(full_name: str | None) -> tuple[bool, str]:
    if full_name is None:
        return True, ""
    if not full_name.strip():
        return False, "Full name must not be blank"
    if len(full_name) > FULL_NAME_MAX_LENGTH:
        return False, f"Full name must be at most {FULL_NAME_MAX_LENGTH} characters"
    return True, ""


def validate_token(token: str) -> tuple[bool, str]:
    if not token or not token.strip():
        return False, "Token is required"
    return True, ""


def validate_product_fields(fields: dict[str, Any], partial: bool = False) -> tuple[bool, str]:
    """Validate catalog attributes.

    With ``partial=True`` (updates) only the keys present are checked and
    ``name``/``price`` are not required.
    """
    if not partial:
        for required in ('name', 'price'):
            if fields.get(required) is None:
                return False, f"Field '{required}' is required"

    if 'name' in fields:
        name = fields['name']
        if name is None or not name.strip():
            return False, "Product name must not be blank"
        if len(name) > PRODUCT_NAME_MAX_LENGTH:
            return False, f"Product name must be at most {PRODUCT_NAME_MAX_LENGTH} characters"

    if 'price' in fields:
        price = fields['price']
        if price is None or math.isnan(price) or price < 0:
            return False, "Price must be a non-negative number"

    if 'stock' in fields:
        stock = fields['stock']
        if stock is None or stock < 0:
            return False, "Stock must be a non-negative integer"

    return True, ""
