"""Credential helpers shared by the user and auth services."""

import secrets

import bcrypt

BCRYPT_ROUNDS = 10
TOKEN_BYTES = 32
# bcrypt only reads the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Hash password with bcrypt using a fresh salt."""
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain: str, hashed: str | None) -> bool:
    """Check plain against a bcrypt hash. Never raises; False on any mismatch."""
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain), hashed.encode("utf-8"))
    except ValueError:
        # Malformed or non-bcrypt digest
        return False


def generate_token() -> str:
    """Random one-shot token: 32 bytes from the OS CSPRNG as 64 hex chars."""
    return secrets.token_hex(TOKEN_BYTES)
