"""Cryptographic utilities - password hashing, signed tokens, and token hashing."""

from datetime import UTC, datetime, timedelta
from hashlib import sha256
from typing import Any
from uuid import UUID, uuid4

import argon2
from jose import JWTError, jwt

from src.taskflow.core.config import get_settings


class TokenType:
    """Signed token purposes. A token is only accepted for the purpose it was issued for."""

    VERIFICATION = "verification"
    RESET = "reset"


def hash_token(token: str) -> str:
    """Hash a token using SHA256 for secure storage."""
    return sha256(token.encode()).hexdigest()


def _create_password_hasher() -> argon2.PasswordHasher:
    """Create password hasher with settings from config."""
    settings = get_settings()
    return argon2.PasswordHasher(
        time_cost=settings.argon2_time_cost,
        memory_cost=settings.argon2_memory_cost,
        parallelism=settings.argon2_parallelism,
    )


_password_hasher = _create_password_hasher()

# Verified against when no account matches, so login costs the same either way
DUMMY_PASSWORD_HASH = _password_hasher.hash("taskflow-dummy-password")


def hash_password(password: str) -> str:
    """Hash password using Argon2id."""
    return _password_hasher.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify password against hash. Returns False on any error."""
    try:
        _password_hasher.verify(hashed, password)
        return True
    except argon2.exceptions.VerifyMismatchError:
        return False
    except argon2.exceptions.InvalidHashError:
        return False


def _sign(claims: dict[str, Any], expire: datetime) -> str:
    settings = get_settings()
    token: str = jwt.encode(  # type: ignore[assignment]
        {**claims, "exp": expire},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return token


def create_verification_token(user_id: str | UUID, email: str) -> str:
    """Create the signed token embedded in the email verification link."""
    settings = get_settings()
    expire = datetime.now(UTC) + timedelta(hours=settings.email_verification_expire_hours)
    return _sign(
        {"id": str(user_id), "email": email, "type": TokenType.VERIFICATION},
        expire,
    )


def create_reset_token(user_id: str | UUID, email: str) -> tuple[str, datetime]:
    """Create a password reset token. Returns (token, expiry as naive UTC datetime).

    Includes a unique JWT ID (jti) so that tokens issued for the same user in
    the same second still differ, which keeps their stored hashes unique.
    """
    settings = get_settings()
    expire = datetime.now(UTC) + timedelta(minutes=settings.reset_token_expire_minutes)
    token = _sign(
        {
            "id": str(user_id),
            "email": email,
            "type": TokenType.RESET,
            "jti": str(uuid4()),
        },
        expire,
    )
    # Return naive datetime for PostgreSQL TIMESTAMP (without timezone)
    return token, expire.replace(tzinfo=None)


def decode_token(token: str, expected_type: str | None = None) -> dict[str, Any] | None:
    """Decode and validate a signed token. Returns None on any error.

    Expired, tampered, foreign-key-signed and wrong-purpose tokens all yield None.
    """
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
    if expected_type is not None and payload.get("type") != expected_type:
        return None
    return payload
