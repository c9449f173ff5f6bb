"""Security utilities - crypto and headers.

Re-exports all security-related functions for convenience.
"""

from src.taskflow.core.security.crypto import (
    DUMMY_PASSWORD_HASH,
    TokenType,
    create_reset_token,
    create_verification_token,
    decode_token,
    hash_password,
    hash_token,
    verify_password,
)
from src.taskflow.core.security.headers import SecurityHeadersMiddleware

__all__ = [
    # Crypto
    "DUMMY_PASSWORD_HASH",
    "TokenType",
    "create_reset_token",
    "create_verification_token",
    "decode_token",
    "hash_password",
    "hash_token",
    "verify_password",
    # Middleware
    "SecurityHeadersMiddleware",
]
