"""
Password Utilities for Authentication Service

Password hashing and verification using bcrypt.
"""

import logging
from typing import Optional, Tuple

import bcrypt

logger = logging.getLogger(__name__)

# Bcrypt work factor
BCRYPT_ROUNDS = 12


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password
        rounds: Bcrypt work factor

    Returns:
        Bcrypt hash string
    """
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Verify a password against its hash.

    Returns:
        True if password matches, False otherwise (including a missing or
        malformed hash)
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError as e:
        logger.error(f"Password verification failed: {e}")
        return False


def is_password_strong(password: str, min_length: int = 8) -> Tuple[bool, Optional[str]]:
    """
    Check minimum password requirements.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if len(password) < min_length:
        return False, f"Password must be at least {min_length} characters"

    has_letter = any(c.isalpha() for c in password)
    has_digit = any(c.isdigit() for c in password)
    if not (has_letter and has_digit):
        return False, "Password must contain a letter and a number"

    return True, None
