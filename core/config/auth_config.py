#!/usr/bin/env python3
"""Authentication configuration"""
import os
from dataclasses import dataclass
from typing import Optional


def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class AuthConfig:
    """JWT and password hashing settings"""
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "earngage"
    access_token_expiry: int = 3600
    bcrypt_rounds: int = 12
    min_password_length: int = 8

    @classmethod
    def from_env(cls) -> 'AuthConfig':
        return cls(
            jwt_secret=os.getenv("JWT_SECRET") or None,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_issuer=os.getenv("JWT_ISSUER", "earngage"),
            access_token_expiry=_int(os.getenv("ACCESS_TOKEN_EXPIRY", "3600"), 3600),
            bcrypt_rounds=_int(os.getenv("BCRYPT_ROUNDS", "12"), 12),
            min_password_length=_int(os.getenv("MIN_PASSWORD_LENGTH", "8"), 8),
        )
