"""
JWT Token Manager for EarnGage

Issues and verifies the signed access tokens handed out at login and
registration.
"""

import jwt
import uuid
import secrets
import logging
from typing import Dict, Any, Optional
from datetime import datetime, timedelta, timezone
from dataclasses import dataclass, field

from core.config import AuthConfig

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


@dataclass
class TokenClaims:
    """Claims carried by an access token"""
    user_id: str
    email: Optional[str] = None
    user_type: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)


class JWTManager:
    """
    Self-issued JWT access tokens.

    Tokens carry ``sub`` (user id), ``email`` and ``user_type`` and expire
    after ``access_token_expiry`` seconds.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: str = "HS256",
        issuer: str = "earngage",
        access_token_expiry: int = 3600,
    ):
        """
        Args:
            secret_key: Signing secret (generated when not provided)
            algorithm: JWT algorithm
            issuer: Token issuer identifier
            access_token_expiry: Access token lifetime in seconds
        """
        if not secret_key:
            logger.warning(
                "No JWT_SECRET provided - using generated secret. "
                "Tokens will not survive a restart."
            )
        self.secret_key = secret_key or secrets.token_urlsafe(64)
        self.algorithm = algorithm
        self.issuer = issuer
        self.access_token_expiry = access_token_expiry

    @classmethod
    def from_config(cls, config: AuthConfig) -> "JWTManager":
        return cls(
            secret_key=config.jwt_secret,
            algorithm=config.jwt_algorithm,
            issuer=config.jwt_issuer,
            access_token_expiry=config.access_token_expiry,
        )

    def create_access_token(
        self,
        claims: TokenClaims,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        now = datetime.now(tz=timezone.utc)
        expires = now + (expires_delta or timedelta(seconds=self.access_token_expiry))

        payload = {
            "iss": self.issuer,
            "sub": claims.user_id,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
            "jti": str(uuid.uuid4()),
            "type": ACCESS_TOKEN_TYPE,
            "email": claims.email,
            "user_type": claims.user_type,
            "metadata": claims.metadata or None,
        }
        payload = {k: v for k, v in payload.items() if v is not None}

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"Created access token for user: {claims.user_id}, expires: {expires}")
        return token

    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a token.

        Returns:
            ``{"valid": True, "user_id": ..., ...}`` or
            ``{"valid": False, "error": ...}``
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            return {"valid": False, "error": "Token has expired"}
        except jwt.InvalidIssuerError:
            return {"valid": False, "error": "Invalid token issuer"}
        except jwt.InvalidTokenError as e:
            return {"valid": False, "error": f"Invalid token: {e}"}

        if payload.get("type") != ACCESS_TOKEN_TYPE:
            return {"valid": False, "error": f"Invalid token type: {payload.get('type')}"}

        return {
            "valid": True,
            "payload": payload,
            "user_id": payload.get("sub"),
            "email": payload.get("email"),
            "user_type": payload.get("user_type"),
            "expires_at": datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            "jti": payload.get("jti"),
        }


__all__ = ["TokenClaims", "JWTManager"]
