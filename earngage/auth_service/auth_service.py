"""
Authentication Service Business Logic

Sign-in, signup, token validation and password change. Passwords are
stored as bcrypt hashes; tokens are signed JWT access tokens. When a
session is wired, sign-in and signup store the token in it and logout
clears it.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError

from core.config import AuthConfig
from core.exceptions import (
    AuthenticationError,
    DuplicateError,
    NotFoundError,
    ValidationFailedError,
)
from core.jwt_manager import JWTManager, TokenClaims
from core.rows_helpers import generate_row_id
from core.session import SessionProtocol
from earngage.user_service.models import BrandProfile, CreatorProfile, User, UserType

from .models import AuthResult, ChangePasswordRequest, LoginRequest, RegisterRequest
from .password_utils import hash_password, is_password_strong, verify_password
from .protocols import UserAccountRepositoryProtocol

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Authentication business logic layer"""

    def __init__(
        self,
        user_repository: UserAccountRepositoryProtocol,
        jwt_manager: JWTManager,
        session: Optional[SessionProtocol] = None,
        config: Optional[AuthConfig] = None,
    ):
        self.user_repository = user_repository
        self.jwt_manager = jwt_manager
        self.session = session
        self.config = config or AuthConfig()

    def _issue_token(self, user: User) -> AuthResult:
        token = self.jwt_manager.create_access_token(
            TokenClaims(user_id=user.id, email=user.email, user_type=getattr(user.user_type, "value", user.user_type))
        )
        if self.session:
            self.session.set_token(token)
        return AuthResult(user=user, token=token, expires_in=self.jwt_manager.access_token_expiry)

    def _check_strength(self, password: str) -> None:
        ok, message = is_password_strong(password, self.config.min_password_length)
        if not ok:
            raise ValidationFailedError(message, field="password")

    # ====================
    # Sign-in / signup
    # ====================

    async def login_user(self, email: str, password: str) -> AuthResult:
        """
        Raises:
            ValidationFailedError: malformed email
            AuthenticationError: unknown email or wrong password
        """
        try:
            request = LoginRequest(email=email, password=password)
        except ValidationError as e:
            raise ValidationFailedError(f"Invalid login request: {e}")

        user = await self.user_repository.get_user_by_email(request.email)
        if not user or not verify_password(request.password, user.password):
            logger.info(f"Failed login for {request.email}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        now = datetime.now(timezone.utc)
        try:
            user = await self.user_repository.update_user(user, {"lastLogin": now})
        except Exception as e:
            logger.warning(f"Failed to stamp last login for {user.id}: {e}")

        logger.info(f"User {user.id} logged in")
        return self._issue_token(user.model_copy(update={"password": None}))

    async def register_user(self, data: Dict[str, Any]) -> AuthResult:
        """
        Create a user and an empty profile of the matching type.

        Raises:
            ValidationFailedError: bad email, weak password or unknown userType
            DuplicateError: email already registered
        """
        try:
            request = RegisterRequest.model_validate(data or {})
        except ValidationError as e:
            raise ValidationFailedError(f"Invalid registration: {e}")
        self._check_strength(request.password)

        if await self.user_repository.get_user_by_email(request.email):
            raise DuplicateError("An account with this email already exists")

        now = datetime.now(timezone.utc)
        user = User(
            id=generate_row_id("usr"),
            email=request.email,
            user_type=request.user_type,
            password=hash_password(request.password, self.config.bcrypt_rounds),
            firstname=request.firstname,
            surname=request.surname,
            created_at=now,
            updated_at=now,
        )
        user = await self.user_repository.create_user(user)
        await self._create_empty_profile(user, now)

        return self._issue_token(user.model_copy(update={"password": None}))

    async def _create_empty_profile(self, user: User, now: datetime) -> None:
        try:
            if user.user_type == UserType.CREATOR:
                await self.user_repository.create_creator_profile(CreatorProfile(
                    id=generate_row_id("crp"),
                    user_id=user.id,
                    display_name=user.firstname,
                    created_at=now,
                    updated_at=now,
                ))
            else:
                await self.user_repository.create_brand_profile(BrandProfile(
                    id=generate_row_id("brp"),
                    user_id=user.id,
                    created_at=now,
                    updated_at=now,
                ))
        except Exception as e:
            logger.error(f"Failed to create profile for new user {user.id}: {e}")

    # ====================
    # Tokens
    # ====================

    async def validate_token(self, token: Optional[str] = None) -> Optional[User]:
        """
        Verify a token (default: the session token) and load its user.

        Returns:
            The user, or None for a missing, invalid or expired token or a
            user that no longer exists
        """
        token = token or (self.session.get_token() if self.session else None)
        if not token:
            return None

        result = self.jwt_manager.verify_token(token)
        if not result.get("valid"):
            logger.debug(f"Token rejected: {result.get('error')}")
            return None

        user = await self.user_repository.get_user(result["user_id"])
        if not user:
            return None
        return user.model_copy(update={"password": None})

    def logout(self) -> None:
        if self.session:
            self.session.clear()

    async def change_password(self, user_id: str, current_password: str, new_password: str) -> bool:
        """
        Raises:
            NotFoundError: user missing
            AuthenticationError: current password wrong
            ValidationFailedError: new password too weak
        """
        try:
            request = ChangePasswordRequest(current_password=current_password, new_password=new_password)
        except ValidationError as e:
            raise ValidationFailedError(f"Invalid password change: {e}")

        user = await self.user_repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found", entity="user", entity_id=user_id)
        if not verify_password(request.current_password, user.password):
            raise AuthenticationError("Current password is incorrect")
        self._check_strength(request.new_password)

        await self.user_repository.update_user(user, {
            "password": hash_password(request.new_password, self.config.bcrypt_rounds),
            "updatedAt": datetime.now(timezone.utc),
        })
        logger.info(f"Password changed for user {user_id}")
        return True
