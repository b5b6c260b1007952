"""
Authentication Service Models
"""

from typing import Optional

from pydantic import ConfigDict, EmailStr, Field, field_validator

from core.rows_model import RequestModel, RowModel
from earngage.user_service.models import User, UserType


class LoginRequest(RequestModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class RegisterRequest(RequestModel):
    """Signup form; userType defaults to creator"""
    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr
    password: str = Field(..., min_length=1)
    user_type: UserType = UserType.CREATOR
    firstname: Optional[str] = None
    surname: Optional[str] = None

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class ChangePasswordRequest(RequestModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class AuthResult(RowModel):
    """Signed-in user (without password) and its access token"""
    user: User
    token: str
    token_type: str = "Bearer"
    expires_in: int = 3600
