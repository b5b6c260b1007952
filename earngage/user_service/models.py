"""
User Service Models

Users and the creator/brand profiles attached to them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from core.rows_model import RequestModel, RowModel, parse_json_cell, parse_list_cell


class UserType(str, Enum):
    """Marketplace roles"""
    CREATOR = "creator"
    BRAND = "brand"


class User(RowModel):
    """
    User row (``users`` table)

    ``password`` holds the bcrypt hash and is excluded from every dump;
    the repository writes it explicitly.
    """
    id: str
    email: str
    user_type: Union[UserType, str] = UserType.CREATOR
    password: Optional[str] = Field(default=None, exclude=True, repr=False)
    firstname: Optional[str] = None
    surname: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_login: Optional[datetime] = None

    @field_validator('email', mode='before')
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator('user_type', mode='before')
    @classmethod
    def known_user_type(cls, v):
        # Unknown stored values stay strings so callers can reject them
        try:
            return UserType(v)
        except ValueError:
            return v

    @property
    def display_name(self) -> str:
        return self.firstname or self.email


class CreatorProfile(RowModel):
    """Creator profile row (``creator_profiles`` table)"""
    id: str
    user_id: str
    display_name: Optional[str] = None
    bio: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    niches: List[str] = Field(default_factory=list)
    social_media: Dict[str, Any] = Field(default_factory=dict)
    demographics: Dict[str, Any] = Field(default_factory=dict)
    metrics: Dict[str, Any] = Field(default_factory=dict)
    portfolio_items: List[Any] = Field(default_factory=list)
    follower_count: Optional[int] = None
    engagement_rate: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('categories', 'niches', mode='before')
    @classmethod
    def parse_string_list(cls, v):
        return parse_list_cell(v)

    @field_validator('portfolio_items', mode='before')
    @classmethod
    def parse_portfolio(cls, v):
        parsed = parse_json_cell(v, [])
        return parsed if isinstance(parsed, list) else [parsed]

    @field_validator('social_media', 'demographics', 'metrics', mode='before')
    @classmethod
    def parse_object(cls, v):
        parsed = parse_json_cell(v, {})
        return parsed if isinstance(parsed, dict) else {}

    @field_validator('follower_count', 'engagement_rate', mode='before')
    @classmethod
    def empty_number(cls, v):
        return None if v == "" else v


class BrandProfile(RowModel):
    """Brand profile row (``brand_profiles`` table)"""
    id: str
    user_id: str
    company_name: Optional[str] = None
    bio: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    # column filters in operator form
    filters: Dict[str, Any] = Field(default_factory=dict)
    website: Optional[str] = None
    logo_url: Optional[str] = None
    social_media: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('social_media', mode='before')
    @classmethod
    def parse_object(cls, v):
        parsed = parse_json_cell(v, {})
        return parsed if isinstance(parsed, dict) else {}


class CreatorProfileDetails(CreatorProfile):
    """Creator profile merged with the owner's email and role"""
    email: Optional[str] = None
    user_type: UserType = UserType.CREATOR


class BrandProfileDetails(BrandProfile):
    """Brand profile merged with the owner's email and role"""
    email: Optional[str] = None
    user_type: UserType = UserType.BRAND


class UserProfileSummary(RowModel):
    """Header-level view of a user"""
    display_name: str
    email: str
    user_type: UserType


# ====================
# Request Models
# ====================

class CreatorProfileCreateRequest(RequestModel):
    display_name: Optional[str] = None
    bio: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    niches: List[str] = Field(default_factory=list)
    social_media: Dict[str, Any] = Field(default_factory=dict)
    demographics: Dict[str, Any] = Field(default_factory=dict)
    metrics: Dict[str, Any] = Field(default_factory=dict)
    portfolio_items: List[Any] = Field(default_factory=list)
    follower_count: Optional[int] = Field(None, ge=0)
    engagement_rate: Optional[float] = Field(None, ge=0)


class BrandProfileCreateRequest(RequestModel):
    company_name: Optional[str] = None
    bio: Optional[str] = None
    industry: Optional[str] = None
    company_size: Optional[str] = None
    website: Optional[str] = None
    logo_url: Optional[str] = None
    social_media: Dict[str, Any] = Field(default_factory=dict)


class UserSearchCriteria(RequestModel):
    """Search options shared by creator and brand search"""
    search_term: Optional[str] = None
    # creators
    categories: List[str] = Field(default_factory=list)
    min_followers: Optional[int] = Field(None, ge=0)
    max_followers: Optional[int] = Field(None, ge=0)
    min_engagement: Optional[float] = Field(None, ge=0)
    # brands
    industry: Optional[str] = None
    company_size: Optional[str] = None
    # paging
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=100)
    order_by: str = "created_at"
    order_direction: str = Field("desc", pattern="^(asc|desc)$")


# ====================
# Stats
# ====================

class CreatorStats(RowModel):
    total_applications: int = 0
    approved_applications: int = 0
    completed_applications: int = 0


class BrandStats(RowModel):
    total_campaigns: int = 0
    active_campaigns: int = 0
    total_applications_received: int = 0


# Columns a profile update may never overwrite
PROTECTED_PROFILE_FIELDS = {"id", "userId", "user_id", "createdAt", "created_at"}
