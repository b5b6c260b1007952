"""
Campaign Service Models

Campaigns posted by brands, plus search criteria and stats.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from core.rows_model import RequestModel, RowModel
from earngage.user_service.models import BrandProfile


class CampaignStatus(str, Enum):
    """Campaign lifecycle states"""
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


VALID_CAMPAIGN_STATUSES = [s.value for s in CampaignStatus]


class Campaign(RowModel):
    """Campaign row (``campaigns`` table)"""
    id: str
    brand_user_id: str
    title: str
    description: Optional[str] = None
    requirements: Optional[Union[str, List[str]]] = None
    budget: Optional[float] = None
    status: CampaignStatus = CampaignStatus.DRAFT
    category: Optional[str] = None
    start_date: Optional[Union[datetime, str]] = None
    end_date: Optional[Union[datetime, str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('budget', mode='before')
    @classmethod
    def empty_budget(cls, v):
        return None if v == "" else v


class CampaignDetails(Campaign):
    """Campaign with its brand's profile attached"""
    brand: Optional[BrandProfile] = None


# ====================
# Request Models
# ====================

class CampaignCreateRequest(RequestModel):
    """Fields a brand provides when posting a campaign"""
    brand_user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    requirements: Union[str, List[str]]
    budget: float = Field(..., gt=0)
    status: CampaignStatus = CampaignStatus.DRAFT
    category: Optional[str] = None
    start_date: Optional[Union[datetime, str]] = None
    end_date: Optional[Union[datetime, str]] = None

    @field_validator('requirements')
    @classmethod
    def requirements_not_empty(cls, v):
        if not v:
            raise ValueError("requirements must not be empty")
        return v


class CampaignSearchCriteria(RequestModel):
    """Named criteria plus optional column filters in operator form, e.g. ``{"budget": {"gte": 100}}``"""
    search_term: Optional[str] = None
    category: Optional[str] = None
    min_budget: Optional[float] = Field(None, ge=0)
    max_budget: Optional[float] = Field(None, ge=0)
    status: Optional[CampaignStatus] = None
    start_date_from: Optional[Union[datetime, str]] = None
    start_date_to: Optional[Union[datetime, str]] = None
    filters: Dict[str, Any] = Field(default_factory=dict)
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=100)
    order_by: str = "created_at"
    order_direction: str = Field("desc", pattern="^(asc|desc)$")


# ====================
# Stats
# ====================

class CampaignStats(RowModel):
    campaign_id: str
    total_applications: int = 0
    pending_applications: int = 0
    approved_applications: int = 0
    rejected_applications: int = 0
    completed_applications: int = 0
    # Omitted when view events cannot be read
    total_views: Optional[int] = None
    unique_viewers: Optional[int] = None


# Columns an update may never overwrite
PROTECTED_CAMPAIGN_FIELDS = {"id", "brandUserId", "brand_user_id", "createdAt", "created_at"}

RECOMMENDATION_POOL_SIZE = 10
MIN_RECOMMENDATIONS = 5
