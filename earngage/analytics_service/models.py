"""
Analytics Service Models

Tracked events and the aggregated reports computed from them.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from core.rows_model import RequestModel, RowModel, parse_json_cell


class EventType(str, Enum):
    """Event types emitted by EarnGage itself; callers may record others"""
    CAMPAIGN_VIEW = "campaign_view"
    CAMPAIGN_APPLICATION = "campaign_application"
    PROFILE_VIEW = "profile_view"


class ProfileType(str, Enum):
    CREATOR = "creator"
    BRAND = "brand"


class AnalyticsEvent(RowModel):
    """Analytics event row (``analytics`` table)"""
    id: str
    event_type: str
    user_id: Optional[str] = None
    campaign_id: Optional[str] = None
    profile_id: Optional[str] = None
    profile_type: Optional[str] = None
    timestamp: Optional[datetime] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('metadata', mode='before')
    @classmethod
    def parse_metadata(cls, v):
        parsed = parse_json_cell(v, {})
        return parsed if isinstance(parsed, dict) else {}


class AnalyticsEventCreateRequest(RequestModel):
    event_type: str = Field(..., min_length=1)
    user_id: Optional[str] = None
    campaign_id: Optional[str] = None
    profile_id: Optional[str] = None
    profile_type: Optional[ProfileType] = None
    timestamp: Optional[datetime] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


# ====================
# Reports
# ====================

class CampaignViewAnalytics(RowModel):
    campaign_id: str
    total_views: int = 0
    unique_viewers: int = 0
    # [{"date": "YYYY-MM-DD", "views": n}] ascending
    views_over_time: List[Dict[str, Any]] = Field(default_factory=list)


class CampaignApplicationAnalytics(RowModel):
    campaign_id: str
    total_applications: int = 0
    applications_by_status: Dict[str, int] = Field(default_factory=dict)
    average_price: float = 0.0
    # [{"date": "YYYY-MM-DD", "applications": n}] ascending
    applications_over_time: List[Dict[str, Any]] = Field(default_factory=list)


class CreatorAnalytics(RowModel):
    creator_id: str
    total_applications: int = 0
    applications_by_status: Dict[str, int] = Field(default_factory=dict)
    total_profile_views: int = 0
    unique_profile_viewers: int = 0
    application_success_rate: float = 0.0


class CampaignConversion(RowModel):
    campaign_id: str
    title: str
    views: int = 0
    applications: int = 0
    conversion_rate: float = 0.0


class BrandAnalytics(RowModel):
    brand_id: str
    total_campaigns: int = 0
    campaigns_by_status: Dict[str, int] = Field(default_factory=dict)
    total_profile_views: int = 0
    unique_profile_viewers: int = 0
    total_applications_received: int = 0
    applications_by_status: Dict[str, int] = Field(default_factory=dict)
    campaign_stats: List[CampaignConversion] = Field(default_factory=list)


class UserCounts(RowModel):
    total: int = 0
    creators: int = 0
    brands: int = 0


class ContentCounts(RowModel):
    campaigns: int = 0
    applications: int = 0


class PlatformAnalytics(RowModel):
    user_counts: UserCounts = Field(default_factory=UserCounts)
    content_counts: ContentCounts = Field(default_factory=ContentCounts)
    user_growth: List[Dict[str, Any]] = Field(default_factory=list)
    cumulative_user_growth: List[Dict[str, Any]] = Field(default_factory=list)
    campaign_growth: List[Dict[str, Any]] = Field(default_factory=list)
    events_by_type: Dict[str, int] = Field(default_factory=dict)
