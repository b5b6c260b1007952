"""
Application Service Models

Creator applications to campaigns and their review state.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from core.rows_model import RequestModel, RowModel
from earngage.campaign_service.models import CampaignDetails
from earngage.user_service.models import CreatorProfileDetails


class ApplicationStatus(str, Enum):
    """Application review states"""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"


VALID_APPLICATION_STATUSES = [s.value for s in ApplicationStatus]


class Application(RowModel):
    """Application row (``applications`` table)"""
    id: str
    campaign_id: str
    creator_user_id: str
    proposal: Optional[str] = None
    price: Optional[float] = None
    status: ApplicationStatus = ApplicationStatus.PENDING
    feedback: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator('price', mode='before')
    @classmethod
    def empty_price(cls, v):
        return None if v == "" else v


class ApplicationDetails(Application):
    """Application with the creator or the campaign (and its brand) attached"""
    creator: Optional[CreatorProfileDetails] = None
    campaign: Optional[CampaignDetails] = None


class ApplicationCreateRequest(RequestModel):
    campaign_id: str = Field(..., min_length=1)
    creator_user_id: str = Field(..., min_length=1)
    proposal: str = Field(..., min_length=1)
    price: Optional[float] = Field(None, ge=0)


class ApplicationAnalytics(RowModel):
    campaign_id: str
    total_applications: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
    average_price: float = 0.0


# Fields frozen once an application leaves pending
REVIEW_LOCKED_FIELDS = {"proposal", "price"}

# Columns an update may never overwrite
PROTECTED_APPLICATION_FIELDS = {
    "id", "campaignId", "campaign_id", "creatorUserId", "creator_user_id", "createdAt", "created_at",
}


__all__ = [
    "ApplicationStatus",
    "VALID_APPLICATION_STATUSES",
    "Application",
    "ApplicationDetails",
    "ApplicationCreateRequest",
    "ApplicationAnalytics",
    "REVIEW_LOCKED_FIELDS",
    "PROTECTED_APPLICATION_FIELDS",
]
