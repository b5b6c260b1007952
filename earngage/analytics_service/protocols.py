"""
Analytics Service Protocols

Interfaces for dependency injection and testing.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from earngage.application_service.models import Application
from earngage.campaign_service.models import Campaign
from earngage.user_service.models import BrandProfile, CreatorProfile, User

from .models import AnalyticsEvent


@runtime_checkable
class AnalyticsRepositoryProtocol(Protocol):
    """Protocol for analytics event repository"""

    async def create_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        ...

    async def list_events(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: str = "timestamp",
        order_direction: str = "asc",
    ) -> List[AnalyticsEvent]:
        ...

    async def list_events_for_campaigns(
        self, event_type: str, campaign_ids: Iterable[str]
    ) -> List[AnalyticsEvent]:
        ...


class CampaignReaderProtocol(Protocol):
    async def get_campaign(self, campaign_id: str) -> Optional[Campaign]:
        ...

    async def list_by_brand(self, brand_user_id: str) -> List[Campaign]:
        ...

    async def list_all_campaigns(self) -> List[Campaign]:
        ...

    async def count_campaigns(self) -> int:
        ...


class ApplicationReaderProtocol(Protocol):
    async def list_by_campaign(self, campaign_id: str) -> List[Application]:
        ...

    async def list_by_creator(self, creator_user_id: str) -> List[Application]:
        ...

    async def list_by_campaign_ids(self, campaign_ids: Iterable[str]) -> List[Application]:
        ...

    async def count_applications(self) -> int:
        ...


class UserReaderProtocol(Protocol):
    async def get_user(self, user_id: str) -> Optional[User]:
        ...

    async def get_creator_profile(self, user_id: str) -> Optional[CreatorProfile]:
        ...

    async def get_brand_profile(self, user_id: str) -> Optional[BrandProfile]:
        ...

    async def list_all_users(self) -> List[User]:
        ...

    async def count_users(self) -> int:
        ...

    async def count_creator_profiles(self) -> int:
        ...

    async def count_brand_profiles(self) -> int:
        ...


__all__ = [
    "AnalyticsRepositoryProtocol",
    "CampaignReaderProtocol",
    "ApplicationReaderProtocol",
    "UserReaderProtocol",
]
