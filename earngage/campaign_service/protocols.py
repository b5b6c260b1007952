"""
Campaign Service Protocols

Interfaces for dependency injection and testing.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from earngage.user_service.models import BrandProfile, CreatorProfile

from .models import Campaign


@runtime_checkable
class CampaignRepositoryProtocol(Protocol):
    """Protocol for campaign data repository"""

    async def get_campaign(self, campaign_id: str) -> Optional[Campaign]:
        ...

    async def get_campaigns_by_ids(self, campaign_ids: Iterable[str]) -> List[Campaign]:
        ...

    async def create_campaign(self, campaign: Campaign) -> Campaign:
        ...

    async def update_campaign(self, campaign: Campaign, updates: Dict[str, Any]) -> Campaign:
        ...

    async def delete_campaign(self, campaign_id: str) -> bool:
        ...

    async def list_campaigns(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10,
        order_by: str = "created_at",
        order_direction: str = "desc",
    ) -> List[Campaign]:
        ...

    async def list_by_brand(self, brand_user_id: str) -> List[Campaign]:
        ...

    async def list_all_campaigns(self) -> List[Campaign]:
        ...

    async def count_campaigns(self) -> int:
        ...


class ApplicationReaderProtocol(Protocol):
    """Application lookups used for campaign stats"""

    async def list_by_campaign(self, campaign_id: str) -> List[Any]:
        ...


class EventReaderProtocol(Protocol):
    """Analytics event lookups used for campaign stats"""

    async def list_events(self, filters: Optional[Dict[str, Any]] = None) -> List[Any]:
        ...


class ProfileReaderProtocol(Protocol):
    """Profile lookups used for enrichment and recommendations"""

    async def get_creator_profile(self, user_id: str) -> Optional[CreatorProfile]:
        ...

    async def get_brand_profile(self, user_id: str) -> Optional[BrandProfile]:
        ...


__all__ = [
    "CampaignRepositoryProtocol",
    "ApplicationReaderProtocol",
    "EventReaderProtocol",
    "ProfileReaderProtocol",
]
