"""
Application Service Protocols

Interfaces for dependency injection and testing.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from earngage.campaign_service.models import Campaign
from earngage.user_service.models import BrandProfile, CreatorProfile, User

from .models import Application


@runtime_checkable
class ApplicationRepositoryProtocol(Protocol):
    """Protocol for application data repository"""

    async def get_application(self, application_id: str) -> Optional[Application]:
        ...

    async def create_application(self, application: Application) -> Application:
        ...

    async def update_application(self, application: Application, updates: Dict[str, Any]) -> Application:
        ...

    async def delete_application(self, application_id: str) -> bool:
        ...

    async def find_by_campaign_and_creator(
        self, campaign_id: str, creator_user_id: str
    ) -> Optional[Application]:
        ...

    async def list_by_campaign(self, campaign_id: str) -> List[Application]:
        ...

    async def list_by_creator(self, creator_user_id: str) -> List[Application]:
        ...

    async def list_by_status(self, status: str) -> List[Application]:
        ...

    async def list_by_campaign_ids(self, campaign_ids: Iterable[str]) -> List[Application]:
        ...

    async def count_applications(self) -> int:
        ...


class CampaignReaderProtocol(Protocol):
    async def get_campaign(self, campaign_id: str) -> Optional[Campaign]:
        ...

    async def get_campaigns_by_ids(self, campaign_ids: Iterable[str]) -> List[Campaign]:
        ...


class UserReaderProtocol(Protocol):
    async def get_user(self, user_id: str) -> Optional[User]:
        ...

    async def get_users_by_ids(self, user_ids: Iterable[str]) -> List[User]:
        ...

    async def get_creator_profiles_by_user_ids(self, user_ids: Iterable[str]) -> List[CreatorProfile]:
        ...

    async def get_brand_profiles_by_user_ids(self, user_ids: Iterable[str]) -> List[BrandProfile]:
        ...


class AnalyticsRecorderProtocol(Protocol):
    async def record_analytics_event(self, data: Dict[str, Any]) -> Any:
        ...


class NotificationSenderProtocol(Protocol):
    async def create_notification(self, data: Dict[str, Any]) -> Any:
        ...


__all__ = [
    "ApplicationRepositoryProtocol",
    "CampaignReaderProtocol",
    "UserReaderProtocol",
    "AnalyticsRecorderProtocol",
    "NotificationSenderProtocol",
]
