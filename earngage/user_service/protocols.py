"""
User Service Protocols

Interfaces for dependency injection and testing.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol, runtime_checkable

from .models import BrandProfile, CreatorProfile, User


@runtime_checkable
class UserRepositoryProtocol(Protocol):
    """Users plus creator/brand profiles"""

    async def get_user(self, user_id: str) -> Optional[User]:
        ...

    async def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    async def get_users_by_ids(self, user_ids: Iterable[str]) -> List[User]:
        ...

    async def create_user(self, user: User) -> User:
        ...

    async def update_user(self, user: User, updates: Dict[str, Any]) -> User:
        ...

    async def count_users(self) -> int:
        ...

    async def list_all_users(self) -> List[User]:
        ...

    async def get_creator_profile(self, user_id: str) -> Optional[CreatorProfile]:
        ...

    async def get_brand_profile(self, user_id: str) -> Optional[BrandProfile]:
        ...

    async def get_creator_profiles_by_user_ids(self, user_ids: Iterable[str]) -> List[CreatorProfile]:
        ...

    async def get_brand_profiles_by_user_ids(self, user_ids: Iterable[str]) -> List[BrandProfile]:
        ...

    async def create_creator_profile(self, profile: CreatorProfile) -> CreatorProfile:
        ...

    async def create_brand_profile(self, profile: BrandProfile) -> BrandProfile:
        ...

    async def update_creator_profile(self, profile: CreatorProfile, updates: Dict[str, Any]) -> CreatorProfile:
        ...

    async def update_brand_profile(self, profile: BrandProfile, updates: Dict[str, Any]) -> BrandProfile:
        ...

    async def list_creator_profiles(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10,
        order_by: str = "created_at",
        order_direction: str = "desc",
    ) -> List[CreatorProfile]:
        ...

    async def list_brand_profiles(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10,
        order_by: str = "created_at",
        order_direction: str = "desc",
    ) -> List[BrandProfile]:
        ...

    async def count_creator_profiles(self) -> int:
        ...

    async def count_brand_profiles(self) -> int:
        ...


class ApplicationReaderProtocol(Protocol):
    """Application lookups used for user stats"""

    async def list_by_creator(self, creator_user_id: str) -> List[Any]:
        ...

    async def list_by_campaign_ids(self, campaign_ids: Iterable[str]) -> List[Any]:
        ...


class CampaignReaderProtocol(Protocol):
    """Campaign lookups used for brand stats"""

    async def list_by_brand(self, brand_user_id: str) -> List[Any]:
        ...


__all__ = [
    "UserRepositoryProtocol",
    "ApplicationReaderProtocol",
    "CampaignReaderProtocol",
]
