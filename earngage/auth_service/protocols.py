"""
Authentication Service Protocols

Interfaces for dependency injection and testing.
NO import-time I/O dependencies - safe to import anywhere.
"""

from typing import Any, Dict, Optional, Protocol

from earngage.user_service.models import BrandProfile, CreatorProfile, User


class UserAccountRepositoryProtocol(Protocol):
    """User lookups and writes needed for sign-in and signup"""

    async def get_user(self, user_id: str) -> Optional[User]:
        ...

    async def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    async def create_user(self, user: User) -> User:
        ...

    async def update_user(self, user: User, updates: Dict[str, Any]) -> User:
        ...

    async def create_creator_profile(self, profile: CreatorProfile) -> CreatorProfile:
        ...

    async def create_brand_profile(self, profile: BrandProfile) -> BrandProfile:
        ...


__all__ = ["UserAccountRepositoryProtocol"]
