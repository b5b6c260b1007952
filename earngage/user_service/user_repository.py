"""
User Service Repository Layer

Data access for the ``users``, ``creator_profiles`` and ``brand_profiles``
Rows tables.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from core.config import RowsConfig
from core.rows_store import RowStoreProtocol

from .models import BrandProfile, CreatorProfile, User

logger = logging.getLogger(__name__)

USERS_TABLE = "users"
CREATOR_PROFILES_TABLE = "creator_profiles"
BRAND_PROFILES_TABLE = "brand_profiles"

# Column order of the users sheet range used by the append endpoint
USER_APPEND_COLUMNS = (
    "id", "email", "userType", "password", "firstname", "surname", "createdAt", "updatedAt",
)


class UserRepository:
    """Users and profiles over the Rows row store"""

    def __init__(self, store: RowStoreProtocol, rows_config: Optional[RowsConfig] = None):
        self.store = store
        self.rows_config = rows_config or RowsConfig()

    # ====================
    # Users
    # ====================

    async def get_user(self, user_id: str) -> Optional[User]:
        row = await self.store.get_by_id(USERS_TABLE, user_id)
        return User.model_validate(row) if row else None

    async def get_user_by_email(self, email: str) -> Optional[User]:
        rows = await self.store.query(USERS_TABLE, {"email": email.strip().lower()}, page_size=1)
        return User.model_validate(rows[0]) if rows else None

    async def get_users_by_ids(self, user_ids: Iterable[str]) -> List[User]:
        rows = await self.store.get_many(USERS_TABLE, "id", user_ids)
        return [User.model_validate(row) for row in rows]

    async def create_user(self, user: User) -> User:
        """
        Insert a user row including its password hash.

        Uses the spreadsheet append endpoint when the users sheet
        coordinates are configured, otherwise a plain row POST.
        """
        row = user.to_row()
        if user.password:
            row["password"] = user.password

        try:
            if self.rows_config.use_append_for_users:
                values = [[row.get(column, "") for column in USER_APPEND_COLUMNS]]
                await self.store.append_values(
                    self.rows_config.spreadsheet_id,
                    self.rows_config.users_table_id,
                    self.rows_config.users_range,
                    values,
                )
            else:
                await self.store.create(USERS_TABLE, row)
        except Exception as e:
            logger.error(f"Failed to create user {user.email}: {e}")
            raise

        logger.info(f"Created user {user.id} ({user.user_type})")
        return user

    async def update_user(self, user: User, updates: Dict[str, Any]) -> User:
        row = await self.store.update(USERS_TABLE, user.id, updates)
        return user.merged(updates, echo=row)

    async def count_users(self) -> int:
        return await self.store.count(USERS_TABLE)

    async def list_all_users(self) -> List[User]:
        rows = await self.store.fetch_all(USERS_TABLE, order_by="created_at", order_direction="asc")
        return [User.model_validate(row) for row in rows]

    # ====================
    # Profiles
    # ====================

    async def get_creator_profile(self, user_id: str) -> Optional[CreatorProfile]:
        rows = await self.store.query(CREATOR_PROFILES_TABLE, {"userId": user_id}, page_size=1)
        return CreatorProfile.model_validate(rows[0]) if rows else None

    async def get_brand_profile(self, user_id: str) -> Optional[BrandProfile]:
        rows = await self.store.query(BRAND_PROFILES_TABLE, {"userId": user_id}, page_size=1)
        return BrandProfile.model_validate(rows[0]) if rows else None

    async def get_creator_profiles_by_user_ids(self, user_ids: Iterable[str]) -> List[CreatorProfile]:
        rows = await self.store.get_many(CREATOR_PROFILES_TABLE, "userId", user_ids)
        return [CreatorProfile.model_validate(row) for row in rows]

    async def get_brand_profiles_by_user_ids(self, user_ids: Iterable[str]) -> List[BrandProfile]:
        rows = await self.store.get_many(BRAND_PROFILES_TABLE, "userId", user_ids)
        return [BrandProfile.model_validate(row) for row in rows]

    async def create_creator_profile(self, profile: CreatorProfile) -> CreatorProfile:
        row = await self.store.create(CREATOR_PROFILES_TABLE, profile.to_row())
        return profile.merged(echo=row)

    async def create_brand_profile(self, profile: BrandProfile) -> BrandProfile:
        row = await self.store.create(BRAND_PROFILES_TABLE, profile.to_row())
        return profile.merged(echo=row)

    async def update_creator_profile(self, profile: CreatorProfile, updates: Dict[str, Any]) -> CreatorProfile:
        row = await self.store.update(CREATOR_PROFILES_TABLE, profile.id, updates)
        return profile.merged(updates, echo=row)

    async def update_brand_profile(self, profile: BrandProfile, updates: Dict[str, Any]) -> BrandProfile:
        row = await self.store.update(BRAND_PROFILES_TABLE, profile.id, updates)
        return profile.merged(updates, echo=row)

    async def list_creator_profiles(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10,
        order_by: str = "created_at",
        order_direction: str = "desc",
    ) -> List[CreatorProfile]:
        rows = await self.store.query(
            CREATOR_PROFILES_TABLE, filters, page=page, page_size=page_size,
            order_by=order_by, order_direction=order_direction,
        )
        return [CreatorProfile.model_validate(row) for row in rows]

    async def list_brand_profiles(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10,
        order_by: str = "created_at",
        order_direction: str = "desc",
    ) -> List[BrandProfile]:
        rows = await self.store.query(
            BRAND_PROFILES_TABLE, filters, page=page, page_size=page_size,
            order_by=order_by, order_direction=order_direction,
        )
        return [BrandProfile.model_validate(row) for row in rows]

    async def count_creator_profiles(self) -> int:
        return await self.store.count(CREATOR_PROFILES_TABLE)

    async def count_brand_profiles(self) -> int:
        return await self.store.count(BRAND_PROFILES_TABLE)

