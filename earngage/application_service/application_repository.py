"""
Application Service Repository Layer

Data access for the ``applications`` Rows table.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from core.rows_store import RowStoreProtocol

from .models import Application

logger = logging.getLogger(__name__)

APPLICATIONS_TABLE = "applications"


class ApplicationRepository:
    """Applications over the Rows row store"""

    def __init__(self, store: RowStoreProtocol):
        self.store = store

    async def get_application(self, application_id: str) -> Optional[Application]:
        row = await self.store.get_by_id(APPLICATIONS_TABLE, application_id)
        return Application.model_validate(row) if row else None

    async def create_application(self, application: Application) -> Application:
        try:
            row = await self.store.create(APPLICATIONS_TABLE, application.to_row())
        except Exception as e:
            logger.error(f"Failed to create application {application.id}: {e}")
            raise
        return application.merged(echo=row)

    async def update_application(self, application: Application, updates: Dict[str, Any]) -> Application:
        row = await self.store.update(APPLICATIONS_TABLE, application.id, updates)
        return application.merged(updates, echo=row)

    async def delete_application(self, application_id: str) -> bool:
        return await self.store.delete(APPLICATIONS_TABLE, application_id)

    async def find_by_campaign_and_creator(
        self, campaign_id: str, creator_user_id: str
    ) -> Optional[Application]:
        rows = await self.store.query(
            APPLICATIONS_TABLE,
            {"campaignId": campaign_id, "creatorUserId": creator_user_id},
            page_size=1,
        )
        return Application.model_validate(rows[0]) if rows else None

    async def _list(self, filters: Dict[str, Any]) -> List[Application]:
        rows = await self.store.fetch_all(
            APPLICATIONS_TABLE, filters, order_by="created_at", order_direction="desc"
        )
        return [Application.model_validate(row) for row in rows]

    async def list_by_campaign(self, campaign_id: str) -> List[Application]:
        return await self._list({"campaignId": campaign_id})

    async def list_by_creator(self, creator_user_id: str) -> List[Application]:
        return await self._list({"creatorUserId": creator_user_id})

    async def list_by_status(self, status: str) -> List[Application]:
        return await self._list({"status": status})

    async def list_by_campaign_ids(self, campaign_ids: Iterable[str]) -> List[Application]:
        rows = await self.store.get_many(APPLICATIONS_TABLE, "campaignId", campaign_ids)
        return [Application.model_validate(row) for row in rows]

    async def count_applications(self) -> int:
        return await self.store.count(APPLICATIONS_TABLE)
