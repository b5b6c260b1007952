"""
Campaign Service Repository Layer

Data access for the ``campaigns`` Rows table.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from core.rows_store import RowStoreProtocol

from .models import Campaign

logger = logging.getLogger(__name__)

CAMPAIGNS_TABLE = "campaigns"


class CampaignRepository:
    """Campaigns over the Rows row store"""

    def __init__(self, store: RowStoreProtocol):
        self.store = store

    async def get_campaign(self, campaign_id: str) -> Optional[Campaign]:
        row = await self.store.get_by_id(CAMPAIGNS_TABLE, campaign_id)
        return Campaign.model_validate(row) if row else None

    async def get_campaigns_by_ids(self, campaign_ids: Iterable[str]) -> List[Campaign]:
        rows = await self.store.get_many(CAMPAIGNS_TABLE, "id", campaign_ids)
        return [Campaign.model_validate(row) for row in rows]

    async def create_campaign(self, campaign: Campaign) -> Campaign:
        try:
            row = await self.store.create(CAMPAIGNS_TABLE, campaign.to_row())
        except Exception as e:
            logger.error(f"Failed to create campaign {campaign.id}: {e}")
            raise
        return campaign.merged(echo=row)

    async def update_campaign(self, campaign: Campaign, updates: Dict[str, Any]) -> Campaign:
        row = await self.store.update(CAMPAIGNS_TABLE, campaign.id, updates)
        return campaign.merged(updates, echo=row)

    async def delete_campaign(self, campaign_id: str) -> bool:
        return await self.store.delete(CAMPAIGNS_TABLE, campaign_id)

    async def list_campaigns(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10,
        order_by: str = "created_at",
        order_direction: str = "desc",
    ) -> List[Campaign]:
        rows = await self.store.query(
            CAMPAIGNS_TABLE, filters, page=page, page_size=page_size,
            order_by=order_by, order_direction=order_direction,
        )
        return [Campaign.model_validate(row) for row in rows]

    async def list_by_brand(self, brand_user_id: str) -> List[Campaign]:
        rows = await self.store.fetch_all(
            CAMPAIGNS_TABLE, {"brandUserId": brand_user_id},
            order_by="created_at", order_direction="desc",
        )
        return [Campaign.model_validate(row) for row in rows]

    async def list_all_campaigns(self) -> List[Campaign]:
        rows = await self.store.fetch_all(CAMPAIGNS_TABLE, order_by="created_at", order_direction="asc")
        return [Campaign.model_validate(row) for row in rows]

    async def count_campaigns(self) -> int:
        return await self.store.count(CAMPAIGNS_TABLE)
