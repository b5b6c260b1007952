"""
Analytics Service Repository Layer

Data access for the ``analytics`` Rows table.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from core.rows_store import RowStoreProtocol

from .models import AnalyticsEvent

logger = logging.getLogger(__name__)

ANALYTICS_TABLE = "analytics"


class AnalyticsRepository:
    """Analytics events over the Rows row store"""

    def __init__(self, store: RowStoreProtocol):
        self.store = store

    async def create_event(self, event: AnalyticsEvent) -> AnalyticsEvent:
        row = await self.store.create(ANALYTICS_TABLE, event.to_row())
        return event.merged(echo=row)

    async def list_events(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: str = "timestamp",
        order_direction: str = "asc",
    ) -> List[AnalyticsEvent]:
        rows = await self.store.fetch_all(
            ANALYTICS_TABLE, filters, order_by=order_by, order_direction=order_direction
        )
        return [AnalyticsEvent.model_validate(row) for row in rows]

    async def list_events_for_campaigns(
        self, event_type: str, campaign_ids: Iterable[str]
    ) -> List[AnalyticsEvent]:
        rows = await self.store.get_many(
            ANALYTICS_TABLE, "campaignId", campaign_ids, filters={"eventType": event_type}
        )
        return [AnalyticsEvent.model_validate(row) for row in rows]
