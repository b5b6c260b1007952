"""
Notification Service Repository Layer

Data access for the ``notifications`` Rows table.
"""

import logging
from typing import List, Optional

from core.rows_store import RowStoreProtocol

from .models import Notification

logger = logging.getLogger(__name__)

NOTIFICATIONS_TABLE = "notifications"


class NotificationRepository:
    """Notifications over the Rows row store"""

    def __init__(self, store: RowStoreProtocol):
        self.store = store

    async def get_notification(self, notification_id: str) -> Optional[Notification]:
        row = await self.store.get_by_id(NOTIFICATIONS_TABLE, notification_id)
        return Notification.model_validate(row) if row else None

    async def create_notification(self, notification: Notification) -> Notification:
        row = await self.store.create(NOTIFICATIONS_TABLE, notification.to_row())
        return notification.merged(echo=row)

    async def mark_as_read(self, notification: Notification) -> Notification:
        updates = {"isRead": True}
        row = await self.store.update(NOTIFICATIONS_TABLE, notification.id, updates)
        return notification.merged(updates, echo=row)

    async def list_by_user(self, user_id: str) -> List[Notification]:
        rows = await self.store.fetch_all(
            NOTIFICATIONS_TABLE, {"userId": user_id}, order_by="created_at", order_direction="desc"
        )
        return [Notification.model_validate(row) for row in rows]
