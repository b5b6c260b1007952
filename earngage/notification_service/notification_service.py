"""
Notification Service Business Logic

Per-user notifications, e.g. application review results.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from pydantic import ValidationError

from core.exceptions import NotFoundError, ValidationFailedError
from core.rows_helpers import generate_row_id

from .models import Notification, NotificationCreateRequest
from .protocols import NotificationRepositoryProtocol

logger = logging.getLogger(__name__)


class NotificationService:
    """Notification business logic layer"""

    def __init__(self, repository: NotificationRepositoryProtocol):
        self.repository = repository

    async def get_user_notifications(self, user_id: str) -> List[Notification]:
        """Newest first"""
        return await self.repository.list_by_user(user_id)

    async def create_notification(self, data: Dict[str, Any]) -> Notification:
        try:
            request = NotificationCreateRequest.model_validate(data or {})
        except ValidationError as e:
            raise ValidationFailedError(f"Invalid notification: {e}")

        notification = Notification(
            id=generate_row_id("not"),
            is_read=False,
            created_at=datetime.now(timezone.utc),
            **request.model_dump(),
        )
        created = await self.repository.create_notification(notification)
        logger.debug(f"Created notification {created.id} for user {created.user_id}")
        return created

    async def get_notification_by_id(self, notification_id: str) -> Notification:
        notification = await self.repository.get_notification(notification_id)
        if not notification:
            raise NotFoundError("Notification not found", entity="notification", entity_id=notification_id)
        return notification

    async def mark_notification_as_read(self, notification_id: str) -> Notification:
        notification = await self.get_notification_by_id(notification_id)
        if notification.is_read:
            return notification
        return await self.repository.mark_as_read(notification)
