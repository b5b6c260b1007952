"""
Notification Service Protocols
"""

from typing import List, Optional, Protocol, runtime_checkable

from .models import Notification


@runtime_checkable
class NotificationRepositoryProtocol(Protocol):

    async def get_notification(self, notification_id: str) -> Optional[Notification]:
        ...

    async def create_notification(self, notification: Notification) -> Notification:
        ...

    async def mark_as_read(self, notification: Notification) -> Notification:
        ...

    async def list_by_user(self, user_id: str) -> List[Notification]:
        ...


__all__ = ["NotificationRepositoryProtocol"]
