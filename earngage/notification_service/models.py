"""
Notification Service Models
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from core.rows_model import RequestModel, RowModel


class Notification(RowModel):
    """Notification row (``notifications`` table)"""
    id: str
    user_id: str
    title: str
    message: Optional[str] = None
    notification_type: str = "general"
    is_read: bool = False
    link: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator('is_read', mode='before')
    @classmethod
    def parse_flag(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in ("true", "1", "yes")
        return bool(v)


class NotificationCreateRequest(RequestModel):
    user_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    message: Optional[str] = None
    notification_type: str = "general"
    link: Optional[str] = None
