"""
Common/Shared Fixtures

Base ID generators and timestamps used across test layers.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional


def make_id(prefix: str) -> str:
    """Row id in the ``<prefix>-<8 hex>`` shape the services generate"""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def make_user_id() -> str:
    return make_id("usr")


def make_email(prefix: Optional[str] = None) -> str:
    """Generate a unique email"""
    prefix = prefix or f"test_{uuid.uuid4().hex[:8]}"
    return f"{prefix}@example.com"


def make_timestamp(days_ago: int = 0, hours_ago: int = 0) -> str:
    """UTC ISO timestamp in the Rows wire format"""
    value = datetime.now(timezone.utc) - timedelta(days=days_ago, hours=hours_ago)
    return value.isoformat().replace("+00:00", "Z")
