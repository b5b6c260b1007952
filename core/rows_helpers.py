"""
Rows API payload helpers

Request/response shaping shared by the HTTP client and the row store:
datetime <-> ISO string conversion, pagination and filter parameters,
key-case normalization and client-side row ids.
"""

import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

ISO_TIMESTAMP_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})?$"
)

FILTER_SUFFIXES = {
    "gt": "_gt",
    "gte": "_gte",
    "lt": "_lt",
    "lte": "_lte",
    "contains": "_contains",
    "in": "_in",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """Serialize a datetime as ISO-8601, treating naive values as UTC"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat().replace("+00:00", "Z")


def parse_iso(value: str) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp string, returning None when it is not one"""
    if not isinstance(value, str) or not ISO_TIMESTAMP_RE.match(value):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_request_data(data: Any) -> Any:
    """Recursively convert datetimes to ISO strings before sending"""
    if isinstance(data, datetime):
        return to_iso(data)
    if isinstance(data, dict):
        return {key: format_request_data(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [format_request_data(item) for item in data]
    return data


def format_response_data(data: Any) -> Any:
    """Recursively convert ISO timestamp strings to aware datetimes"""
    if isinstance(data, str):
        parsed = parse_iso(data)
        return parsed if parsed is not None else data
    if isinstance(data, dict):
        return {key: format_response_data(value) for key, value in data.items()}
    if isinstance(data, list):
        return [format_response_data(item) for item in data]
    return data


def build_pagination_params(page: int = 1, page_size: int = 10) -> Dict[str, int]:
    page = max(int(page or 1), 1)
    page_size = max(int(page_size or 10), 1)
    return {"offset": (page - 1) * page_size, "limit": page_size}


def format_filters(filters: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Flatten operator filters into suffixed keys.

    ``{"budget": {"gte": 100}}`` becomes ``{"budget_gte": 100}``; plain
    values and already-suffixed keys pass through. ``None`` values are
    dropped.
    """
    formatted: Dict[str, Any] = {}
    for key, value in (filters or {}).items():
        if value is None:
            continue
        if isinstance(value, dict) and value and all(op in FILTER_SUFFIXES for op in value):
            for op, operand in value.items():
                if operand is not None:
                    formatted[f"{key}{FILTER_SUFFIXES[op]}"] = operand
        else:
            formatted[key] = value
    return formatted


def snake_to_camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def generate_row_id(prefix: str) -> str:
    """Client-side row id: ``<prefix>-`` plus 8 hex chars"""
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


__all__ = [
    "ISO_TIMESTAMP_RE",
    "utc_now",
    "to_iso",
    "parse_iso",
    "format_request_data",
    "format_response_data",
    "build_pagination_params",
    "format_filters",
    "snake_to_camel",
    "generate_row_id",
]
