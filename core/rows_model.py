"""
Row model base

Spreadsheet columns are camelCase; Python attributes are snake_case.
Unknown columns are kept because the store enforces no schema.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class RowModel(BaseModel):
    """Base for every persisted EarnGage entity"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_row(self, exclude_none: bool = True) -> Dict[str, Any]:
        """Serialize with column (camelCase) names"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=exclude_none)

    def merged(self, updates: Optional[Dict[str, Any]] = None, echo: Any = None):
        """
        Copy with column ``updates`` and then a remote row echo applied on top.

        ``updates`` must use column (camelCase) names. An ``echo`` that is
        not a row (no ``id``) is ignored.
        """
        data = self.model_dump(by_alias=True)
        data.update(updates or {})
        if isinstance(echo, dict) and "id" in echo:
            data.update(echo)
        return type(self).model_validate(data)


class RequestModel(BaseModel):
    """Base for validated service inputs; accepts camelCase or snake_case keys"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_row(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def parse_json_cell(value: Any, default: Any) -> Any:
    """
    Parse a cell holding JSON text.

    The spreadsheet stores lists and objects as strings; empty or malformed
    cells fall back to ``default``.
    """
    if value is None or value == "":
        return default
    if isinstance(value, str):
        try:
            return json.loads(value)
        except (json.JSONDecodeError, TypeError):
            logger.debug(f"Cell is not JSON, using default: {value[:40]!r}")
            return default
    return value


def parse_list_cell(value: Any) -> List[Any]:
    """Parse a list cell stored as JSON text or as a comma-separated string"""
    if isinstance(value, str) and value.strip() and not value.strip().startswith("["):
        return [item.strip() for item in value.split(",") if item.strip()]
    parsed = parse_json_cell(value, [])
    if isinstance(parsed, list):
        return parsed
    return [parsed]


__all__ = ["RowModel", "RequestModel", "parse_json_cell", "parse_list_cell"]
