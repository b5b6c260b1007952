#!/usr/bin/env python3
"""Rows API configuration

Connection settings for the Rows spreadsheet API that backs every
EarnGage collection.
"""
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_ROWS_API_URL = "https://api.rows.com/v1"


def _float(val: str, default: float) -> float:
    try:
        return float(val) if val else default
    except ValueError:
        return default


@dataclass
class RowsConfig:
    """Rows API connection settings"""
    api_url: str = DEFAULT_ROWS_API_URL
    api_key: Optional[str] = None
    timeout: float = 30.0

    # Spreadsheet coordinates for the append endpoint used when creating users
    spreadsheet_id: Optional[str] = None
    users_table_id: Optional[str] = None
    users_range: str = "A:H"

    @property
    def use_append_for_users(self) -> bool:
        return bool(self.spreadsheet_id and self.users_table_id)

    @classmethod
    def from_env(cls) -> 'RowsConfig':
        return cls(
            api_url=os.getenv("ROWS_API_URL", DEFAULT_ROWS_API_URL).rstrip("/"),
            api_key=os.getenv("ROWS_API_KEY") or None,
            timeout=_float(os.getenv("ROWS_API_TIMEOUT", "30"), 30.0),
            spreadsheet_id=os.getenv("ROWS_SPREADSHEET_ID") or None,
            users_table_id=os.getenv("ROWS_USERS_TABLE_ID") or None,
            users_range=os.getenv("ROWS_USERS_RANGE", "A:H"),
        )
