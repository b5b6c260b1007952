#!/usr/bin/env python3
"""
Core Module for EarnGage

Shared infrastructure used by every EarnGage service.

COMPONENTS:
    - config/: Environment-driven configuration (Rows, auth, logging)
    - logger.py: Service logger setup
    - exceptions.py: Closed error taxonomy
    - session.py: Bearer token holder
    - rows_http_client.py: httpx wrapper for the Rows API
    - rows_store.py: Generic row CRUD/query over Rows tables
    - rows_model.py: Pydantic base model for rows
    - jwt_manager.py: Access token issue/verify

USAGE:
    from core.config import get_settings
    from core.rows_http_client import RowsHttpClient
    from core.rows_store import RowStore

    settings = get_settings()
    store = RowStore(RowsHttpClient(settings.rows))
"""

__version__ = "1.0.0"
