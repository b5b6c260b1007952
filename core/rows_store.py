"""
Rows Row Store

Generic CRUD/query client over Rows tables. Every EarnGage collection is a
table; every operation is one request (``fetch_all`` and ``get_many`` issue
one per page or chunk). Filter keys, including operator suffixes such as
``_gte`` or ``_contains``, are passed to the remote untouched.
"""

import asyncio
import json
import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol

from core.exceptions import TransportError
from core.rows_helpers import build_pagination_params, format_request_data
from core.rows_http_client import RowsHttpClient

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

LIST_ENVELOPE_KEYS = ("items", "rows", "data")


class RowStoreProtocol(Protocol):
    """Row-level access to Rows tables"""

    async def get_all(self, table: str, page: int = 1, page_size: int = 10, **filters) -> List[Row]:
        ...

    async def get_by_id(self, table: str, row_id: str) -> Optional[Row]:
        ...

    async def create(self, table: str, data: Row) -> Row:
        ...

    async def update(self, table: str, row_id: str, data: Row) -> Row:
        ...

    async def delete(self, table: str, row_id: str) -> bool:
        ...

    async def query(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10,
        order_by: Optional[str] = None,
        order_direction: Optional[str] = None,
    ) -> List[Row]:
        ...

    async def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        ...

    async def fetch_all(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        page_size: int = 100,
        order_by: Optional[str] = None,
        order_direction: Optional[str] = None,
    ) -> List[Row]:
        ...

    async def get_many(
        self,
        table: str,
        field: str,
        values: Iterable[Any],
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Row]:
        ...

    async def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        ...

    async def append_values(
        self,
        spreadsheet_id: str,
        table_id: str,
        cell_range: str,
        values: List[List[Any]],
    ) -> Any:
        ...


class RowStore:
    """Rows API implementation of ``RowStoreProtocol``"""

    MAX_PAGES = 1000
    IN_CHUNK_SIZE = 50

    def __init__(self, http_client: RowsHttpClient):
        self.http = http_client

    async def close(self):
        await self.http.close()

    @staticmethod
    def _rows_path(table: str, row_id: Optional[str] = None) -> str:
        path = f"/tables/{table}/rows"
        return f"{path}/{row_id}" if row_id else path

    @staticmethod
    def _unwrap_rows(result: Any) -> List[Row]:
        if result is None:
            return []
        if isinstance(result, list):
            return result
        if isinstance(result, dict):
            for key in LIST_ENVELOPE_KEYS:
                if isinstance(result.get(key), list):
                    return result[key]
        logger.warning(f"Unexpected list response shape: {type(result).__name__}")
        return []

    @staticmethod
    def _encode_filter(filters: Optional[Dict[str, Any]]) -> Optional[str]:
        if not filters:
            return None
        return json.dumps(format_request_data(filters))

    # ====================
    # CRUD
    # ====================

    async def get_all(self, table: str, page: int = 1, page_size: int = 10, **filters) -> List[Row]:
        params = {**build_pagination_params(page, page_size), **filters}
        result = await self.http.get(self._rows_path(table), params=params)
        return self._unwrap_rows(result)

    async def get_by_id(self, table: str, row_id: str) -> Optional[Row]:
        """Fetch one row; None when the remote answers 404 or an empty body"""
        try:
            result = await self.http.get(self._rows_path(table, row_id))
        except TransportError as e:
            if e.status == 404:
                return None
            raise
        return result or None

    async def create(self, table: str, data: Row) -> Row:
        result = await self.http.post(self._rows_path(table), json=data)
        return result if isinstance(result, dict) else dict(data)

    async def update(self, table: str, row_id: str, data: Row) -> Row:
        """Partial update; only the given fields change"""
        result = await self.http.patch(self._rows_path(table, row_id), json=data)
        return result if isinstance(result, dict) else {"id": row_id, **data}

    async def delete(self, table: str, row_id: str) -> bool:
        await self.http.delete(self._rows_path(table, row_id))
        return True

    # ====================
    # Query
    # ====================

    async def query(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        page_size: int = 10,
        order_by: Optional[str] = None,
        order_direction: Optional[str] = None,
    ) -> List[Row]:
        params: Dict[str, Any] = build_pagination_params(page, page_size)
        encoded = self._encode_filter(filters)
        if encoded:
            params["filter"] = encoded
        if order_by:
            params["order_by"] = order_by
        if order_direction:
            params["order_direction"] = order_direction

        result = await self.http.get(self._rows_path(table), params=params)
        return self._unwrap_rows(result)

    async def count(self, table: str, filters: Optional[Dict[str, Any]] = None) -> int:
        params: Dict[str, Any] = {"count_only": True}
        encoded = self._encode_filter(filters)
        if encoded:
            params["filter"] = encoded
        result = await self.http.get(self._rows_path(table), params=params)
        if isinstance(result, dict):
            return int(result.get("count") or 0)
        return 0

    async def fetch_all(
        self,
        table: str,
        filters: Optional[Dict[str, Any]] = None,
        page_size: int = 100,
        order_by: Optional[str] = None,
        order_direction: Optional[str] = None,
    ) -> List[Row]:
        """Page through ``query`` until a short page"""
        rows: List[Row] = []
        for page in range(1, self.MAX_PAGES + 1):
            batch = await self.query(
                table, filters, page=page, page_size=page_size,
                order_by=order_by, order_direction=order_direction,
            )
            rows.extend(batch)
            if 0 < len(batch) < page_size:
                # Also what a remote capping limit below page_size looks like
                logger.warning(
                    f"fetch_all on {table}: page {page} returned {len(batch)} of {page_size} rows, "
                    f"treating it as the last page"
                )
            # A remote that ignores limit returns everything at once
            if len(batch) != page_size:
                break
        else:
            logger.warning(f"fetch_all on {table} stopped after {self.MAX_PAGES} pages")
        return rows

    async def get_many(
        self,
        table: str,
        field: str,
        values: Iterable[Any],
        filters: Optional[Dict[str, Any]] = None,
    ) -> List[Row]:
        """
        Batch fetch rows whose ``field`` is in ``values``.

        One ``{field}_in`` query per chunk of distinct values, combined with
        any extra ``filters``.
        """
        distinct = list(dict.fromkeys(v for v in values if v is not None))
        if not distinct:
            return []

        chunks = [
            distinct[i:i + self.IN_CHUNK_SIZE]
            for i in range(0, len(distinct), self.IN_CHUNK_SIZE)
        ]
        results = await asyncio.gather(
            *(self.fetch_all(table, {**(filters or {}), f"{field}_in": chunk}) for chunk in chunks)
        )
        return [row for batch in results for row in batch]

    # ====================
    # Spreadsheet endpoints
    # ====================

    async def execute_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.http.post("/execute-query", json={"query": query, "params": params or {}})

    async def append_values(
        self,
        spreadsheet_id: str,
        table_id: str,
        cell_range: str,
        values: List[List[Any]],
    ) -> Any:
        """Append raw cell values to a spreadsheet table range"""
        path = f"/spreadsheets/{spreadsheet_id}/tables/{table_id}/values/{cell_range}:append"
        return await self.http.post(path, json={"values": values})


__all__ = ["Row", "RowStoreProtocol", "RowStore"]
