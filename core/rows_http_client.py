"""
Rows HTTP Client

Thin wrapper over ``httpx.AsyncClient`` for the Rows spreadsheet API.

Handles:
1. Base URL and default headers (JSON, API key)
2. Bearer token injection from the session on every request
3. datetime <-> ISO string shaping of bodies and responses
4. Normalizing failures into ``TransportError``

Usage:
    async with RowsHttpClient(settings.rows, session) as http:
        rows = await http.get("/tables/campaigns/rows", params={"limit": 10})
"""

import httpx
import logging
from typing import Any, Dict, Optional

from core.config import RowsConfig
from core.exceptions import TransportError
from core.rows_helpers import format_request_data, format_response_data
from core.session import SessionProtocol

logger = logging.getLogger(__name__)


class RowsHttpClient:
    """HTTP client for the Rows API"""

    user_agent = "EarnGage-Rows-Client/1.0"

    def __init__(
        self,
        config: Optional[RowsConfig] = None,
        session: Optional[SessionProtocol] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            config: Rows connection settings (defaults from environment)
            session: Token holder consulted on every request
            client: Pre-built async client, mainly for tests
        """
        self.config = config or RowsConfig.from_env()
        self.session = session
        self.base_url = self.config.api_url.rstrip("/")
        self.client = client or httpx.AsyncClient(
            timeout=self.config.timeout,
            headers=self._build_default_headers(),
        )

        logger.debug(
            f"Initialized Rows client: {self.base_url} "
            f"(api_key={'set' if self.config.api_key else 'unset'})"
        )

    def _build_default_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
        if self.config.api_key:
            headers["X-API-Key"] = self.config.api_key
        return headers

    def _auth_headers(self) -> Dict[str, str]:
        """Bearer header from the session token, falling back to the API key"""
        token = self.session.get_token() if self.session else None
        token = token or self.config.api_key
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    async def close(self):
        """Close the underlying HTTP client"""
        await self.client.aclose()
        logger.debug("Closed Rows client")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # ========================================
    # HTTP methods
    # ========================================

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Any:
        """
        Send a request and return the decoded JSON body.

        Returns:
            Parsed response with ISO timestamps converted to datetimes, or
            None for an empty body

        Raises:
            TransportError: no response (status 0) or an HTTP status >= 400
        """
        url = f"{self.base_url}{path}"
        headers = self._auth_headers()
        if params is not None:
            params = {k: v for k, v in format_request_data(params).items() if v is not None}
        if json is not None:
            json = format_request_data(json)

        try:
            response = await self.client.request(
                method, url, params=params, json=json, headers=headers
            )
        except httpx.RequestError as e:
            logger.error(f"Rows API {method} {path} got no response: {e}")
            raise TransportError("No response from server", status=0, details=str(e)) from e

        if response.status_code >= 400:
            details = self._decode(response)
            message = "Server error"
            if isinstance(details, dict) and details.get("message"):
                message = details["message"]
            if response.status_code != 404:
                logger.error(f"Rows API {method} {path} failed: {response.status_code} {message}")
            raise TransportError(message, status=response.status_code, details=details)

        if response.status_code == 204 or not response.content:
            return None
        return format_response_data(self._decode(response))

    @staticmethod
    def _decode(response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text or None

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Optional[Any] = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return await self.request("DELETE", path, params=params)


__all__ = ["RowsHttpClient"]
