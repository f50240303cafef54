"""
n8n API Client for MCP Server

Process-scoped client built from a ConnectionConfig. The underlying httpx
connection pool is created on first use and shared by every tool call.
"""
import logging
from typing import Any, Optional

import httpx

from .config import ConnectionConfig

logger = logging.getLogger(__name__)

# How much of an error response body is echoed back in TransportError
ERROR_BODY_LIMIT = 500


class TransportError(Exception):
    """Any failure talking to n8n: network, HTTP status or undecodable body"""


def _excerpt(text: str) -> str:
    """Single-line, truncated copy of a response body for error messages"""
    return " ".join(text.split())[:ERROR_BODY_LIMIT]


def _clean_params(params: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    """Drop unset query parameters so n8n applies its own defaults"""
    if not params:
        return None
    cleaned = {key: value for key, value in params.items() if value is not None}
    return cleaned or None


class N8nClient:
    """Client for the n8n public REST API and webhook endpoints"""

    def __init__(self, config: ConnectionConfig):
        """
        Initialize API client with configuration.

        Args:
            config: Connection settings; base URL and API key are already validated
        """
        self.config = config
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Lazy initialization of HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.config.base_url,
                headers={
                    "Accept": "application/json",
                    "X-N8N-API-KEY": self.config.api_key,
                },
                timeout=self.config.timeout,
            )
        return self._client

    async def request(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
        json_data: Optional[Any] = None,
        auth: Optional[tuple[str, str]] = None,
    ) -> Any:
        """
        Make API request and decode the JSON response.

        Args:
            method: HTTP verb
            endpoint: Path relative to the base URL
            params: Query parameters; None values are omitted
            json_data: JSON body, sent only when not None
            auth: Optional basic-auth credentials for this request

        Returns:
            Decoded JSON value, or None for an empty body

        Raises:
            TransportError: On connection failure, non-2xx status or non-JSON body
        """
        response = await self.send(method, endpoint, params=params, json_data=json_data, auth=auth)
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"{method} {endpoint} returned a non-JSON body")
            raise TransportError(
                f"{method} {endpoint} returned a non-JSON response: "
                f"{_excerpt(response.text)}"
            ) from e

    async def send(
        self,
        method: str,
        endpoint: str,
        params: Optional[dict[str, Any]] = None,
        json_data: Optional[Any] = None,
        auth: Optional[tuple[str, str]] = None,
    ) -> httpx.Response:
        """
        Issue a single request and return the raw response.

        Raises:
            TransportError: On connection failure or a non-2xx status
        """
        client = self._get_client()
        logger.debug(f"{method} {endpoint} params={params!r}")

        kwargs: dict[str, Any] = {"params": _clean_params(params)}
        if json_data is not None:
            kwargs["json"] = json_data
        if auth is not None:
            kwargs["auth"] = auth

        try:
            response = await client.request(method=method, url=endpoint, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {endpoint} failed: {e!r}")
            detail = str(e) or e.__class__.__name__
            raise TransportError(f"{method} {endpoint} failed: {detail}") from e

        if response.is_error:
            logger.warning(f"{method} {endpoint} returned HTTP {response.status_code}")
            raise TransportError(
                f"{method} {endpoint} returned HTTP {response.status_code} "
                f"{response.reason_phrase}: {_excerpt(response.text)}"
            )
        return response

    async def get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("GET", endpoint, params=params)

    async def post(
        self,
        endpoint: str,
        json_data: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        return await self.request("POST", endpoint, params=params, json_data=json_data)

    async def put(
        self,
        endpoint: str,
        json_data: Optional[Any] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        return await self.request("PUT", endpoint, params=params, json_data=json_data)

    async def delete(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> Any:
        return await self.request("DELETE", endpoint, params=params)

    async def close(self):
        """Close client"""
        if self._client:
            await self._client.aclose()
            self._client = None
