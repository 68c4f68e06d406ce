"""
NetBox API tool - blocking HTTP access to the NetBox REST API.

Implements the InventoryAPI protocol on top of ``requests``. Every call is
issued once; retry policy belongs to the caller.

Usage:
    tool = NetBoxAPITool(base_url="https://netbox.example.com", token="...")
    page = tool.list("/ipam/prefixes/", {"prefix": "10.0.0.0/24", "limit": 2})
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from nbrecon.core.exceptions import (
    ConfigError,
    RemoteNotFound,
    RemoteRejected,
    RemoteUnavailable,
)
from nbrecon.core.settings import settings
from nbrecon.tools.base import ListResult

logger = logging.getLogger(__name__)


class NetBoxAPITool:
    """NetBox REST client used by the reconciler and lookup resolver."""

    name = "netbox_api"
    description = "Create, read, update, delete and list NetBox objects over the REST API."

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        verify_ssl: bool | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize NetBoxAPITool.

        Args:
            base_url: NetBox URL (default: settings.netbox_url)
            token: API token (default: settings.netbox_token)
            verify_ssl: Verify TLS certificates (default: settings.netbox_verify_ssl)
            timeout: Per-request timeout in seconds (default: settings.netbox_timeout)
        """
        self.base_url = (base_url or settings.netbox_url or "").rstrip("/")
        self.token = token or settings.netbox_token or ""
        self.verify_ssl = settings.netbox_verify_ssl if verify_ssl is None else verify_ssl
        self.timeout = settings.netbox_timeout if timeout is None else timeout

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        if not path.startswith("/api/"):
            path = f"/api{path}"
        return f"{self.base_url}{path}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Token {self.token}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }

    @staticmethod
    def _detail(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    def execute(
        self,
        path: str,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
    ) -> Any:
        """
        Execute one NetBox API request.

        Args:
            path: API path, with or without the ``/api`` prefix
            method: HTTP method
            params: Query params
            data: JSON body

        Returns:
            Decoded JSON body, or None for 204 No Content

        Raises:
            ConfigError: NetBox URL or token not configured
            RemoteNotFound: 404
            RemoteRejected: any other 4xx
            RemoteUnavailable: transport failure or 5xx
        """
        if not self.base_url or not self.token:
            raise ConfigError("NetBox not configured (set NETBOX_URL and NETBOX_TOKEN)")

        url = self._url(path)
        logger.debug(f"NetBox {method} {url} params={params}")
        try:
            response = requests.request(
                method=method,
                url=url,
                headers=self._headers(),
                params=params,
                json=data,
                verify=self.verify_ssl,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RemoteUnavailable(
                f"NetBox request failed: {method} {path}: {e}",
                method=method,
                path=path,
            ) from e

        status = response.status_code
        if status == 404:
            raise RemoteNotFound(
                f"NetBox 404 Not Found: {method} {path}",
                status_code=status,
                method=method,
                path=path,
                detail=self._detail(response),
            )
        if status >= 500:
            raise RemoteUnavailable(
                f"NetBox {status} {response.reason}: {method} {path}",
                status_code=status,
                method=method,
                path=path,
                detail=self._detail(response),
            )
        if status >= 400:
            detail = self._detail(response)
            raise RemoteRejected(
                f"NetBox {status} {response.reason}: {method} {path}: {detail}",
                status_code=status,
                method=method,
                path=path,
                detail=detail,
            )
        if status == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _object_path(endpoint: str, object_id: int) -> str:
        return f"{endpoint.rstrip('/')}/{object_id}/"

    def list(self, endpoint: str, params: dict[str, Any] | None = None) -> ListResult:
        body = self.execute(endpoint, "GET", params=params) or {}
        results = body.get("results", [])
        return ListResult(count=body.get("count", len(results)), results=results)

    def create(self, endpoint: str, data: dict[str, Any]) -> dict[str, Any]:
        return self.execute(endpoint, "POST", data=data)

    def get(self, endpoint: str, object_id: int) -> dict[str, Any]:
        return self.execute(self._object_path(endpoint, object_id), "GET")

    def update(self, endpoint: str, object_id: int, data: dict[str, Any]) -> dict[str, Any]:
        return self.execute(self._object_path(endpoint, object_id), "PUT", data=data)

    def delete(self, endpoint: str, object_id: int) -> None:
        self.execute(self._object_path(endpoint, object_id), "DELETE")
