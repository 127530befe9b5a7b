"""Remote record store speaking the PostgREST dialect used by Supabase.

Rows live at ``/rest/v1/<table>``; row selection uses ``column=eq.value``
query parameters and writes ask for the affected rows back with
``Prefer: return=representation``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

import httpx

from .base import RecordNotFound, RecordStore, StoreError

logger = logging.getLogger(__name__)

REST_PREFIX = "/rest/v1"


def _filter_value(value: Any) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return f"eq.{str(value).lower()}"
    return f"eq.{value}"


def _jsonable(fields: dict[str, Any]) -> dict[str, Any]:
    return {k: (v.value if isinstance(v, Enum) else v) for k, v in fields.items()}


class RestStore(RecordStore):
    """HTTP client for a PostgREST-compatible backend.

    All methods are async and raise StoreError on failure.
    """

    def __init__(self, base_url: str, api_key: str = "", timeout: float = 30.0):
        headers: dict[str, str] = {
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }
        if api_key:
            headers["apikey"] = api_key
            headers["Authorization"] = f"Bearer {api_key}"

        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + REST_PREFIX,
            headers=headers,
            timeout=httpx.Timeout(timeout),
        )

    # --- RecordStore ---

    async def list(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        """GET /rest/v1/{table}?select=*&col=eq.val&order=col.asc"""
        params: dict[str, str] = {"select": "*"}
        for key, val in (filters or {}).items():
            params[key] = _filter_value(val)
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"

        rows = await self._request("GET", f"/{table}", params=params)
        return rows if isinstance(rows, list) else []

    async def get(self, table: str, record_id: str) -> dict[str, Any]:
        """GET /rest/v1/{table}?id=eq.{id}"""
        rows = await self._request(
            "GET", f"/{table}", params={"select": "*", "id": _filter_value(record_id)}
        )
        if not rows:
            raise RecordNotFound(table, record_id)
        return rows[0]

    async def insert(self, table: str, fields: dict[str, Any]) -> dict[str, Any]:
        """POST /rest/v1/{table}"""
        rows = await self._request("POST", f"/{table}", json=_jsonable(fields))
        if not rows:
            raise StoreError(f"Insert into {table} returned no row")
        return rows[0] if isinstance(rows, list) else rows

    async def update(
        self, table: str, record_id: str, fields: dict[str, Any]
    ) -> dict[str, Any]:
        """PATCH /rest/v1/{table}?id=eq.{id}"""
        rows = await self._request(
            "PATCH",
            f"/{table}",
            params={"id": _filter_value(record_id)},
            json=_jsonable(fields),
        )
        if not rows:
            raise RecordNotFound(table, record_id)
        return rows[0] if isinstance(rows, list) else rows

    async def delete(self, table: str, record_id: str) -> None:
        """DELETE /rest/v1/{table}?id=eq.{id}"""
        rows = await self._request("DELETE", f"/{table}", params={"id": _filter_value(record_id)})
        if not rows:
            raise RecordNotFound(table, record_id)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # --- Internal ---

    async def _request(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a request against the REST endpoint.

        Raises:
            StoreError: On HTTP errors or connection failures.
        """
        try:
            response = await self._client.request(method, url, json=json, params=params)

            if response.status_code >= 400:
                detail = ""
                try:
                    body = response.json()
                    detail = body.get("message") or body.get("detail") or str(body)
                except Exception:
                    detail = response.text[:200]

                raise StoreError(
                    f"{method} {url} returned {response.status_code}: {detail}",
                    status_code=response.status_code,
                    detail=detail,
                )

            if not response.content:
                return []

            return response.json()

        except httpx.ConnectError as e:
            raise StoreError(f"Cannot connect to backend: {e}", detail=str(e)) from e
        except httpx.TimeoutException as e:
            raise StoreError(f"Request timed out: {method} {url}", detail=str(e)) from e
        except StoreError:
            raise
        except Exception as e:
            raise StoreError(f"Unexpected error: {e}", detail=str(e)) from e
