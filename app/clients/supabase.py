from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Tuple

import httpx

from app.clients.base import Filters, Ordering, Record
from app.services.exceptions import NotFoundError, StoreUnavailableError

logger = logging.getLogger(__name__)


class SupabaseRecordStore:
    """Async record store backed by the Supabase PostgREST API."""

    def __init__(
        self,
        base_url: str,
        service_key: str | None,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = f"{str(base_url).rstrip('/')}/rest/v1"
        self._timeout = timeout
        self._headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if service_key:
            self._headers.update({
                "apikey": service_key,
                "Authorization": f"Bearer {service_key}",
            })
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _build_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            headers=self._headers,
            transport=self._transport,
        )

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = self._build_client()
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        table: str,
        *,
        params: List[Tuple[str, str]] | None = None,
        payload: Any = None,
        prefer: str | None = None,
    ) -> httpx.Response:
        client = self._ensure_client()
        headers = {"Prefer": prefer} if prefer else None
        try:
            response = await client.request(
                method, f"/{table}", params=params, json=payload, headers=headers
            )
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as exc:
            logger.exception("Supabase returned error %s", exc.response.status_code)
            raise StoreUnavailableError(
                "Record store returned an error response",
                status_code=exc.response.status_code,
                cause=exc,
            ) from exc
        except httpx.RequestError as exc:
            logger.exception("Unable to reach Supabase: %s", exc)
            raise StoreUnavailableError(
                "Unable to reach record store", status_code=None, cause=exc
            ) from exc

    async def insert(self, table: str, record: Mapping[str, Any]) -> Record:
        response = await self._request(
            "POST", table, payload=dict(record), prefer="return=representation"
        )
        rows = response.json()
        if not rows:
            raise StoreUnavailableError("Record store did not return the inserted row")
        return rows[0]

    async def update(self, table: str, record_id: str, patch: Mapping[str, Any]) -> Record:
        response = await self._request(
            "PATCH",
            table,
            params=[("id", _eq(record_id))],
            payload=dict(patch),
            prefer="return=representation",
        )
        rows = response.json()
        if not rows:
            raise NotFoundError(table, record_id)
        return rows[0]

    async def delete(self, table: str, record_id: str) -> None:
        response = await self._request(
            "DELETE",
            table,
            params=[("id", _eq(record_id))],
            prefer="return=representation",
        )
        if not response.json():
            raise NotFoundError(table, record_id)

    async def find(self, table: str, filters: Filters) -> Optional[Record]:
        rows = await self.query(table, filters, limit=1)
        return rows[0] if rows else None

    async def query(
        self,
        table: str,
        filters: Filters | None = None,
        *,
        order: Ordering | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> List[Record]:
        params = [("select", "*")] + _filter_params(filters)
        if order:
            params.append(
                ("order", ",".join(
                    f"{column}.{'desc' if descending else 'asc'}"
                    for column, descending in order
                ))
            )
        if limit is not None:
            params.append(("limit", str(limit)))
        if offset:
            params.append(("offset", str(offset)))
        response = await self._request("GET", table, params=params)
        return response.json()

    async def count(self, table: str, filters: Filters | None = None) -> int:
        params = [("select", "id")] + _filter_params(filters)
        response = await self._request("HEAD", table, params=params, prefer="count=exact")
        return parse_content_range_total(response.headers.get("content-range"))


def _eq(value: Any) -> str:
    if value is None:
        return "is.null"
    if isinstance(value, bool):
        return f"eq.{'true' if value else 'false'}"
    return f"eq.{value}"


def _filter_params(filters: Filters | None) -> List[Tuple[str, str]]:
    return [(column, _eq(value)) for column, value in (filters or {}).items()]


def parse_content_range_total(header: str | None) -> int:
    """Return the total from a PostgREST ``Content-Range`` header such as ``0-9/15``."""

    if not header or "/" not in header:
        return 0
    total = header.rsplit("/", 1)[1].strip()
    if not total.isdigit():
        return 0
    return int(total)
