from __future__ import annotations

import logging
from typing import Optional

import httpx

from app.schemas.review import AdminNotification
from app.services.exceptions import DownstreamServiceError

logger = logging.getLogger(__name__)


class AdminNotifier:
    """Posts operator notifications to the site's notification endpoint."""

    path = "/api/send-admin-notification"

    def __init__(
        self,
        base_url: str | None,
        *,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = str(base_url).rstrip("/") if base_url else None
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def enabled(self) -> bool:
        return self._base_url is not None

    def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def notify(self, event: AdminNotification) -> None:
        if not self.enabled:
            logger.debug("Admin notifications disabled; dropping %s", event.type)
            return
        client = self._ensure_client()
        try:
            response = await client.post(self.path, json=event.model_dump(by_alias=True))
            response.raise_for_status()
            logger.info("Sent %s notification", event.type)
        except httpx.HTTPStatusError as exc:
            raise DownstreamServiceError(
                "Notification endpoint returned an error response",
                status_code=exc.response.status_code,
                cause=exc,
            ) from exc
        except httpx.RequestError as exc:
            raise DownstreamServiceError(
                "Unable to reach notification endpoint", cause=exc
            ) from exc
