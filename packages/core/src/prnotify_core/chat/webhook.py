"""Webhook transport: POSTs each message as JSON to a relay endpoint.

The relay (a Slack workflow, a Teams connector, an internal bot) maps the
user id to a chat handle. Payload:

    {"to": "<user id>", "text": "<message>"}
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from prnotify_core.chat.base import BaseChatService

if TYPE_CHECKING:
    from prnotify_core.types import UserID

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT = 10.0


class WebhookChatService(BaseChatService):
    """Sends every message through one httpx.AsyncClient.

    A client passed in is used as is and left open. Otherwise one is created
    on the first send, reused for the rest, and closed by aclose().
    Non-2xx responses raise httpx.HTTPStatusError. There is no retry.
    """

    def __init__(self, url: str, timeout: float = _DEFAULT_TIMEOUT, client: httpx.AsyncClient | None = None):
        self._url = url
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send_message(self, to: UserID, message: str) -> None:
        payload = {"to": to, "text": message}
        response = await self._http().post(self._url, json=payload, timeout=self._timeout)
        response.raise_for_status()
        logger.debug("Delivered message to %s via %s", to, self._url)

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
