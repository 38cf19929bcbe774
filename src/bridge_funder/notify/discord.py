"""Discord webhook notifier - posts funding summaries as a single embed."""

from __future__ import annotations

import json
import logging

import httpx

from bridge_funder.models.config import DEFAULT_EXPLORER_TX_URL

log = logging.getLogger(__name__)


class DiscordNotifier:
    """Posts ``{username, avatar_url, embeds: [...]}`` to a webhook URL.

    Delivery is best effort: failures are logged and reported as False so
    a broken webhook never interrupts funding.
    """

    def __init__(
        self,
        webhook_url: str,
        username: str = "",
        avatar_url: str = "",
        explorer_tx_url: str = DEFAULT_EXPLORER_TX_URL,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._webhook_url = webhook_url
        self._username = username
        self._avatar_url = avatar_url
        self._explorer_tx_url = explorer_tx_url
        self._timeout = timeout
        self._transport = transport

    def build_payload(self, message: str, block_number: int, tx_hash: str) -> dict:
        title = f"Block: {block_number} TX: {tx_hash[:30]}..."
        return {
            "username": self._username,
            "avatar_url": self._avatar_url,
            "embeds": [
                {
                    "title": title,
                    "url": self._explorer_tx_url.format(tx_hash=tx_hash),
                    "description": message,
                }
            ],
        }

    async def notify(self, message: str, block_number: int, tx_hash: str) -> bool:
        if not self._webhook_url:
            log.debug("No webhook configured, skipping notification")
            return False

        payload = self.build_payload(message, block_number, tx_hash)
        log.debug("Webhook POST: %s", json.dumps(payload))

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                resp = await client.post(self._webhook_url, json=payload)
                resp.raise_for_status()
        except httpx.HTTPError as exc:
            log.warning("Webhook delivery failed: %s", exc)
            return False

        return True
