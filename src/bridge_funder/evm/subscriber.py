"""WebSocket log subscriber - raw eth_subscribe("logs") over the websockets library."""

from __future__ import annotations

import json
import logging
from typing import AsyncIterator

import websockets

from bridge_funder.errors import SubscriptionError
from bridge_funder.models.events import LogRecord

log = logging.getLogger(__name__)


class WebSocketLogSubscription:
    """One open eth_subscribe("logs") stream."""

    def __init__(self, ws, subscription_id: str) -> None:
        self._ws = ws
        self._subscription_id = subscription_id

    async def records(self) -> AsyncIterator[LogRecord]:
        """Yield logs until the socket closes, then raise SubscriptionError."""
        async for message in self._ws:
            try:
                payload = json.loads(message)
            except json.JSONDecodeError:
                log.warning("Dropping non-JSON frame (%d bytes)", len(message))
                continue

            if payload.get("method") != "eth_subscription":
                continue
            params = payload.get("params", {})
            if params.get("subscription") != self._subscription_id:
                continue

            yield LogRecord.from_rpc(params["result"])

        raise SubscriptionError("websocket closed by peer")

    async def close(self) -> None:
        await self._ws.close()


class WebSocketLogSubscriber:
    """Opens log subscriptions against a node's WebSocket endpoint.

    A fresh connection is dialed per subscription so a dropped socket is
    recovered by simply subscribing again.
    """

    def __init__(
        self,
        ws_url: str,
        ping_interval: float = 20,
        ping_timeout: float = 20,
    ) -> None:
        self._ws_url = ws_url
        self._ping_interval = ping_interval
        self._ping_timeout = ping_timeout
        self._request_id = 0

    async def subscribe(self, contract_address: str) -> WebSocketLogSubscription:
        ws = await websockets.connect(
            self._ws_url,
            ping_interval=self._ping_interval,
            ping_timeout=self._ping_timeout,
        )
        try:
            self._request_id += 1
            await ws.send(json.dumps({
                "jsonrpc": "2.0",
                "id": self._request_id,
                "method": "eth_subscribe",
                "params": ["logs", {"address": contract_address}],
            }))
            reply = json.loads(await ws.recv())
        except BaseException:
            await ws.close()
            raise

        if "result" not in reply:
            await ws.close()
            raise SubscriptionError(f"eth_subscribe rejected: {reply.get('error')}")

        log.debug("eth_subscribe id %s for %s", reply["result"], contract_address)
        return WebSocketLogSubscription(ws, reply["result"])
