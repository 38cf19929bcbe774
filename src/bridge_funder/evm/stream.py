"""Event stream manager - keeps a log subscription alive and feeds the consumer queue."""

from __future__ import annotations

import asyncio
import logging

from bridge_funder.errors import TransferDecodeError
from bridge_funder.interfaces.subscriber import LogSubscriber
from bridge_funder.models.events import LogRecord

log = logging.getLogger(__name__)


class EventStreamManager:
    """Maintains one log subscription for the lifetime of the daemon.

    Every established subscription first puts a zero-topic sentinel on the
    queue, then forwards each log. Any failure (dial error, subscribe
    timeout, dropped stream) is logged and followed by a resubscribe after
    a fixed delay. The first attempt is not delayed. There is no retry cap;
    the loop ends when its task is cancelled, or when the node pushes a log
    that cannot be parsed.

    The queue is bounded and ``put`` blocks, so a stalled consumer applies
    back-pressure to the subscription instead of growing memory.
    """

    def __init__(
        self,
        subscriber: LogSubscriber,
        contract_address: str,
        queue: asyncio.Queue[LogRecord],
        subscribe_timeout: float = 10.0,
        reconnect_delay: float = 2.0,
    ) -> None:
        self._subscriber = subscriber
        self._contract_address = contract_address
        self._queue = queue
        self._subscribe_timeout = subscribe_timeout
        self._reconnect_delay = reconnect_delay
        self._attempts = 0
        self._connected = False

    @property
    def attempts(self) -> int:
        return self._attempts

    @property
    def connected(self) -> bool:
        return self._connected

    async def run(self) -> None:
        """Subscribe, stream, and resubscribe forever."""
        while True:
            if self._attempts > 0:
                await asyncio.sleep(self._reconnect_delay)
            self._attempts += 1

            try:
                await self._stream_once()
                log.warning("connection lost: subscription stream ended")
            except asyncio.CancelledError:
                raise
            except TransferDecodeError as exc:
                log.critical("Malformed log from node, stopping: %s", exc)
                raise
            except asyncio.TimeoutError:
                log.warning(
                    "subscribe error: no subscription after %.1fs", self._subscribe_timeout,
                )
            except Exception as exc:
                log.warning("connection lost: %s", exc)
            finally:
                self._connected = False

    async def _stream_once(self) -> None:
        subscription = await asyncio.wait_for(
            self._subscriber.subscribe(self._contract_address),
            timeout=self._subscribe_timeout,
        )
        try:
            self._connected = True
            log.info(
                "Subscribed to logs of %s (attempt %d)",
                self._contract_address, self._attempts,
            )
            await self._queue.put(LogRecord.sentinel())

            async for record in subscription.records():
                await self._queue.put(record)
        finally:
            await subscription.close()
