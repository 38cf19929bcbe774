"""Main daemon loop - wires all components together."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from eth_utils import to_checksum_address

from bridge_funder.errors import ChainQueryError, TransferDecodeError
from bridge_funder.evm.client import Web3ChainClient, format_ether
from bridge_funder.evm.decoder import TransferDecoder
from bridge_funder.evm.dispatcher import EvmFundDispatcher
from bridge_funder.evm.stream import EventStreamManager
from bridge_funder.evm.subscriber import WebSocketLogSubscriber
from bridge_funder.interfaces import (
    ChainClient,
    FundDispatcher,
    FundingPolicy,
    LogSubscriber,
    Notifier,
)
from bridge_funder.models.config import FunderConfig
from bridge_funder.models.events import LogRecord, TransferEvent
from bridge_funder.models.records import FundingResult
from bridge_funder.notify.discord import DiscordNotifier
from bridge_funder.policy.funding import BalanceCeilingPolicy
from bridge_funder.state.processed import ProcessedTxTracker

log = logging.getLogger(__name__)

ERROR_BALANCE = "unable to get balance of recipient"


class FunderDaemon:
    """Bridge gas-funding daemon.

    A background task keeps the log subscription alive and feeds a bounded
    queue. The main loop drains it in order: decode, match the handler
    address, drop replays, check the recipient's balance, fund, notify.
    """

    def __init__(self, cfg: FunderConfig) -> None:
        self._cfg = cfg
        self._running = False
        self._handler = to_checksum_address(cfg.handler_address)
        self._stream_task: asyncio.Task | None = None

        # Core components
        self.queue: asyncio.Queue[LogRecord] = asyncio.Queue(maxsize=cfg.channel_capacity)
        self.chain: ChainClient = Web3ChainClient(cfg.rpc_url)
        self.subscriber: LogSubscriber = WebSocketLogSubscriber(cfg.ws_rpc_url)
        self.stream = EventStreamManager(
            self.subscriber,
            to_checksum_address(cfg.contract_address),
            self.queue,
            subscribe_timeout=cfg.subscribe_timeout,
            reconnect_delay=cfg.reconnect_delay,
        )
        self.decoder = TransferDecoder()
        self.tracker = ProcessedTxTracker()
        self.policy: FundingPolicy = BalanceCeilingPolicy(self.chain, cfg.fund_limit_wei)
        self.dispatcher: FundDispatcher = EvmFundDispatcher(
            self.chain, cfg.sender_private_key, cfg.fund_amount_wei,
        )
        self.notifier: Notifier = DiscordNotifier(
            cfg.webhook_url,
            username=cfg.avatar_username,
            avatar_url=cfg.avatar_url,
            explorer_tx_url=cfg.explorer_tx_url,
            timeout=cfg.notify_timeout,
        )

    async def start(self) -> None:
        """Start the subscription task and run the main loop until stopped."""
        log.info("Starting bridge_funder daemon")
        log.info("  Sender: %s", self.dispatcher.sender_address)
        log.info("  Contract: %s", self._cfg.contract_address)
        log.info("  Handler: %s", self._handler)
        log.info("  RPC: %s", self._cfg.rpc_url)
        log.info("  WS RPC: %s", self._cfg.ws_rpc_url)
        log.info(
            "  Funding: %s %s while balance <= %s %s",
            format_ether(self._cfg.fund_amount_wei, self._cfg.value_decimals),
            self._cfg.base_asset,
            format_ether(self._cfg.fund_limit_wei, self._cfg.value_decimals),
            self._cfg.base_asset,
        )

        self._running = True
        self._stream_task = asyncio.create_task(self.stream.run(), name="log-stream")

        try:
            await self._main_loop()
        finally:
            if not self._stream_task.done():
                self._stream_task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await self._stream_task
            await self.chain.close()
            log.info("Daemon shut down cleanly")

    async def stop(self) -> None:
        """Signal the daemon to stop gracefully."""
        log.info("Stop requested")
        self._running = False

    async def _main_loop(self) -> None:
        """Consume log records one at a time, in delivery order."""
        while self._running:
            if self._stream_task is not None and self._stream_task.done():
                # run() never returns, so this is a crash; surface it
                self._stream_task.result()

            try:
                record = await asyncio.wait_for(
                    self.queue.get(), timeout=self._cfg.poll_interval,
                )
            except asyncio.TimeoutError:
                continue

            try:
                await self.handle_record(record)
            except asyncio.CancelledError:
                log.info("Main loop cancelled")
                break
            except TransferDecodeError as exc:
                log.critical("Cannot decode Transfer log, stopping: %s", exc)
                raise
            except Exception as exc:
                log.error("Error handling log %s: %s", record.tx_hash, exc, exc_info=True)

    async def handle_record(self, record: LogRecord) -> FundingResult | None:
        """Process one raw log. Returns the funding result if one was attempted."""
        transfer = self.decoder.decode(record)
        if transfer is None:
            if not record.topics:
                log.info("Log subscription live")
            return None

        if transfer.sender != self._handler:
            return None

        if self.tracker.was_processed(transfer.tx_hash):
            log.info("Duplicate TX: %s", transfer.tx_hash)
            return None

        try:
            return await self._fund_transfer(transfer)
        finally:
            self.tracker.mark_processed(transfer.tx_hash)

    async def _fund_transfer(self, transfer: TransferEvent) -> FundingResult:
        """Balance check, fund, and notify for a handler-originated transfer."""
        log.info(
            "Transfer from handler: to=%s value=%d tx=%s block=%d",
            transfer.recipient, transfer.value, transfer.tx_hash, transfer.block_number,
        )

        try:
            decision = await self.policy.decide(transfer.recipient)
        except ChainQueryError as exc:
            log.error("Funding %s skipped: %s (%s)", transfer.recipient, ERROR_BALANCE, exc)
            return FundingResult(
                success=False,
                recipient=transfer.recipient,
                error=ERROR_BALANCE,
            )

        if not decision.proceed:
            log.info(
                "Not funding %s: %s (balance %d wei, ceiling %d wei)",
                transfer.recipient, decision.reason,
                decision.balance_wei, decision.ceiling_wei,
            )
            return FundingResult(
                success=False,
                recipient=transfer.recipient,
                error=decision.reason,
                decision=decision,
            )

        result = await self.dispatcher.fund(transfer.recipient)
        result.decision = decision
        if not result.success:
            return result

        msg = (
            f"Funded - To: {result.recipient} "
            f"Value: {format_ether(result.amount_wei, self._cfg.value_decimals)} "
            f"{self._cfg.base_asset}"
        )
        log.info("%s TXID: %s", msg, result.tx_hash)
        await self.notifier.notify(msg, transfer.block_number, result.tx_hash or "")
        return result


async def run_daemon(cfg: FunderConfig) -> None:
    """Entry point for running the daemon."""
    daemon = FunderDaemon(cfg)

    loop = asyncio.get_running_loop()

    def _signal_handler():
        asyncio.ensure_future(daemon.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            pass

    await daemon.start()
