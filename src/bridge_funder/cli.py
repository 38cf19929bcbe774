"""CLI entry point for the bridge_funder daemon."""

from __future__ import annotations

import asyncio
import logging
import sys

import click
from eth_account import Account

from bridge_funder.config import load_config, missing_settings
from bridge_funder.daemon import run_daemon
from bridge_funder.errors import BridgeFunderError, TransferDecodeError
from bridge_funder.evm.client import Web3ChainClient, format_ether


def _require_settings(cfg) -> None:
    """Exit with error if any required setting is missing."""
    missing = missing_settings(cfg)
    if missing:
        click.echo(f"Error: missing required settings: {', '.join(missing)}", err=True)
        click.echo(
            "Set them in the config TOML or via BRIDGE_FUNDER_* env vars.", err=True,
        )
        sys.exit(1)


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """bridge_funder - Gas funding for bridge transfer recipients."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Daemon ─────────────────────────────────────────────


@cli.command()
@click.pass_context
def run(ctx: click.Context) -> None:
    """Start the funding daemon."""
    cfg = load_config(ctx.obj["config_path"])
    _require_settings(cfg)
    if not ctx.obj["verbose"]:
        logging.getLogger().setLevel(cfg.log_level.upper())

    click.echo(f"Starting bridge_funder daemon (contract: {cfg.contract_address})")
    try:
        asyncio.run(run_daemon(cfg))
    except TransferDecodeError as exc:
        click.echo(f"Fatal: {exc}", err=True)
        sys.exit(1)


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show daemon configuration."""
    cfg = load_config(ctx.obj["config_path"])
    click.echo(f"RPC URL:    {cfg.rpc_url}")
    click.echo(f"WS RPC URL: {cfg.ws_rpc_url}")
    click.echo(f"Contract:   {cfg.contract_address or '(not set)'}")
    click.echo(f"Handler:    {cfg.handler_address or '(not set)'}")
    click.echo(f"Asset:      {cfg.base_asset}")
    click.echo(f"Limit:      {cfg.fund_limit_wei} wei")
    click.echo(f"Amount:     {cfg.fund_amount_wei} wei")
    click.echo(f"Webhook:    {'configured' if cfg.webhook_url else '(not set)'}")
    click.echo(
        f"Key:        {'***configured***' if cfg.sender_private_key else '(not set)'}"
    )


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Query the node for the sender's balance, nonce, gas price, and network id."""
    cfg = load_config(ctx.obj["config_path"])
    if not cfg.sender_private_key:
        click.echo("Error: No sender private key configured.", err=True)
        sys.exit(1)

    async def _info():
        sender = Account.from_key(cfg.sender_private_key).address
        chain = Web3ChainClient(cfg.rpc_url)
        try:
            click.echo(f"Sender:     {sender}")
            balance = await chain.balance_at(sender)
            click.echo(
                f"Balance:    {balance} wei ({format_ether(balance)} {cfg.base_asset})"
            )
            click.echo(f"Nonce:      {await chain.pending_nonce(sender)}")
            click.echo(f"Gas price:  {await chain.suggested_gas_price()} wei")
            click.echo(f"Network:    {await chain.network_id()}")
        except BridgeFunderError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)
        finally:
            await chain.close()

    asyncio.run(_info())


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
