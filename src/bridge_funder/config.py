"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
from pathlib import Path

try:
    import tomllib  # Python 3.11+
except ModuleNotFoundError:
    import tomli as tomllib  # type: ignore[no-redef]

from bridge_funder.models.config import FunderConfig

# Environment variable suffix -> (config attribute, type)
_ENV_OVERRIDES = {
    "SENDER_PRIVATE_KEY": ("sender_private_key", str),
    "WRAPPED_ADDRESS": ("contract_address", str),
    "ERC20_HANDLER_ADDRESS": ("handler_address", str),
    "BASE_ASSET": ("base_asset", str),
    "FUND_LIMIT_WEI": ("fund_limit_wei", int),
    "FUND_AMOUNT_WEI": ("fund_amount_wei", int),
    "RPC_URL": ("rpc_url", str),
    "WS_RPC_URL": ("ws_rpc_url", str),
    "WEBHOOK_URL": ("webhook_url", str),
    "AVATAR_USERNAME": ("avatar_username", str),
    "AVATAR_URL": ("avatar_url", str),
}


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "BRIDGE_FUNDER_",
) -> FunderConfig:
    """Load daemon configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (BRIDGE_FUNDER_SENDER_PRIVATE_KEY, etc.)
        2. TOML config file
        3. Defaults from FunderConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = FunderConfig()

    # ── Daemon section ─────────────────────────────────────
    daemon = raw.get("daemon", {})
    if v := daemon.get("log_level"):
        cfg.log_level = str(v)
    if v := daemon.get("poll_interval"):
        cfg.poll_interval = float(v)
    if v := daemon.get("channel_capacity"):
        cfg.channel_capacity = int(v)

    # ── Chain section ──────────────────────────────────────
    chain = raw.get("chain", {})
    if v := chain.get("rpc_url"):
        cfg.rpc_url = str(v)
    if v := chain.get("ws_rpc_url"):
        cfg.ws_rpc_url = str(v)
    if v := chain.get("contract_address"):
        cfg.contract_address = str(v)
    if v := chain.get("handler_address"):
        cfg.handler_address = str(v)
    if v := chain.get("sender_private_key"):
        cfg.sender_private_key = str(v)
    if (v := chain.get("subscribe_timeout")) is not None:
        cfg.subscribe_timeout = float(v)
    if (v := chain.get("reconnect_delay")) is not None:
        cfg.reconnect_delay = float(v)

    # ── Funding section ────────────────────────────────────
    funding = raw.get("funding", {})
    if v := funding.get("base_asset"):
        cfg.base_asset = str(v)
    if (v := funding.get("fund_limit_wei")) is not None:
        cfg.fund_limit_wei = int(v)
    if (v := funding.get("fund_amount_wei")) is not None:
        cfg.fund_amount_wei = int(v)
    if (v := funding.get("value_decimals")) is not None:
        cfg.value_decimals = int(v)

    # ── Notifier section ───────────────────────────────────
    notifier = raw.get("notifier", {})
    if v := notifier.get("webhook_url"):
        cfg.webhook_url = str(v)
    if v := notifier.get("avatar_username"):
        cfg.avatar_username = str(v)
    if v := notifier.get("avatar_url"):
        cfg.avatar_url = str(v)
    if v := notifier.get("explorer_tx_url"):
        cfg.explorer_tx_url = str(v)
    if v := notifier.get("timeout"):
        cfg.notify_timeout = float(v)

    # ── Environment variable overrides (highest priority) ──
    for suffix, (attr, cast) in _ENV_OVERRIDES.items():
        if value := os.environ.get(f"{env_prefix}{suffix}"):
            setattr(cfg, attr, cast(value))

    return cfg


def missing_settings(cfg: FunderConfig) -> list[str]:
    """Names of required settings that are empty."""
    required = {
        "sender_private_key": cfg.sender_private_key,
        "contract_address": cfg.contract_address,
        "handler_address": cfg.handler_address,
        "rpc_url": cfg.rpc_url,
        "ws_rpc_url": cfg.ws_rpc_url,
    }
    return [name for name, value in required.items() if not value]
