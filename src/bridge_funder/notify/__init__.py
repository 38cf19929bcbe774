"""Outbound notification sinks."""

from bridge_funder.notify.discord import DiscordNotifier

__all__ = ["DiscordNotifier"]
