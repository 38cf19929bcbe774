"""Funding policy components."""

from bridge_funder.policy.funding import BalanceCeilingPolicy

__all__ = ["BalanceCeilingPolicy"]
