"""CLI commands package."""

# Import all command modules to make them available
from . import config, currencies, curve, tiers

__all__ = ["curve", "tiers", "config", "currencies"]
