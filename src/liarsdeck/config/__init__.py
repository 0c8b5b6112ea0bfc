"""Configuration models and the strategy registry."""

from . import settings, strategy_registry

__all__ = ["settings", "strategy_registry"]
