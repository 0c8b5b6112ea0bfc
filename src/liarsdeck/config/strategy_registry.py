"""
Strategies that can be seated by name from ``GameConfig.player_names``.

Each entry maps a lower-case name to a factory taking ``seed=``.
"""

from typing import Callable, Dict, List, Optional, TypedDict

from ..strategies import (
    BaseStrategy,
    ChallengerStrategy,
    RandomStrategy,
    SafeStrategy,
    TruthStrategy,
)

StrategyFactory = Callable[..., BaseStrategy]


class StrategyInfo(TypedDict):
    """Information about a registered strategy."""
    name: str
    display_name: str
    description: str
    factory: StrategyFactory


# Registry of all available strategies
STRATEGY_REGISTRY: Dict[str, StrategyInfo] = {
    "challenger": {
        "name": "challenger",
        "display_name": "Challenger",
        "description": "Always challenges the previous claim.",
        "factory": ChallengerStrategy,
    },
    "random": {
        "name": "random",
        "display_name": "Random",
        "description": "Plays its first card; challenges 25% of the time.",
        "factory": RandomStrategy,
    },
    "truth": {
        "name": "truth",
        "display_name": "Truth",
        "description": "Plays one table card at a time, challenges when it has none.",
        "factory": TruthStrategy,
    },
    "safe": {
        "name": "safe",
        "display_name": "Safe",
        "description": "Plays every table card and joker at once, challenges when it has none.",
        "factory": SafeStrategy,
    },
}


def normalize_name(name: str) -> str:
    return name.strip().lower()


def get_all_strategies() -> List[StrategyInfo]:
    """Get list of all registered strategies."""
    return list(STRATEGY_REGISTRY.values())


def is_registered(name: str) -> bool:
    return normalize_name(name) in STRATEGY_REGISTRY


def get_strategy_factory(name: str) -> Optional[StrategyFactory]:
    """Get the constructor for a strategy name, or None if unknown."""
    info = STRATEGY_REGISTRY.get(normalize_name(name))
    return info["factory"] if info else None


def get_strategy_display_name(name: str) -> str:
    """Get display name for a strategy."""
    info = STRATEGY_REGISTRY.get(normalize_name(name))
    return info["display_name"] if info else name
