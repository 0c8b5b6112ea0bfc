"""Core package for the Liar's Deck bluffing simulator."""

from .core import cards, chamber, fsm, hand, history, player, schemas
from . import narrator, strategies
from .utils import rng

from .core.fsm import GameEngine, GameState, run_game
from .config.settings import GameConfig, load_game_config

__all__ = [
    "cards",
    "chamber",
    "fsm",
    "hand",
    "history",
    "narrator",
    "player",
    "rng",
    "schemas",
    "strategies",
    "GameConfig",
    "GameEngine",
    "GameState",
    "load_game_config",
    "run_game",
]
