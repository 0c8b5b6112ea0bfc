"""Game configuration model and loader."""

from __future__ import annotations

from pathlib import Path
from typing import List

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..core.schemas import ConfigurationError

DEFAULT_CONFIG_PATH = Path("config/game.json")


class GameConfig(BaseModel):
    """Seats, revolver capacity, hand size and deck composition."""

    model_config = ConfigDict(frozen=True)

    player_names: List[str] = Field(
        default_factory=lambda: ["random", "random", "random", "truth"],
        min_length=2,
        description="Registered strategy name for each seat, in seating order",
    )
    chamber_rounds: int = Field(6, ge=1)
    hand_size: int = Field(5, ge=1)
    queen_count: int = Field(6, ge=0)
    king_count: int = Field(6, ge=0)
    ace_count: int = Field(6, ge=0)
    joker_count: int = Field(2, ge=0)

    @property
    def players(self) -> int:
        return len(self.player_names)

    @property
    def deck_size(self) -> int:
        return self.queen_count + self.king_count + self.ace_count + self.joker_count

    @property
    def cards_dealt(self) -> int:
        return self.players * self.hand_size

    @model_validator(mode="after")
    def _check_deck(self) -> "GameConfig":
        if self.deck_size < self.cards_dealt:
            raise ValueError(
                f"Deck of {self.deck_size} cards cannot deal {self.hand_size} cards to {self.players} players"
            )
        return self


DEFAULT_CONFIG = GameConfig()


def build_game_config(data: dict) -> GameConfig:
    """Validate a raw mapping into a :class:`GameConfig`."""
    try:
        return GameConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid game configuration: {e.errors()}", e.errors()) from e


def load_game_config(path: Path = DEFAULT_CONFIG_PATH) -> GameConfig:
    """Load game configuration from disk, falling back to defaults."""

    if not path.exists():
        return DEFAULT_CONFIG

    try:
        data = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must hold a JSON object")
    return build_game_config(data)
