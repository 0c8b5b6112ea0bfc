"""Card kinds and deck construction."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, List, Tuple

if TYPE_CHECKING:  # pragma: no cover - import cycle guard for type checkers
    from ..config.settings import GameConfig


class Card(str, Enum):
    """The four card symbols. Jokers are wild."""

    QUEEN = "Q"
    KING = "K"
    ACE = "A"
    JOKER = "J"


TABLE_CARDS: Tuple[Card, ...] = (Card.QUEEN, Card.KING, Card.ACE)

TABLE_NAMES = {
    Card.QUEEN: "Queen's Table",
    Card.KING: "King's Table",
    Card.ACE: "Ace's Table",
}


def matches_table(card: Card, table: Card) -> bool:
    """Return True when ``card`` backs up a claim on ``table``."""
    return card == Card.JOKER or card == table


def table_to_string(card: Card) -> str:
    return TABLE_NAMES.get(card, "Joker's Table?")


def build_deck(config: "GameConfig") -> List[Card]:
    """Return an unshuffled deck built from the configured per-symbol counts."""
    return (
        [Card.QUEEN] * config.queen_count
        + [Card.KING] * config.king_count
        + [Card.ACE] * config.ace_count
        + [Card.JOKER] * config.joker_count
    )
