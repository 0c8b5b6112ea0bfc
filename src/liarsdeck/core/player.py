"""Player aggregate binding identity, cards, elimination state and strategy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Sequence

from .chamber import EliminationState
from .hand import Hand
from .history import PublicPlayer, PublicTurnRecord

if TYPE_CHECKING:  # pragma: no cover - import cycle guard for type checkers
    from ..strategies import Strategy


@dataclass
class Player:
    """A seat at the table."""

    seat: int
    player_id: str
    name: str
    strategy: "Strategy"
    hand: Hand = field(default_factory=Hand)
    elimination: EliminationState = field(default_factory=EliminationState)

    @property
    def is_eliminated(self) -> bool:
        return self.elimination.is_eliminated

    @property
    def chamber_position(self) -> int:
        return self.elimination.chamber_position

    @property
    def can_act(self) -> bool:
        return not self.is_eliminated and not self.hand.is_empty

    @property
    def label(self) -> str:
        return f"{self.name} #{self.player_id}"

    def take_action(self, history: Sequence[PublicTurnRecord]) -> Any:
        """Ask the strategy for an action; the raw result is validated by the engine."""
        return self.strategy.take_action(history, self.hand.snapshot())

    def public_view(self) -> PublicPlayer:
        return PublicPlayer(
            player_id=self.player_id,
            chamber_position=self.elimination.chamber_position,
            cards_in_hand=len(self.hand),
            is_eliminated=self.elimination.is_eliminated,
        )
