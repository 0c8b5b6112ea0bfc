"""Abstractions and implementations for strategies seated at the table."""

from __future__ import annotations

import random
from typing import Optional, Protocol, Sequence

from .core.cards import Card
from .core.history import PublicTurnRecord
from .core.schemas import Action, indices_of


class Strategy(Protocol):
    """Minimal protocol describing a strategy.

    ``history`` is the whole game's public record, oldest first; its last
    entry always carries the current round's table card. ``hand`` is the
    acting player's own cards. Returning an empty action challenges.
    """

    def take_action(self, history: Sequence[PublicTurnRecord], hand: Sequence[Card]) -> Action:
        ...


class BaseStrategy:
    """Concrete helper giving strategies a private random source."""

    name = "base"

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    @staticmethod
    def current_table(history: Sequence[PublicTurnRecord]) -> Optional[Card]:
        return history[-1].table if history else None

    def take_action(self, history: Sequence[PublicTurnRecord], hand: Sequence[Card]) -> Action:
        raise NotImplementedError


class ChallengerStrategy(BaseStrategy):
    """Challenges every time."""

    name = "challenger"

    def take_action(self, history: Sequence[PublicTurnRecord], hand: Sequence[Card]) -> Action:
        return Action.challenge()


class RandomStrategy(BaseStrategy):
    """Plays its first card, challenging a quarter of the time."""

    name = "random"
    challenge_rate = 0.25

    def __init__(self, seed: Optional[int] = None, *, challenge_rate: Optional[float] = None) -> None:
        super().__init__(seed)
        if challenge_rate is not None:
            self.challenge_rate = challenge_rate

    def take_action(self, history: Sequence[PublicTurnRecord], hand: Sequence[Card]) -> Action:
        if self.rng.random() < self.challenge_rate:
            return Action.challenge()
        return Action.play(0)


class TruthStrategy(BaseStrategy):
    """Never lies: lays down one table card, otherwise challenges."""

    name = "truth"

    def take_action(self, history: Sequence[PublicTurnRecord], hand: Sequence[Card]) -> Action:
        table = self.current_table(history)
        safe = indices_of(hand, {table})
        if not safe:
            return Action.challenge()
        return Action.play(safe[-1])


class SafeStrategy(BaseStrategy):
    """Dumps every card that matches the table, jokers included."""

    name = "safe"

    def take_action(self, history: Sequence[PublicTurnRecord], hand: Sequence[Card]) -> Action:
        table = self.current_table(history)
        safe = indices_of(hand, {table, Card.JOKER})
        if not safe:
            return Action.challenge()
        return Action.play(*safe)
