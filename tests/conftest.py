import random
from typing import Iterable, List, Optional

import pytest

from liarsdeck.config.settings import GameConfig
from liarsdeck.core.cards import Card
from liarsdeck.core.fsm import GameEngine
from liarsdeck.core.schemas import Action
from liarsdeck.narrator import BaseReporter


class StubRandom(random.Random):
    """Deterministic random source for rule tests.

    ``shuffle`` leaves the deck in build order, ``choice`` picks ``table``,
    and single-argument ``randrange`` calls (chamber draws) pop from
    ``chamber_draws`` once armed, falling back to ``fallback_draw``.
    """

    def __init__(self, seed: int = 0, *, table: Card = Card.QUEEN) -> None:
        super().__init__(seed)
        self.table = table
        self.chamber_draws: List[int] = []
        self.fallback_draw: Optional[int] = None

    def shuffle(self, x, *args, **kwargs) -> None:
        return None

    def choice(self, seq):
        return self.table if self.table in seq else seq[0]

    def randrange(self, start, stop=None, step=1):
        if stop is None and (self.chamber_draws or self.fallback_draw is not None):
            value = self.chamber_draws.pop(0) if self.chamber_draws else self.fallback_draw
            return min(value, start - 1)
        return super().randrange(start, stop, step)


class ScriptedStrategy:
    """Replays a fixed list of actions, then challenges."""

    name = "scripted"

    def __init__(self, actions: Iterable = ()) -> None:
        self.actions = list(actions)
        self.seen: List[int] = []

    def take_action(self, history, hand):
        self.seen.append(len(history))
        if self.actions:
            return self.actions.pop(0)
        return Action.challenge()


class RecordingReporter(BaseReporter):
    def __init__(self) -> None:
        self.events: List[tuple] = []
        self.hand_totals: List[int] = []
        self.snapshots: List[List[tuple]] = []

    def game_start(self, state) -> None:
        self.events.append(("game_start",))

    def round_start(self, state) -> None:
        self.events.append(("round_start", state.round_number, state.table))
        self.hand_totals.append(sum(len(player.hand) for player in state.players))

    def turn_start(self, state, round_state, player) -> None:
        self.events.append(("turn_start", player.seat))

    def turn_resolved(self, state, resolution) -> None:
        self.events.append(("turn_resolved", resolution.actor, resolution.action.is_challenge))
        self.snapshots.append(
            [(player.chamber_position, player.is_eliminated) for player in state.players]
        )

    def game_end(self, state) -> None:
        self.events.append(("game_end", state.winner.seat if state.winner else None))


def make_config(players: int = 2, **overrides) -> GameConfig:
    values = dict(
        player_names=["scripted"] * players,
        chamber_rounds=6,
        hand_size=2,
        queen_count=0,
        king_count=0,
        ace_count=0,
        joker_count=0,
    )
    values.update(overrides)
    return GameConfig(**values)


def make_engine(config: GameConfig, scripts: dict, *, table: Card = Card.QUEEN, reporter=None):
    rng = StubRandom(table=table)
    strategies = {seat: ScriptedStrategy(actions) for seat, actions in scripts.items()}
    engine = GameEngine(config, rng=rng, reporter=reporter, game_id=12345, strategies=strategies)
    return engine, rng, strategies


@pytest.fixture
def stub_rng() -> StubRandom:
    return StubRandom()
