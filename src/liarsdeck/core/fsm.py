"""Finite state machine orchestrating Liar's Deck game flow."""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import structlog

from ..config.settings import DEFAULT_CONFIG, GameConfig
from ..config.strategy_registry import get_strategy_factory
from ..narrator import BaseReporter, Reporter
from ..utils.rng import build_rng, derive_seed, random_game_id, random_player_id, shuffled
from .cards import TABLE_CARDS, Card, build_deck, matches_table
from .history import GameHistory, PublicTurnRecord, rotate_view
from .player import Player
from .schemas import CHALLENGE, Action, ConfigurationError, normalize_action, validate_action

LOGGER = structlog.get_logger(__name__)

MAX_TURNS = 10_000


class State(str, Enum):
    """Engine states."""

    NOT_STARTED = "NOT_STARTED"
    ROUND_START = "ROUND_START"
    TURN_IN_PROGRESS = "TURN_IN_PROGRESS"
    ROUND_END = "ROUND_END"
    GAME_END = "GAME_END"


class ShowdownReason(str, Enum):
    """Why a particular player had to fire."""

    SELF_CHALLENGE = "SELF_CHALLENGE"
    CAUGHT_LYING = "CAUGHT_LYING"
    FALSE_ACCUSATION = "FALSE_ACCUSATION"


class EngineError(RuntimeError):
    """Raised when the FSM cannot make progress."""


@dataclass(frozen=True)
class RoundState:
    """Per-round turn sequencing, replaced wholesale after every turn."""

    round_number: int
    table: Card
    current_actor: int = 0
    last_actor: Optional[int] = None
    previous_actor_lying: bool = False
    last_claim_index: Optional[int] = None
    turn_number: int = 1
    continue_round: bool = True


@dataclass(frozen=True)
class Showdown:
    """Outcome of a challenge."""

    challenger: int
    accused: Optional[int]
    shooter: int
    reason: ShowdownReason
    died: bool
    chamber_position: int
    skipped: bool = False


@dataclass(frozen=True)
class TurnResolution:
    """Everything that happened during one turn."""

    round_number: int
    turn_number: int
    actor: int
    requested: Optional[Action]
    action: Action
    forced: bool = False
    invalid_reason: Optional[str] = None
    played: Tuple[Card, ...] = ()
    was_lie: Optional[bool] = None
    showdown: Optional[Showdown] = None
    record_index: Optional[int] = None
    settled_index: Optional[int] = None
    settled_lie: Optional[bool] = None

    @property
    def ends_round(self) -> bool:
        return self.showdown is not None


@dataclass
class GameState:
    """Container for tracking game state."""

    config: GameConfig
    rng: random.Random
    game_id: int
    seed: Optional[int] = None

    players: List[Player] = field(default_factory=list)
    history: GameHistory = field(default_factory=GameHistory)

    state: State = State.NOT_STARTED
    round_number: int = 0
    round: Optional[RoundState] = None
    turns_played: int = 0
    winner: Optional[Player] = None

    @property
    def table(self) -> Optional[Card]:
        return self.round.table if self.round else None

    def alive_players(self) -> List[Player]:
        return [player for player in self.players if not player.is_eliminated]

    def is_game_over(self) -> bool:
        return len(self.alive_players()) < 2


def check_deck(config: GameConfig) -> None:
    if config.deck_size < config.cards_dealt:
        raise ConfigurationError(
            f"Deck of {config.deck_size} cards cannot deal {config.hand_size} cards to {config.players} players"
        )


def build_players(
    config: GameConfig,
    rng: random.Random,
    overrides: Optional[Dict[int, Any]] = None,
) -> List[Player]:
    """Seat one player per configured name, resolving strategies from the registry."""

    overrides = overrides or {}
    unknown_seats = set(overrides) - set(range(config.players))
    if unknown_seats:
        raise ConfigurationError(f"Strategy overrides for seats outside the table: {sorted(unknown_seats)}")

    players: List[Player] = []
    for seat, name in enumerate(config.player_names):
        strategy = overrides.get(seat)
        if strategy is None:
            factory = get_strategy_factory(name)
            if factory is None:
                raise ConfigurationError(f"Unknown strategy {name!r} for seat {seat}")
            strategy = factory(seed=derive_seed(rng))
        player_id = random_player_id(rng, taken=[p.player_id for p in players])
        players.append(Player(seat=seat, player_id=player_id, name=name, strategy=strategy))
    return players


def _package_record(state: GameState, round_state: RoundState, *, seat: int, action: Action, turn_number: int) -> PublicTurnRecord:
    views = [player.public_view() for player in state.players]
    return PublicTurnRecord(
        players=rotate_view(views, seat),
        action=action,
        table=round_state.table,
        round_number=round_state.round_number,
        turn_number=turn_number,
    )


def _begin_game(state: GameState, reporter: Reporter) -> None:
    state.history.reset()
    state.round_number = 0
    state.round = None
    state.turns_played = 0
    state.winner = None
    for player in state.players:
        player.elimination.reset()
        player.hand.clear()
    state.state = State.ROUND_START
    LOGGER.info("game.start", game_id=state.game_id, players=[p.label for p in state.players])
    reporter.game_start(state)


def _deal_hands(state: GameState) -> None:
    config = state.config
    check_deck(config)
    deck = shuffled(state.rng, build_deck(config))
    for player in state.players:
        player.hand.clear()
    for _ in range(config.hand_size):
        for player in state.players:
            if not deck:
                LOGGER.error("deal.deck_exhausted", game_id=state.game_id, seat=player.seat)
                continue
            player.hand.draw_card(deck.pop())


def _begin_round(state: GameState, reporter: Reporter) -> None:
    if state.state != State.ROUND_START:
        raise EngineError(f"Cannot begin a round from state {state.state}")

    state.round_number += 1
    _deal_hands(state)
    table = state.rng.choice(TABLE_CARDS)
    state.round = RoundState(round_number=state.round_number, table=table)
    # Round-opening record so the first strategy of the round can see the table.
    state.history.append(_package_record(state, state.round, seat=0, action=CHALLENGE, turn_number=0))
    state.state = State.TURN_IN_PROGRESS

    LOGGER.info("round.start", game_id=state.game_id, round=state.round_number, table=table.value)
    reporter.round_start(state)


def next_valid_actor(state: GameState, start: int) -> int:
    """Return the first seat from ``start`` (wrapping) that is alive and holds cards."""

    total = len(state.players)
    for offset in range(total):
        seat = (start + offset) % total
        if state.players[seat].can_act:
            return seat
    raise EngineError(f"No player can act in round {state.round_number}")


def is_last_in_play(state: GameState, actor: int) -> bool:
    return not any(player.can_act for player in state.players if player.seat != actor)


def _request_action(state: GameState, player: Player) -> Tuple[Optional[Action], Action, Optional[str]]:
    """Return (requested, usable, invalid_reason); contract violations become challenges."""

    requested: Optional[Action] = None
    try:
        requested = normalize_action(player.take_action(state.history.records))
        validate_action(requested, len(player.hand))
    except Exception as exc:
        LOGGER.warning(
            "strategy.invalid_action",
            game_id=state.game_id,
            seat=player.seat,
            player=player.label,
            error=str(exc),
        )
        return requested, CHALLENGE, str(exc)
    return requested, requested, None


def _fire(state: GameState, seat: int) -> Tuple[bool, int, bool]:
    player = state.players[seat]
    if player.is_eliminated:
        LOGGER.warning("showdown.already_eliminated", game_id=state.game_id, seat=seat)
        return True, player.chamber_position, True
    result = player.elimination.fire(state.config.chamber_rounds, state.rng)
    LOGGER.info(
        "showdown.fire",
        game_id=state.game_id,
        seat=seat,
        died=result.died,
        chamber=result.chamber_position,
    )
    return result.died, result.chamber_position, False


def _resolve_showdown(state: GameState, round_state: RoundState, challenger: int) -> Showdown:
    accused = round_state.last_actor
    if accused is None:
        shooter, reason = challenger, ShowdownReason.SELF_CHALLENGE
    elif round_state.previous_actor_lying:
        shooter, reason = accused, ShowdownReason.CAUGHT_LYING
    else:
        shooter, reason = challenger, ShowdownReason.FALSE_ACCUSATION

    died, chamber_position, skipped = _fire(state, shooter)
    return Showdown(
        challenger=challenger,
        accused=accused,
        shooter=shooter,
        reason=reason,
        died=died,
        chamber_position=chamber_position,
        skipped=skipped,
    )


def resolve_action(
    state: GameState,
    round_state: RoundState,
    action: Action,
    *,
    requested: Optional[Action] = None,
    invalid_reason: Optional[str] = None,
) -> TurnResolution:
    """Apply the game rules to ``action`` taken by ``round_state.current_actor``."""

    actor = round_state.current_actor
    player = state.players[actor]
    forced = is_last_in_play(state, actor)
    base = TurnResolution(
        round_number=round_state.round_number,
        turn_number=round_state.turn_number,
        actor=actor,
        requested=requested,
        action=action,
        forced=forced,
        invalid_reason=invalid_reason,
    )

    if action.is_challenge or forced:
        showdown = _resolve_showdown(state, round_state, actor)
        return replace(base, action=CHALLENGE, showdown=showdown)

    played = tuple(player.hand.play_cards(action.card_indices))
    was_lie = any(not matches_table(card, round_state.table) for card in played)
    return replace(base, played=played, was_lie=was_lie)


def _play_turn(state: GameState, reporter: Reporter) -> TurnResolution:
    round_state = state.round
    if state.state != State.TURN_IN_PROGRESS or round_state is None:
        raise EngineError(f"Cannot play a turn from state {state.state}")
    if state.turns_played >= MAX_TURNS:
        raise EngineError("FSM reached iteration cap without ending the game")

    actor = next_valid_actor(state, round_state.current_actor)
    round_state = replace(round_state, current_actor=actor)
    player = state.players[actor]
    reporter.turn_start(state, round_state, player)

    requested, action, invalid_reason = _request_action(state, player)
    resolution = resolve_action(
        state, round_state, action, requested=requested, invalid_reason=invalid_reason
    )

    record = _package_record(
        state, round_state, seat=actor, action=resolution.action, turn_number=round_state.turn_number
    )
    resolution = replace(resolution, record_index=state.history.append(record))

    next_seat = (actor + 1) % len(state.players)
    if resolution.ends_round:
        if round_state.last_claim_index is not None:
            state.history.mark_lie(round_state.last_claim_index, round_state.previous_actor_lying)
            resolution = replace(
                resolution,
                settled_index=round_state.last_claim_index,
                settled_lie=round_state.previous_actor_lying,
            )
        round_state = replace(
            round_state,
            last_actor=actor,
            current_actor=next_seat,
            turn_number=round_state.turn_number + 1,
            continue_round=False,
        )
    else:
        round_state = replace(
            round_state,
            last_actor=actor,
            current_actor=next_seat,
            previous_actor_lying=bool(resolution.was_lie),
            last_claim_index=resolution.record_index,
            turn_number=round_state.turn_number + 1,
        )

    state.round = round_state
    state.turns_played += 1
    LOGGER.debug(
        "turn.action",
        game_id=state.game_id,
        round=resolution.round_number,
        turn=resolution.turn_number,
        seat=actor,
        cards=list(resolution.action.card_indices),
        lie=resolution.was_lie,
        forced=resolution.forced,
    )
    reporter.turn_resolved(state, resolution)

    if not round_state.continue_round:
        state.state = State.ROUND_END
        _handle_round_end(state, reporter)
    return resolution


def _handle_round_end(state: GameState, reporter: Reporter) -> None:
    LOGGER.info("round.end", game_id=state.game_id, round=state.round_number)
    if state.is_game_over():
        _finish_game(state, reporter)
        return
    state.state = State.ROUND_START


def _finish_game(state: GameState, reporter: Reporter) -> None:
    alive = state.alive_players()
    state.winner = alive[0] if len(alive) == 1 else None
    state.state = State.GAME_END
    LOGGER.info(
        "game.end",
        game_id=state.game_id,
        rounds=state.round_number,
        winner=state.winner.label if state.winner else None,
    )
    reporter.game_end(state)


class GameEngine:
    """Drives a game one turn, one round, or all the way at a time.

    Every entry point goes through the same turn primitive, so stepping
    granularity never changes how a turn resolves.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        reporter: Optional[Reporter] = None,
        game_id: Optional[int] = None,
        strategies: Optional[Dict[int, Any]] = None,
    ) -> None:
        config = config or DEFAULT_CONFIG
        check_deck(config)
        rng = rng if rng is not None else build_rng(seed=seed)
        self.reporter: Reporter = reporter or BaseReporter()
        self.state = GameState(
            config=config,
            rng=rng,
            game_id=game_id if game_id is not None else random_game_id(rng),
            seed=seed,
        )
        self.state.players = build_players(config, rng, strategies)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def players(self) -> List[Player]:
        return self.state.players

    @property
    def history(self) -> GameHistory:
        return self.state.history

    @property
    def phase(self) -> State:
        return self.state.state

    @property
    def winner(self) -> Optional[Player]:
        return self.state.winner

    def is_game_over(self) -> bool:
        return self.state.is_game_over()

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def _ready_turn(self) -> bool:
        """Move the FSM to a playable turn; return False once the game is over."""

        if self.state.state == State.GAME_END:
            return False
        if self.state.state == State.NOT_STARTED:
            _begin_game(self.state, self.reporter)
        if self.state.state == State.ROUND_START:
            if self.state.is_game_over():
                _finish_game(self.state, self.reporter)
                return False
            _begin_round(self.state, self.reporter)
        return self.state.state == State.TURN_IN_PROGRESS

    def step(self) -> Optional[TurnResolution]:
        """Play exactly one turn, dealing a new round first if needed."""

        if not self._ready_turn():
            return None
        return _play_turn(self.state, self.reporter)

    def continue_round(self) -> List[TurnResolution]:
        """Play out the rest of the current round (or a whole new one)."""

        if not self._ready_turn():
            return []
        resolutions: List[TurnResolution] = []
        while self.state.state == State.TURN_IN_PROGRESS:
            resolutions.append(_play_turn(self.state, self.reporter))
        return resolutions

    def run(self) -> Optional[Player]:
        """Play until fewer than two players remain and return the winner."""

        while self.state.state != State.GAME_END:
            self.continue_round()
        return self.state.winner

    def play_round(self) -> List[TurnResolution]:
        """Deal and play a complete fresh round."""

        if self.state.state == State.TURN_IN_PROGRESS:
            raise EngineError("A round is already in progress; use continue_round()")
        return self.continue_round()

    def play_game(self) -> Optional[Player]:
        """Start over from a clean table and play to completion."""

        self.state.state = State.NOT_STARTED
        return self.run()


def run_game(
    config: Optional[GameConfig] = None,
    *,
    seed: Optional[int] = None,
    reporter: Optional[Reporter] = None,
    strategies: Optional[Dict[int, Any]] = None,
) -> GameState:
    """Play a whole game and return its final state."""

    engine = GameEngine(config, seed=seed, reporter=reporter, strategies=strategies)
    engine.run()
    return engine.state
