"""Typer CLI entry point for running Liar's Deck simulations."""

from __future__ import annotations

import logging
from collections import Counter
from enum import Enum
from pathlib import Path
from typing import Optional

import structlog
import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from ..config.settings import DEFAULT_CONFIG_PATH, GameConfig, build_game_config, load_game_config
from ..config.strategy_registry import get_all_strategies, get_strategy_display_name, is_registered
from ..core.fsm import EngineError, GameEngine, run_game
from ..core.schemas import ConfigurationError
from ..narrator import BaseReporter, GameNarrator

LOGGER = structlog.get_logger(__name__)

app = typer.Typer(help="Run Liar's Deck simulations.", invoke_without_command=False)
console = Console()


class StepMode(str, Enum):
    GAME = "game"
    ROUND = "round"
    TURN = "turn"


def configure_logging(verbose: bool = False) -> None:
    level = logging.INFO if verbose else logging.WARNING
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=False,
    )


def _resolve_config(config: Path, players: Optional[str]) -> GameConfig:
    game_config = load_game_config(config)
    if players:
        names = [name.strip() for name in players.split(",") if name.strip()]
        data = game_config.model_dump()
        data["player_names"] = names
        game_config = build_game_config(data)
    unknown = [name for name in game_config.player_names if not is_registered(name)]
    if unknown:
        raise ConfigurationError(f"Unknown strategies: {', '.join(unknown)}")
    return game_config


def _pause(label: str) -> None:
    typer.prompt(f"Press Enter for the next {label}", default="", show_default=False)


@app.command("play")
def play(
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH, envvar="LIARSDECK_CONFIG", help="Path to game configuration JSON"
    ),
    seed: Optional[int] = typer.Option(None, envvar="LIARSDECK_SEED", help="Seed for deterministic simulation"),
    players: Optional[str] = typer.Option(
        None, help="Comma separated strategy names, overriding the configured seats"
    ),
    step: StepMode = typer.Option(StepMode.GAME, help="Pause after every turn or round"),
    hide_hands: bool = typer.Option(False, "--hide-hands", help="Do not print private hands"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show structured engine logs"),
) -> None:
    """Play a single narrated game."""

    load_dotenv()
    configure_logging(verbose)

    try:
        game_config = _resolve_config(config, players)
        engine = GameEngine(game_config, seed=seed, reporter=GameNarrator(console, show_hands=not hide_hands))
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    LOGGER.info("simulation.start", seed=seed, config=str(config), players=game_config.player_names)

    try:
        if step == StepMode.TURN:
            while engine.step() is not None:
                if not engine.is_game_over():
                    _pause("turn")
        elif step == StepMode.ROUND:
            while engine.continue_round():
                if not engine.is_game_over():
                    _pause("round")
        else:
            engine.run()
    except EngineError as exc:  # pragma: no cover - invariant violation
        LOGGER.error("simulation.failed", error=str(exc))
        raise typer.Exit(code=1) from exc

    winner = engine.winner
    LOGGER.info(
        "simulation.complete",
        winner=winner.label if winner else None,
        rounds=engine.state.round_number,
        turns=engine.state.turns_played,
    )


@app.command("tournament")
def tournament(
    games: int = typer.Option(100, min=1, help="Number of games to simulate"),
    config: Path = typer.Option(
        DEFAULT_CONFIG_PATH, envvar="LIARSDECK_CONFIG", help="Path to game configuration JSON"
    ),
    seed: Optional[int] = typer.Option(None, envvar="LIARSDECK_SEED", help="Base seed; game i uses seed + i"),
    players: Optional[str] = typer.Option(
        None, help="Comma separated strategy names, overriding the configured seats"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show structured engine logs"),
) -> None:
    """Run many silent games and tabulate who survives."""

    load_dotenv()
    configure_logging(verbose)

    try:
        game_config = _resolve_config(config, players)
    except ConfigurationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    seat_wins: Counter = Counter()
    strategy_wins: Counter = Counter()
    no_winner = 0
    total_rounds = 0
    reporter = BaseReporter()

    for index in range(games):
        game_seed = seed + index if seed is not None else None
        state = run_game(game_config, seed=game_seed, reporter=reporter)
        total_rounds += state.round_number
        if state.winner is None:
            no_winner += 1
            continue
        seat_wins[state.winner.seat] += 1
        strategy_wins[state.winner.name] += 1

    table = Table(title=f"{games} games", show_header=True, header_style="bold cyan")
    table.add_column("Seat", style="dim", width=6)
    table.add_column("Strategy", width=14)
    table.add_column("Wins", justify="right")
    table.add_column("Win rate", justify="right")
    for seat, name in enumerate(game_config.player_names):
        wins = seat_wins[seat]
        table.add_row(str(seat), get_strategy_display_name(name), str(wins), f"{wins / games:.3f}")
    console.print(table)

    summary = Table(show_header=True, header_style="bold cyan")
    summary.add_column("Strategy", width=14)
    summary.add_column("Seats", justify="right")
    summary.add_column("Wins", justify="right")
    seats_by_strategy = Counter(game_config.player_names)
    for name, seats in sorted(seats_by_strategy.items()):
        summary.add_row(get_strategy_display_name(name), str(seats), str(strategy_wins[name]))
    console.print(summary)

    console.print(f"Games with no survivor: {no_winner}")
    console.print(f"Average rounds per game: {total_rounds / games:.2f}")
    LOGGER.info("tournament.complete", games=games, no_winner=no_winner)


@app.command("strategies")
def strategies() -> None:
    """List the strategies that can be seated by name."""

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Name")
    table.add_column("Display name")
    table.add_column("Description")
    for info in get_all_strategies():
        table.add_row(info["name"], info["display_name"], info["description"])
    console.print(table)


if __name__ == "__main__":  # pragma: no cover
    app()
