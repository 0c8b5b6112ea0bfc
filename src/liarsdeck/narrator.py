"""Reporter hooks and the console narrator for watching games unfold."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .core.cards import table_to_string
from .core.schemas import action_to_string

if TYPE_CHECKING:  # pragma: no cover - import cycle guard for type checkers
    from .core.fsm import GameState, RoundState, TurnResolution
    from .core.player import Player


class Reporter(Protocol):
    """Receives narration events from the engine. Purely advisory."""

    def game_start(self, state: "GameState") -> None:
        ...

    def round_start(self, state: "GameState") -> None:
        ...

    def turn_start(self, state: "GameState", round_state: "RoundState", player: "Player") -> None:
        ...

    def turn_resolved(self, state: "GameState", resolution: "TurnResolution") -> None:
        ...

    def game_end(self, state: "GameState") -> None:
        ...


class BaseReporter:
    """Silent reporter used for batch runs."""

    def game_start(self, state: "GameState") -> None:
        return None

    def round_start(self, state: "GameState") -> None:
        return None

    def turn_start(self, state: "GameState", round_state: "RoundState", player: "Player") -> None:
        return None

    def turn_resolved(self, state: "GameState", resolution: "TurnResolution") -> None:
        return None

    def game_end(self, state: "GameState") -> None:
        return None


class GameNarrator(BaseReporter):
    """Provides human-friendly game progress updates."""

    def __init__(self, console: Optional[Console] = None, *, show_hands: bool = True) -> None:
        self.console = console or Console()
        self.show_hands = show_hands

    def _say(self, state: "GameState", message: str) -> None:
        self.console.print(f"[dim]\\[Game {state.game_id}]:[/dim] {message}")

    def _describe(self, state: "GameState", seat: int) -> str:
        return f"Player {seat} ({escape(state.players[seat].label)})"

    def game_start(self, state: "GameState") -> None:
        self.console.rule(f"[bold]Beginning new game! ({state.game_id})[/bold]")

    def round_start(self, state: "GameState") -> None:
        self.console.print()
        self.console.rule()
        table = state.table
        table_name = table_to_string(table) if table is not None else "No table"
        self._say(state, f"[bold blue]Round {state.round_number}[/bold blue], {table_name}")

    def turn_start(self, state: "GameState", round_state: "RoundState", player: "Player") -> None:
        self.console.print()
        self._say(state, f"Turn {round_state.turn_number}")
        self._say(state, f"Player {player.seat}'s turn ({escape(player.label)})")
        self._say(state, f"Current chamber = {player.chamber_position}")
        if self.show_hands:
            self._say(state, str(player.hand))

    def turn_resolved(self, state: "GameState", resolution: "TurnResolution") -> None:
        if resolution.invalid_reason:
            self._say(state, f"[yellow]Invalid action ({escape(resolution.invalid_reason)}); challenging instead[/yellow]")

        showdown = resolution.showdown
        if showdown is None:
            verdict = "[red]lie[/red]" if resolution.was_lie else "[green]truth[/green]"
            self._say(state, f"{action_to_string(resolution.action)} ({verdict})")
            if self.show_hands:
                self._say(state, str(state.players[resolution.actor].hand))
            return

        prefix = "Forced " if resolution.forced else ""
        self._say(state, f"[bold]{prefix}{action_to_string(resolution.action)}[/bold]")

        reason = showdown.reason.value
        if reason == "SELF_CHALLENGE":
            self._say(state, f"Player {showdown.challenger} challenged themselves!")
        elif reason == "CAUGHT_LYING":
            self._say(state, f"{self._describe(state, showdown.shooter)} lied and has to shoot themselves!")
        else:
            accused = self._describe(state, showdown.accused) if showdown.accused is not None else "Nobody"
            self._say(
                state,
                f"{accused} told the truth so player {showdown.shooter} has to shoot themselves!",
            )

        if showdown.died:
            self._say(state, "[bold red]DEAD![/bold red]")
        else:
            self._say(state, f"-- blank -- chamber: {showdown.chamber_position}")

    def game_end(self, state: "GameState") -> None:
        self.console.print()
        self.console.rule("[bold]GAME OVER[/bold]")
        winner = state.winner
        if winner is None:
            self._say(state, "[red]No survivors[/red]")
        else:
            self._say(state, f"[bold green]WINNER![/bold green] {self._describe(state, winner.seat)}")

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Seat", style="dim", width=6)
        table.add_column("Player", width=24)
        table.add_column("Chambers fired", justify="right")
        table.add_column("Status", width=10)
        for player in state.players:
            status = "[red]dead[/red]" if player.is_eliminated else "[green]alive[/green]"
            table.add_row(str(player.seat), escape(player.label), str(player.chamber_position), status)
        self.console.print(table)
