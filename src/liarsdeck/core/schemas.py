"""Pydantic contracts for strategy actions."""

from enum import Enum
from typing import Any, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class ActionType(str, Enum):
    """Action types."""
    PLAY = "PLAY"
    CHALLENGE = "CHALLENGE"


class Action(BaseModel):
    """Cards laid down this turn; no cards means a challenge."""

    model_config = ConfigDict(frozen=True)

    card_indices: Tuple[int, ...] = Field(default=(), description="Indices into the actor's own hand")

    @classmethod
    def challenge(cls) -> "Action":
        return cls()

    @classmethod
    def play(cls, *indices: int) -> "Action":
        return cls(card_indices=tuple(indices))

    @property
    def is_challenge(self) -> bool:
        return not self.card_indices

    @property
    def type(self) -> ActionType:
        return ActionType.CHALLENGE if self.is_challenge else ActionType.PLAY


CHALLENGE = Action.challenge()


class ConfigurationError(ValueError):
    """Raised when a game cannot be set up from the supplied configuration."""

    def __init__(self, message: str, errors: list | None = None):
        self.errors = errors or []
        super().__init__(message)


class ActionValidationError(ValueError):
    """Raised when a strategy returns something that is not a usable action."""


def action_to_string(action: Action) -> str:
    """Render an action the way the table narrates it."""
    if action.is_challenge:
        return "Challenge!"
    noun = "cards" if len(action.card_indices) > 1 else "card"
    return f"Playing {noun} " + ", ".join(str(index) for index in action.card_indices)


def normalize_action(raw: Any) -> Action:
    """Coerce a strategy's return value into an :class:`Action`."""
    if isinstance(raw, Action):
        return raw
    if isinstance(raw, dict):
        try:
            return Action(**raw)
        except ValidationError as e:
            raise ActionValidationError(f"Action payload did not validate: {e.errors()}") from e
    if isinstance(raw, (list, tuple)):
        try:
            return Action(card_indices=tuple(raw))
        except ValidationError as e:
            raise ActionValidationError(f"Action indices did not validate: {e.errors()}") from e
    raise ActionValidationError(f"Unsupported action type: {type(raw)!r}")


def validate_action(action: Action, hand_size: int) -> None:
    """Check that every index is unique and points into a hand of ``hand_size`` cards."""
    seen: set[int] = set()
    for index in action.card_indices:
        if not 0 <= index < hand_size:
            raise ActionValidationError(f"Card index {index} is out of range (0-{hand_size - 1})")
        if index in seen:
            raise ActionValidationError(f"Duplicate card index {index}")
        seen.add(index)


def indices_of(cards: Sequence[Any], wanted: Any) -> Tuple[int, ...]:
    """Return the positions in ``cards`` whose value is in ``wanted``."""
    return tuple(i for i, card in enumerate(cards) if card in wanted)
