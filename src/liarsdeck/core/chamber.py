"""Revolver chamber model used for eliminations.

A single live round hides uniformly among the chambers that have not been
fired yet, so a surviving player's odds of dying rise with every pull:
``1/n`` on the first fire, ``1/(n-1)`` on the second, and certain death once a
single chamber remains.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from fractions import Fraction
from typing import NamedTuple


class FireResult(NamedTuple):
    died: bool
    chamber_position: int


def fire(chamber_position: int, total_chambers: int, rng: random.Random) -> FireResult:
    """Pull the trigger once and return the outcome and the advanced position."""

    remaining = total_chambers - chamber_position
    if remaining <= 0:
        # Exhausted cylinder; unreachable when positions advance one per fire.
        died = True
    else:
        died = rng.randrange(remaining) == 0
    return FireResult(died=died, chamber_position=chamber_position + 1)


def death_probability(chamber_position: int, total_chambers: int) -> Fraction:
    """Exact probability that the next fire at ``chamber_position`` is lethal."""

    remaining = total_chambers - chamber_position
    if remaining <= 0:
        return Fraction(1)
    return Fraction(1, remaining)


@dataclass
class EliminationState:
    """Per-player elimination bookkeeping, persistent across rounds."""

    chamber_position: int = 0
    is_eliminated: bool = False

    def fire(self, total_chambers: int, rng: random.Random) -> FireResult:
        result = fire(self.chamber_position, total_chambers, rng)
        self.chamber_position = result.chamber_position
        if result.died:
            self.is_eliminated = True
        return result

    def reset(self) -> None:
        self.chamber_position = 0
        self.is_eliminated = False
