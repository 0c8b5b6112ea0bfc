"""Seeded randomness helpers for deterministic simulations."""

import random
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def build_rng(*, seed: int | None = None) -> random.Random:
    """Return a deterministic random generator."""
    return random.Random(seed)


def shuffled(rng: random.Random, items: Sequence[T]) -> List[T]:
    """Return a uniformly shuffled copy of ``items``.

    Args:
        rng: Random number generator
        items: Items to shuffle (left untouched)

    Returns:
        New list holding the same items in random order
    """
    result = list(items)
    rng.shuffle(result)
    return result


def random_game_id(rng: random.Random) -> int:
    """Return a five digit game identifier."""
    return rng.randint(10000, 99999)


def random_player_id(rng: random.Random, *, taken: Sequence[str] = ()) -> str:
    """Return an opaque six digit player id not already in ``taken``."""
    while True:
        candidate = f"{rng.randrange(1_000_000):06d}"
        if candidate not in taken:
            return candidate


def derive_seed(rng: random.Random) -> int:
    """Draw a child seed so dependent generators stay reproducible."""
    return rng.getrandbits(32)
