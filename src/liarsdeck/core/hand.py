"""A player's private cards."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .cards import Card


class Hand:
    """Ordered multiset of cards owned by one player."""

    def __init__(self, cards: Optional[Iterable[Card]] = None) -> None:
        self.cards: List[Card] = list(cards or [])

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __str__(self) -> str:
        if not self.cards:
            return "Empty"
        return " ".join(card.value for card in self.cards)

    def __repr__(self) -> str:
        return f"Hand({self})"

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def snapshot(self) -> Tuple[Card, ...]:
        """Return a read-only copy for strategies."""
        return tuple(self.cards)

    def clear(self) -> None:
        self.cards = []

    def draw_card(self, card: Card) -> None:
        self.cards.append(card)

    def check_indices(self, indices: Sequence[int]) -> None:
        """Raise ``ValueError`` unless every index is unique and in range."""
        seen: set[int] = set()
        for index in indices:
            if not 0 <= index < len(self.cards):
                raise ValueError(f"Card index {index} is out of range (hand has {len(self.cards)} cards)")
            if index in seen:
                raise ValueError(f"Duplicate card index {index}")
            seen.add(index)

    def play_cards(self, indices: Sequence[int]) -> List[Card]:
        """Remove the indexed cards and return them in hand order.

        The remaining cards keep their relative order.
        """
        self.check_indices(indices)
        chosen = set(indices)
        played: List[Card] = []
        remaining: List[Card] = []
        for position, card in enumerate(self.cards):
            if position in chosen:
                played.append(card)
            else:
                remaining.append(card)
        self.cards = remaining
        return played
