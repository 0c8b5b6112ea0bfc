"""Public, redacted game history shared with strategies."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, List, Optional, Sequence, Tuple, overload

from .cards import Card
from .schemas import Action


@dataclass(frozen=True, slots=True)
class PublicPlayer:
    """What everyone at the table can see about a player."""

    player_id: str
    chamber_position: int
    cards_in_hand: int
    is_eliminated: bool

    @property
    def can_act(self) -> bool:
        return not self.is_eliminated and self.cards_in_hand > 0


@dataclass(frozen=True, slots=True)
class PublicTurnRecord:
    """Snapshot taken after a turn resolves.

    ``players`` starts with the actor and continues counter-clockwise.
    ``was_lie`` stays ``None`` until a later challenge settles the claim.
    """

    players: Tuple[PublicPlayer, ...]
    action: Action
    table: Card
    round_number: int
    turn_number: int
    was_lie: Optional[bool] = None

    @property
    def actor(self) -> PublicPlayer:
        return self.players[0]

    @property
    def cards_played(self) -> int:
        return len(self.action.card_indices)


def rotate_view(players: Sequence[PublicPlayer], start: int) -> Tuple[PublicPlayer, ...]:
    """Return ``players`` reordered to begin at seat ``start``, wrapping around."""

    total = len(players)
    return tuple(players[(start + offset) % total] for offset in range(total))


class GameHistory(Sequence[PublicTurnRecord]):
    """Append-only log of public turn records for a whole game."""

    def __init__(self) -> None:
        self._records: List[PublicTurnRecord] = []

    @overload
    def __getitem__(self, index: int) -> PublicTurnRecord: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[PublicTurnRecord]: ...

    def __getitem__(self, index):
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PublicTurnRecord]:
        return iter(self._records)

    @property
    def records(self) -> Tuple[PublicTurnRecord, ...]:
        return tuple(self._records)

    @property
    def last(self) -> Optional[PublicTurnRecord]:
        return self._records[-1] if self._records else None

    def append(self, record: PublicTurnRecord) -> int:
        """Append a record and return its turn index."""
        self._records.append(record)
        return len(self._records) - 1

    def mark_lie(self, index: int, was_lie: bool) -> PublicTurnRecord:
        """Fill in the verdict for the record at ``index``.

        Re-applying the same verdict is a no-op; contradicting an existing one
        raises ``ValueError``.
        """
        record = self._records[index]
        if record.was_lie is not None:
            if record.was_lie != was_lie:
                raise ValueError(f"Turn {index} already marked was_lie={record.was_lie}")
            return record
        if record.action.is_challenge:
            raise ValueError(f"Turn {index} is a challenge and has no claim to settle")
        patched = replace(record, was_lie=was_lie)
        self._records[index] = patched
        return patched

    def reset(self) -> None:
        self._records.clear()

    def for_round(self, round_number: int) -> List[PublicTurnRecord]:
        return [record for record in self._records if record.round_number == round_number]
