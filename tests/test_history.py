import pytest

from liarsdeck.core.cards import Card
from liarsdeck.core.history import GameHistory, PublicPlayer, PublicTurnRecord, rotate_view
from liarsdeck.core.schemas import Action


def _players(count):
    return [PublicPlayer(player_id=str(i), chamber_position=0, cards_in_hand=5, is_eliminated=False) for i in range(count)]


def _record(action, turn=1):
    return PublicTurnRecord(
        players=tuple(_players(3)),
        action=action,
        table=Card.KING,
        round_number=1,
        turn_number=turn,
    )


def test_rotate_view_starts_at_actor_and_wraps():
    rotated = rotate_view(_players(4), 2)
    assert [p.player_id for p in rotated] == ["2", "3", "0", "1"]


def test_append_returns_turn_index():
    history = GameHistory()
    assert history.append(_record(Action.challenge(), turn=0)) == 0
    assert history.append(_record(Action.play(1))) == 1
    assert len(history) == 2
    assert history.last.turn_number == 1


def test_mark_lie_is_idempotent():
    history = GameHistory()
    history.append(_record(Action.challenge(), turn=0))
    index = history.append(_record(Action.play(0, 1)))
    history.mark_lie(index, True)
    history.mark_lie(index, True)
    assert history[index].was_lie is True


def test_mark_lie_rejects_contradiction():
    history = GameHistory()
    index = history.append(_record(Action.play(0)))
    history.mark_lie(index, False)
    with pytest.raises(ValueError):
        history.mark_lie(index, True)


def test_mark_lie_refuses_challenge_records():
    history = GameHistory()
    index = history.append(_record(Action.challenge(), turn=0))
    with pytest.raises(ValueError):
        history.mark_lie(index, False)
    assert history[index].was_lie is None


def test_records_are_frozen():
    record = _record(Action.play(0))
    with pytest.raises(AttributeError):
        record.was_lie = True  # type: ignore[misc]


def test_public_player_can_act():
    assert PublicPlayer("1", 0, 2, False).can_act
    assert not PublicPlayer("1", 0, 0, False).can_act
    assert not PublicPlayer("1", 0, 2, True).can_act
