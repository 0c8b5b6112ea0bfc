import pytest

from liarsdeck.config.settings import GameConfig
from liarsdeck.core.cards import TABLE_CARDS
from liarsdeck.core.fsm import State, run_game
from tests.conftest import RecordingReporter

LINEUPS = [
    ["random", "random", "random", "truth"],
    ["challenger", "random", "truth", "safe"],
    ["safe", "truth"],
]


@pytest.mark.parametrize("names", LINEUPS)
@pytest.mark.parametrize("seed", range(15))
def test_seeded_games_keep_the_table_invariants(names, seed):
    config = GameConfig(player_names=names)
    reporter = RecordingReporter()
    state = run_game(config, seed=seed, reporter=reporter)

    assert state.state == State.GAME_END
    assert len(state.alive_players()) <= 1
    if state.winner is not None:
        assert not state.winner.is_eliminated

    # every seat, dead or alive, is dealt a full hand each round
    assert reporter.hand_totals == [config.cards_dealt] * state.round_number

    for before, after in zip(reporter.snapshots, reporter.snapshots[1:]):
        for (chamber_a, dead_a), (chamber_b, dead_b) in zip(before, after):
            assert chamber_b >= chamber_a
            assert dead_b or not dead_a

    for player in state.players:
        assert player.chamber_position <= config.chamber_rounds

    for round_number in range(1, state.round_number + 1):
        records = state.history.for_round(round_number)
        assert records[0].turn_number == 0
        assert {record.table for record in records} == {records[0].table}
        assert records[0].table in TABLE_CARDS
        assert records[-1].action.is_challenge

        plays = [index for index, record in enumerate(records) if not record.action.is_challenge]
        for index in plays[:-1]:
            assert records[index].was_lie is None
        if plays and plays[-1] == len(records) - 2:
            assert records[plays[-1]].was_lie is not None


@pytest.mark.parametrize("seed", [3, 42, 2024])
def test_same_seed_replays_the_same_game(seed):
    first = run_game(seed=seed)
    second = run_game(seed=seed)

    assert first.game_id == second.game_id
    assert [p.player_id for p in first.players] == [p.player_id for p in second.players]
    assert first.history.records == second.history.records
    assert (first.winner.seat if first.winner else None) == (second.winner.seat if second.winner else None)


def test_player_ids_are_unique_six_digit_strings():
    state = run_game(GameConfig(player_names=["random"] * 4, hand_size=5), seed=9)
    ids = [player.player_id for player in state.players]
    assert len(set(ids)) == len(ids)
    assert all(len(player_id) == 6 and player_id.isdigit() for player_id in ids)
    assert 10000 <= state.game_id <= 99999
