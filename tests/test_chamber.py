import random
from fractions import Fraction

from liarsdeck.core.chamber import EliminationState, death_probability, fire


def test_first_pull_of_six_is_one_in_six():
    assert death_probability(0, 6) == Fraction(1, 6)
    assert death_probability(3, 6) == Fraction(1, 3)


def test_last_chamber_is_certain_death():
    assert death_probability(5, 6) == 1
    for seed in range(20):
        result = fire(5, 6, random.Random(seed))
        assert result.died
        assert result.chamber_position == 6


def test_exhausted_cylinder_always_kills():
    assert death_probability(7, 6) == 1
    assert fire(6, 6, random.Random(0)).died
    assert fire(9, 6, random.Random(0)).chamber_position == 10


def test_position_advances_whether_or_not_player_dies():
    rng = random.Random(1)
    positions = [fire(position, 6, rng).chamber_position for position in range(5)]
    assert positions == [1, 2, 3, 4, 5]


def test_first_pull_frequency_is_close_to_one_sixth():
    rng = random.Random(2024)
    deaths = sum(fire(0, 6, rng).died for _ in range(6000))
    assert 850 <= deaths <= 1150


def test_elimination_state_is_monotonic(stub_rng):
    state = EliminationState()
    stub_rng.chamber_draws = [1, 0, 3]
    assert not state.fire(6, stub_rng).died
    assert state.chamber_position == 1 and not state.is_eliminated
    assert state.fire(6, stub_rng).died
    assert state.is_eliminated
    state.fire(6, stub_rng)
    assert state.is_eliminated
    assert state.chamber_position == 3
