import pytest

from liarsdeck.config.settings import GameConfig
from liarsdeck.core.cards import TABLE_CARDS, Card, build_deck, matches_table, table_to_string
from liarsdeck.core.hand import Hand


def test_table_cards_never_include_joker():
    assert Card.JOKER not in TABLE_CARDS
    assert set(TABLE_CARDS) == {Card.QUEEN, Card.KING, Card.ACE}


def test_joker_matches_every_table():
    for table in TABLE_CARDS:
        assert matches_table(Card.JOKER, table)
        assert matches_table(table, table)
    assert not matches_table(Card.KING, Card.QUEEN)


def test_table_names():
    assert table_to_string(Card.QUEEN) == "Queen's Table"
    assert table_to_string(Card.ACE) == "Ace's Table"
    assert table_to_string(Card.JOKER) == "Joker's Table?"


def test_build_deck_uses_configured_counts():
    config = GameConfig(queen_count=3, king_count=2, ace_count=1, joker_count=4, hand_size=2)
    deck = build_deck(config)
    assert len(deck) == config.deck_size == 10
    assert deck.count(Card.QUEEN) == 3
    assert deck.count(Card.KING) == 2
    assert deck.count(Card.ACE) == 1
    assert deck.count(Card.JOKER) == 4


def test_play_cards_returns_played_in_hand_order_and_keeps_rest():
    hand = Hand([Card.QUEEN, Card.KING, Card.ACE, Card.JOKER, Card.KING])
    played = hand.play_cards([3, 0, 4])
    assert played == [Card.QUEEN, Card.JOKER, Card.KING]
    assert hand.cards == [Card.KING, Card.ACE]


def test_draw_card_appends():
    hand = Hand()
    hand.draw_card(Card.ACE)
    hand.draw_card(Card.QUEEN)
    assert hand.cards == [Card.ACE, Card.QUEEN]
    assert len(hand) == 2


@pytest.mark.parametrize("indices", [[2], [-1], [0, 0]])
def test_play_cards_rejects_bad_indices_without_mutating(indices):
    hand = Hand([Card.QUEEN, Card.KING])
    with pytest.raises(ValueError):
        hand.play_cards(indices)
    assert hand.cards == [Card.QUEEN, Card.KING]


def test_hand_rendering():
    assert str(Hand()) == "Empty"
    assert str(Hand([Card.QUEEN, Card.JOKER, Card.ACE])) == "Q J A"


def test_snapshot_is_detached():
    hand = Hand([Card.QUEEN])
    snapshot = hand.snapshot()
    hand.draw_card(Card.KING)
    assert snapshot == (Card.QUEEN,)
