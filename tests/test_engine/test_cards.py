"""Tests for card models."""

import pickle
import random

import pytest

from regicide_engine.cards import (
    CASTLE_SIZE,
    Card,
    Rank,
    Suit,
    create_castle_cards,
    create_tavern_cards,
)


class TestSuit:
    def test_suit_order_matches_power_order(self):
        assert Suit.HEARTS < Suit.DIAMONDS < Suit.CLUBS < Suit.SPADES

    def test_suit_symbols(self):
        assert Suit.HEARTS.symbol == "♥"
        assert Suit.DIAMONDS.symbol == "♦"
        assert Suit.CLUBS.symbol == "♣"
        assert Suit.SPADES.symbol == "♠"

    def test_red_suits(self):
        assert Suit.HEARTS.is_red
        assert Suit.DIAMONDS.is_red
        assert not Suit.CLUBS.is_red


class TestRank:
    def test_rank_symbols(self):
        assert Rank.JESTER.symbol == "*"
        assert Rank.ACE.symbol == "A"
        assert Rank.TEN.symbol == "10"
        assert Rank.QUEEN.symbol == "Q"

    def test_card_values(self):
        assert Rank.JESTER.card_value == 0
        assert Rank.ACE.card_value == 1
        assert Rank.SEVEN.card_value == 7
        assert Rank.JACK.card_value == 10
        assert Rank.QUEEN.card_value == 15
        assert Rank.KING.card_value == 20


class TestCard:
    def test_card_singleton(self):
        """Same rank/suit should return same instance."""
        assert Card(Rank.FIVE, Suit.CLUBS) is Card(Rank.FIVE, Suit.CLUBS)
        assert Card.jester() is Card(Rank.JESTER)

    def test_jester_has_no_suit(self):
        jester = Card.jester()
        assert jester.suit is None
        assert jester.is_jester
        assert jester.value == 0
        # A suit passed for a Jester is dropped
        assert Card(Rank.JESTER, Suit.HEARTS) is jester

    def test_non_jester_requires_suit(self):
        with pytest.raises(ValueError):
            Card(Rank.FIVE)

    def test_card_string(self):
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card.jester()) == "Jester"

    def test_card_repr(self):
        assert repr(Card(Rank.FIVE, Suit.CLUBS)) == "Card(FIVE, CLUBS)"
        assert repr(Card.jester()) == "Card(JESTER)"

    def test_flags(self):
        assert Card(Rank.ACE, Suit.HEARTS).is_companion
        assert Card(Rank.KING, Suit.HEARTS).is_royal
        assert not Card(Rank.TEN, Suit.HEARTS).is_royal

    def test_ordering(self):
        assert Card.jester() < Card(Rank.ACE, Suit.HEARTS)
        assert Card(Rank.TWO, Suit.HEARTS) < Card(Rank.TWO, Suit.SPADES)
        assert Card(Rank.TEN, Suit.SPADES) < Card(Rank.JACK, Suit.HEARTS)

    def test_pickle_preserves_identity(self):
        card = Card(Rank.NINE, Suit.DIAMONDS)
        assert pickle.loads(pickle.dumps(card)) is card


class TestDecks:
    def test_tavern_has_forty_number_cards(self):
        cards = create_tavern_cards()
        assert len(cards) == 40
        assert len(set(cards)) == 40
        assert all(not c.is_royal and not c.is_jester for c in cards)

    def test_tavern_with_jesters(self):
        cards = create_tavern_cards(jesters=2)
        assert len(cards) == 42
        assert sum(1 for c in cards if c.is_jester) == 2

    def test_castle_is_layered(self):
        castle = create_castle_cards(random.Random(7))
        assert len(castle) == CASTLE_SIZE == 12
        assert [c.rank for c in castle[:4]] == [Rank.JACK] * 4
        assert [c.rank for c in castle[4:8]] == [Rank.QUEEN] * 4
        assert [c.rank for c in castle[8:]] == [Rank.KING] * 4
        assert {c.suit for c in castle[:4]} == set(Suit)

    def test_castle_layers_are_shuffled_by_seed(self):
        assert create_castle_cards(random.Random(1)) == create_castle_cards(random.Random(1))
