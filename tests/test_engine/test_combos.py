"""Tests for play legality."""

import pytest

from regicide_engine.cards import Card, Rank, Suit
from regicide_engine.combos import (
    PlayKind,
    active_suits,
    attack_value,
    classify_play,
    covering_discards,
    is_legal_play,
    legal_plays,
)
from regicide_engine.errors import IllegalPlay

H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES


def c(rank, suit):
    return Card(Rank(rank), suit)


class TestClassify:
    def test_single(self):
        assert classify_play([c(7, H)]) == PlayKind.SINGLE

    def test_jester_alone(self):
        assert classify_play([Card.jester()]) == PlayKind.JESTER

    def test_jester_with_other_cards_is_illegal(self):
        with pytest.raises(IllegalPlay, match="alone"):
            classify_play([Card.jester(), c(2, H)])

    def test_empty_play_is_illegal(self):
        with pytest.raises(IllegalPlay):
            classify_play([])

    def test_combo_of_fives(self):
        assert classify_play([c(5, H), c(5, S)]) == PlayKind.COMBO

    def test_combo_of_four_twos(self):
        assert classify_play([c(2, H), c(2, D), c(2, C), c(2, S)]) == PlayKind.COMBO

    def test_combo_over_ten_is_illegal(self):
        with pytest.raises(IllegalPlay, match="10 or less"):
            classify_play([c(6, H), c(6, S)])

    def test_four_threes_over_ten_is_illegal(self):
        with pytest.raises(IllegalPlay):
            classify_play([c(3, H), c(3, D), c(3, C), c(3, S)])

    def test_mixed_ranks_are_illegal(self):
        with pytest.raises(IllegalPlay):
            classify_play([c(2, H), c(3, H)])

    def test_ace_companion(self):
        assert classify_play([c(1, H), c(10, S)]) == PlayKind.COMPANION

    def test_two_aces_form_a_combo(self):
        assert classify_play([c(1, H), c(1, S)]) == PlayKind.COMBO

    def test_ace_with_two_other_cards_is_illegal(self):
        with pytest.raises(IllegalPlay):
            classify_play([c(1, H), c(4, S), c(4, C)])

    def test_is_legal_play(self):
        assert is_legal_play([c(1, C), c(9, D)])
        assert not is_legal_play([c(9, C), c(9, D)])


class TestValues:
    def test_attack_value(self):
        assert attack_value([c(1, H), c(10, S)]) == 11
        assert attack_value([Card.jester()]) == 0

    def test_active_suits(self):
        assert active_suits([c(5, H), c(5, S)]) == frozenset({H, S})
        assert active_suits([Card.jester()]) == frozenset()


class TestEnumeration:
    def test_legal_plays(self):
        hand = [c(5, H), c(5, S), c(1, C), c(9, D)]
        plays = legal_plays(hand)
        assert (0,) in plays and (3,) in plays
        assert (0, 1) in plays  # 5 + 5
        assert (2, 3) in plays  # Ace companion
        assert (0, 3) not in plays
        assert (0, 1, 2) not in plays

    def test_covering_discards(self):
        hand = [c(3, H), c(4, H), c(8, H)]
        discards = covering_discards(hand, 8)
        assert (2,) in discards
        assert (0, 1) not in discards
        assert (0, 1, 2) in discards

    def test_nothing_required(self):
        assert covering_discards([c(3, H)], 0) == [()]

    def test_cannot_cover(self):
        assert covering_discards([c(3, H)], 10) == []


class TestRulebookExamples:
    def test_three_fives_exceed_ten(self):
        assert not is_legal_play([c(5, H), c(5, S), c(5, D)])

    def test_different_ranks_without_ace(self):
        assert not is_legal_play([c(5, H), c(4, S)])

    def test_ace_and_seven(self):
        cards = [c(1, H), c(7, C)]
        assert classify_play(cards) == PlayKind.COMPANION
        assert attack_value(cards) == 8
        assert active_suits(cards) == frozenset({H, C})
