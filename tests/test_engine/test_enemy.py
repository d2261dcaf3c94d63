"""Tests for the enemy record."""

import pytest

from regicide_engine.cards import Card, Rank, Suit
from regicide_engine.enemy import Enemy


class TestStats:
    @pytest.mark.parametrize(
        "rank,hp,attack",
        [(Rank.JACK, 20, 10), (Rank.QUEEN, 30, 15), (Rank.KING, 40, 20)],
    )
    def test_enemy_stats(self, rank, hp, attack):
        enemy = Enemy.from_card(Card(rank, Suit.CLUBS))
        assert enemy.max_hp == hp
        assert enemy.current_hp == hp
        assert enemy.base_attack == attack
        assert enemy.effective_attack == attack

    def test_number_card_is_not_an_enemy(self):
        with pytest.raises(ValueError):
            Enemy.from_card(Card(Rank.TEN, Suit.CLUBS))

    def test_name(self):
        assert Enemy.from_card(Card(Rank.QUEEN, Suit.HEARTS)).name == "Queen of Hearts"


class TestDamage:
    def test_remainder_signs(self):
        enemy = Enemy.from_card(Card(Rank.JACK, Suit.HEARTS))
        assert enemy.take_damage(5) == 15
        assert enemy.take_damage(15) == 0
        assert enemy.is_defeated

    def test_overkill_floors_hp(self):
        enemy = Enemy.from_card(Card(Rank.JACK, Suit.HEARTS))
        assert enemy.take_damage(25) == -5
        assert enemy.current_hp == 0

    def test_shield_never_goes_negative(self):
        enemy = Enemy.from_card(Card(Rank.JACK, Suit.HEARTS))
        enemy.add_shield(14)
        assert enemy.effective_attack == 0


class TestImmunity:
    def test_immune_to_own_suit_only(self):
        enemy = Enemy.from_card(Card(Rank.KING, Suit.SPADES))
        assert enemy.is_immune_to(Suit.SPADES)
        assert not enemy.is_immune_to(Suit.CLUBS)
        assert not enemy.is_immune_to(None)

    def test_cancel_pays_blocked_spades_once(self):
        enemy = Enemy.from_card(Card(Rank.JACK, Suit.SPADES))
        enemy.record_blocked(Suit.SPADES, 5)

        assert enemy.cancel_immunity() == 5
        assert enemy.shield == 5
        assert not enemy.is_immune_to(Suit.SPADES)
        assert enemy.cancel_immunity() == 0
        assert enemy.shield == 5

    def test_blocked_clubs_only_noted(self):
        enemy = Enemy.from_card(Card(Rank.JACK, Suit.CLUBS))
        enemy.record_blocked(Suit.CLUBS, 8)
        assert enemy.pending_clubs_seen
        assert enemy.cancel_immunity() == 0
        assert enemy.current_hp == 20
