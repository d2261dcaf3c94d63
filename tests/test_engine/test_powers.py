"""Tests for suit powers."""

from regicide_engine.cards import Card, Rank, Suit
from regicide_engine.config import GameConfig
from regicide_engine.enemy import Enemy
from regicide_engine.events import EventKind, EventRecorder, Zone
from regicide_engine.powers import damage_multiplier, resolve_powers
from regicide_engine.state import create_initial_state

H, D, C, S = Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES


def c(rank, suit):
    return Card(Rank(rank), suit)


def make_state(enemy_suit=S, hand=(), tavern=(), discard=(), config=None):
    state = create_initial_state(config or GameConfig(), tavern=[], castle=[])
    state.enemy = Enemy.from_card(Card(Rank.JACK, enemy_suit))
    state.players[0].hand = list(hand)
    state.tavern.cards = list(tavern)
    state.tavern_discard.extend(discard)
    return state


class TestHearts:
    def test_heal_moves_discard_under_tavern(self):
        discard = [c(r, C) for r in range(1, 6)]
        state = make_state(tavern=[c(9, H)], discard=discard)
        recorder = EventRecorder(EventKind.PLAY)

        results = resolve_powers(state, {H}, 3, recorder)

        assert results[0].amount == 3
        assert len(state.tavern_discard) == 2
        assert len(state.tavern) == 4
        assert state.tavern.cards[0] == c(9, H)
        assert all(m.source == Zone.TAVERN_DISCARD for m in recorder.moves)

    def test_heal_is_capped_by_discard(self):
        state = make_state(discard=[c(2, C)])
        results = resolve_powers(state, {H}, 7, EventRecorder(EventKind.PLAY))
        assert results[0].amount == 1
        assert state.tavern_discard == []


class TestDiamonds:
    def test_draw_stops_at_hand_limit(self):
        hand = [c(r, S) for r in range(1, 7)]
        state = make_state(enemy_suit=H, hand=hand, tavern=[c(r, C) for r in range(1, 6)])

        results = resolve_powers(state, {D}, 5, EventRecorder(EventKind.PLAY))

        assert results[0].amount == 2
        assert len(state.players[0].hand) == 8
        assert len(state.tavern) == 3

    def test_hearts_resolve_before_diamonds(self):
        state = make_state(enemy_suit=S, discard=[c(4, C), c(5, C)])

        results = resolve_powers(state, {D, H}, 2, EventRecorder(EventKind.PLAY))

        assert [r.suit for r in results] == [H, D]
        assert len(state.players[0].hand) == 2
        assert len(state.tavern) == 0


class TestClubsAndSpades:
    def test_clubs_double(self):
        state = make_state(enemy_suit=H)
        results = resolve_powers(state, {C}, 6, EventRecorder(EventKind.PLAY))
        assert results[0].amount == 6
        assert damage_multiplier(results) == 2

    def test_blocked_clubs_do_not_double(self):
        state = make_state(enemy_suit=C)
        results = resolve_powers(state, {C}, 6, EventRecorder(EventKind.PLAY))
        assert results[0].blocked
        assert damage_multiplier(results) == 1

    def test_spades_accumulate(self):
        state = make_state(enemy_suit=H)
        resolve_powers(state, {S}, 4, EventRecorder(EventKind.PLAY))
        resolve_powers(state, {S}, 3, EventRecorder(EventKind.PLAY))
        assert state.enemy.shield == 7
        assert state.enemy.effective_attack == 3

    def test_blocked_spades_are_remembered(self):
        state = make_state(enemy_suit=S)
        recorder = EventRecorder(EventKind.PLAY)
        resolve_powers(state, {S}, 5, recorder)
        assert state.enemy.shield == 0
        assert state.enemy.pending_spade_value == 5
        assert recorder.powers[0].blocked


class TestImmunity:
    def test_blocked_hearts_leave_discard_alone(self):
        state = make_state(enemy_suit=H, discard=[c(2, C), c(3, C)])
        results = resolve_powers(state, {H}, 5, EventRecorder(EventKind.PLAY))
        assert results[0].blocked
        assert len(state.tavern_discard) == 2
        assert len(state.tavern) == 0

    def test_blocked_diamonds_draw_nothing(self):
        state = make_state(enemy_suit=D, tavern=[c(2, C), c(3, C)])
        resolve_powers(state, {D}, 5, EventRecorder(EventKind.PLAY))
        assert state.players[0].hand == []
        assert len(state.tavern) == 2

    def test_cancelled_immunity_lets_power_through(self):
        state = make_state(enemy_suit=D, tavern=[c(2, C), c(3, C)])
        state.enemy.cancel_immunity()
        resolve_powers(state, {D}, 5, EventRecorder(EventKind.PLAY))
        assert len(state.players[0].hand) == 2
