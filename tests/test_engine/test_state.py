"""Tests for game state, snapshots and configuration."""

import dataclasses

import pytest

from regicide_engine.cards import Card, Rank, Suit
from regicide_engine.config import GameConfig
from regicide_engine.engine import TurnEngine
from regicide_engine.events import Phase, VictoryRank
from regicide_engine.state import create_initial_state


class TestGameConfig:
    @pytest.mark.parametrize(
        "players,hand,jesters,charges",
        [(1, 8, 0, 2), (2, 7, 0, 0), (3, 6, 1, 0), (4, 5, 2, 0)],
    )
    def test_player_count_table(self, players, hand, jesters, charges):
        config = GameConfig.for_players(players)
        assert config.max_hand_size == hand
        assert config.tavern_jesters == jesters
        assert config.jester_charges == charges
        assert config.is_solo == (players == 1)

    def test_invalid_player_count(self):
        with pytest.raises(ValueError):
            GameConfig.for_players(5)
        with pytest.raises(ValueError):
            GameConfig(player_count=0)

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("REGICIDE_PLAYERS", "3")
        monkeypatch.setenv("REGICIDE_SEED", "99")
        monkeypatch.setenv("REGICIDE_LOG_TAIL", "4")

        config = GameConfig.from_env()

        assert config.player_count == 3
        assert config.seed == 99
        assert config.log_tail == 4
        assert config.max_hand_size == 6

    def test_from_env_defaults(self, monkeypatch):
        for name in ("REGICIDE_PLAYERS", "REGICIDE_SEED", "REGICIDE_LOG_TAIL"):
            monkeypatch.delenv(name, raising=False)
        assert GameConfig.from_env() == GameConfig()


class TestInitialState:
    def test_deal_and_piles(self):
        state = create_initial_state(GameConfig.for_players(4, seed=3))
        assert [len(p.hand) for p in state.players] == [5, 5, 5, 5]
        assert len(state.tavern) == 42 - 20
        assert len(state.castle) == 12
        assert state.enemy is None
        assert [p.name for p in state.players] == ["Player 1", "Player 2", "Player 3", "Player 4"]

    def test_solo_defaults(self):
        state = create_initial_state()
        assert state.players[0].name == "Hero"
        assert state.players[0].jester_charges == 2

    def test_custom_names(self):
        state = create_initial_state(GameConfig.for_players(2), names=["Ann", "Bo"])
        assert [p.name for p in state.players] == ["Ann", "Bo"]

    def test_preordered_tavern_deals_from_top(self):
        tavern = [Card(Rank(r), Suit.HEARTS) for r in range(1, 11)]
        state = create_initial_state(GameConfig(), tavern=tavern, castle=[])
        assert state.players[0].hand == tavern[:8]
        assert state.tavern.cards == tavern[8:]


class TestSnapshot:
    def test_snapshot_is_frozen(self):
        snapshot = TurnEngine(seed=5).snapshot()
        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.phase = Phase.DEFEAT
        assert isinstance(snapshot.hand, tuple)

    def test_snapshot_does_not_follow_engine(self):
        engine = TurnEngine(seed=5)
        before = engine.snapshot()

        engine.yield_turn()

        assert before.phase == Phase.INPUT
        assert engine.snapshot().phase == Phase.ENEMY_ATTACK

    def test_family_sizes_at_start(self):
        snapshot = TurnEngine(seed=5).snapshot()
        assert snapshot.tavern_family_size == 40
        assert snapshot.castle_family_size == 12
        assert snapshot.enemies_remaining == 12

    def test_log_tail_is_bounded(self):
        config = dataclasses.replace(GameConfig(seed=8), log_tail=2)
        engine = TurnEngine(config)

        engine.yield_turn()
        engine.execute(engine.legal_actions()[0])

        assert len(engine.history()) == 3
        assert engine.snapshot().log_tail == engine.history()[-2:]


class TestVictoryRank:
    @pytest.mark.parametrize(
        "used,rank",
        [(0, VictoryRank.GOLD), (1, VictoryRank.SILVER), (2, VictoryRank.BRONZE)],
    )
    def test_rank_by_jesters_used(self, used, rank):
        assert VictoryRank.for_jesters_used(used) == rank
