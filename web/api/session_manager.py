"""Game session management for the web API."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any

from regicide_engine.actions import Action, DiscardCards, PlayCards, UseJester, YieldTurn
from regicide_engine.config import GameConfig
from regicide_engine.engine import TurnEngine

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from regicide_engine.cards import Card
    from regicide_engine.events import TurnEvent
    from regicide_engine.state import EnemyView, GameSnapshot
    from strategies.base import Strategy


@dataclass
class GameSession:
    """An active game session wrapping one authoritative engine."""

    id: str
    engine: TurnEngine
    created_at: datetime
    seed: int | None = None
    strategy: Strategy | None = None  # Drives the "auto" endpoint
    action_history: list[dict] = field(default_factory=list)

    @property
    def snapshot(self) -> GameSnapshot:
        return self.engine.snapshot()

    @property
    def legal_actions(self) -> list[Action]:
        return self.engine.legal_actions()

    def play(self, indices: list[int], next_player: int | None = None) -> TurnEvent:
        return self.execute_action(PlayCards(tuple(indices), next_player=next_player))

    def discard(self, indices: list[int]) -> TurnEvent:
        return self.execute_action(DiscardCards(tuple(indices)))

    def use_jester(self) -> TurnEvent:
        return self.execute_action(UseJester())

    def yield_turn(self) -> TurnEvent:
        return self.execute_action(YieldTurn())

    def execute_action(self, action: Action) -> TurnEvent:
        """Run an action through the engine and record it.

        Engine errors propagate unchanged; the session is untouched by them.
        """
        before = self.engine.snapshot()
        event = self.engine.execute(action)
        self.action_history.append(
            {
                "turn": before.turn_number,
                "player": before.current_player,
                "action": str(action),
                "action_type": action.action_type.name,
                "timestamp": datetime.now().isoformat(),
                "messages": list(event.messages),
            }
        )
        return event

    def to_client_state(self) -> dict:
        """Convert the current snapshot to a client-friendly format."""
        snapshot = self.snapshot
        return {
            "game_id": self.id,
            "phase": snapshot.phase.name,
            "turn_number": snapshot.turn_number,
            "current_player": snapshot.current_player,
            "players": [
                {
                    "index": p.index,
                    "name": p.name,
                    "hand": [_card_to_dict(c) for c in p.hand],
                    "hand_value": p.hand_value,
                    "max_hand_size": p.max_hand_size,
                    "jester_charges": p.jester_charges,
                    "jesters_used": p.jesters_used,
                }
                for p in snapshot.players
            ],
            "enemy": _enemy_to_dict(snapshot.enemy) if snapshot.enemy is not None else None,
            "tavern_count": snapshot.tavern_count,
            "tavern_discard_count": snapshot.tavern_discard_count,
            "castle_count": snapshot.castle_count,
            "castle_discard_count": snapshot.castle_discard_count,
            "in_play": [_card_to_dict(c) for c in snapshot.in_play],
            "required_discard": snapshot.required_discard,
            "can_yield": snapshot.can_yield,
            "is_game_over": snapshot.is_game_over,
            "victory_rank": snapshot.victory_rank.name if snapshot.victory_rank is not None else None,
            "defeat_reason": snapshot.defeat_reason,
            "log": [_event_to_dict(e) for e in snapshot.log_tail],
        }

    def actions_to_client(self, actions: list[Action]) -> list[dict]:
        """Convert actions to client-friendly format."""
        return [_action_to_dict(i, a) for i, a in enumerate(actions)]


def _card_to_dict(card: Card) -> dict:
    """Convert a Card to a dictionary."""
    return {
        "rank": card.rank.value,
        "rank_symbol": card.rank.symbol,
        "rank_name": card.rank.name,
        "suit": card.suit.value if card.suit is not None else None,
        "suit_symbol": card.suit.symbol if card.suit is not None else None,
        "suit_name": card.suit.name if card.suit is not None else None,
        "is_red": card.suit is not None and card.suit.is_red,
        "display": str(card),
        "value": card.value,
    }


def _enemy_to_dict(enemy: EnemyView) -> dict:
    return {
        "card": _card_to_dict(enemy.card),
        "name": enemy.name,
        "current_hp": enemy.current_hp,
        "max_hp": enemy.max_hp,
        "attack": enemy.base_attack,
        "shield": enemy.shield,
        "effective_attack": enemy.effective_attack,
        "immunity_cancelled": enemy.immunity_cancelled,
    }


def _event_to_dict(event: TurnEvent) -> dict:
    return {
        "kind": event.kind.name,
        "actor": event.actor,
        "cards": [str(c) for c in event.cards],
        "phases": [p.name for p in event.phases],
        "attack": event.attack,
        "damage": event.damage,
        "outcome": event.outcome.name if event.outcome is not None else None,
        "messages": list(event.messages),
    }


def _action_to_dict(index: int, action: Action) -> dict:
    """Convert an Action to a dictionary."""
    base = {
        "index": index,
        "type": action.action_type.name,
        "description": str(action),
    }

    match action:
        case PlayCards(indices=indices, next_player=next_player):
            base["indices"] = list(indices)
            if next_player is not None:
                base["next_player"] = next_player
        case DiscardCards(indices=indices):
            base["indices"] = list(indices)
        case UseJester() | YieldTurn():
            pass

    return base


class GameSessionManager:
    """Manages all active game sessions."""

    def __init__(self):
        self._sessions: dict[str, GameSession] = {}
        self._strategy_factory = StrategyFactory()

    def create_session(
        self,
        players: int = 1,
        seed: int | None = None,
        strategy_name: str | None = None,
        strategy_params: dict[str, Any] | None = None,
    ) -> GameSession:
        """Create a new game session.

        Raises:
            ValueError: Unknown strategy or unsupported player count.
        """
        session_id = str(uuid.uuid4())
        config = GameConfig.for_players(players, seed=seed)

        strategy = None
        if strategy_name:
            strategy = self._strategy_factory.create(strategy_name, strategy_params)

        session = GameSession(
            id=session_id,
            engine=TurnEngine(config),
            created_at=datetime.now(),
            seed=seed,
            strategy=strategy,
        )
        if strategy:
            strategy.on_game_start(session.snapshot)

        self._sessions[session_id] = session
        logger.info("Created game %s (%d players, seed=%s)", session_id, players, seed)
        return session

    def get_session(self, session_id: str) -> GameSession | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def delete_session(self, session_id: str) -> bool:
        """Delete a session."""
        if session_id in self._sessions:
            del self._sessions[session_id]
            return True
        return False

    def list_sessions(self) -> list[dict]:
        """List all active sessions."""
        summaries = []
        for s in self._sessions.values():
            snapshot = s.snapshot
            summaries.append(
                {
                    "id": s.id,
                    "created_at": s.created_at.isoformat(),
                    "players": len(snapshot.players),
                    "phase": snapshot.phase.name,
                    "turn_number": snapshot.turn_number,
                    "is_game_over": snapshot.is_game_over,
                    "enemies_remaining": snapshot.enemies_remaining,
                    "strategy": s.strategy.name if s.strategy else None,
                }
            )
        return summaries

    def run_ai_action(self, session: GameSession) -> TurnEvent | None:
        """Let the session's strategy take one action.

        Returns None if the game is over or the session has no strategy.
        """
        if session.strategy is None or session.engine.is_game_over:
            return None

        legal_actions = session.legal_actions
        if not legal_actions:
            return None

        snapshot = session.snapshot
        action = session.strategy.select_action(snapshot, legal_actions)
        logger.info("AI (%s) selected: %s", session.strategy.name, action)
        event = session.execute_action(action)
        session.strategy.on_action_taken(session.snapshot, action, event)
        if session.engine.is_game_over:
            session.strategy.on_game_end(session.snapshot)
        return event


class StrategyFactory:
    """Factory for creating strategy instances."""

    AVAILABLE_STRATEGIES = {
        "random": "Random player (baseline)",
        "greedy": "Hits as hard as possible, discards as little as possible",
    }

    def create(self, name: str, params: dict[str, Any] | None = None) -> Strategy:
        """Create a strategy instance."""
        params = params or {}
        name_lower = name.lower()

        match name_lower:
            case "random":
                from strategies.random_strategy import RandomStrategy
                return RandomStrategy(seed=params.get("seed"))

            case "greedy":
                from strategies.greedy import GreedyStrategy
                return GreedyStrategy()

            case _:
                raise ValueError(f"Unknown strategy: {name}")

    def list_strategies(self) -> dict[str, str]:
        """List available strategies with descriptions."""
        return self.AVAILABLE_STRATEGIES.copy()


# Global session manager instance
session_manager = GameSessionManager()
