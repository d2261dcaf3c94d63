"""Game runner for Regicide simulations."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from regicide_engine.cards import CASTLE_SIZE
from regicide_engine.config import GameConfig
from regicide_engine.engine import TurnEngine
from regicide_engine.events import Phase

if TYPE_CHECKING:
    from regicide_engine.state import GameSnapshot
    from strategies.base import Strategy

logger = logging.getLogger(__name__)


@dataclass
class GameResult:
    """Result of a completed game."""

    game_id: str
    won: bool
    final_phase: str  # VICTORY, DEFEAT, or the phase a capped game stopped in
    victory_rank: str | None  # Solo only: GOLD, SILVER, BRONZE
    defeat_reason: str | None
    enemies_defeated: int
    turns: int
    player_count: int
    strategy: str
    seed: int | None
    duration_ms: float
    action_count: int


@dataclass
class ActionRecord:
    """Record of a single action."""

    turn: int
    player: int
    action: str
    messages: list[str] = field(default_factory=list)


@dataclass
class GameLog:
    """Complete log of a game."""

    game_id: str
    timestamp: str
    seed: int | None
    strategy: str
    actions: list[ActionRecord] = field(default_factory=list)
    result: GameResult | None = None


class GameRunner:
    """Runs Regicide games with one strategy driving every seat."""

    def __init__(
        self,
        strategy: Strategy,
        player_count: int = 1,
        max_turns: int = 1000,
        log_actions: bool = False,
    ):
        """Initialize the game runner.

        Args:
            strategy: Strategy for every player.
            player_count: Number of seats, 1-4.
            max_turns: Turns before the game is abandoned as a loss.
            log_actions: Whether to keep a per-action log.
        """
        self.strategy = strategy
        self.player_count = player_count
        self.max_turns = max_turns
        self.log_actions = log_actions

    def run_game(self, seed: int | None = None) -> tuple[GameResult, GameLog | None]:
        """Run a single game.

        Args:
            seed: Random seed for reproducibility.

        Returns:
            Tuple of (result, log). Log is None if log_actions is False.
        """
        start_time = time.perf_counter()
        game_id = str(uuid.uuid4())

        engine = TurnEngine(GameConfig.for_players(self.player_count, seed=seed))
        snapshot = engine.snapshot()
        self.strategy.on_game_start(snapshot)

        game_log = None
        if self.log_actions:
            game_log = GameLog(
                game_id=game_id,
                timestamp=datetime.now().isoformat(),
                seed=seed,
                strategy=self.strategy.name,
            )

        action_count = 0
        while not snapshot.is_game_over and snapshot.turn_number <= self.max_turns:
            legal_actions = engine.legal_actions()
            if not legal_actions:
                # Shouldn't happen: the engine declares defeat first
                logger.warning(
                    "No legal actions in %s on turn %d", snapshot.phase.name, snapshot.turn_number
                )
                break

            action = self.strategy.select_action(snapshot, legal_actions)
            event = engine.execute(action)
            action_count += 1

            if game_log:
                game_log.actions.append(
                    ActionRecord(
                        turn=snapshot.turn_number,
                        player=snapshot.current_player,
                        action=str(action),
                        messages=list(event.messages),
                    )
                )

            snapshot = engine.snapshot()
            self.strategy.on_action_taken(snapshot, action, event)

        duration_ms = (time.perf_counter() - start_time) * 1000
        result = GameResult(
            game_id=game_id,
            won=snapshot.phase == Phase.VICTORY,
            final_phase=snapshot.phase.name,
            victory_rank=snapshot.victory_rank.name if snapshot.victory_rank is not None else None,
            defeat_reason=snapshot.defeat_reason,
            enemies_defeated=enemies_defeated(snapshot),
            turns=snapshot.turn_number,
            player_count=self.player_count,
            strategy=self.strategy.name,
            seed=seed,
            duration_ms=duration_ms,
            action_count=action_count,
        )
        if not snapshot.is_game_over:
            logger.info("Game %s abandoned after %d turns", game_id, self.max_turns)

        if game_log:
            game_log.result = result

        self.strategy.on_game_end(snapshot)
        return result, game_log


def enemies_defeated(snapshot: GameSnapshot) -> int:
    """Enemies captured or defeated so far (all of them on victory)."""
    return CASTLE_SIZE - snapshot.enemies_remaining


def run_batch(
    strategy: Strategy,
    num_games: int,
    start_seed: int = 0,
    player_count: int = 1,
    log_actions: bool = False,
) -> list[GameResult]:
    """Run multiple games.

    Args:
        strategy: Strategy for every player.
        num_games: Number of games to run.
        start_seed: Starting seed (incremented for each game).
        player_count: Number of seats, 1-4.
        log_actions: Whether to log actions (slower).

    Returns:
        List of game results.
    """
    runner = GameRunner(strategy, player_count=player_count, log_actions=log_actions)
    results = []

    for i in range(num_games):
        result, _ = runner.run_game(seed=start_seed + i)
        results.append(result)

    return results
