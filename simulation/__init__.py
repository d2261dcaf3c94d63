"""Simulation running."""

from simulation.runner import (
    ActionRecord,
    GameLog,
    GameResult,
    GameRunner,
    enemies_defeated,
    run_batch,
)

__all__ = [
    "ActionRecord",
    "GameLog",
    "GameResult",
    "GameRunner",
    "enemies_defeated",
    "run_batch",
]
