"""Random strategy for baseline testing."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from regicide_engine.actions import ActionType
from strategies.base import Strategy

if TYPE_CHECKING:
    from regicide_engine.actions import Action
    from regicide_engine.state import GameSnapshot


class RandomStrategy(Strategy):
    """Strategy that selects actions uniformly at random.

    Solo Jester charges are only spent when nothing else is legal, since a
    charge changes the victory rank. Useful as a baseline and for smoke testing.
    """

    def __init__(self, seed: int | None = None):
        """Initialize the random strategy.

        Args:
            seed: Optional random seed for reproducibility.
        """
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def name(self) -> str:
        return "Random"

    def select_action(self, snapshot: GameSnapshot, legal_actions: list[Action]) -> Action:
        """Select a random legal action, holding Jester charges in reserve."""
        if not legal_actions:
            raise ValueError("No legal actions available")
        candidates = [a for a in legal_actions if a.action_type != ActionType.USE_JESTER]
        return self._rng.choice(candidates or legal_actions)

    def reset_seed(self, seed: int | None = None) -> None:
        """Reset the random number generator with a new seed."""
        self._seed = seed
        self._rng = random.Random(seed)
