"""Base strategy interface for Regicide players."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from regicide_engine.actions import Action
    from regicide_engine.events import TurnEvent
    from regicide_engine.state import GameSnapshot


class Strategy(ABC):
    """Abstract base class for player strategies.

    Regicide is cooperative, so one strategy usually drives every seat.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this strategy."""
        ...

    @abstractmethod
    def select_action(self, snapshot: GameSnapshot, legal_actions: list[Action]) -> Action:
        """Select an action from the list of legal actions.

        Args:
            snapshot: Current game snapshot.
            legal_actions: List of all legal actions for the acting player.

        Returns:
            The selected action.
        """
        ...

    def on_game_start(self, snapshot: GameSnapshot) -> None:
        """Called when a game starts.

        Override to initialize per-game state.
        """
        pass

    def on_game_end(self, snapshot: GameSnapshot) -> None:
        """Called when a game ends, in victory or defeat."""
        pass

    def on_action_taken(self, snapshot: GameSnapshot, action: Action, event: TurnEvent) -> None:
        """Called after every accepted action.

        Args:
            snapshot: Snapshot after the action.
            action: The action that was taken.
            event: What the engine recorded for it.
        """
        pass
