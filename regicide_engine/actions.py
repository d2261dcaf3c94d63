"""Action records accepted by ``TurnEngine.execute``."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto


class ActionType(IntEnum):
    PLAY = auto()  # Step 1: play cards (including a Jester card)
    DISCARD = auto()  # Step 4: discard to survive the attack
    USE_JESTER = auto()  # Solo Jester power: refresh the hand
    YIELD = auto()  # Step 1: skip straight to the enemy attack


@dataclass(frozen=True, slots=True)
class Action(ABC):
    """Base class for all actions."""

    @property
    @abstractmethod
    def action_type(self) -> ActionType:
        ...

    @abstractmethod
    def __str__(self) -> str:
        ...


@dataclass(frozen=True, slots=True)
class PlayCards(Action):
    """Play the hand cards at ``indices``.

    ``next_player`` only matters for a Jester card with more than one player.
    """

    indices: tuple[int, ...]
    next_player: int | None = None

    @property
    def action_type(self) -> ActionType:
        return ActionType.PLAY

    def __str__(self) -> str:
        positions = ", ".join(str(i + 1) for i in self.indices)
        if self.next_player is not None:
            return f"Play cards [{positions}], player {self.next_player + 1} goes next"
        return f"Play cards [{positions}]"


@dataclass(frozen=True, slots=True)
class DiscardCards(Action):
    indices: tuple[int, ...]

    @property
    def action_type(self) -> ActionType:
        return ActionType.DISCARD

    def __str__(self) -> str:
        positions = ", ".join(str(i + 1) for i in self.indices)
        return f"Discard cards [{positions}]"


@dataclass(frozen=True, slots=True)
class UseJester(Action):
    @property
    def action_type(self) -> ActionType:
        return ActionType.USE_JESTER

    def __str__(self) -> str:
        return "Use Jester power"


@dataclass(frozen=True, slots=True)
class YieldTurn(Action):
    @property
    def action_type(self) -> ActionType:
        return ActionType.YIELD

    def __str__(self) -> str:
        return "Yield"
