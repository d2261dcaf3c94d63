"""Regicide card game engine."""

from regicide_engine.cards import Card, Rank, Suit
from regicide_engine.config import GameConfig
from regicide_engine.engine import Selection, TurnEngine
from regicide_engine.errors import (
    CannotYield,
    EmptyDeck,
    IllegalDiscard,
    IllegalPlay,
    InvalidSelection,
    NoJesterCharge,
    RegicideError,
)
from regicide_engine.events import EventKind, Outcome, Phase, TurnEvent, VictoryRank
from regicide_engine.actions import Action, DiscardCards, PlayCards, UseJester, YieldTurn
from regicide_engine.state import GameSnapshot

__all__ = [
    "Card",
    "Rank",
    "Suit",
    "GameConfig",
    "TurnEngine",
    "Selection",
    "GameSnapshot",
    "Phase",
    "EventKind",
    "Outcome",
    "TurnEvent",
    "VictoryRank",
    "Action",
    "PlayCards",
    "DiscardCards",
    "UseJester",
    "YieldTurn",
    "RegicideError",
    "IllegalPlay",
    "IllegalDiscard",
    "NoJesterCharge",
    "CannotYield",
    "EmptyDeck",
    "InvalidSelection",
]
