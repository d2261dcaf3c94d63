"""Structured records of what each action did."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from regicide_engine.cards import Card, Suit


class Phase(IntEnum):
    """Turn engine states."""

    INPUT = auto()  # Step 1: play cards or yield
    RESOLUTION = auto()  # Step 2: suit powers
    VICTORY_CHECK = auto()  # Step 3: damage and defeat
    ENEMY_ATTACK = auto()  # Step 4: discard to survive
    VICTORY = auto()
    DEFEAT = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.VICTORY, Phase.DEFEAT)


class EventKind(IntEnum):
    GAME_STARTED = auto()
    PLAY = auto()
    JESTER_PLAYED = auto()
    YIELD = auto()
    DISCARD = auto()
    JESTER_POWER = auto()


class Zone(IntEnum):
    """Places a card can move between."""

    HAND = auto()
    IN_PLAY = auto()
    TAVERN = auto()
    TAVERN_DISCARD = auto()
    CASTLE = auto()
    CASTLE_DISCARD = auto()
    ENEMY = auto()


class Outcome(IntEnum):
    """What happened to the enemy at the victory check."""

    SURVIVED = auto()
    CAPTURED = auto()  # Exact damage: onto the Tavern
    DEFEATED = auto()  # Overkill: into the Castle discard


class VictoryRank(IntEnum):
    """Solo grading by Jester charges spent."""

    GOLD = 0
    SILVER = 1
    BRONZE = 2

    @classmethod
    def for_jesters_used(cls, used: int) -> VictoryRank:
        return cls(min(used, cls.BRONZE))


@dataclass(frozen=True, slots=True)
class CardMove:
    card: Card
    source: Zone
    destination: Zone
    player: int | None = None

    def __str__(self) -> str:
        return f"{self.card}: {self.source.name} -> {self.destination.name}"


@dataclass(frozen=True, slots=True)
class PowerResult:
    """Outcome of one suit power.

    ``amount`` is what the power actually did: cards healed, cards drawn,
    bonus damage from Clubs, or shield gained.
    """

    suit: Suit
    blocked: bool
    amount: int = 0

    def __str__(self) -> str:
        if self.blocked:
            return f"{self.suit.name.title()} blocked by immunity"
        return f"{self.suit.name.title()} +{self.amount}"


@dataclass(frozen=True, slots=True)
class TurnEvent:
    """Everything one action changed.

    Attributes:
        kind: Which entry point produced the event
        actor: Index of the acting player
        cards: Cards played, discarded, or refreshed
        phases: Phases visited, in order, ending with the new phase
        attack: Attack value of the play before Clubs
        damage: Damage dealt to the enemy
        powers: Suit powers triggered or blocked
        moves: Every card that changed location
        outcome: Enemy outcome for plays that reach the victory check
        enemy: The enemy card the action targeted
        required_discard: Attack value the actor must now cover
        retroactive_shield: Spades paid out by a Jester
        messages: Human-readable log lines
    """

    kind: EventKind
    actor: int | None = None
    cards: tuple[Card, ...] = ()
    phases: tuple[Phase, ...] = ()
    attack: int = 0
    damage: int = 0
    powers: tuple[PowerResult, ...] = ()
    moves: tuple[CardMove, ...] = ()
    outcome: Outcome | None = None
    enemy: Card | None = None
    required_discard: int = 0
    retroactive_shield: int = 0
    messages: tuple[str, ...] = ()

    @property
    def final_phase(self) -> Phase | None:
        return self.phases[-1] if self.phases else None

    def power(self, suit: Suit) -> PowerResult | None:
        return next((p for p in self.powers if p.suit == suit), None)

    def __str__(self) -> str:
        return "; ".join(self.messages) or self.kind.name


@dataclass(slots=True)
class EventRecorder:
    """Mutable builder the engine fills while resolving one action."""

    kind: EventKind
    actor: int | None = None
    cards: list[Card] = field(default_factory=list)
    phases: list[Phase] = field(default_factory=list)
    attack: int = 0
    damage: int = 0
    powers: list[PowerResult] = field(default_factory=list)
    moves: list[CardMove] = field(default_factory=list)
    outcome: Outcome | None = None
    enemy: Card | None = None
    required_discard: int = 0
    retroactive_shield: int = 0
    messages: list[str] = field(default_factory=list)

    def move(
        self, cards: list[Card], source: Zone, destination: Zone, player: int | None = None
    ) -> None:
        self.moves.extend(CardMove(c, source, destination, player) for c in cards)

    def note(self, message: str) -> None:
        self.messages.append(message)

    def build(self) -> TurnEvent:
        return TurnEvent(
            kind=self.kind,
            actor=self.actor,
            cards=tuple(self.cards),
            phases=tuple(self.phases),
            attack=self.attack,
            damage=self.damage,
            powers=tuple(self.powers),
            moves=tuple(self.moves),
            outcome=self.outcome,
            enemy=self.enemy,
            required_discard=self.required_discard,
            retroactive_shield=self.retroactive_shield,
            messages=tuple(self.messages),
        )
