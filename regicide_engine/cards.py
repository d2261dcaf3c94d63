"""Card, Suit, and Rank models for Regicide."""

from __future__ import annotations

import random
from enum import IntEnum
from functools import total_ordering
from typing import ClassVar


class Suit(IntEnum):
    """Card suits, ordered the way their powers resolve."""

    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        return {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)


class Rank(IntEnum):
    """Card ranks. Jacks, Queens and Kings start out as enemies."""

    JESTER = 0
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13

    def __str__(self) -> str:
        return self.symbol

    @property
    def symbol(self) -> str:
        if self is Rank.JESTER:
            return "*"
        if self is Rank.ACE:
            return "A"
        if self.value <= 10:
            return str(self.value)
        return self.name[0]

    @property
    def card_value(self) -> int:
        """Attack/discard value of a card of this rank held in hand."""
        return _RANK_VALUES[self]


_RANK_VALUES: dict[Rank, int] = {
    Rank.JESTER: 0,
    Rank.ACE: 1,
    Rank.TWO: 2,
    Rank.THREE: 3,
    Rank.FOUR: 4,
    Rank.FIVE: 5,
    Rank.SIX: 6,
    Rank.SEVEN: 7,
    Rank.EIGHT: 8,
    Rank.NINE: 9,
    Rank.TEN: 10,
    Rank.JACK: 10,
    Rank.QUEEN: 15,
    Rank.KING: 20,
}

ROYAL_RANKS = (Rank.JACK, Rank.QUEEN, Rank.KING)
CASTLE_SIZE = len(ROYAL_RANKS) * len(Suit)


@total_ordering
class Card:
    """A playing card.

    Cards are immutable and interned: ``Card(Rank.FIVE, Suit.CLUBS)`` always
    returns the same instance. The Jester has no suit.
    """

    __slots__ = ("_rank", "_suit")

    _instances: ClassVar[dict[tuple[Rank, Suit | None], Card]] = {}

    def __new__(cls, rank: Rank, suit: Suit | None = None) -> Card:
        rank = Rank(rank)
        if rank is Rank.JESTER:
            suit = None
        elif suit is None:
            raise ValueError(f"{rank.name} requires a suit")
        else:
            suit = Suit(suit)
        key = (rank, suit)
        if key not in cls._instances:
            instance = object.__new__(cls)
            instance._rank = rank
            instance._suit = suit
            cls._instances[key] = instance
        return cls._instances[key]

    @classmethod
    def jester(cls) -> Card:
        return cls(Rank.JESTER)

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit | None:
        return self._suit

    @property
    def value(self) -> int:
        """Attack value when played, discard value when suffering damage."""
        return self._rank.card_value

    @property
    def is_jester(self) -> bool:
        return self._rank is Rank.JESTER

    @property
    def is_companion(self) -> bool:
        """Aces are Animal Companions and may pair with one other card."""
        return self._rank is Rank.ACE

    @property
    def is_royal(self) -> bool:
        return self._rank in ROYAL_RANKS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._rank == other._rank and self._suit == other._suit

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        if self._rank != other._rank:
            return self._rank < other._rank
        return _suit_key(self._suit) < _suit_key(other._suit)

    def __hash__(self) -> int:
        return hash((self._rank, self._suit))

    def __reduce__(self) -> tuple:
        return (Card, (self._rank, self._suit))

    def __repr__(self) -> str:
        if self._suit is None:
            return f"Card({self._rank.name})"
        return f"Card({self._rank.name}, {self._suit.name})"

    def __str__(self) -> str:
        if self._suit is None:
            return "Jester"
        return f"{self._rank.symbol}{self._suit.symbol}"


def _suit_key(suit: Suit | None) -> int:
    return -1 if suit is None else int(suit)


def create_tavern_cards(jesters: int = 0) -> list[Card]:
    """Ace through Ten of every suit, plus the requested number of Jesters."""
    cards = [Card(Rank(value), suit) for suit in Suit for value in range(1, 11)]
    cards.extend(Card.jester() for _ in range(jesters))
    return cards


def create_castle_cards(rng: random.Random) -> list[Card]:
    """Build the layered Castle, top card first.

    Each royal layer is shuffled on its own, then Jacks are stacked over
    Queens over Kings so the Jacks are faced first.
    """
    castle: list[Card] = []
    for rank in ROYAL_RANKS:
        layer = [Card(rank, suit) for suit in Suit]
        rng.shuffle(layer)
        castle.extend(layer)
    return castle
