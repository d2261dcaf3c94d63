"""Player hand and Jester charges."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from regicide_engine.cards import Card
from regicide_engine.errors import InvalidSelection


@dataclass(slots=True)
class Player:
    """A single player.

    Attributes:
        name: Display name
        max_hand_size: Hand limit; draws beyond it are not taken
        hand: Cards held, in the order the player sees them
        jester_charges: Solo Jester powers still available
        jesters_used: Solo Jester powers spent so far
    """

    name: str
    max_hand_size: int
    hand: list[Card] = field(default_factory=list)
    jester_charges: int = 0
    jesters_used: int = 0

    @property
    def room(self) -> int:
        return max(0, self.max_hand_size - len(self.hand))

    @property
    def is_hand_full(self) -> bool:
        return len(self.hand) >= self.max_hand_size

    @property
    def hand_value(self) -> int:
        return sum(card.value for card in self.hand)

    def can_survive(self, required: int) -> bool:
        """Whether discarding the whole hand would cover ``required``."""
        return self.hand_value >= required

    def receive(self, cards: Iterable[Card]) -> None:
        self.hand.extend(cards)

    def cards_at(self, indices: Sequence[int]) -> list[Card]:
        """Look up hand cards without removing them."""
        if len(set(indices)) != len(indices):
            raise InvalidSelection("A card can only be selected once")
        for i in indices:
            if not 0 <= i < len(self.hand):
                raise InvalidSelection(f"No card at position {i}")
        return [self.hand[i] for i in indices]

    def take(self, indices: Sequence[int]) -> list[Card]:
        """Remove and return the cards at ``indices`` (in the given order)."""
        cards = self.cards_at(indices)
        for i in sorted(indices, reverse=True):
            del self.hand[i]
        return cards

    def take_all(self) -> list[Card]:
        cards = list(self.hand)
        self.hand.clear()
        return cards
