"""Draw piles for the Tavern and the Castle."""

from __future__ import annotations

import random
from typing import Iterable, Iterator

from regicide_engine.cards import Card, create_castle_cards, create_tavern_cards
from regicide_engine.errors import EmptyDeck


class Deck:
    """An ordered pile of cards. ``cards[0]`` is the top.

    A deck built with a ``discard_pile`` folds that pile back in, shuffled,
    whenever a draw finds the deck empty. The Castle is built without one,
    so defeated enemies never return.
    """

    def __init__(
        self,
        cards: Iterable[Card] = (),
        rng: random.Random | None = None,
        discard_pile: list[Card] | None = None,
    ):
        self.cards: list[Card] = list(cards)
        self.rng = rng or random.Random()
        self.discard_pile = discard_pile

    @classmethod
    def tavern(cls, rng: random.Random, jesters: int = 0) -> Deck:
        """A freshly shuffled Tavern with its own discard pile."""
        deck = cls(create_tavern_cards(jesters), rng, discard_pile=[])
        deck.shuffle()
        return deck

    @classmethod
    def castle(cls, rng: random.Random) -> Deck:
        return cls(create_castle_cards(rng), rng)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __repr__(self) -> str:
        discard = "-" if self.discard_pile is None else len(self.discard_pile)
        return f"Deck(cards={len(self.cards)}, discard={discard})"

    @property
    def is_empty(self) -> bool:
        return not self.cards

    @property
    def can_recover(self) -> bool:
        return bool(self.discard_pile)

    def shuffle(self) -> None:
        self.rng.shuffle(self.cards)

    def recycle_discard(self) -> int:
        """Shuffle the paired discard pile into the bottom of the deck.

        Returns:
            Number of cards moved.
        """
        if not self.discard_pile:
            return 0
        recovered = list(self.discard_pile)
        self.discard_pile.clear()
        self.rng.shuffle(recovered)
        self.cards.extend(recovered)
        return len(recovered)

    def draw(self, n: int = 1) -> list[Card]:
        """Remove and return up to ``n`` cards from the top.

        Raises:
            EmptyDeck: If ``n > 0`` and neither the deck nor its discard
                pile has anything to give.
        """
        drawn: list[Card] = []
        while len(drawn) < n:
            if self.is_empty and not self.recycle_discard():
                break
            drawn.append(self.cards.pop(0))
        if n > 0 and not drawn:
            raise EmptyDeck("Deck and discard pile are both empty")
        return drawn

    def draw_one(self) -> Card:
        return self.draw(1)[0]

    def push_top(self, cards: Iterable[Card]) -> None:
        """Place cards on top; the first card given ends up topmost."""
        self.cards[:0] = list(cards)

    def push_bottom(self, cards: Iterable[Card]) -> None:
        self.cards.extend(cards)
