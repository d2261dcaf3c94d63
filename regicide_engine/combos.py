"""Play legality: singles, Jesters, same-rank combos and Animal Companions."""

from __future__ import annotations

from enum import IntEnum, auto
from itertools import combinations
from typing import Sequence

from regicide_engine.cards import Card, Suit
from regicide_engine.errors import IllegalPlay

MAX_COMBO_CARDS = 4
MAX_COMBO_TOTAL = 10


class PlayKind(IntEnum):
    SINGLE = auto()  # One non-Jester card
    JESTER = auto()  # A Jester on its own
    COMBO = auto()  # 2-4 cards of one rank totalling 10 or less
    COMPANION = auto()  # An Ace paired with one other card


def classify_play(cards: Sequence[Card]) -> PlayKind:
    """Classify a proposed play.

    Raises:
        IllegalPlay: If the cards do not form a legal play.
    """
    if not cards:
        raise IllegalPlay("Must select at least one card")

    if any(card.is_jester for card in cards):
        if len(cards) > 1:
            raise IllegalPlay("Jester must be played alone")
        return PlayKind.JESTER

    if len(cards) == 1:
        return PlayKind.SINGLE

    if len({card.rank for card in cards}) == 1:
        if len(cards) > MAX_COMBO_CARDS:
            raise IllegalPlay(f"Cannot play more than {MAX_COMBO_CARDS} cards at once")
        total = attack_value(cards)
        if total > MAX_COMBO_TOTAL:
            raise IllegalPlay(f"Combo total must be {MAX_COMBO_TOTAL} or less (got {total})")
        return PlayKind.COMBO

    aces = sum(1 for card in cards if card.is_companion)
    if aces == 1 and len(cards) == 2:
        return PlayKind.COMPANION
    if aces:
        raise IllegalPlay("An Ace can only be paired with one other card")
    raise IllegalPlay("Combo cards must all have the same rank (or use Ace + 1 card)")


def is_legal_play(cards: Sequence[Card]) -> bool:
    try:
        classify_play(cards)
    except IllegalPlay:
        return False
    return True


def attack_value(cards: Sequence[Card]) -> int:
    return sum(card.value for card in cards)


def active_suits(cards: Sequence[Card]) -> frozenset[Suit]:
    """Suits whose powers the play triggers. Jesters carry none."""
    return frozenset(card.suit for card in cards if card.suit is not None)


def legal_plays(hand: Sequence[Card]) -> list[tuple[int, ...]]:
    """Index tuples of every legal play from ``hand``."""
    plays: list[tuple[int, ...]] = []
    for size in range(1, min(MAX_COMBO_CARDS, len(hand)) + 1):
        for indices in combinations(range(len(hand)), size):
            if is_legal_play([hand[i] for i in indices]):
                plays.append(indices)
    return plays


def covering_discards(hand: Sequence[Card], required: int) -> list[tuple[int, ...]]:
    """Index tuples of every discard worth at least ``required``."""
    if required <= 0:
        return [()]
    discards: list[tuple[int, ...]] = []
    for size in range(1, len(hand) + 1):
        for indices in combinations(range(len(hand)), size):
            if sum(hand[i].value for i in indices) >= required:
                discards.append(indices)
    return discards
