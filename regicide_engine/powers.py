"""Suit powers.

Powers resolve in a fixed order regardless of the order cards were
played: Hearts, Diamonds, Clubs, Spades. Hearts goes before Diamonds so
cards healed back into the Tavern can be drawn the same turn.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from regicide_engine.cards import Suit
from regicide_engine.events import EventRecorder, PowerResult, Zone
from regicide_engine.state import TurnState

logger = logging.getLogger(__name__)

POWER_ORDER: tuple[Suit, ...] = (Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS, Suit.SPADES)

CLUBS_MULTIPLIER = 2


def _heal(state: TurnState, amount: int, recorder: EventRecorder) -> int:
    """Hearts: shuffle the discard and move ``amount`` cards under the Tavern."""
    discard = state.tavern_discard
    count = min(amount, len(discard))
    if count == 0:
        return 0
    state.rng.shuffle(discard)
    healed = discard[:count]
    del discard[:count]
    state.tavern.push_bottom(healed)
    recorder.move(healed, Zone.TAVERN_DISCARD, Zone.TAVERN)
    recorder.note(f"Healed {count} cards from discard to tavern deck")
    return count


def _draw(state: TurnState, amount: int, recorder: EventRecorder) -> int:
    """Diamonds: deal ``amount`` cards round the table from the acting player.

    Full hands are skipped; once every hand is full the rest is not taken.
    """
    seats = len(state.players)
    drawn = 0
    seat = state.current_player
    passes_without_room = 0
    while drawn < amount and passes_without_room < seats:
        player = state.players[seat]
        if player.is_hand_full:
            passes_without_room += 1
        else:
            passes_without_room = 0
            if state.tavern.is_empty and not state.tavern.can_recover:
                break
            cards = state.tavern.draw(1)
            player.receive(cards)
            recorder.move(cards, Zone.TAVERN, Zone.HAND, player=seat)
            drawn += 1
        seat = (seat + 1) % seats
    if drawn:
        recorder.note(f"Drew {drawn} cards")
    return drawn


def _double(state: TurnState, amount: int, recorder: EventRecorder) -> int:
    """Clubs: the bonus damage. Applied at the damage step, never stored."""
    recorder.note("Clubs active - double damage!")
    return amount * (CLUBS_MULTIPLIER - 1)


def _shield(state: TurnState, amount: int, recorder: EventRecorder) -> int:
    """Spades: cumulative shield against the current enemy."""
    state.enemy.add_shield(amount)
    recorder.note(f"Shield increased by {amount} (Total: {state.enemy.shield})")
    return amount


SUIT_POWERS: dict[Suit, Callable[[TurnState, int, EventRecorder], int]] = {
    Suit.HEARTS: _heal,
    Suit.DIAMONDS: _draw,
    Suit.CLUBS: _double,
    Suit.SPADES: _shield,
}


def resolve_powers(
    state: TurnState, suits: Iterable[Suit], attack: int, recorder: EventRecorder
) -> list[PowerResult]:
    """Apply every active suit power against ``state.enemy`` in ``POWER_ORDER``.

    A power of the enemy's own suit is blocked unless its immunity was
    cancelled. Blocked Spades are remembered on the enemy so a later
    Jester can pay them out; blocked Clubs are only noted.
    """
    enemy = state.enemy
    active = set(suits)
    results: list[PowerResult] = []
    for suit in POWER_ORDER:
        if suit not in active:
            continue
        if enemy.is_immune_to(suit):
            enemy.record_blocked(suit, attack)
            recorder.note(f"{suit.name.title()} power blocked by immunity")
            logger.debug("%s blocked by %s", suit.name, enemy.name)
            results.append(PowerResult(suit, blocked=True))
            continue
        amount = SUIT_POWERS[suit](state, attack, recorder)
        logger.debug("%s power resolved for %d", suit.name, amount)
        results.append(PowerResult(suit, blocked=False, amount=amount))
    recorder.powers.extend(results)
    return results


def damage_multiplier(results: Iterable[PowerResult]) -> int:
    """Derived fresh from this resolution's results only."""
    for result in results:
        if result.suit is Suit.CLUBS and not result.blocked:
            return CLUBS_MULTIPLIER
    return 1
