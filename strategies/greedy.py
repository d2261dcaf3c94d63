"""Greedy strategy: hit as hard as possible, pay as little as possible.

Priorities:
1. Capture the enemy with exact damage (its card joins the Tavern)
2. Any play that defeats the enemy, using the fewest points
3. Otherwise the play with the highest expected damage
4. Discard the cheapest set of cards that covers the attack
5. With nothing to play, refresh with a Jester charge before yielding
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from regicide_engine.actions import ActionType, DiscardCards, PlayCards
from regicide_engine.cards import Suit
from regicide_engine.combos import attack_value
from strategies.base import Strategy

if TYPE_CHECKING:
    from regicide_engine.actions import Action
    from regicide_engine.state import EnemyView, GameSnapshot


def expected_damage(cards, enemy: EnemyView) -> int:
    """Damage a play would deal, counting Clubs unless the enemy blocks them."""
    attack = attack_value(cards)
    clubs = any(card.suit is Suit.CLUBS for card in cards)
    blocked = enemy.suit is Suit.CLUBS and not enemy.immunity_cancelled
    return attack * 2 if clubs and not blocked else attack


class GreedyStrategy(Strategy):
    """Deterministic baseline that always takes the locally best action."""

    @property
    def name(self) -> str:
        return "Greedy"

    def select_action(self, snapshot: GameSnapshot, legal_actions: list[Action]) -> Action:
        if not legal_actions:
            raise ValueError("No legal actions available")

        plays = [a for a in legal_actions if isinstance(a, PlayCards)]
        if plays and snapshot.enemy is not None:
            return max(plays, key=lambda play: self._score_play(snapshot, play))

        discards = [a for a in legal_actions if isinstance(a, DiscardCards)]
        if discards:
            return min(discards, key=lambda d: self._discard_cost(snapshot, d))

        for action_type in (ActionType.USE_JESTER, ActionType.YIELD):
            for action in legal_actions:
                if action.action_type == action_type:
                    return action
        return legal_actions[0]

    def _score_play(self, snapshot: GameSnapshot, play: PlayCards) -> tuple[int, int, int]:
        enemy = snapshot.enemy
        cards = [snapshot.hand[i] for i in play.indices]
        if len(cards) == 1 and cards[0].is_jester:
            # Worth it only against an enemy whose immunity still matters
            useful = not enemy.immunity_cancelled
            return (0, 1 if useful else -1, 0)

        damage = expected_damage(cards, enemy)
        spent = attack_value(cards)
        if damage == enemy.current_hp:
            return (3, -spent, 0)
        if damage > enemy.current_hp:
            return (2, -spent, 0)
        return (1, damage, -spent)

    @staticmethod
    def _discard_cost(snapshot: GameSnapshot, discard: DiscardCards) -> tuple[int, int]:
        value = sum(snapshot.hand[i].value for i in discard.indices)
        return (value, len(discard.indices))
