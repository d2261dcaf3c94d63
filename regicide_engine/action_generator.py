"""Legal action generation for Regicide."""

from __future__ import annotations

from regicide_engine.actions import Action, DiscardCards, PlayCards, UseJester, YieldTurn
from regicide_engine.combos import covering_discards, legal_plays
from regicide_engine.events import Phase
from regicide_engine.state import GameSnapshot


def generate_legal_actions(snapshot: GameSnapshot) -> list[Action]:
    """Generate every action the engine would accept right now.

    Args:
        snapshot: Current game snapshot.

    Returns:
        List of legal actions for the acting player.
    """
    if snapshot.is_game_over:
        return []

    match snapshot.phase:
        case Phase.INPUT:
            return _generate_input_actions(snapshot)
        case Phase.ENEMY_ATTACK:
            return _generate_attack_actions(snapshot)

    return []


def _generate_input_actions(snapshot: GameSnapshot) -> list[Action]:
    actions: list[Action] = []
    hand = snapshot.hand
    seats = len(snapshot.players)

    for indices in legal_plays(hand):
        if len(indices) == 1 and hand[indices[0]].is_jester and seats > 1:
            # A Jester card chooses who acts next
            actions.extend(PlayCards(indices, next_player=seat) for seat in range(seats))
        else:
            actions.append(PlayCards(indices))

    if snapshot.can_yield:
        actions.append(YieldTurn())
    if snapshot.player.jester_charges > 0:
        actions.append(UseJester())
    return actions


def _generate_attack_actions(snapshot: GameSnapshot) -> list[Action]:
    actions: list[Action] = [
        DiscardCards(indices)
        for indices in covering_discards(snapshot.hand, snapshot.required_discard)
    ]
    if snapshot.player.jester_charges > 0:
        actions.append(UseJester())
    return actions
