"""The turn engine: validates actions and drives the four-step turn.

Input -> Resolution -> Victory check -> Enemy attack -> next Input.
A Jester card goes from the victory check straight to the next Input, and
defeating an enemy hands a fresh Input to the same player.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable

from regicide_engine.action_generator import generate_legal_actions
from regicide_engine.actions import Action, DiscardCards, PlayCards, UseJester, YieldTurn
from regicide_engine.cards import CASTLE_SIZE, Card
from regicide_engine.combos import PlayKind, active_suits, attack_value, classify_play
from regicide_engine.config import GameConfig
from regicide_engine.enemy import Enemy
from regicide_engine.errors import (
    CannotYield,
    EmptyDeck,
    IllegalDiscard,
    IllegalPlay,
    InvalidSelection,
    NoJesterCharge,
    RegicideError,
)
from regicide_engine.events import EventKind, EventRecorder, Outcome, Phase, TurnEvent, Zone
from regicide_engine.powers import damage_multiplier, resolve_powers
from regicide_engine.state import GameSnapshot, TurnState, create_initial_state

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Selection:
    """Hand positions proposed for a play or discard, with the cards seen there."""

    indices: tuple[int, ...]
    cards: tuple[Card, ...]

    @property
    def value(self) -> int:
        return sum(card.value for card in self.cards)

    def __str__(self) -> str:
        return ", ".join(str(card) for card in self.cards) or "(nothing)"


class TurnEngine:
    """Owns the single ``TurnState`` and exposes the only ways to change it.

    Every entry point either returns the ``TurnEvent`` it appended to the
    log or raises a ``RegicideError`` subclass without touching state.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        seed: int | None = None,
        state: TurnState | None = None,
    ):
        if state is None:
            config = config or GameConfig()
            if seed is not None:
                config = replace(config, seed=seed)
            state = create_initial_state(config)
        self._state = state
        if state.enemy is None and not state.log and not state.is_game_over:
            self._start()

    @classmethod
    def for_players(cls, player_count: int = 1, seed: int | None = None) -> TurnEngine:
        return cls(GameConfig.for_players(player_count, seed=seed))

    # -- queries ----------------------------------------------------------

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    @property
    def config(self) -> GameConfig:
        return self._state.config

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot.of(self._state)

    def history(self) -> tuple[TurnEvent, ...]:
        return tuple(self._state.log)

    def legal_actions(self) -> list[Action]:
        return generate_legal_actions(self.snapshot())

    # -- selection (no state-machine effect) ------------------------------

    def propose_selection(self, indices: Iterable[int]) -> Selection:
        """Resolve hand positions into a ``Selection`` without changing anything.

        Raises:
            InvalidSelection: If an index is repeated or not in the hand.
        """
        indices = tuple(indices)
        cards = self._state.player.cards_at(indices)
        return Selection(indices, tuple(cards))

    @property
    def selection(self) -> Selection:
        return self.propose_selection(self._state.selected)

    def toggle_selection(self, index: int) -> Selection:
        state = self._state
        if state.is_game_over:
            raise InvalidSelection("Game is already over")
        if not 0 <= index < len(state.player.hand):
            raise InvalidSelection(f"No card at position {index}")
        if index in state.selected:
            state.selected.remove(index)
        else:
            state.selected.append(index)
        return self.selection

    def clear_selection(self) -> None:
        self._state.selected.clear()

    # -- actions ----------------------------------------------------------

    def execute(self, action: Action) -> TurnEvent:
        """Dispatch an action record to its entry point."""
        match action:
            case PlayCards():
                return self.commit_play(
                    self.propose_selection(action.indices), next_player=action.next_player
                )
            case DiscardCards():
                return self.commit_discard(self.propose_selection(action.indices))
            case UseJester():
                return self.use_jester()
            case YieldTurn():
                return self.yield_turn()
            case _:
                raise RegicideError(f"Unknown action type: {type(action)}")

    def commit_play(
        self, selection: Selection | None = None, next_player: int | None = None
    ) -> TurnEvent:
        """Step 1: play cards, then resolve powers, damage and the enemy's reply.

        Args:
            selection: Cards to play; the toggled selection if None.
            next_player: Who acts after a Jester card (multi-player only).

        Raises:
            IllegalPlay: Wrong phase, stale selection, or an illegal combination.
        """
        state = self._state
        self._require_phase(Phase.INPUT, IllegalPlay, "play cards")
        selection = self._checked(selection)
        kind = classify_play(selection.cards)
        if kind is PlayKind.JESTER:
            next_player = self._jester_target(next_player)

        actor = state.current_player
        recorder = EventRecorder(EventKind.PLAY, actor=actor, enemy=state.enemy.card)
        cards = state.player.take(selection.indices)
        state.in_play.extend(cards)
        state.selected.clear()
        state.last_action_was_yield = False
        recorder.cards.extend(cards)
        recorder.move(cards, Zone.HAND, Zone.IN_PLAY, player=actor)
        self._enter(Phase.RESOLUTION, recorder)

        if kind is PlayKind.JESTER:
            self._resolve_jester(next_player, recorder)
        else:
            self._resolve_attack(cards, recorder)
        return self._record(recorder)

    def commit_discard(self, selection: Selection | None = None) -> TurnEvent:
        """Step 4: discard cards worth at least the enemy's attack.

        Raises:
            IllegalDiscard: Wrong phase, stale selection, or not enough value.
        """
        state = self._state
        self._require_phase(Phase.ENEMY_ATTACK, IllegalDiscard, "discard")
        selection = self._checked(selection)
        required = state.required_discard
        if selection.value < required:
            raise IllegalDiscard(f"Not enough value (need {required}, have {selection.value})")

        actor = state.current_player
        recorder = EventRecorder(
            EventKind.DISCARD, actor=actor, enemy=state.enemy.card, required_discard=required
        )
        cards = state.player.take(selection.indices)
        state.tavern_discard.extend(cards)
        recorder.cards.extend(cards)
        recorder.move(cards, Zone.HAND, Zone.TAVERN_DISCARD, player=actor)
        recorder.note(f"Discarded: {selection} (Value: {selection.value})")
        self._begin_input(self._next_seat(), recorder)
        return self._record(recorder)

    def use_jester(self) -> TurnEvent:
        """Solo Jester power: discard the whole hand and draw back up to the limit.

        Allowed in Input and in the enemy attack. It is not a Diamonds draw,
        so enemy immunity has no bearing on it.

        Raises:
            NoJesterCharge: No charge left, or not an Input/attack phase.
        """
        state = self._state
        if state.is_game_over:
            raise NoJesterCharge("Game is already over")
        if state.phase not in (Phase.INPUT, Phase.ENEMY_ATTACK):
            raise NoJesterCharge(f"Cannot use the Jester power during {state.phase.name}")
        player = state.player
        if player.jester_charges <= 0:
            raise NoJesterCharge("No Jesters remaining")

        actor = state.current_player
        recorder = EventRecorder(EventKind.JESTER_POWER, actor=actor, enemy=state.enemy.card)
        discarded = player.take_all()
        state.tavern_discard.extend(discarded)
        recorder.cards.extend(discarded)
        recorder.move(discarded, Zone.HAND, Zone.TAVERN_DISCARD, player=actor)
        try:
            drawn = state.tavern.draw(player.room)
        except EmptyDeck:
            drawn = []
        player.receive(drawn)
        recorder.move(drawn, Zone.TAVERN, Zone.HAND, player=actor)
        player.jester_charges -= 1
        player.jesters_used += 1
        state.selected.clear()
        recorder.phases.append(state.phase)
        recorder.note(
            f"Used Jester power! Discarded {len(discarded)} cards and drew {len(drawn)} "
            f"({player.jester_charges} Jesters remaining)"
        )
        logger.info("%s used a Jester charge (%d left)", player.name, player.jester_charges)

        if state.phase == Phase.ENEMY_ATTACK:
            recorder.required_discard = state.required_discard
            self._check_survival(recorder)
        return self._record(recorder)

    def yield_turn(self) -> TurnEvent:
        """Skip playing and go straight to the enemy attack.

        Raises:
            CannotYield: Not in Input, or the previous actor also yielded.
        """
        state = self._state
        if state.is_game_over:
            raise CannotYield("Game is already over")
        if state.phase != Phase.INPUT:
            raise CannotYield(f"Cannot yield during {state.phase.name}")
        if not state.can_yield:
            raise CannotYield("Cannot yield: the previous player also yielded")

        recorder = EventRecorder(
            EventKind.YIELD, actor=state.current_player, enemy=state.enemy.card
        )
        state.last_action_was_yield = True
        state.selected.clear()
        recorder.note("Yielded turn")
        self._enter_enemy_attack(recorder)
        return self._record(recorder)

    # -- resolution -------------------------------------------------------

    def _resolve_jester(self, next_player: int, recorder: EventRecorder) -> None:
        enemy = self._state.enemy
        recorder.kind = EventKind.JESTER_PLAYED
        retroactive = enemy.cancel_immunity()
        recorder.retroactive_shield = retroactive
        recorder.note("Played Jester - Enemy immunity cancelled!")
        if retroactive:
            recorder.note(
                f"Spades now active! Shield increased by {retroactive} (Total: {enemy.shield})"
            )
        if enemy.pending_clubs_seen:
            recorder.note("Clubs played before the Jester do not count double retroactively")
        logger.debug("Immunity of %s cancelled, retroactive shield %d", enemy.name, retroactive)
        self._enter(Phase.VICTORY_CHECK, recorder)
        self._begin_input(next_player, recorder)

    def _resolve_attack(self, cards: list[Card], recorder: EventRecorder) -> None:
        state = self._state
        enemy = state.enemy
        attack = attack_value(cards)
        recorder.attack = attack
        recorder.note(f"Played: {', '.join(str(c) for c in cards)} (Attack: {attack})")

        results = resolve_powers(state, active_suits(cards), attack, recorder)
        damage = attack * damage_multiplier(results)

        self._enter(Phase.VICTORY_CHECK, recorder)
        recorder.damage = damage
        remainder = enemy.take_damage(damage)
        recorder.note(f"Dealt {damage} damage ({enemy.current_hp}/{enemy.max_hp} HP left)")

        if not enemy.is_defeated:
            recorder.outcome = Outcome.SURVIVED
            self._enter_enemy_attack(recorder)
            return
        self._remove_enemy(exact=remainder == 0, recorder=recorder)
        if not state.is_game_over:
            self._begin_input(state.current_player, recorder)

    def _remove_enemy(self, exact: bool, recorder: EventRecorder) -> None:
        state = self._state
        enemy = state.enemy

        played = list(state.in_play)
        state.in_play.clear()
        state.tavern_discard.extend(played)
        recorder.move(played, Zone.IN_PLAY, Zone.TAVERN_DISCARD)

        if exact:
            state.tavern.push_top([enemy.card])
            state.captured.append(enemy.card)
            recorder.move([enemy.card], Zone.ENEMY, Zone.TAVERN)
            recorder.outcome = Outcome.CAPTURED
            recorder.note(f"Exact damage! {enemy.name} captured!")
            logger.info("%s captured onto the tavern deck", enemy.name)
        else:
            state.castle_discard.append(enemy.card)
            recorder.move([enemy.card], Zone.ENEMY, Zone.CASTLE_DISCARD)
            recorder.outcome = Outcome.DEFEATED
            recorder.note(f"{enemy.name} defeated!")
            logger.info("%s defeated", enemy.name)

        state.enemy = None
        self._reveal_next_enemy(recorder)

    def _reveal_next_enemy(self, recorder: EventRecorder) -> None:
        state = self._state
        if state.castle.is_empty:
            self._enter(Phase.VICTORY, recorder)
            rank = state.victory_rank
            suffix = f" ({rank.name.title()} victory)" if rank is not None else ""
            recorder.note(f"Victory! All enemies have been defeated!{suffix}")
            logger.info("Victory after %d turns%s", state.turn_number, suffix)
            return
        card = state.castle.draw_one()
        state.enemy = Enemy.from_card(card)
        recorder.move([card], Zone.CASTLE, Zone.ENEMY)
        recorder.note(f"A {state.enemy.name} appears!")
        logger.info("Revealed %s (%d enemies left in castle)", state.enemy.name, len(state.castle))

    def _enter_enemy_attack(self, recorder: EventRecorder) -> None:
        enemy = self._state.enemy
        self._enter(Phase.ENEMY_ATTACK, recorder)
        required = enemy.effective_attack
        recorder.required_discard = required
        if required == 0:
            recorder.note("Enemy attack fully blocked by shields!")
            self._begin_input(self._next_seat(), recorder)
            return
        recorder.note(f"Enemy attacks for {required} damage!")
        self._check_survival(recorder)

    def _check_survival(self, recorder: EventRecorder) -> None:
        state = self._state
        player = state.player
        if not player.can_survive(state.required_discard) and player.jester_charges == 0:
            self._lose("Cannot survive enemy attack!", recorder)

    def _begin_input(self, seat: int, recorder: EventRecorder) -> None:
        state = self._state
        state.current_player = seat
        state.selected.clear()
        state.turn_number += 1
        self._enter(Phase.INPUT, recorder)
        player = state.player
        if not player.hand and not state.can_yield and player.jester_charges == 0:
            self._lose("Cannot play a card or yield", recorder)

    def _lose(self, reason: str, recorder: EventRecorder) -> None:
        state = self._state
        state.defeat_reason = reason
        self._enter(Phase.DEFEAT, recorder)
        recorder.note(f"Defeat: {reason}")
        logger.info("Defeat on turn %d: %s", state.turn_number, reason)

    # -- helpers ----------------------------------------------------------

    def _start(self) -> None:
        recorder = EventRecorder(EventKind.GAME_STARTED)
        self._reveal_next_enemy(recorder)
        if not self._state.is_game_over:
            self._enter(Phase.INPUT, recorder)
            recorder.note(f"Game started! Defeat all {CASTLE_SIZE} enemies to win.")
        self._record(recorder)

    def _enter(self, phase: Phase, recorder: EventRecorder) -> None:
        self._state.phase = phase
        recorder.phases.append(phase)

    def _record(self, recorder: EventRecorder) -> TurnEvent:
        event = recorder.build()
        self._state.log.append(event)
        return event

    def _next_seat(self) -> int:
        return (self._state.current_player + 1) % len(self._state.players)

    def _require_phase(self, phase: Phase, error: type[RegicideError], verb: str) -> None:
        state = self._state
        if state.is_game_over:
            raise error("Game is already over")
        if state.phase != phase:
            raise error(f"Cannot {verb} during {state.phase.name}")

    def _checked(self, selection: Selection | None) -> Selection:
        """Re-validate a selection against the hand as it is now."""
        if selection is None:
            return self.selection
        current = self.propose_selection(selection.indices)
        if current.cards != selection.cards:
            raise InvalidSelection("Selection is stale; the hand has changed")
        return current

    def _jester_target(self, next_player: int | None) -> int:
        seats = len(self._state.players)
        if seats == 1 or next_player is None:
            return self._next_seat()
        if not 0 <= next_player < seats:
            raise IllegalPlay(f"No player {next_player} to act next")
        return next_player
