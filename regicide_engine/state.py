"""Authoritative game state and the read-only snapshot handed to callers."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from regicide_engine.cards import Card
from regicide_engine.config import GameConfig
from regicide_engine.deck import Deck
from regicide_engine.enemy import Enemy
from regicide_engine.events import Phase, TurnEvent, VictoryRank
from regicide_engine.player import Player

if TYPE_CHECKING:
    from regicide_engine.cards import Suit


@dataclass(slots=True)
class TurnState:
    """The single mutable game state, owned by a ``TurnEngine``.

    Attributes:
        config: Rules for this game
        rng: Shuffle source shared by both decks
        players: Seats in turn order
        current_player: Index of the acting player
        phase: Current engine state
        enemy: Enemy being fought, None once the Castle is cleared
        tavern: Player draw pile; its discard pile is the Tavern discard
        castle: Enemy draw pile, top card is the next enemy
        castle_discard: Enemies defeated by overkill
        in_play: Cards played against the current enemy
        captured: Enemies captured onto the Tavern by exact damage
        selected: Toggled hand indices awaiting commit
        log: Append-only event history
        turn_number: Increments every time a new Input begins
        last_action_was_yield: The previous actor's last action was a yield
        defeat_reason: Why the game was lost
    """

    config: GameConfig
    rng: random.Random
    players: list[Player]
    tavern: Deck
    castle: Deck
    current_player: int = 0
    phase: Phase = Phase.INPUT
    enemy: Enemy | None = None
    castle_discard: list[Card] = field(default_factory=list)
    in_play: list[Card] = field(default_factory=list)
    captured: list[Card] = field(default_factory=list)
    selected: list[int] = field(default_factory=list)
    log: list[TurnEvent] = field(default_factory=list)
    turn_number: int = 1
    last_action_was_yield: bool = False
    defeat_reason: str | None = None

    @property
    def tavern_discard(self) -> list[Card]:
        return self.tavern.discard_pile

    @property
    def player(self) -> Player:
        return self.players[self.current_player]

    @property
    def is_game_over(self) -> bool:
        return self.phase.is_terminal

    @property
    def required_discard(self) -> int:
        if self.phase != Phase.ENEMY_ATTACK or self.enemy is None:
            return 0
        return self.enemy.effective_attack

    @property
    def can_yield(self) -> bool:
        """Solo may always yield; otherwise not straight after another yield."""
        if self.phase != Phase.INPUT:
            return False
        return self.config.is_solo or not self.last_action_was_yield

    @property
    def victory_rank(self) -> VictoryRank | None:
        if self.phase != Phase.VICTORY or not self.config.is_solo:
            return None
        return VictoryRank.for_jesters_used(self.players[0].jesters_used)

    @property
    def tavern_family_size(self) -> int:
        """Tavern-family cards in every location, less captured enemies."""
        held = sum(len(p.hand) for p in self.players)
        return len(self.tavern) + len(self.tavern_discard) + held + len(self.in_play) - len(
            self.captured
        )

    @property
    def castle_family_size(self) -> int:
        current = 1 if self.enemy is not None else 0
        return len(self.castle) + len(self.castle_discard) + current + len(self.captured)


@dataclass(frozen=True, slots=True)
class EnemyView:
    card: Card
    name: str
    suit: Suit
    max_hp: int
    current_hp: int
    base_attack: int
    shield: int
    effective_attack: int
    immunity_cancelled: bool
    pending_spade_value: int
    pending_clubs_seen: bool

    @classmethod
    def of(cls, enemy: Enemy) -> EnemyView:
        return cls(
            card=enemy.card,
            name=enemy.name,
            suit=enemy.suit,
            max_hp=enemy.max_hp,
            current_hp=enemy.current_hp,
            base_attack=enemy.base_attack,
            shield=enemy.shield,
            effective_attack=enemy.effective_attack,
            immunity_cancelled=enemy.immunity_cancelled,
            pending_spade_value=enemy.pending_spade_value,
            pending_clubs_seen=enemy.pending_clubs_seen,
        )


@dataclass(frozen=True, slots=True)
class PlayerView:
    index: int
    name: str
    hand: tuple[Card, ...]
    max_hand_size: int
    jester_charges: int
    jesters_used: int

    @property
    def hand_value(self) -> int:
        return sum(card.value for card in self.hand)


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    """Immutable view of the game, the only thing renderers ever see."""

    phase: Phase
    turn_number: int
    current_player: int
    players: tuple[PlayerView, ...]
    enemy: EnemyView | None
    tavern_count: int
    tavern_discard_count: int
    castle_count: int
    castle_discard_count: int
    in_play: tuple[Card, ...]
    captured_count: int
    selected: tuple[int, ...]
    required_discard: int
    can_yield: bool
    victory_rank: VictoryRank | None
    defeat_reason: str | None
    log_tail: tuple[TurnEvent, ...]
    tavern_family_size: int
    castle_family_size: int

    @property
    def player(self) -> PlayerView:
        return self.players[self.current_player]

    @property
    def hand(self) -> tuple[Card, ...]:
        return self.player.hand

    @property
    def is_game_over(self) -> bool:
        return self.phase.is_terminal

    @property
    def enemies_remaining(self) -> int:
        return self.castle_count + (1 if self.enemy is not None else 0)

    @classmethod
    def of(cls, state: TurnState) -> GameSnapshot:
        tail = state.config.log_tail
        return cls(
            phase=state.phase,
            turn_number=state.turn_number,
            current_player=state.current_player,
            players=tuple(
                PlayerView(
                    index=i,
                    name=p.name,
                    hand=tuple(p.hand),
                    max_hand_size=p.max_hand_size,
                    jester_charges=p.jester_charges,
                    jesters_used=p.jesters_used,
                )
                for i, p in enumerate(state.players)
            ),
            enemy=EnemyView.of(state.enemy) if state.enemy is not None else None,
            tavern_count=len(state.tavern),
            tavern_discard_count=len(state.tavern_discard),
            castle_count=len(state.castle),
            castle_discard_count=len(state.castle_discard),
            in_play=tuple(state.in_play),
            captured_count=len(state.captured),
            selected=tuple(state.selected),
            required_discard=state.required_discard,
            can_yield=state.can_yield,
            victory_rank=state.victory_rank,
            defeat_reason=state.defeat_reason,
            log_tail=tuple(state.log[-tail:]) if tail > 0 else (),
            tavern_family_size=state.tavern_family_size,
            castle_family_size=state.castle_family_size,
        )


def create_initial_state(
    config: GameConfig | None = None,
    tavern: Sequence[Card] | None = None,
    castle: Sequence[Card] | None = None,
    rng: random.Random | None = None,
    names: Sequence[str] | None = None,
) -> TurnState:
    """Create a state with hands dealt and no enemy revealed yet.

    Args:
        config: Rules; defaults to solo.
        tavern: Optional pre-ordered Tavern (top first). Shuffled fresh if None.
        castle: Optional pre-ordered Castle (top first). Layered fresh if None.
        rng: Shuffle source; seeded from ``config.seed`` if None.
        names: Optional player names.

    Returns:
        State in the Input phase. ``TurnEngine`` reveals the first enemy.
    """
    config = config or GameConfig()
    rng = rng or random.Random(config.seed)

    if tavern is None:
        tavern_deck = Deck.tavern(rng, jesters=config.tavern_jesters)
    else:
        tavern_deck = Deck(tavern, rng, discard_pile=[])
    castle_deck = Deck.castle(rng) if castle is None else Deck(castle, rng)

    if names is None:
        names = ["Hero"] if config.is_solo else []
    players = []
    for i in range(config.player_count):
        name = names[i] if i < len(names) else f"Player {i + 1}"
        player = Player(
            name=name,
            max_hand_size=config.max_hand_size,
            jester_charges=config.jester_charges,
        )
        players.append(player)

    # Deal one card at a time round the table, like the Diamonds power
    for _ in range(config.max_hand_size):
        for player in players:
            if not tavern_deck.is_empty:
                player.receive(tavern_deck.draw(1))

    return TurnState(config=config, rng=rng, players=players, tavern=tavern_deck, castle=castle_deck)
