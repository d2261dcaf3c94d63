"""The enemy currently defending the Castle."""

from __future__ import annotations

from dataclasses import dataclass

from regicide_engine.cards import Card, Rank, Suit

# rank -> (max_hp, base_attack)
ENEMY_STATS: dict[Rank, tuple[int, int]] = {
    Rank.JACK: (20, 10),
    Rank.QUEEN: (30, 15),
    Rank.KING: (40, 20),
}


@dataclass(slots=True)
class Enemy:
    """Per-encounter enemy state.

    Attributes:
        card: The royal card this enemy was revealed from
        max_hp: Starting health
        current_hp: Remaining health, never below zero
        base_attack: Attack before shields
        shield: Cumulative Spades reduction for this encounter
        immunity_cancelled: Set once a Jester has been played against it
        pending_spade_value: Spades blocked by immunity, owed if a Jester lands
        pending_clubs_seen: Clubs were blocked at least once (never retroactive)
    """

    card: Card
    max_hp: int
    current_hp: int
    base_attack: int
    shield: int = 0
    immunity_cancelled: bool = False
    pending_spade_value: int = 0
    pending_clubs_seen: bool = False

    @classmethod
    def from_card(cls, card: Card) -> Enemy:
        if not card.is_royal:
            raise ValueError(f"Cannot create an enemy from {card!r}")
        max_hp, attack = ENEMY_STATS[card.rank]
        return cls(card=card, max_hp=max_hp, current_hp=max_hp, base_attack=attack)

    @property
    def rank(self) -> Rank:
        return self.card.rank

    @property
    def suit(self) -> Suit:
        return self.card.suit

    @property
    def name(self) -> str:
        return f"{self.card.rank.name.title()} of {self.card.suit.name.title()}"

    @property
    def effective_attack(self) -> int:
        return max(0, self.base_attack - self.shield)

    @property
    def is_defeated(self) -> bool:
        return self.current_hp == 0

    def is_immune_to(self, suit: Suit | None) -> bool:
        """Whether the suit power of ``suit`` is blocked. Damage is never blocked."""
        return suit is not None and suit == self.suit and not self.immunity_cancelled

    def take_damage(self, damage: int) -> int:
        """Apply damage and return the signed remainder.

        Zero means an exact kill, a negative value means overkill.
        """
        remainder = self.current_hp - damage
        self.current_hp = max(0, remainder)
        return remainder

    def add_shield(self, amount: int) -> None:
        self.shield += amount

    def record_blocked(self, suit: Suit, amount: int) -> None:
        if suit is Suit.SPADES:
            self.pending_spade_value += amount
        elif suit is Suit.CLUBS:
            self.pending_clubs_seen = True

    def cancel_immunity(self) -> int:
        """Cancel immunity and pay out blocked Spades exactly once.

        Returns:
            Shield added retroactively.
        """
        self.immunity_cancelled = True
        retroactive = self.pending_spade_value
        if retroactive:
            self.shield += retroactive
            self.pending_spade_value = 0
        return retroactive
