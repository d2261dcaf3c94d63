"""Game configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

# player_count -> (max_hand_size, tavern_jesters, jester_charges)
PLAYER_COUNT_TABLE: dict[int, tuple[int, int, int]] = {
    1: (8, 0, 2),
    2: (7, 0, 0),
    3: (6, 1, 0),
    4: (5, 2, 0),
}


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Rules parameters for one game.

    Attributes:
        player_count: Number of seats (1 = solo)
        max_hand_size: Hand limit per player
        tavern_jesters: Jester cards shuffled into the Tavern
        jester_charges: Solo Jester powers available to each player
        log_tail: How many recent events a snapshot carries
        seed: Seed for the shuffle RNG, None for a random game
    """

    player_count: int = 1
    max_hand_size: int = 8
    tavern_jesters: int = 0
    jester_charges: int = 2
    log_tail: int = 10
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.player_count not in PLAYER_COUNT_TABLE:
            raise ValueError(f"player_count must be 1-4, got {self.player_count}")
        if self.max_hand_size < 1:
            raise ValueError("max_hand_size must be positive")
        if self.tavern_jesters < 0 or self.jester_charges < 0:
            raise ValueError("Jester counts cannot be negative")

    @property
    def is_solo(self) -> bool:
        return self.player_count == 1

    @classmethod
    def for_players(cls, player_count: int = 1, seed: int | None = None) -> GameConfig:
        """Standard rules for the given number of players."""
        if player_count not in PLAYER_COUNT_TABLE:
            raise ValueError(f"player_count must be 1-4, got {player_count}")
        hand, jesters, charges = PLAYER_COUNT_TABLE[player_count]
        return cls(
            player_count=player_count,
            max_hand_size=hand,
            tavern_jesters=jesters,
            jester_charges=charges,
            seed=seed,
        )

    @classmethod
    def from_env(cls) -> GameConfig:
        """Build a config from REGICIDE_PLAYERS, REGICIDE_SEED and REGICIDE_LOG_TAIL."""
        players = int(os.environ.get("REGICIDE_PLAYERS", "1"))
        seed_env = os.environ.get("REGICIDE_SEED")
        config = cls.for_players(players, seed=int(seed_env) if seed_env else None)
        log_tail = os.environ.get("REGICIDE_LOG_TAIL")
        if log_tail:
            config = replace(config, log_tail=int(log_tail))
        return config
