"""Game strategies for Regicide."""

from strategies.base import Strategy
from strategies.greedy import GreedyStrategy
from strategies.random_strategy import RandomStrategy

__all__ = [
    "Strategy",
    "RandomStrategy",
    "GreedyStrategy",
]
