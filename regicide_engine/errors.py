"""Errors raised by the Regicide engine.

Every error is recoverable: the engine rejects the action and leaves the
game state exactly as it was.
"""

from __future__ import annotations


class RegicideError(Exception):
    """Base class for rejected actions."""


class IllegalPlay(RegicideError):
    """The proposed cards do not form a legal play, or playing is not allowed now."""


class IllegalDiscard(RegicideError):
    """The discard does not cover the enemy attack, or discarding is not allowed now."""


class NoJesterCharge(RegicideError):
    """No solo Jester charge is left, or the power cannot be used now."""


class CannotYield(RegicideError):
    """Yielding is not permitted for the acting player."""


class EmptyDeck(RegicideError):
    """A deck and its paired discard pile are both exhausted."""


class InvalidSelection(IllegalPlay, IllegalDiscard):
    """Selected indices do not exist in the hand, repeat, or are stale."""
