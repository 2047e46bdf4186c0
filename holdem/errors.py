"""Errors raised by the hold'em engine.

Recoverable errors (a bad card count, a missing player) are input problems
the caller can handle. Fatal errors mean a bookkeeping invariant is broken
and the round cannot safely continue.
"""


class HoldemError(Exception):
    """Base class for engine errors."""


class InvalidHandSize(HoldemError, ValueError):
    """A hand was ranked with a card count other than 2, 5, 6 or 7."""

    def __init__(self, count: int) -> None:
        super().__init__(f"Expected 2, 5, 6 or 7 cards to rank a hand, got {count}")
        self.count = count


class EmptyDeck(HoldemError, RuntimeError):
    """A card was drawn from an empty deck."""


class PlayerOrSeatNotFound(HoldemError, LookupError):
    """A player identifier or seat index did not resolve to a seated player."""


class ZeroChipBlindPoster(HoldemError, RuntimeError):
    """A player with no chips was asked to post a blind."""


class NoWinnerDetermined(HoldemError, RuntimeError):
    """A showdown over at least one player produced no winner."""
