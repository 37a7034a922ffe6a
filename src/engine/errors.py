"""
Error taxonomy.

Every error is detected synchronously while validating input, before any
search starts. All kinds derive from ValueError so callers that only care
about "bad input" can catch that.
"""

from __future__ import annotations


class CrackerError(ValueError):
    """Base class for every invalid-input condition."""


class ParseError(CrackerError):
    """A card-like token that is not part of the card grammar."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid input '{token}'")
        self.token = token


class EmptyHandError(CrackerError):
    def __init__(self) -> None:
        super().__init__("Both the dealer and the player hand need at least one card")


class AlreadyBustedError(CrackerError):
    def __init__(self, score: int) -> None:
        super().__init__(f"Player hand is already busted ({score})")
        self.score = score


class ImpossibleHandError(CrackerError):
    """More copies of a rank are held than a single shoe contains."""

    def __init__(self, rank) -> None:
        super().__init__(
            f"Impossible hand, cannot simulate card draw: too many '{rank}' cards"
        )
        self.rank = rank


class CommandError(CrackerError):
    """An unrecognised or invalid console command."""
