"""
Outcome probability triples and rank-weighted aggregation.

A Chance is (win, draw, loss) from the player's perspective. Terminal
outcomes are the three pure triples; every internal node of the search is a
weighted average of its children, where a child's weight is the number of
cards of its rank still in the deck. With w cards of a rank out of W
remaining, that rank contributes w/W of the node's probability, so no call
site needs to normalise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, NamedTuple

from .rules import Outcome


@dataclass(frozen=True)
class Chance:
    win: float
    draw: float
    loss: float

    def total(self) -> float:
        return self.win + self.draw + self.loss

    def __add__(self, other: Chance) -> Chance:
        return Chance(self.win + other.win, self.draw + other.draw, self.loss + other.loss)

    def __mul__(self, scalar: float) -> Chance:
        return Chance(self.win * scalar, self.draw * scalar, self.loss * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Chance:
        return Chance(self.win / scalar, self.draw / scalar, self.loss / scalar)


# ─── Pure outcomes ────────────────────────────────────────────────────────────

def win() -> Chance:
    return Chance(1.0, 0.0, 0.0)


def draw() -> Chance:
    return Chance(0.0, 1.0, 0.0)


def loss() -> Chance:
    return Chance(0.0, 0.0, 1.0)


def zero() -> Chance:
    return Chance(0.0, 0.0, 0.0)


def from_outcome(outcome: Outcome) -> Chance:
    """Map a settled outcome to its pure triple.

    Examples:
        >>> from_outcome(Outcome.PUSH)
        Chance(win=0.0, draw=1.0, loss=0.0)
    """
    if outcome is Outcome.WIN:
        return win()
    if outcome is Outcome.LOSS:
        return loss()
    return draw()


# ─── Aggregation ──────────────────────────────────────────────────────────────

class WeightedResult(NamedTuple):
    weight: int
    result: Chance


def weighted_average(results: Iterable[WeightedResult]) -> Chance:
    """Average branch outcomes weighted by their card counts.

    Examples:
        >>> weighted_average([WeightedResult(3, win()), WeightedResult(1, loss())])
        Chance(win=0.75, draw=0.0, loss=0.25)

    Raises:
        ValueError: If there are no results or the weights sum to zero.
    """
    total_weight = 0
    accumulated = zero()
    for weight, result in results:
        total_weight += weight
        accumulated = accumulated + result * weight
    if total_weight <= 0:
        raise ValueError("Cannot average an empty set of weighted results.")
    return accumulated / total_weight
