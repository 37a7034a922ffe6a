"""
Remaining-shoe bookkeeping for the exhaustive search.

Counts are kept per rank, length 10:
    index = rank.value - 1  ->  0=A, 1=2, ..., 8=9, 9=10/J/Q/K

A deck is built and validated as a numpy int16 array: a single 52-card shoe
(4 of each rank, 16 tens) minus the cards already held. The search then
touches one count at a time millions of times, so the live counts are held
as a plain list of ints; counts() hands back a numpy copy.

During the search the deck is a shared backtracking buffer: every
hypothetical draw goes through drawn(), which restores the count on every
exit path.
"""

from __future__ import annotations

import contextlib
from typing import Iterator, Mapping

import numpy as np

from .cards import RANKS, NUM_RANKS, Rank, rank_index
from .errors import ImpossibleHandError
from .hand import Hand

SHOE_COMPOSITION: tuple[int, ...] = (4, 4, 4, 4, 4, 4, 4, 4, 4, 16)
SHOE_SIZE: int = 52


def create_deck() -> np.ndarray:
    """Create the per-rank counts of a fresh, full shoe.

    Examples:
        >>> deck = create_deck()
        >>> int(deck.sum())
        52
        >>> deck.dtype
        dtype('int16')
    """
    return np.array(SHOE_COMPOSITION, dtype=np.int16)


class Deck:
    """Per-rank remaining counts, mutated in place by the search."""

    def __init__(self, counts: np.ndarray | None = None) -> None:
        if counts is None:
            counts = create_deck()
        if counts.shape != (NUM_RANKS,):
            raise ValueError(f"Deck needs {NUM_RANKS} rank counts, got shape {counts.shape}.")
        self._counts: list[int] = counts.astype(np.int16).tolist()

    @classmethod
    def from_hands(cls, dealer: Hand, player: Hand) -> Deck:
        """Build the remaining shoe after removing both hands' cards.

        Raises:
            ImpossibleHandError: If the hands hold more copies of a rank than
                the shoe contains.

        Examples:
            >>> deck = Deck.from_hands(Hand([Rank.SEVEN]), Hand([Rank.TEN, Rank.SIX]))
            >>> deck.cards_remaining()
            49
        """
        held = np.array(
            [rank_index(card) for card in (*dealer.cards, *player.cards)], dtype=np.intp
        )
        counts = create_deck() - np.bincount(held, minlength=NUM_RANKS).astype(np.int16)

        over_claimed = np.flatnonzero(counts < 0)
        if over_claimed.size:
            raise ImpossibleHandError(RANKS[over_claimed[0]])
        return cls(counts)

    @classmethod
    def from_counts(cls, counts: Mapping[Rank, int]) -> Deck:
        """Build a deck holding exactly the given counts (missing ranks = 0).

        Examples:
            >>> Deck.from_counts({Rank.ACE: 1, Rank.TEN: 2}).cards_remaining()
            3
        """
        array = np.zeros(NUM_RANKS, dtype=np.int16)
        for rank, count in counts.items():
            if count < 0:
                raise ValueError(f"Negative count {count} for rank {rank}.")
            array[rank_index(rank)] = count
        return cls(array)

    def remaining(self, rank: Rank) -> int:
        return self._counts[rank_index(rank)]

    def decrement(self, rank: Rank) -> None:
        self._counts[rank_index(rank)] -= 1

    def increment(self, rank: Rank) -> None:
        self._counts[rank_index(rank)] += 1

    def cards_remaining(self) -> int:
        return sum(self._counts)

    def counts(self) -> np.ndarray:
        """Return a copy of the per-rank counts."""
        return np.array(self._counts, dtype=np.int16)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Deck):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        return f"Deck({self._counts})"


@contextlib.contextmanager
def drawn(deck: Deck, hand: Hand, rank: Rank) -> Iterator[int]:
    """Draw one rank from the deck into a hand for the duration of a branch.

    Yields the count of the rank before the draw, which is the branch weight.
    On exit (normal or not) the card leaves the hand and the count is
    restored, so sibling branches see identical state.

    Examples:
        >>> deck, hand = Deck(), Hand()
        >>> with drawn(deck, hand, Rank.TEN) as weight:
        ...     weight, deck.remaining(Rank.TEN), len(hand)
        (16, 15, 1)
        >>> deck.remaining(Rank.TEN), len(hand)
        (16, 0)
    """
    weight = deck.remaining(rank)
    deck.decrement(rank)
    hand.append(rank)
    try:
        yield weight
    finally:
        hand.pop()
        deck.increment(rank)
