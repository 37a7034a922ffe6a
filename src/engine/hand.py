"""
Hand evaluation: score calculation, bust and natural detection.

Ace valuation follows the standard soft-ace rule:
    Every ace counts 1. If the hand holds at least one ace and the raw sum is
    11 or less, a single ace is promoted to 11 (add 10). At most one ace is
    ever promoted, since two promoted aces would always bust.

The score is recomputed from the card sequence on every call; the search
mutates hands in place, so nothing derived from the cards is cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .cards import Rank, hand_to_str, tokenize

BLACKJACK: int = 21

# Comparison-only sentinels for effective_score().
BUST_SCORE: int = -100
NATURAL_SCORE: int = 100


def calculate_score(cards) -> int:
    """Return the best score of a sequence of ranks.

    Examples:
        >>> calculate_score((Rank.ACE, Rank.SEVEN))
        18
        >>> calculate_score((Rank.ACE, Rank.ACE, Rank.NINE))
        21
        >>> calculate_score((Rank.TEN, Rank.TEN, Rank.FIVE))
        25
    """
    total = 0
    has_ace = False
    for card in cards:
        total += card.value
        if card is Rank.ACE:
            has_ace = True
    if has_ace and total <= 11:
        total += 10
    return total


def is_bust(score: int) -> bool:
    """Return True if a score exceeds 21.

    Examples:
        >>> is_bust(21)
        False
        >>> is_bust(22)
        True
    """
    return score > BLACKJACK


def is_natural(cards) -> bool:
    """Return True for a two-card 21.

    Examples:
        >>> is_natural((Rank.ACE, Rank.TEN))
        True
        >>> is_natural((Rank.ACE, Rank.ACE, Rank.NINE))
        False
    """
    return len(cards) == 2 and calculate_score(cards) == BLACKJACK


def effective_score(cards) -> int:
    """Return the comparison score of a finished hand.

    Busted hands collapse to BUST_SCORE and naturals to NATURAL_SCORE so
    that a plain integer comparison settles any dealer/player pair.

    Examples:
        >>> effective_score((Rank.ACE, Rank.TEN))
        100
        >>> effective_score((Rank.TEN, Rank.TEN, Rank.FIVE))
        -100
        >>> effective_score((Rank.TEN, Rank.NINE))
        19
    """
    score = calculate_score(cards)
    if is_bust(score):
        return BUST_SCORE
    if is_natural(cards):
        return NATURAL_SCORE
    return score


@dataclass
class Hand:
    """Ordered sequence of ranks. Order only affects display."""

    cards: list[Rank] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str) -> Hand:
        """Build a hand from free text such as ``'A, 10'`` or ``'7 k'``.

        Raises:
            ParseError: If the text contains a card-like token outside the
                grammar; no partial hand is produced.
        """
        return cls(tokenize(text))

    def score(self) -> int:
        return calculate_score(self.cards)

    def is_empty(self) -> bool:
        return not self.cards

    def is_busted(self) -> bool:
        return is_bust(self.score())

    def effective_score(self) -> int:
        return effective_score(self.cards)

    def append(self, rank: Rank) -> None:
        self.cards.append(rank)

    def pop(self) -> Rank:
        return self.cards.pop()

    def copy(self) -> Hand:
        return Hand(list(self.cards))

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return hand_to_str(self.cards)
