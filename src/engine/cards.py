"""
Rank constants, token grammar, and human-readable I/O helpers.

Rank encoding:
    Rank.value is the point value of the card (Ace=1 ... Ten=10).
    Ten aggregates 10, J, Q and K: suits and face cards never change the
    outcome, so the engine only ever sees ten distinguishable ranks.

String representations are used exclusively at I/O boundaries.
"""

from __future__ import annotations

import re
from enum import Enum

from .errors import ParseError


class Rank(Enum):
    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10

    def __str__(self) -> str:
        return RANK_NAMES[self]


# Enumeration order used by every search loop: Ace first, Ten last.
RANKS: tuple[Rank, ...] = tuple(Rank)

NUM_RANKS: int = len(RANKS)

RANK_NAMES: dict[Rank, str] = {
    Rank.ACE: 'A',
    Rank.TWO: '2',
    Rank.THREE: '3',
    Rank.FOUR: '4',
    Rank.FIVE: '5',
    Rank.SIX: '6',
    Rank.SEVEN: '7',
    Rank.EIGHT: '8',
    Rank.NINE: '9',
    Rank.TEN: '10',
}

# Accepted card tokens. Alternation order matters: '10' and '11' must be
# tried before '1'. Any other letter or digit is captured as 'invalid'.
CARD_TOKEN_REGEX = re.compile(
    r"10|11|1|2|3|4|5|6|7|8|9|A|K|Q|J|a|k|q|j|X|x|(?P<invalid>[0-9A-Za-z])"
)

TOKEN_TO_RANK: dict[str, Rank] = {
    '1': Rank.ACE, '11': Rank.ACE, 'A': Rank.ACE, 'a': Rank.ACE,
    '2': Rank.TWO,
    '3': Rank.THREE,
    '4': Rank.FOUR,
    '5': Rank.FIVE,
    '6': Rank.SIX,
    '7': Rank.SEVEN,
    '8': Rank.EIGHT,
    '9': Rank.NINE,
    '10': Rank.TEN,
    'J': Rank.TEN, 'j': Rank.TEN,
    'Q': Rank.TEN, 'q': Rank.TEN,
    'K': Rank.TEN, 'k': Rank.TEN,
    'X': Rank.TEN, 'x': Rank.TEN,
}


def rank_index(rank: Rank) -> int:
    """Return the 0-based slot of a rank in per-rank arrays.

    Examples:
        >>> rank_index(Rank.ACE)
        0
        >>> rank_index(Rank.TEN)
        9
    """
    return rank.value - 1


def str_to_rank(token: str) -> Rank:
    """Parse a single card token to its Rank.

    Examples:
        >>> str_to_rank('K')
        <Rank.TEN: 10>
        >>> str_to_rank('11')
        <Rank.ACE: 1>

    Raises:
        ParseError: If the token is not part of the card grammar.
    """
    try:
        return TOKEN_TO_RANK[token]
    except KeyError:
        raise ParseError(token) from None


def tokenize(text: str) -> list[Rank]:
    """Scan text left to right and return the ranks of every card token.

    Whitespace and punctuation between tokens are ignored. A letter or digit
    that does not start a valid token fails the whole scan.

    Examples:
        >>> tokenize('A, 10 k')
        [<Rank.ACE: 1>, <Rank.TEN: 10>, <Rank.TEN: 10>]

    Raises:
        ParseError: On the first card-like token outside the grammar.
    """
    ranks: list[Rank] = []
    for match in CARD_TOKEN_REGEX.finditer(text):
        if match.group('invalid') is not None:
            raise ParseError(match.group(0))
        ranks.append(str_to_rank(match.group(0)))
    return ranks


def hand_to_str(cards) -> str:
    """Convert a sequence of ranks to a space-separated string.

    Examples:
        >>> hand_to_str((Rank.ACE, Rank.TEN))
        'A 10'
    """
    return ' '.join(RANK_NAMES[c] for c in cards)
