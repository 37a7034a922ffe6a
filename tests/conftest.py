"""
Shared pytest fixtures for the blackjack cracker tests.

Provides a convenience wrapper around Hand.parse for building known hands.
"""

from __future__ import annotations

import pytest

from src.engine.deck import Deck
from src.engine.hand import Hand
from src.engine.rules import Config, DecisionPolicy


def hand(*tokens: str) -> Hand:
    """Build a Hand from card tokens.

    Examples:
        >>> hand('A', '10').score()
        21
        >>> str(hand('7', 'K', 'q'))
        '7 10 10'
    """
    return Hand.parse(' '.join(tokens))


@pytest.fixture
def fresh_deck() -> Deck:
    """Return a full 52-card shoe."""
    return Deck()


@pytest.fixture
def default_config() -> Config:
    """Dealer hits soft 17, MOST_WIN policy."""
    return Config()


@pytest.fixture
def least_loss_config() -> Config:
    return Config(decision_policy=DecisionPolicy.LEAST_LOSS)


@pytest.fixture
def h():
    """Expose the hand() helper as a fixture for convenience."""
    return hand
