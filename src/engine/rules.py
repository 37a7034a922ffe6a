"""
House rules, settlement, and the player's decision policy.

Dealer drawing rule:
    The dealer keeps drawing while the score is at or below the draw limit.
    "Dealer hits soft 17" is modelled as a limit of 16 (draw through 16),
    "dealer stands on 17" as a limit of 17 (draw through 17).

Settlement compares effective scores (see hand.effective_score):
    1. Dealer lower   → player WIN
    2. Dealer higher  → player LOSS
    3. Equal          → PUSH, unless the player busted, then LOSS

Decision policy (player's choice at each simulated decision point):
    MOST_WIN   → stand iff standing wins strictly more often
    LEAST_LOSS → stand iff standing loses strictly less often
    Ties go to hitting.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from .hand import Hand

if TYPE_CHECKING:
    from .chance import Chance

SOFT_DRAW_LIMIT: int = 16  # draws until exceeding this score
HARD_DRAW_LIMIT: int = 17  # draws until exceeding this score


class Outcome(Enum):
    WIN = auto()
    LOSS = auto()
    PUSH = auto()


class PlayerAction(Enum):
    HIT = auto()
    STAND = auto()


class DecisionPolicy(Enum):
    MOST_WIN = "Most win"
    LEAST_LOSS = "Least loss"


@dataclass(frozen=True)
class Config:
    """Rule configuration for one calculation.

    Attributes:
        soft_seventeen_dealer_hits_on: True if the dealer hits soft 17
                                       (draw limit 16), False for 17.
        decision_policy:               How the simulated player picks between
                                       standing and hitting again.
    """

    soft_seventeen_dealer_hits_on: bool = True
    decision_policy: DecisionPolicy = DecisionPolicy.MOST_WIN


def draw_limit(config: Config) -> int:
    """Return the highest score at which the dealer still draws.

    Examples:
        >>> draw_limit(Config(soft_seventeen_dealer_hits_on=True))
        16
        >>> draw_limit(Config(soft_seventeen_dealer_hits_on=False))
        17
    """
    return SOFT_DRAW_LIMIT if config.soft_seventeen_dealer_hits_on else HARD_DRAW_LIMIT


def dealer_should_draw(dealer: Hand, config: Config) -> bool:
    return dealer.score() <= draw_limit(config)


def settle_hand(dealer: Hand, player: Hand) -> Outcome:
    """Settle a finished dealer hand against a finished player hand.

    The busted-player branch cannot be reached from the search: a busted
    player is settled as a loss before the dealer plays, and a calculation
    never starts from a busted player. It is kept so that settle_hand is
    correct on its own.

    Examples:
        >>> settle_hand(Hand.parse('10 7'), Hand.parse('10 9'))
        <Outcome.WIN: 1>
        >>> settle_hand(Hand.parse('A 10'), Hand.parse('7 7 7'))
        <Outcome.LOSS: 2>
    """
    dealer_score = dealer.effective_score()
    player_score = player.effective_score()

    if dealer_score < player_score:
        return Outcome.WIN
    if dealer_score > player_score:
        return Outcome.LOSS
    if player.is_busted():
        return Outcome.LOSS
    return Outcome.PUSH


def choose_branch(policy: DecisionPolicy, stand: Chance, hit: Chance) -> PlayerAction:
    """Pick between standing and hitting again according to the policy.

    Examples:
        >>> from src.engine.chance import Chance
        >>> stand, hit = Chance(0.4, 0.0, 0.6), Chance(0.3, 0.3, 0.4)
        >>> choose_branch(DecisionPolicy.MOST_WIN, stand, hit)
        <PlayerAction.STAND: 2>
        >>> choose_branch(DecisionPolicy.LEAST_LOSS, stand, hit)
        <PlayerAction.HIT: 1>
    """
    if policy is DecisionPolicy.MOST_WIN:
        prefer_stand = stand.win > hit.win
    else:
        prefer_stand = stand.loss < hit.loss
    return PlayerAction.STAND if prefer_stand else PlayerAction.HIT
