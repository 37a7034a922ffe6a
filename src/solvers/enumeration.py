"""
Exact outcome probabilities by exhaustive enumeration of future draws.

Two mutually recursive procedures explore every card that could be drawn
from the remaining shoe:

    resolve_stand — the player's hand is fixed; the dealer draws by the house
                    rule until past the draw limit, then the hands are settled.
    resolve_hit   — the player draws one card; unless that busts, the player
                    then picks between standing and hitting again using the
                    configured decision policy.

Every branch is weighted by the number of cards of its rank still in the
deck, which turns the enumeration over ranks into exact probabilities.

The deck and both hands are shared backtracking buffers: each hypothetical
draw happens inside deck.drawn(), which restores them before the next
sibling rank is tried. There is no memoisation; branching is at most 10 per
ply and a hand busts within about twenty draws.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from src.engine import chance
from src.engine.cards import RANKS
from src.engine.chance import Chance, WeightedResult, weighted_average
from src.engine.deck import Deck, drawn
from src.engine.errors import AlreadyBustedError, EmptyHandError
from src.engine.hand import Hand
from src.engine.rules import (
    Config,
    PlayerAction,
    choose_branch,
    dealer_should_draw,
    settle_hand,
)

logger = logging.getLogger(__name__)


# ─── Result type ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CalculationResult:
    """Outcome probabilities of the two immediate choices.

    Attributes:
        chance_when_hit:   Probabilities if the player hits now and then keeps
                           following the decision policy.
        chance_when_stand: Probabilities if the player stands now.
    """

    chance_when_hit: Chance
    chance_when_stand: Chance


# ─── Resolution procedures ────────────────────────────────────────────────────


def resolve_stand(deck: Deck, dealer: Hand, player: Hand, config: Config) -> Chance:
    """Return the outcome probabilities of the player standing on ``player``.

    Args:
        deck:   Remaining shoe. Mutated during the call, restored on return.
        dealer: Dealer hand. Mutated during the call, restored on return.
        player: Player hand (not modified).
        config: House rule for the dealer's draw limit.
    """
    if not dealer_should_draw(dealer, config):
        return chance.from_outcome(settle_hand(dealer, player))

    results: list[WeightedResult] = []
    for rank in RANKS:
        if deck.remaining(rank) <= 0:
            continue
        with drawn(deck, dealer, rank) as weight:
            results.append(WeightedResult(weight, resolve_stand(deck, dealer, player, config)))
    return weighted_average(results)


def resolve_hit(deck: Deck, dealer: Hand, player: Hand, config: Config) -> Chance:
    """Return the outcome probabilities of the player hitting once more.

    After each non-busting card the player stands or hits again, whichever
    ``config.decision_policy`` prefers at that state.

    Args:
        deck:   Remaining shoe. Mutated during the call, restored on return.
        dealer: Dealer hand. Mutated by nested stand resolutions, restored.
        player: Player hand. Mutated during the call, restored on return.
        config: Dealer rule and decision policy.
    """
    results: list[WeightedResult] = []
    for rank in RANKS:
        if deck.remaining(rank) <= 0:
            continue
        with drawn(deck, player, rank) as weight:
            if player.is_busted():
                outcome = chance.loss()
            else:
                stand = resolve_stand(deck, dealer, player, config)
                hit = resolve_hit(deck, dealer, player, config)
                action = choose_branch(config.decision_policy, stand, hit)
                outcome = stand if action is PlayerAction.STAND else hit
            results.append(WeightedResult(weight, outcome))
    return weighted_average(results)


# ─── Public API ───────────────────────────────────────────────────────────────


def validate_hands(dealer: Hand, player: Hand) -> None:
    """Reject hands the engine cannot start from.

    Raises:
        EmptyHandError:     Either hand has no cards.
        AlreadyBustedError: The player hand already exceeds 21.
    """
    if dealer.is_empty() or player.is_empty():
        raise EmptyHandError()
    if player.is_busted():
        raise AlreadyBustedError(player.score())


def calculate(dealer: Hand, player: Hand, config: Config | None = None) -> CalculationResult:
    """Compute the hit-now and stand-now probabilities for the current hands.

    The caller's hands are never modified; the search runs on copies and a
    fresh deck, so identical inputs always produce identical results.

    Args:
        dealer: Dealer's visible cards.
        player: Player's current cards.
        config: Rule configuration (defaults: dealer hits soft 17, MOST_WIN).

    Returns:
        CalculationResult with both triples computed from the same initial state.

    Raises:
        EmptyHandError, AlreadyBustedError: See validate_hands().
        ImpossibleHandError: More copies of a rank than a single shoe holds.
    """
    if config is None:
        config = Config()
    validate_hands(dealer, player)
    deck = Deck.from_hands(dealer, player)

    dealer = dealer.copy()
    player = player.copy()

    return CalculationResult(
        chance_when_hit=resolve_hit(deck, dealer, player, config),
        chance_when_stand=resolve_stand(deck, dealer, player, config),
    )


def timed_calculate(
    dealer: Hand,
    player: Hand,
    config: Config | None = None,
) -> tuple[CalculationResult, float]:
    """Run calculate() and also return the elapsed wall-clock seconds."""
    start = time.perf_counter()
    result = calculate(dealer, player, config)
    elapsed = time.perf_counter() - start
    logger.debug("Calculated dealer=[%s] player=[%s] in %.4fs", dealer, player, elapsed)
    return result, elapsed


def recommend_action(result: CalculationResult, config: Config | None = None) -> PlayerAction:
    """Return the better immediate action under the configured policy.

    Examples:
        >>> r = CalculationResult(Chance(0.3, 0.1, 0.6), Chance(0.4, 0.0, 0.6))
        >>> recommend_action(r)
        <PlayerAction.STAND: 2>
    """
    if config is None:
        config = Config()
    return choose_branch(config.decision_policy, result.chance_when_stand, result.chance_when_hit)


# ─── __main__ ─────────────────────────────────────────────────────────────────

if __name__ == "__main__":
    from src.analysis.report import print_calculation_result

    dealer_hand = Hand.parse("7")
    player_hand = Hand.parse("10 6")
    rules = Config()

    print(f"Dealer: {dealer_hand}  Player: {player_hand}  ({rules.decision_policy.value})")
    calc_result, seconds = timed_calculate(dealer_hand, player_hand, rules)
    print_calculation_result(calc_result, seconds)
    print(f"Recommended: {recommend_action(calc_result, rules).name}")
