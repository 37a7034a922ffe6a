"""Console and tabular reporting for calculation results.

Public functions:

    format_chance(chance)                     — percentage lines for one triple.
    format_hand(label, hand)                  — 'DEALER: 10 6 (16)' / '(BUST!)'.
    print_hands(dealer, player)               — both non-empty hands.
    print_chance(chance)                      — one indented triple.
    print_calculation_result(result, elapsed) — WHEN HIT / WHEN STAND blocks.
    print_settings(config)                    — decision policy and soft-17 rule.
    build_result_frame(result)                — pandas DataFrame, one row per action.
"""

from __future__ import annotations

import pandas as pd

from src.engine.chance import Chance
from src.engine.hand import Hand
from src.engine.rules import Config
from src.solvers.enumeration import CalculationResult

_OUTCOME_LABELS: list[tuple[str, str]] = [
    ("WIN chance  ", "win"),
    ("LOSE chance ", "loss"),
    ("DRAW chance ", "draw"),
]


def format_percent(probability: float) -> str:
    """Format a probability as a percentage with two decimals.

    Examples:
        >>> format_percent(0.123456)
        '12.35%'
    """
    return f"{probability * 100:.2f}%"


def format_chance(chance: Chance) -> list[str]:
    """Return the three indented percentage lines for a triple (win, lose, draw)."""
    return [
        f"    {label}: {format_percent(getattr(chance, field))}"
        for label, field in _OUTCOME_LABELS
    ]


def format_hand(label: str, hand: Hand) -> str:
    """Render a labelled hand with its score, or '(BUST!)' when busted.

    Examples:
        >>> format_hand("PLAYER", Hand.parse("10 6"))
        'PLAYER: 10 6 (16)'
        >>> format_hand("DEALER", Hand.parse("10 10 5"))
        'DEALER: 10 10 5 (BUST!)'
    """
    if hand.is_busted():
        return f"{label}: {hand} (BUST!)"
    return f"{label}: {hand} ({hand.score()})"


def format_elapsed(seconds: float) -> str:
    """Format a duration for humans.

    Examples:
        >>> format_elapsed(0.0123)
        '12.30ms'
        >>> format_elapsed(2.5)
        '2.500s'
    """
    if seconds < 1.0:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.3f}s"


def print_hands(dealer: Hand, player: Hand) -> None:
    """Print every non-empty hand, followed by a blank line if any was printed."""
    if not dealer.is_empty():
        print(format_hand("DEALER", dealer))
    if not player.is_empty():
        print(format_hand("PLAYER", player))
    if not dealer.is_empty() or not player.is_empty():
        print()


def print_chance(chance: Chance) -> None:
    for line in format_chance(chance):
        print(line)


def print_calculation_result(result: CalculationResult, elapsed: float | None = None) -> None:
    """Print the hit and stand triples and, when given, the calculation time."""
    print("WHEN HIT:")
    print_chance(result.chance_when_hit)
    print()
    print("WHEN STAND:")
    print_chance(result.chance_when_stand)
    print()
    if elapsed is not None:
        print(f"Calculated in {format_elapsed(elapsed)}")


def print_settings(config: Config) -> None:
    print(f"Decision: {config.decision_policy.value}")
    print(f"Soft 17: {'Yes' if config.soft_seventeen_dealer_hits_on else 'No'}")


def build_result_frame(result: CalculationResult) -> pd.DataFrame:
    """Return a DataFrame with one row per action and win/draw/loss columns.

    Examples:
        >>> frame = build_result_frame(result)          # doctest: +SKIP
        >>> list(frame.columns)                         # doctest: +SKIP
        ['Action', 'Win', 'Draw', 'Loss']
    """
    rows = []
    for action, chance in (
        ("HIT", result.chance_when_hit),
        ("STAND", result.chance_when_stand),
    ):
        rows.append(
            {"Action": action, "Win": chance.win, "Draw": chance.draw, "Loss": chance.loss}
        )
    return pd.DataFrame(rows, columns=["Action", "Win", "Draw", "Loss"])
