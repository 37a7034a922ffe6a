"""
Console command grammar and session state.

Commands (case-insensitive, surrounding whitespace ignored):
    D: <cards>      Set the dealer hand, e.g. 'D: 7' or 'd: A, k'
    P: <cards>      Set the player hand
    calc            Calculate hit-now / stand-now probabilities
    decision = N    1: most win, 2: least loss
    soft17 = C      Y/O/T: dealer hits soft 17, N/X/F: dealer stands on 17
    clear           Empty both hands
    quit / exit     Leave the session

Changing a hand or a rule discards the last result; a failed calculation
keeps it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import Union

from src.engine.errors import CommandError
from src.engine.hand import Hand
from src.engine.rules import Config, DecisionPolicy
from src.solvers.enumeration import CalculationResult, timed_calculate

# ─── Grammar ──────────────────────────────────────────────────────────────────

SET_HAND_REGEX = re.compile(r"\s*([DP])\s*:(.*)$", re.IGNORECASE)
CALCULATE_REGEX = re.compile(r"\s*calc\s*$", re.IGNORECASE)
SET_DECISION_REGEX = re.compile(r"\s*decision\s*=\s*([123])\s*$", re.IGNORECASE)
SET_SOFT_17_REGEX = re.compile(r"\s*soft\s*17\s*=\s*([YNTFOX])\s*$", re.IGNORECASE)
CLEAR_REGEX = re.compile(r"\s*clear\s*$", re.IGNORECASE)
QUIT_REGEX = re.compile(r"\s*(?:quit|exit)\s*$", re.IGNORECASE)

DECISION_CODES: dict[str, DecisionPolicy] = {
    "1": DecisionPolicy.MOST_WIN,
    "2": DecisionPolicy.LEAST_LOSS,
}

SOFT_17_CODES: dict[str, bool] = {
    "y": True, "o": True, "t": True,
    "n": False, "x": False, "f": False,
}


# ─── Command types ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class SetHand:
    target: str  # 'D' or 'P'
    hand: Hand


@dataclass(frozen=True)
class SetDecision:
    policy: DecisionPolicy


@dataclass(frozen=True)
class SetSoftSeventeen:
    enabled: bool


@dataclass(frozen=True)
class Calculate:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[SetHand, SetDecision, SetSoftSeventeen, Calculate, Clear, Quit]


def parse_command(line: str) -> Command:
    """Parse one input line into a command.

    Examples:
        >>> parse_command('d: A, 10')
        SetHand(target='D', hand=Hand(cards=[<Rank.ACE: 1>, <Rank.TEN: 10>]))
        >>> parse_command('Soft 17 = n')
        SetSoftSeventeen(enabled=False)

    Raises:
        CommandError: If the line matches no command or carries an invalid value.
        ParseError:   If a hand's cards cannot be parsed.
    """
    match = SET_HAND_REGEX.match(line)
    if match:
        return SetHand(match.group(1).upper(), Hand.parse(match.group(2)))

    match = SET_DECISION_REGEX.match(line)
    if match:
        code = match.group(1)
        if code not in DECISION_CODES:
            raise CommandError(f"Unknown decision '{code}'")
        return SetDecision(DECISION_CODES[code])

    match = SET_SOFT_17_REGEX.match(line)
    if match:
        return SetSoftSeventeen(SOFT_17_CODES[match.group(1).lower()])

    if CALCULATE_REGEX.match(line):
        return Calculate()
    if CLEAR_REGEX.match(line):
        return Clear()
    if QUIT_REGEX.match(line):
        return Quit()
    raise CommandError("Invalid input")


# ─── Session ──────────────────────────────────────────────────────────────────

@dataclass
class Session:
    """Mutable console state between commands.

    Attributes:
        dealer:  Dealer hand being edited.
        player:  Player hand being edited.
        config:  Current rule configuration.
        result:  Last successful calculation, or None once inputs change.
        elapsed: Seconds the last calculation took.
    """

    dealer: Hand = field(default_factory=Hand)
    player: Hand = field(default_factory=Hand)
    config: Config = field(default_factory=Config)
    result: CalculationResult | None = None
    elapsed: float | None = None

    def reset_result(self) -> None:
        self.result = None
        self.elapsed = None


def apply_command(session: Session, command: Command) -> None:
    """Apply a parsed command to the session.

    Raises:
        CrackerError: From calculate() on a Calculate command; the previous
                      result is left untouched.
    """
    if isinstance(command, SetHand):
        if command.target == "D":
            session.dealer = command.hand.copy()
        else:
            session.player = command.hand.copy()
        session.reset_result()
    elif isinstance(command, SetDecision):
        session.config = replace(session.config, decision_policy=command.policy)
        session.reset_result()
    elif isinstance(command, SetSoftSeventeen):
        session.config = replace(session.config, soft_seventeen_dealer_hits_on=command.enabled)
        session.reset_result()
    elif isinstance(command, Calculate):
        session.result, session.elapsed = timed_calculate(
            session.dealer, session.player, session.config
        )
    elif isinstance(command, Clear):
        session.dealer = Hand()
        session.player = Hand()
        session.reset_result()
