"""Tests for src/console/commands.py — command grammar and session updates."""

from __future__ import annotations

import pytest

from src.console.commands import (
    Calculate,
    Clear,
    Quit,
    Session,
    SetDecision,
    SetHand,
    SetSoftSeventeen,
    apply_command,
    parse_command,
)
from src.engine.cards import Rank
from src.engine.chance import Chance
from src.engine.errors import AlreadyBustedError, CommandError, EmptyHandError, ParseError
from src.engine.hand import Hand
from src.engine.rules import Config, DecisionPolicy
from src.solvers.enumeration import CalculationResult
from tests.conftest import hand

_DUMMY_RESULT = CalculationResult(Chance(0.3, 0.1, 0.6), Chance(0.4, 0.0, 0.6))


# ─── parse_command ────────────────────────────────────────────────────────────


class TestParseHand:
    def test_dealer(self):
        assert parse_command("D: 7") == SetHand("D", hand('7'))

    def test_player_lowercase_with_commas(self):
        command = parse_command("p: a, k, 5")
        assert command.target == "P"
        assert command.hand.cards == [Rank.ACE, Rank.TEN, Rank.FIVE]

    def test_surrounding_whitespace(self):
        assert parse_command("   D  :  10 6   ") == SetHand("D", hand('10', '6'))

    def test_empty_card_list(self):
        assert parse_command("P:") == SetHand("P", Hand())

    def test_invalid_card_raises_parse_error(self):
        with pytest.raises(ParseError) as excinfo:
            parse_command("D: 7 Z")
        assert excinfo.value.token == "Z"


class TestParseSettings:
    @pytest.mark.parametrize(
        "line, policy",
        [("decision = 1", DecisionPolicy.MOST_WIN),
         ("Decision=2", DecisionPolicy.LEAST_LOSS),
         ("  DECISION =  2 ", DecisionPolicy.LEAST_LOSS)],
    )
    def test_decision(self, line, policy):
        assert parse_command(line) == SetDecision(policy)

    def test_decision_three_rejected(self):
        with pytest.raises(CommandError, match="3"):
            parse_command("decision = 3")

    def test_decision_out_of_grammar(self):
        with pytest.raises(CommandError, match="Invalid input"):
            parse_command("decision = 4")

    @pytest.mark.parametrize("code", ["y", "Y", "o", "t"])
    def test_soft_17_on(self, code):
        assert parse_command(f"soft17 = {code}") == SetSoftSeventeen(True)

    @pytest.mark.parametrize("code", ["n", "X", "f"])
    def test_soft_17_off(self, code):
        assert parse_command(f"Soft 17 = {code}") == SetSoftSeventeen(False)


class TestParseKeywords:
    @pytest.mark.parametrize("line", ["calc", "CALC", "  Calc  "])
    def test_calculate(self, line):
        assert parse_command(line) == Calculate()

    def test_clear(self):
        assert parse_command("clear") == Clear()

    @pytest.mark.parametrize("line", ["quit", "exit", "QUIT"])
    def test_quit(self, line):
        assert parse_command(line) == Quit()

    @pytest.mark.parametrize("line", ["", "hello", "calculate now", "X: 7"])
    def test_invalid(self, line):
        with pytest.raises(CommandError, match="Invalid input"):
            parse_command(line)


# ─── apply_command ────────────────────────────────────────────────────────────


class TestApplyCommand:
    def test_set_hands(self):
        session = Session()
        apply_command(session, SetHand("D", hand('7')))
        apply_command(session, SetHand("P", hand('10', '6')))
        assert str(session.dealer) == "7"
        assert str(session.player) == "10 6"

    def test_set_hand_copies(self):
        session = Session()
        player = hand('10')
        apply_command(session, SetHand("P", player))
        player.append(Rank.FIVE)
        assert str(session.player) == "10"

    def test_set_decision(self):
        session = Session()
        apply_command(session, SetDecision(DecisionPolicy.LEAST_LOSS))
        assert session.config.decision_policy is DecisionPolicy.LEAST_LOSS
        assert session.config.soft_seventeen_dealer_hits_on is True

    def test_set_soft_17(self):
        session = Session()
        apply_command(session, SetSoftSeventeen(False))
        assert session.config == Config(soft_seventeen_dealer_hits_on=False)

    def test_clear(self):
        session = Session(dealer=hand('7'), player=hand('10'))
        apply_command(session, Clear())
        assert session.dealer.is_empty() and session.player.is_empty()

    @pytest.mark.parametrize(
        "command",
        [SetHand("D", hand('9')),
         SetDecision(DecisionPolicy.LEAST_LOSS),
         SetSoftSeventeen(False),
         Clear()],
    )
    def test_changes_discard_result(self, command):
        session = Session(dealer=hand('7'), player=hand('10'), result=_DUMMY_RESULT, elapsed=0.1)
        apply_command(session, command)
        assert session.result is None
        assert session.elapsed is None

    def test_calculate_stores_result(self):
        session = Session(dealer=hand('10'), player=hand('10', '9'))
        apply_command(session, Calculate())
        assert session.result is not None
        assert session.elapsed >= 0.0
        assert session.result.chance_when_stand.total() == pytest.approx(1.0)

    def test_failed_calculate_keeps_result(self):
        session = Session(dealer=Hand(), player=hand('10'), result=_DUMMY_RESULT, elapsed=0.1)
        with pytest.raises(EmptyHandError):
            apply_command(session, Calculate())
        assert session.result is _DUMMY_RESULT

    def test_busted_player(self):
        session = Session(dealer=hand('7'), player=hand('10', '10', '2'))
        with pytest.raises(AlreadyBustedError):
            apply_command(session, Calculate())
