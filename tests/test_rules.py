"""Tests for src/engine/rules.py — dealer limit, settlement, and decision policy."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, replace

import pytest

from src.engine.chance import Chance
from src.engine.rules import (
    HARD_DRAW_LIMIT,
    SOFT_DRAW_LIMIT,
    Config,
    DecisionPolicy,
    Outcome,
    PlayerAction,
    choose_branch,
    dealer_should_draw,
    draw_limit,
    settle_hand,
)
from tests.conftest import hand


# ─── Config ───────────────────────────────────────────────────────────────────

class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.soft_seventeen_dealer_hits_on is True
        assert config.decision_policy is DecisionPolicy.MOST_WIN

    def test_frozen(self):
        with pytest.raises(FrozenInstanceError):
            Config().decision_policy = DecisionPolicy.LEAST_LOSS  # type: ignore[misc]

    def test_replace(self):
        config = replace(Config(), soft_seventeen_dealer_hits_on=False)
        assert config.soft_seventeen_dealer_hits_on is False
        assert config.decision_policy is DecisionPolicy.MOST_WIN


# ─── Dealer drawing rule ──────────────────────────────────────────────────────

class TestDrawLimit:
    def test_soft_17(self):
        assert draw_limit(Config(soft_seventeen_dealer_hits_on=True)) == SOFT_DRAW_LIMIT == 16

    def test_hard_17(self):
        assert draw_limit(Config(soft_seventeen_dealer_hits_on=False)) == HARD_DRAW_LIMIT == 17

    def test_dealer_draws_on_16(self):
        assert dealer_should_draw(hand('10', '6'), Config())

    def test_dealer_stands_on_17_when_soft_17_hits(self):
        assert not dealer_should_draw(hand('10', '7'), Config())

    def test_dealer_draws_on_17_when_hard_17(self):
        assert dealer_should_draw(hand('10', '7'), Config(soft_seventeen_dealer_hits_on=False))

    def test_dealer_stands_on_18(self):
        assert not dealer_should_draw(hand('10', '8'), Config(soft_seventeen_dealer_hits_on=False))

    def test_single_card_always_draws(self):
        assert dealer_should_draw(hand('A'), Config())  # 11


# ─── Settlement ───────────────────────────────────────────────────────────────

class TestSettleHand:
    def test_dealer_lower_player_wins(self):
        assert settle_hand(hand('10', '7'), hand('10', '9')) is Outcome.WIN

    def test_dealer_higher_player_loses(self):
        assert settle_hand(hand('10', '9'), hand('10', '7')) is Outcome.LOSS

    def test_equal_is_push(self):
        assert settle_hand(hand('10', '8'), hand('9', '9')) is Outcome.PUSH

    def test_dealer_bust_player_wins(self):
        assert settle_hand(hand('10', '6', '8'), hand('10', '2')) is Outcome.WIN

    def test_natural_beats_three_card_21(self):
        assert settle_hand(hand('A', 'K'), hand('7', '7', '7')) is Outcome.LOSS
        assert settle_hand(hand('7', '7', '7'), hand('A', 'K')) is Outcome.WIN

    def test_natural_vs_natural_is_push(self):
        assert settle_hand(hand('A', '10'), hand('K', 'A')) is Outcome.PUSH


# ─── Decision policy ──────────────────────────────────────────────────────────

class TestChooseBranch:
    # Standing wins more but also loses more; hitting trades wins for draws.
    STAND = Chance(0.40, 0.00, 0.60)
    HIT = Chance(0.35, 0.30, 0.35)

    def test_most_win_prefers_higher_win(self):
        assert choose_branch(DecisionPolicy.MOST_WIN, self.STAND, self.HIT) is PlayerAction.STAND

    def test_least_loss_prefers_lower_loss(self):
        assert choose_branch(DecisionPolicy.LEAST_LOSS, self.STAND, self.HIT) is PlayerAction.HIT

    def test_policies_disagree_on_same_state(self):
        picks = {choose_branch(p, self.STAND, self.HIT) for p in DecisionPolicy}
        assert picks == {PlayerAction.STAND, PlayerAction.HIT}

    @pytest.mark.parametrize('policy', list(DecisionPolicy))
    def test_tie_goes_to_hit(self, policy):
        same = Chance(0.3, 0.2, 0.5)
        assert choose_branch(policy, same, same) is PlayerAction.HIT

    def test_most_win_ignores_loss(self):
        stand = Chance(0.5, 0.0, 0.5)
        hit = Chance(0.49, 0.5, 0.01)
        assert choose_branch(DecisionPolicy.MOST_WIN, stand, hit) is PlayerAction.STAND
