"""Blackjack Cracker — Streamlit Dashboard.

Enter the dealer's visible cards and the player's cards in the sidebar, pick
the house rule and decision policy, and press Calculate to see the exact
win / draw / loss probabilities of hitting now versus standing now.

Run:
    PYTHONPATH=. streamlit run app.py
"""

from __future__ import annotations

import contextlib
import io

import streamlit as st

from src.analysis.plotly_chart import build_outcome_figure
from src.analysis.report import (
    build_result_frame,
    format_elapsed,
    format_hand,
    format_percent,
    print_calculation_result,
    print_settings,
)
from src.engine.errors import CrackerError
from src.engine.hand import Hand
from src.engine.rules import Config, DecisionPolicy
from src.solvers.enumeration import recommend_action, timed_calculate

# ─── Page config ──────────────────────────────────────────────────────────────

st.set_page_config(
    page_title="Blackjack Cracker",
    page_icon="🃏",
    layout="wide",
)


@st.cache_data(show_spinner=False)
def _calculate(dealer_text: str, player_text: str, soft_17: bool, policy_name: str):
    """Parse and calculate once per distinct input (cached for the session)."""
    dealer = Hand.parse(dealer_text)
    player = Hand.parse(player_text)
    config = Config(
        soft_seventeen_dealer_hits_on=soft_17,
        decision_policy=DecisionPolicy[policy_name],
    )
    result, elapsed = timed_calculate(dealer, player, config)
    return dealer, player, config, result, elapsed


# ─── Sidebar controls ─────────────────────────────────────────────────────────

with st.sidebar:
    st.title("🃏 Blackjack Cracker")
    st.markdown("---")

    dealer_text = st.text_input("Dealer cards", value="7", help="e.g. '7' or 'A, K'")
    player_text = st.text_input("Player cards", value="10 6", help="e.g. '10 6' or 'a 5 2'")

    soft_17 = st.checkbox("Dealer hits soft 17", value=True)

    policy_name = st.selectbox(
        "Decision policy",
        options=[p.name for p in DecisionPolicy],
        format_func=lambda name: DecisionPolicy[name].value,
        index=0,
    )

    run_calc = st.button("Calculate", type="primary")

    st.markdown("---")
    st.caption("Exact enumeration over a single 52-card shoe")

# ─── Body ─────────────────────────────────────────────────────────────────────

st.header("Hit or Stand?")

if not run_calc:
    st.info("Enter both hands in the sidebar and press **Calculate**.")
else:
    try:
        with st.spinner("Enumerating every possible draw (low player totals can take a while) …"):
            dealer, player, config, result, elapsed = _calculate(
                dealer_text, player_text, soft_17, policy_name
            )
    except CrackerError as exc:
        st.error(f"Calculation failed: {exc}")
    else:
        st.subheader("Hands")
        st.text(format_hand("DEALER", dealer))
        st.text(format_hand("PLAYER", player))

        action = recommend_action(result, config)
        st.success(f"Recommended: **{action.name}** ({config.decision_policy.value})")

        col1, col2 = st.columns(2)
        for col, label, chance in (
            (col1, "When hit", result.chance_when_hit),
            (col2, "When stand", result.chance_when_stand),
        ):
            col.subheader(label)
            col.metric("Win", format_percent(chance.win))
            col.metric("Draw", format_percent(chance.draw))
            col.metric("Loss", format_percent(chance.loss))

        st.markdown("---")
        st.dataframe(build_result_frame(result), use_container_width=True, hide_index=True)
        st.plotly_chart(build_outcome_figure(result), use_container_width=True)

        st.markdown("---")
        st.subheader("Console report")
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            print_calculation_result(result, elapsed)
            print_settings(config)
        st.code(buf.getvalue(), language=None)
        st.caption(f"Calculated in {format_elapsed(elapsed)}")
