"""Interactive Plotly figures for calculation results.

Public functions:

    build_outcome_figure(result, title)
        — Grouped bars: win / draw / loss for HIT and STAND.
    build_policy_comparison_figure(results)
        — One panel per decision policy, same grouping as above.
    save_outcome_html(fig, path)
        — Export any figure to a self-contained HTML file.

Hover over any bar to see the action, the outcome and its exact percentage.
"""

from __future__ import annotations

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from src.engine.chance import Chance
from src.engine.rules import DecisionPolicy
from src.solvers.enumeration import CalculationResult

# ─── Constants ────────────────────────────────────────────────────────────────

_ACTIONS: list[str] = ["HIT", "STAND"]

# (label, Chance field, colour)
_OUTCOMES: list[tuple[str, str, str]] = [
    ("Win", "win", "#2ca02c"),
    ("Draw", "draw", "#7f7f7f"),
    ("Loss", "loss", "#d62728"),
]


# ─── Trace builder ─────────────────────────────────────────────────────────────


def _outcome_hover(action: str, label: str, probability: float) -> str:
    return "<br>".join(
        [
            f"Action: <b>{action}</b>",
            f"Outcome: {label}",
            f"Probability: <b>{probability * 100:.2f}%</b>",
        ]
    )


def _make_outcome_traces(
    hit: Chance,
    stand: Chance,
    *,
    showlegend: bool = True,
) -> list[go.Bar]:
    """Build one go.Bar per outcome, each with an x entry per action.

    Args:
        hit:        Triple for hitting now.
        stand:      Triple for standing now.
        showlegend: Whether these traces appear in the legend.

    Returns:
        Three go.Bar traces in win, draw, loss order.
    """
    traces: list[go.Bar] = []
    for label, field, colour in _OUTCOMES:
        values = [getattr(hit, field), getattr(stand, field)]
        traces.append(
            go.Bar(
                x=_ACTIONS,
                y=values,
                name=label,
                marker_color=colour,
                text=[f"{v * 100:.2f}%" for v in values],
                textposition="auto",
                hovertext=[
                    _outcome_hover(action, label, v) for action, v in zip(_ACTIONS, values)
                ],
                hovertemplate="%{hovertext}<extra></extra>",
                legendgroup=label,
                showlegend=showlegend,
            )
        )
    return traces


# ─── Public figure builders ───────────────────────────────────────────────────


def build_outcome_figure(result: CalculationResult, title: str | None = None) -> go.Figure:
    """Build a grouped bar chart of the hit-now and stand-now probabilities.

    Args:
        result: CalculationResult returned by enumeration.calculate().
        title:  Optional figure title.

    Returns:
        go.Figure with three bar traces (win, draw, loss).
    """
    fig = go.Figure()
    for trace in _make_outcome_traces(result.chance_when_hit, result.chance_when_stand):
        fig.add_trace(trace)

    fig.update_layout(
        title_text=title or "Outcome probabilities",
        title_font_size=15,
        barmode="group",
        height=420,
        width=640,
    )
    fig.update_yaxes(title_text="Probability", range=[0.0, 1.0], tickformat=".0%")
    fig.update_xaxes(title_text="Action now")
    return fig


def build_policy_comparison_figure(
    results: dict[DecisionPolicy, CalculationResult],
) -> go.Figure:
    """Build side-by-side outcome panels, one per decision policy.

    Only the HIT bars can differ between panels; standing now never involves
    a player decision.

    Args:
        results: Mapping from policy to the result calculated under it.

    Returns:
        go.Figure with three bar traces per panel.
    """
    policies = list(results)
    fig = make_subplots(
        rows=1,
        cols=len(policies),
        subplot_titles=[p.value for p in policies],
        shared_yaxes=True,
        horizontal_spacing=0.08,
    )

    for col, policy in enumerate(policies, start=1):
        result = results[policy]
        for trace in _make_outcome_traces(
            result.chance_when_hit,
            result.chance_when_stand,
            showlegend=col == 1,
        ):
            fig.add_trace(trace, row=1, col=col)

    fig.update_layout(
        title_text="Outcome probabilities by decision policy",
        title_font_size=15,
        barmode="group",
        height=420,
        width=420 * len(policies),
    )
    fig.update_yaxes(range=[0.0, 1.0], tickformat=".0%")
    fig.update_yaxes(title_text="Probability", col=1)
    fig.update_xaxes(title_text="Action now")
    return fig


# ─── HTML export ───────────────────────────────────────────────────────────────


def save_outcome_html(fig: go.Figure, path: str) -> None:
    """Save a Plotly figure to a self-contained HTML file.

    Plotly JS is loaded from the CDN so the file itself remains compact.
    """
    fig.write_html(path, include_plotlyjs="cdn")


# ─── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    import sys

    from src.engine.hand import Hand
    from src.engine.rules import Config
    from src.solvers.enumeration import calculate

    dealer_text = sys.argv[1] if len(sys.argv) > 1 else "7"
    player_text = sys.argv[2] if len(sys.argv) > 2 else "10 6"
    dealer_hand, player_hand = Hand.parse(dealer_text), Hand.parse(player_text)

    print(f"Calculating dealer=[{dealer_hand}] player=[{player_hand}] for both policies …")
    by_policy = {
        policy: calculate(dealer_hand, player_hand, Config(decision_policy=policy))
        for policy in DecisionPolicy
    }
    save_outcome_html(build_outcome_figure(by_policy[DecisionPolicy.MOST_WIN]), "outcome.html")
    save_outcome_html(build_policy_comparison_figure(by_policy), "policy_comparison.html")
    print("Saved: outcome.html, policy_comparison.html")
