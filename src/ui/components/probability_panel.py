"""
Probability Panel Component

Renders the roll statistics of a TurnAnalysis: bust/safe odds, bust risk over
the next few rolls, and the move-type breakdown. All numbers come from the
engine; this module only formats them.
"""

from __future__ import annotations

import streamlit as st

from src.engine.base import TurnAnalysis


def format_percent(probability: float, digits: int = 1) -> str:
    """Format a 0-1 probability as a percentage string."""
    return f"{probability * 100:.{digits}f}%"


def breakdown_rows(analysis: TurnAnalysis) -> list[tuple[str, str]]:
    """Label/value rows for the breakdown table, shares of safe rolls."""
    stats = analysis.stats
    rows = [
        ("1 valid pairing", format_percent(stats.share_of_safe(stats.valid_pairing_counts[0]))),
        ("2 valid pairings", format_percent(stats.share_of_safe(stats.valid_pairing_counts[1]))),
        ("3 valid pairings", format_percent(stats.share_of_safe(stats.valid_pairing_counts[2]))),
        ("Advances active only", format_percent(stats.share_of_safe(stats.active_only_count))),
        ("Starts new only", format_percent(stats.share_of_safe(stats.new_only_count))),
        ("Advances and starts", format_percent(stats.share_of_safe(stats.active_and_new_count))),
    ]
    if stats.mixed_count:
        rows.append(("Either, by pairing", format_percent(stats.share_of_safe(stats.mixed_count))))
    return rows


def render_probability_panel(analysis: TurnAnalysis, active_runners: list[int]) -> None:
    """Render the main odds panel.

    Args:
        analysis: Engine output for the current board.
        active_runners: Columns carrying a runner, for the caption.
    """
    stats = analysis.stats

    cols = st.columns(2)
    cols[0].metric("Bust", format_percent(stats.bust_probability))
    cols[1].metric("Safe", format_percent(stats.safe_probability))

    st.markdown("**Bust risk**")
    for rolls, risk in analysis.bust_risk:
        label = "Next roll" if rolls == 1 else f"Next {rolls} rolls"
        st.caption(f"{label}: {format_percent(risk, 0)}")

    runners = ", ".join(str(c) for c in sorted(active_runners)) or "None"
    st.caption(
        f"Continues active column ({runners}): "
        f"{format_percent(stats.continues_active_probability)}"
    )
    if stats.all_completed_count:
        st.caption(
            f"Only completed columns rolled: {format_percent(stats.all_completed_probability)}"
        )
    if analysis.locked_columns:
        locked = ", ".join(str(c) for c in sorted(analysis.locked_columns))
        st.caption(f"Locked (need 4th runner): {locked}")

    with st.expander("Breakdown of safe rolls"):
        for label, value in breakdown_rows(analysis):
            st.markdown(f"- {label}: **{value}**")
        st.caption(f"Based on all {stats.total:,} possible 4-dice outcomes.")
