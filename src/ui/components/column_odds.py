"""Column odds table — advance and completion chances per relevant column."""

from __future__ import annotations

import streamlit as st

from src.engine.base import ColumnOdds
from src.ui.components.probability_panel import format_percent


def column_odds_rows(odds: tuple[ColumnOdds, ...]) -> list[dict[str, str | int]]:
    """Table rows for ``st.table``."""
    return [
        {
            "Column": entry.column,
            "Runner": "yes" if entry.is_active else "",
            "Steps left": entry.steps_remaining,
            "Advance": format_percent(entry.advance_probability),
            "Complete": format_percent(entry.completion_probability),
        }
        for entry in odds
    ]


def render_column_odds(odds: tuple[ColumnOdds, ...]) -> None:
    """Render the column odds table, or nothing when no column is relevant."""
    if not odds:
        return
    st.markdown("**Column odds**")
    st.table(column_odds_rows(odds))
    st.caption("Completion assumes every future roll has today's odds.")
