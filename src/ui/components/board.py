"""Board summary — per-column progress for both players."""

from __future__ import annotations

import streamlit as st

from src.client.models import GameStateResponse


def board_rows(state: GameStateResponse) -> list[dict[str, str | int]]:
    """One row per column with both players' progress and this turn's runner."""
    rows = []
    for column in sorted(state.column_lengths):
        length = state.column_lengths[column]
        if column in state.player1_completed:
            status = f"won by {state.player1_name}"
        elif column in state.player2_completed:
            status = f"won by {state.player2_name}"
        elif column in state.active_runners:
            status = "runner"
        else:
            status = ""
        rows.append({
            "Column": column,
            state.player1_name: f"{state.player1_permanent.get(column, 0)}/{length}",
            state.player2_name: f"{state.player2_permanent.get(column, 0)}/{length}",
            "This turn": f"+{state.temp_progress[column]}" if column in state.temp_progress else "",
            "Status": status,
        })
    return rows


def render_board(state: GameStateResponse) -> None:
    """Render the board as a compact table."""
    current = state.player1_name if state.current_player == 1 else state.player2_name
    st.subheader(f"{current}'s Turn")
    if state.current_dice:
        st.markdown("Dice: " + " ".join(f"`{d}`" for d in state.current_dice))
    st.table(board_rows(state))
