"""Turn control buttons — Roll, Stop, Continue."""

from __future__ import annotations

import streamlit as st

from src.client.models import GameStateResponse


def render_turn_controls(state: GameStateResponse) -> str | None:
    """Render contextual turn-action buttons.

    Returns:
        ``"roll"``, ``"stop"``, ``"continue"``, or ``None`` if no action taken.
    """
    if state.game_over:
        return None

    # --- Bust state ---
    if state.is_bust:
        if st.button("Continue (bust)", key="btn_continue", use_container_width=True):
            return "continue"
        return None

    has_dice = state.current_dice is not None
    has_chosen = state.last_chosen_pairing_index is not None
    can_act = not has_dice or has_chosen

    cols = st.columns(2)

    with cols[0]:
        if st.button(
            "Roll Dice",
            key="btn_roll",
            use_container_width=True,
            disabled=not can_act,
            type="primary",
        ):
            return "roll"

    with cols[1]:
        can_stop = can_act and bool(state.temp_progress)
        if st.button(
            "Stop",
            key="btn_stop",
            use_container_width=True,
            disabled=not can_stop,
        ):
            return "stop"

    return None
