"""Game page — board, turn controls, and the odds panel."""

from __future__ import annotations

import logging

import streamlit as st

from src.client.api import GameApiClient, GameApiError
from src.client.models import GameStateResponse
from src.config.settings import get_settings
from src.engine.analysis import TurnAnalyzer
from src.engine.base import TurnAnalysis
from src.ui.components.board import render_board
from src.ui.components.choice_odds import describe_ev, render_choice_odds
from src.ui.components.column_odds import render_column_odds
from src.ui.components.probability_panel import render_probability_panel
from src.ui.components.turn_controls import render_turn_controls

logger = logging.getLogger(__name__)


def _apply(action: str, game_id: str, *args) -> None:
    """Send an action to the server and store the returned state."""
    try:
        with GameApiClient.from_settings() as client:
            new_state = getattr(client, action)(game_id, *args)
    except GameApiError as exc:
        # Keep the last good state on screen.
        st.error(f"Game server error: {exc}")
        return
    st.session_state["game_state"] = new_state
    st.rerun()


def _render_odds(state: GameStateResponse) -> TurnAnalysis | None:
    try:
        analysis = TurnAnalyzer.analyze(
            state.to_snapshot(),
            risk_horizon=get_settings().risk_horizon,
        )
    except ValueError as exc:
        logger.exception("Rejected game state from server")
        st.error(f"Cannot analyze this game state: {exc}")
        return None

    st.markdown("### Odds")
    render_probability_panel(analysis, state.active_runners)
    st.caption(f"Roll again: {describe_ev(analysis.expected_value)}")
    render_column_odds(analysis.column_odds)
    return analysis


def render_game_page() -> None:
    """Render the main game page."""
    ss = st.session_state
    game_id = ss.get("game_id")
    state: GameStateResponse | None = ss.get("game_state")

    if not game_id or state is None:
        ss["page"] = "home"
        st.rerun()
        return

    if state.game_over:
        winner = state.player1_name if state.winner == 1 else state.player2_name
        st.success(f"{winner} wins!")
        if st.button("New Game", key="btn_new_game", type="primary"):
            ss.pop("game_id", None)
            ss.pop("game_state", None)
            ss["page"] = "home"
            st.rerun()
        render_board(state)
        return

    game_col, odds_col = st.columns([3, 2])

    with odds_col:
        analysis = _render_odds(state)

    with game_col:
        render_board(state)

        if state.is_bust:
            st.error("BUST! No pairing can be played — this turn's progress is lost.")

        if analysis is not None and state.awaiting_choice:
            picked = render_choice_odds(analysis.choices, state)
            if picked is not None:
                _apply("choose", game_id, *picked)

        action = render_turn_controls(state)
        if action == "roll":
            _apply("roll", game_id)
        elif action == "stop":
            _apply("stop", game_id)
        elif action == "continue":
            _apply("continue_turn", game_id)

        cols = st.columns(2)
        if cols[0].button("Undo", key="btn_undo", disabled=not state.can_undo, use_container_width=True):
            _apply("undo", game_id)
        if cols[1].button("Redo", key="btn_redo", disabled=not state.can_redo, use_container_width=True):
            _apply("redo", game_id)
