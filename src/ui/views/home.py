"""Home page — title, rules, new game."""

from __future__ import annotations

import streamlit as st

from src.client.api import GameApiClient, GameApiError


def _start_game(player1_name: str, player2_name: str) -> None:
    try:
        with GameApiClient.from_settings() as client:
            created = client.create_game(player1_name, player2_name)
    except GameApiError as exc:
        st.error(f"Could not start a game: {exc}")
        return

    st.session_state["game_id"] = created.game_id
    st.session_state["game_state"] = created.state
    st.session_state["page"] = "game"
    st.rerun()


def render_home_page() -> None:
    """Render the home / landing page."""
    st.title("Can't Stop")
    st.caption("Push your luck up the columns, with the odds in view")

    with st.form("new_game"):
        cols = st.columns(2)
        player1_name = cols[0].text_input("Player 1", value="Player 1", max_chars=30)
        player2_name = cols[1].text_input("Player 2", value="Player 2", max_chars=30)
        if st.form_submit_button("New Game", type="primary", use_container_width=True):
            _start_game(player1_name.strip() or "Player 1", player2_name.strip() or "Player 2")

    st.divider()

    with st.expander("Can't Stop — Rules"):
        st.markdown(
            """
**First to claim three columns wins!**

- Roll **four dice** and split them into two pairs; each pair's sum is a column (2-12)
- Advance a runner on each sum you can play; at most **3 runners** per turn
- **Stop** to turn your runners into permanent progress
- **Bust** = no pairing has a playable sum; this turn's progress is lost
- A column topped out by either player is closed to both
"""
        )
