"""Can't Stop Odds — Streamlit Application Entrypoint."""

from __future__ import annotations

import streamlit as st

from src.config.settings import configure_logging


def main() -> None:
    """Application entrypoint. Must call ``st.set_page_config`` first."""
    st.set_page_config(
        page_title="Can't Stop",
        page_icon="🎲",
        layout="wide",
        initial_sidebar_state="collapsed",
    )
    configure_logging()

    # Session state defaults
    if "page" not in st.session_state:
        st.session_state["page"] = "home"

    # Page routing (lazy imports to avoid circular deps)
    page = st.session_state["page"]

    if page == "home":
        from src.ui.views.home import render_home_page
        render_home_page()
    elif page == "game":
        from src.ui.views.game import render_game_page
        render_game_page()
    else:
        st.session_state["page"] = "home"
        st.rerun()


if __name__ == "__main__":
    main()
