"""Choice odds — one button per concrete choice, labelled with its EV."""

from __future__ import annotations

import streamlit as st

from src.client.models import GameStateResponse
from src.engine.base import ChoiceEV, ExpectedValue
from src.ui.components.probability_panel import format_percent


def describe_ev(value: ExpectedValue) -> str:
    """Short EV summary, flagging the first-roll estimate."""
    marker = "~" if value.gain_is_estimate else ""
    return (
        f"EV {value.ev:+.2f} "
        f"(safe {format_percent(value.p_safe, 0)}, "
        f"Q {marker}{value.expected_gain:.2f}, at risk {value.at_risk})"
    )


def choice_label(choice: ChoiceEV) -> str:
    first, second = choice.sums
    played = " + ".join(str(c) for c in choice.columns)
    return f"{first} | {second}  →  play {played}"


def choice_request(
    choice: ChoiceEV,
    state: GameStateResponse,
) -> tuple[int, int | None] | None:
    """
    Arguments for ``GameApiClient.choose`` for a choice.

    Returns:
        ``(valid_pairing_index, chosen_number)``, or None if the server
        does not list the pairing as valid
    """
    index = state.valid_pairing_index(choice.sums)
    if index is None:
        return None
    option = state.pairing_options()[choice.pairing_index]
    chosen_number = choice.columns[0] if option.needs_choice else None
    return index, chosen_number


def render_choice_odds(
    choices: tuple[ChoiceEV, ...],
    state: GameStateResponse,
) -> tuple[int, int | None] | None:
    """Render the choices of the current roll.

    Returns:
        ``(valid_pairing_index, chosen_number)`` of a clicked choice, or
        ``None`` if nothing was clicked.
    """
    if not choices:
        return None

    st.markdown("**Choose your move**")
    picked = None
    for position, choice in enumerate(choices):
        cols = st.columns([2, 3])
        with cols[0]:
            clicked = st.button(
                choice_label(choice),
                key=f"btn_choice_{position}",
                use_container_width=True,
            )
        with cols[1]:
            st.caption(describe_ev(choice.value))
        if clicked:
            picked = choice_request(choice, state)
    return picked
