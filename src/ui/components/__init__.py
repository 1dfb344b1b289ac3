"""UI components for Can't Stop Odds."""

from src.ui.components.board import render_board
from src.ui.components.choice_odds import render_choice_odds
from src.ui.components.column_odds import render_column_odds
from src.ui.components.probability_panel import render_probability_panel
from src.ui.components.turn_controls import render_turn_controls

__all__ = [
    "render_board",
    "render_choice_odds",
    "render_column_odds",
    "render_probability_panel",
    "render_turn_controls",
]
