"""
Can't Stop Odds - Turn Analyzer

Single entry point for the presentation layer: takes a BoardSnapshot and
returns one TurnAnalysis record with roll statistics, bust-risk projection,
column odds and expected values.
"""

from typing import ClassVar

from src.engine.base import BoardSnapshot, TurnAnalysis
from src.engine.expected_value import ExpectedValueModel
from src.engine.playability import PlayabilityClassifier
from src.engine.statistics import AggregateStatistics
from src.engine.validators import validate_snapshot


class TurnAnalyzer:
    """Stateless facade over the probability engine."""

    RISK_HORIZON: ClassVar[int] = 3

    @classmethod
    def analyze(cls, snapshot: BoardSnapshot, risk_horizon: int | None = None) -> TurnAnalysis:
        """
        Analyze the upcoming roll for the current player.

        Args:
            snapshot: Read-only game state
            risk_horizon: Number of rolls in the bust-risk projection

        Returns:
            TurnAnalysis for the snapshot

        Raises:
            ValueError: If the snapshot is malformed
        """
        validate_snapshot(snapshot)

        active = snapshot.active_runners
        completed = snapshot.all_completed
        horizon = cls.RISK_HORIZON if risk_horizon is None else risk_horizon

        stats = AggregateStatistics.compute(active, completed)
        relevant = AggregateStatistics.relevant_columns(active, snapshot.pairings)
        column_odds = AggregateStatistics.column_odds(
            stats,
            relevant,
            {column: snapshot.steps_remaining(column) for column in relevant},
            active=active,
        )

        return TurnAnalysis(
            stats=stats,
            bust_risk=AggregateStatistics.bust_risk_projection(stats.bust_probability, horizon),
            available_columns=PlayabilityClassifier.playable_columns(active, completed),
            locked_columns=PlayabilityClassifier.locked_columns(active, completed),
            column_odds=column_odds,
            expected_value=ExpectedValueModel.evaluate(active, snapshot.temp_progress, completed),
            choices=ExpectedValueModel.evaluate_choices(
                active, snapshot.temp_progress, completed, snapshot.pairings,
            ),
        )
