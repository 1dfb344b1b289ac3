"""
Can't Stop Odds Engine.

Pure Python probability engine with zero UI/network dependencies.
Computes bust odds, column odds and expected values for the next roll.
"""

from src.engine.base import (
    BoardSnapshot,
    ChoiceEV,
    ColumnOdds,
    ExpectedValue,
    MoveType,
    PairingOption,
    RollStats,
    TurnAnalysis,
)
from src.engine.analysis import TurnAnalyzer
from src.engine.expected_value import ExpectedValueModel
from src.engine.outcomes import OutcomeSpace
from src.engine.playability import PlayabilityClassifier
from src.engine.statistics import AggregateStatistics

__all__ = [
    # Data Classes
    "BoardSnapshot",
    "ChoiceEV",
    "ColumnOdds",
    "ExpectedValue",
    "PairingOption",
    "RollStats",
    "TurnAnalysis",
    # Enums
    "MoveType",
    # Engines
    "OutcomeSpace",
    "PlayabilityClassifier",
    "AggregateStatistics",
    "ExpectedValueModel",
    "TurnAnalyzer",
]
