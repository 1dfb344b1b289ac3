"""
Can't Stop Odds - Engine Base Classes

This module defines the foundational data structures used throughout the
probability engine. All classes are immutable (frozen dataclasses) so results
can be memoised and shared between callers without copying.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

MIN_COLUMN = 2
MAX_COLUMN = 12
COLUMNS: tuple[int, ...] = tuple(range(MIN_COLUMN, MAX_COLUMN + 1))
MAX_RUNNERS = 3
NUM_DICE = 4
DIE_FACES = 6
TOTAL_OUTCOMES = DIE_FACES ** NUM_DICE  # 1296

# Steps needed to claim each column on the standard board.
DEFAULT_COLUMN_LENGTHS: dict[int, int] = {
    2: 3,
    3: 5,
    4: 7,
    5: 9,
    6: 11,
    7: 13,
    8: 11,
    9: 9,
    10: 7,
    11: 5,
    12: 3,
}


class MoveType(Enum):
    """What a valid pairing does to the runners on the board."""
    ADVANCE_ACTIVE = "advance_active"
    START_NEW = "start_new"
    ADVANCE_AND_START = "advance_and_start"


@dataclass(frozen=True)
class PairingOption:
    """
    One way of splitting the current roll into two sums.

    Attributes:
        sums: The two column sums (first pair, second pair)
        sum1_playable: Whether the first sum can be placed on its own
        sum2_playable: Whether the second sum can be placed on its own
        needs_choice: Both sums are playable alone but not together,
            so the player has to pick one
    """
    sums: tuple[int, int]
    sum1_playable: bool
    sum2_playable: bool
    needs_choice: bool = False

    @property
    def is_valid(self) -> bool:
        """Returns True if at least one sum can be played."""
        return self.sum1_playable or self.sum2_playable

    def choices(self) -> tuple[tuple[int, ...], ...]:
        """Concrete column sets the player can lock in with this pairing."""
        first, second = self.sums
        if self.needs_choice:
            return ((first,), (second,))
        if self.sum1_playable and self.sum2_playable:
            return ((first, second),)
        if self.sum1_playable:
            return ((first,),)
        if self.sum2_playable:
            return ((second,),)
        return ()


@dataclass(frozen=True)
class BoardSnapshot:
    """
    Read-only view of the game state the engine consumes.

    Attributes:
        column_lengths: Steps required to complete each column
        permanent: Confirmed progress per player (index 0 = player 1)
        completed: Completed column ids per player (index 0 = player 1)
        current_player: 1 or 2
        active_runners: Columns being advanced this turn (max 3)
        temp_progress: Uncommitted steps gained this turn
        pairings: Pairings available from the current roll, if any
    """
    column_lengths: Mapping[int, int] = field(
        default_factory=lambda: dict(DEFAULT_COLUMN_LENGTHS)
    )
    permanent: tuple[Mapping[int, int], Mapping[int, int]] = field(
        default_factory=lambda: ({}, {})
    )
    completed: tuple[frozenset[int], frozenset[int]] = field(
        default_factory=lambda: (frozenset(), frozenset())
    )
    current_player: int = 1
    active_runners: frozenset[int] = field(default_factory=frozenset)
    temp_progress: Mapping[int, int] = field(default_factory=dict)
    pairings: tuple[PairingOption, ...] = field(default_factory=tuple)

    @property
    def all_completed(self) -> frozenset[int]:
        """Columns completed by either player; unavailable to both."""
        return self.completed[0] | self.completed[1]

    @property
    def current_permanent(self) -> Mapping[int, int]:
        """Confirmed progress of the player whose turn it is."""
        return self.permanent[self.current_player - 1]

    @property
    def at_risk(self) -> int:
        """Uncommitted steps lost on a bust."""
        return sum(self.temp_progress.values())

    def steps_remaining(self, column: int) -> int:
        """Steps the current player still needs to top out a column."""
        length = self.column_lengths[column]
        progress = self.current_permanent.get(column, 0) + self.temp_progress.get(column, 0)
        return max(0, length - progress)


@dataclass(frozen=True)
class RollStats:
    """
    Aggregate counts over every four-die outcome for one board state.

    All counts are out of ``total`` (1296). Breakdown counts are out of
    ``safe_count``.
    """
    total: int
    bust_count: int
    safe_count: int
    valid_pairing_counts: tuple[int, int, int]
    active_only_count: int
    new_only_count: int
    active_and_new_count: int
    mixed_count: int
    continues_active_count: int
    all_completed_count: int
    advance_counts: tuple[tuple[int, int], ...]
    best_steps_total: int

    @property
    def bust_probability(self) -> float:
        return self.bust_count / self.total if self.total else 0.0

    @property
    def safe_probability(self) -> float:
        return self.safe_count / self.total if self.total else 0.0

    @property
    def continues_active_probability(self) -> float:
        return self.continues_active_count / self.total if self.total else 0.0

    @property
    def all_completed_probability(self) -> float:
        return self.all_completed_count / self.total if self.total else 0.0

    def share_of_safe(self, count: int) -> float:
        """Fraction of safe outcomes represented by ``count``."""
        if self.safe_count > 0:
            return count / self.safe_count
        return 0.0

    def advance_count(self, column: int) -> int:
        """Outcomes in which some pairing can advance ``column``."""
        return dict(self.advance_counts).get(column, 0)

    def advance_probability(self, column: int) -> float:
        return self.advance_count(column) / self.total if self.total else 0.0


@dataclass(frozen=True)
class ColumnOdds:
    """
    Per-column outlook for the current turn.

    Attributes:
        column: Column id
        steps_remaining: Steps still needed to top out the column
        advance_probability: Chance the next roll can advance it
        completion_probability: Stationary estimate of reaching the top
            before busting
        is_active: Whether a runner is already on the column
    """
    column: int
    steps_remaining: int
    advance_probability: float
    completion_probability: float
    is_active: bool = False


@dataclass(frozen=True)
class ExpectedValue:
    """
    Expected net step gain of rolling again.

    Attributes:
        ev: p_safe * expected_gain - p_bust * at_risk
        at_risk: Uncommitted steps lost on a bust (U)
        expected_gain: Expected steps gained given a safe roll (Q)
        p_safe: Probability the next roll has a valid pairing
        p_bust: Probability the next roll busts
        gain_is_estimate: Q is the fixed first-roll heuristic rather than
            an enumerated value
    """
    ev: float
    at_risk: int
    expected_gain: float
    p_safe: float
    p_bust: float
    gain_is_estimate: bool = False

    @property
    def favours_rolling(self) -> bool:
        return self.ev > 0


@dataclass(frozen=True)
class ChoiceEV:
    """
    Expected value after tentatively locking in one concrete choice.

    Attributes:
        pairing_index: Index of the pairing in the available pairings
        sums: The pairing's two sums
        columns: Columns advanced by this choice (one entry per step)
        value: Expected value evaluated on the resulting state
    """
    pairing_index: int
    sums: tuple[int, int]
    columns: tuple[int, ...]
    value: ExpectedValue


@dataclass(frozen=True)
class TurnAnalysis:
    """Everything the presentation layer needs for one board state."""
    stats: RollStats
    bust_risk: tuple[tuple[int, float], ...]
    available_columns: frozenset[int]
    locked_columns: frozenset[int]
    column_odds: tuple[ColumnOdds, ...]
    expected_value: ExpectedValue
    choices: tuple[ChoiceEV, ...] = ()
