"""
Can't Stop Odds - Aggregate Statistics

Sweeps all 1296 four-die outcomes through the playability classifier and
accumulates bust/safe counts, breakdowns by number of valid pairings and by
move type, and per-column advance counts.

Results depend only on ``(active, completed)`` and are memoised, so hover and
selection events in the UI can ask for them repeatedly at no cost.
"""

import logging
from functools import lru_cache
from typing import Iterable, Mapping

from src.engine.base import (
    COLUMNS,
    ColumnOdds,
    MoveType,
    PairingOption,
    RollStats,
)
from src.engine.outcomes import OutcomeSpace
from src.engine.playability import PlayabilityClassifier
from src.engine.validators import validate_board, validate_column

logger = logging.getLogger(__name__)


@lru_cache(maxsize=512)
def _sweep(active: frozenset[int], completed: frozenset[int]) -> RollStats:
    logger.debug(
        "Enumerating outcomes for active=%s completed=%s",
        sorted(active), sorted(completed),
    )
    classify = PlayabilityClassifier.move_type
    steps_for = PlayabilityClassifier.pairing_steps
    playable = PlayabilityClassifier.playable_columns(active, completed)

    bust_count = 0
    safe_count = 0
    valid_pairing_counts = [0, 0, 0]
    active_only = new_only = active_and_new = mixed = 0
    continues_active = 0
    all_completed = 0
    advance = dict.fromkeys(COLUMNS, 0)
    best_steps_total = 0

    for pairings in OutcomeSpace.pairings():
        valid = 0
        move_types: set[MoveType] = set()
        advanced: set[int] = set()
        best_steps = 0

        for first, second in pairings:
            move = classify(first, second, active, completed)
            if move is None:
                continue
            valid += 1
            move_types.add(move)
            best_steps = max(best_steps, steps_for(first, second, active, completed))
            if first in playable:
                advanced.add(first)
            if second in playable:
                advanced.add(second)

        if valid == 0:
            bust_count += 1
            if all(total in completed for pair in pairings for total in pair):
                all_completed += 1
            continue

        safe_count += 1
        valid_pairing_counts[valid - 1] += 1
        best_steps_total += best_steps

        if MoveType.ADVANCE_AND_START in move_types:
            active_and_new += 1
        elif move_types == {MoveType.ADVANCE_ACTIVE}:
            active_only += 1
        elif move_types == {MoveType.START_NEW}:
            new_only += 1
        else:
            mixed += 1

        if move_types & {MoveType.ADVANCE_ACTIVE, MoveType.ADVANCE_AND_START}:
            continues_active += 1

        for column in advanced:
            advance[column] += 1

    return RollStats(
        total=OutcomeSpace.size(),
        bust_count=bust_count,
        safe_count=safe_count,
        valid_pairing_counts=(
            valid_pairing_counts[0],
            valid_pairing_counts[1],
            valid_pairing_counts[2],
        ),
        active_only_count=active_only,
        new_only_count=new_only,
        active_and_new_count=active_and_new,
        mixed_count=mixed,
        continues_active_count=continues_active,
        all_completed_count=all_completed,
        advance_counts=tuple(advance.items()),
        best_steps_total=best_steps_total,
    )


class AggregateStatistics:
    """
    Exhaustive roll statistics for a board state.

    All methods are class or static methods; the only state is the
    memoisation cache behind ``compute``.
    """

    @classmethod
    def compute(cls, active: Iterable[int], completed: Iterable[int]) -> RollStats:
        """
        Enumerate every outcome for the given board.

        Args:
            active: Columns with a runner this turn (at most 3)
            completed: Columns completed by either player

        Returns:
            RollStats for the next roll

        Raises:
            ValueError: If the board is malformed
        """
        active_set, completed_set = validate_board(active, completed)
        return _sweep(active_set, completed_set)

    @staticmethod
    def cache_clear() -> None:
        _sweep.cache_clear()

    @staticmethod
    def bust_risk(p_bust: float, rolls: int) -> float:
        """Chance of busting at least once within ``rolls`` rolls."""
        if rolls <= 0:
            return 0.0
        return 1.0 - (1.0 - p_bust) ** rolls

    @classmethod
    def bust_risk_projection(cls, p_bust: float, horizon: int = 3) -> tuple[tuple[int, float], ...]:
        """``(rolls, risk)`` for 1..horizon rolls."""
        return tuple((n, cls.bust_risk(p_bust, n)) for n in range(1, horizon + 1))

    @staticmethod
    def completion_probability(steps_remaining: int, p_advance: float, p_bust: float) -> float:
        """
        Approximate chance of topping out a column before busting.

        Treats every future roll as an independent trial with the current
        state's advance and bust probabilities, ignoring rolls that do
        neither: ``(p / (p + q)) ** steps``. This is a stationary
        approximation, not an exact multi-turn probability.
        """
        if steps_remaining <= 0:
            return 1.0
        if p_advance + p_bust <= 0:
            return 0.0
        return (p_advance / (p_advance + p_bust)) ** steps_remaining

    @staticmethod
    def relevant_columns(
        active: Iterable[int],
        pairings: Iterable[PairingOption] = (),
    ) -> tuple[int, ...]:
        """Active columns plus any column a candidate pairing can reach."""
        columns = set(active)
        for option in pairings:
            first, second = option.sums
            if option.sum1_playable:
                columns.add(first)
            if option.sum2_playable:
                columns.add(second)
        return tuple(sorted(columns))

    @classmethod
    def column_odds(
        cls,
        stats: RollStats,
        columns: Iterable[int],
        steps_remaining: Mapping[int, int],
        active: Iterable[int] = (),
    ) -> tuple[ColumnOdds, ...]:
        """
        Advance and completion odds for each requested column.

        Args:
            stats: Statistics of the current board
            columns: Columns to report on
            steps_remaining: Steps each column still needs
            active: Columns currently carrying a runner

        Returns:
            One ColumnOdds per column, sorted by column id
        """
        active_set = frozenset(active)
        p_bust = stats.bust_probability
        odds = []
        for column in sorted(set(columns)):
            validate_column(column)
            p_advance = stats.advance_probability(column)
            steps = steps_remaining.get(column, 0)
            odds.append(ColumnOdds(
                column=column,
                steps_remaining=steps,
                advance_probability=p_advance,
                completion_probability=cls.completion_probability(steps, p_advance, p_bust),
                is_active=column in active_set,
            ))
        return tuple(odds)
