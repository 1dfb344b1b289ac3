"""
Can't Stop Odds - Expected Value Model

Scores the decision to roll again:

    EV = P(safe) * Q - P(bust) * U

where U is the uncommitted progress lost on a bust and Q is the expected
number of steps gained on a safe roll. Conditional EVs for the choices of
the current roll are the same formula evaluated on the state each choice
would produce, one level deep.
"""

import logging
from functools import lru_cache
from typing import ClassVar, Iterable, Mapping, Sequence

from src.engine.base import MAX_RUNNERS, ChoiceEV, ExpectedValue, PairingOption
from src.engine.statistics import AggregateStatistics
from src.engine.validators import validate_board, validate_temp_progress

logger = logging.getLogger(__name__)


@lru_cache(maxsize=512)
def _evaluate(
    active: frozenset[int],
    temp: tuple[tuple[int, int], ...],
    completed: frozenset[int],
    first_roll_gain: float,
) -> ExpectedValue:
    stats = AggregateStatistics.compute(active, completed)
    at_risk = sum(steps for _, steps in temp)

    if not active:
        # No runners yet: use the fixed first-roll estimate.
        expected_gain = first_roll_gain
        estimated = True
    elif stats.safe_count > 0:
        expected_gain = stats.best_steps_total / stats.safe_count
        estimated = False
    else:
        expected_gain = 0.0
        estimated = False

    p_safe = stats.safe_probability
    p_bust = stats.bust_probability
    ev = p_safe * expected_gain - p_bust * at_risk
    logger.debug(
        "EV for active=%s temp=%s: %.4f (Q=%.4f, U=%d)",
        sorted(active), dict(temp), ev, expected_gain, at_risk,
    )
    return ExpectedValue(
        ev=ev,
        at_risk=at_risk,
        expected_gain=expected_gain,
        p_safe=p_safe,
        p_bust=p_bust,
        gain_is_estimate=estimated,
    )


class ExpectedValueModel:
    """Stateless EV calculations on top of AggregateStatistics."""

    FIRST_ROLL_GAIN: ClassVar[float] = 2.0

    @classmethod
    def evaluate(
        cls,
        active: Iterable[int],
        temp: Mapping[int, int],
        completed: Iterable[int],
    ) -> ExpectedValue:
        """
        Expected value of rolling again from the given state.

        Args:
            active: Columns with a runner this turn
            temp: Uncommitted steps per active column
            completed: Columns completed by either player

        Returns:
            ExpectedValue record

        Raises:
            ValueError: If the state is malformed
        """
        active_set, completed_set = validate_board(active, completed)
        temp_map = validate_temp_progress(temp, active_set)
        return _evaluate(
            active_set,
            tuple(sorted(temp_map.items())),
            completed_set,
            cls.FIRST_ROLL_GAIN,
        )

    @staticmethod
    def hypothetical_state(
        active: Iterable[int],
        temp: Mapping[int, int],
        columns: Sequence[int],
    ) -> tuple[frozenset[int], dict[int, int]]:
        """
        State after placing one step on each of ``columns``.

        A column listed twice (a doubled sum) gains two steps but only
        one runner.

        Raises:
            ValueError: If the choice would need more than 3 runners
        """
        next_active = frozenset(active) | frozenset(columns)
        if len(next_active) > MAX_RUNNERS:
            raise ValueError(
                f"Choice {tuple(columns)} needs {len(next_active)} runners; "
                f"at most {MAX_RUNNERS} allowed."
            )
        next_temp = dict(temp)
        for column in columns:
            next_temp[column] = next_temp.get(column, 0) + 1
        return next_active, next_temp

    @classmethod
    def evaluate_choice(
        cls,
        active: Iterable[int],
        temp: Mapping[int, int],
        completed: Iterable[int],
        columns: Sequence[int],
    ) -> ExpectedValue:
        """EV of rolling again after tentatively locking in ``columns``."""
        next_active, next_temp = cls.hypothetical_state(active, temp, columns)
        return cls.evaluate(next_active, next_temp, completed)

    @classmethod
    def evaluate_choices(
        cls,
        active: Iterable[int],
        temp: Mapping[int, int],
        completed: Iterable[int],
        pairings: Sequence[PairingOption],
    ) -> tuple[ChoiceEV, ...]:
        """
        Conditional EV for every concrete choice of the current roll.

        Returns:
            At most six ChoiceEV records (three pairings, up to two
            choices each), in pairing order
        """
        active_set = frozenset(active)
        completed_set = frozenset(completed)
        results = []
        for index, option in enumerate(pairings):
            for columns in option.choices():
                results.append(ChoiceEV(
                    pairing_index=index,
                    sums=option.sums,
                    columns=columns,
                    value=cls.evaluate_choice(active_set, temp, completed_set, columns),
                ))
        return tuple(results)

    @staticmethod
    def cache_clear() -> None:
        _evaluate.cache_clear()
