"""
Can't Stop Odds - Playability Classifier Tests
"""

import pytest

from src.engine.base import MoveType
from src.engine.playability import PlayabilityClassifier

EMPTY = frozenset()


class TestIsPlayable:
    """Tests for PlayabilityClassifier.is_playable()."""

    @pytest.mark.parametrize("total", range(2, 13))
    def test_everything_playable_on_empty_board(self, total):
        assert PlayabilityClassifier.is_playable(total, EMPTY, EMPTY) is True

    def test_completed_column_not_playable(self):
        assert PlayabilityClassifier.is_playable(7, EMPTY, frozenset({7})) is False

    def test_active_column_playable_with_full_slots(self):
        active = frozenset({4, 7, 10})
        assert PlayabilityClassifier.is_playable(7, active, EMPTY) is True

    def test_new_column_blocked_with_full_slots(self):
        active = frozenset({4, 7, 10})
        assert PlayabilityClassifier.is_playable(8, active, EMPTY) is False

    def test_new_column_allowed_with_free_slot(self):
        active = frozenset({4, 7})
        assert PlayabilityClassifier.is_playable(8, active, EMPTY) is True


class TestColumnSets:
    """Tests for playable_columns() and locked_columns()."""

    def test_playable_columns_empty_board(self):
        assert PlayabilityClassifier.playable_columns(EMPTY, EMPTY) == frozenset(range(2, 13))

    def test_playable_columns_full_slots(self):
        active = frozenset({6, 7, 8})
        completed = frozenset({2, 12})
        assert PlayabilityClassifier.playable_columns(active, completed) == active

    def test_locked_columns_need_three_runners(self):
        assert PlayabilityClassifier.locked_columns(frozenset({6, 7}), EMPTY) == frozenset()

    def test_locked_columns_exclude_completed(self):
        locked = PlayabilityClassifier.locked_columns(frozenset({6, 7, 8}), frozenset({2, 12}))
        assert locked == frozenset({3, 4, 5, 9, 10, 11})


class TestPairingSteps:
    """Tests for PlayabilityClassifier.pairing_steps()."""

    def test_two_new_columns_with_free_slots(self):
        assert PlayabilityClassifier.pairing_steps(4, 10, EMPTY, EMPTY) == 2

    def test_two_new_columns_with_one_slot(self):
        assert PlayabilityClassifier.pairing_steps(4, 10, frozenset({5, 9}), EMPTY) == 1

    def test_doubled_new_sum_with_one_slot(self):
        assert PlayabilityClassifier.pairing_steps(7, 7, frozenset({5, 9}), EMPTY) == 2

    def test_active_and_new_with_one_slot(self):
        assert PlayabilityClassifier.pairing_steps(5, 10, frozenset({5, 9}), EMPTY) == 2

    def test_order_does_not_matter(self):
        active = frozenset({5, 9})
        assert PlayabilityClassifier.pairing_steps(10, 5, active, EMPTY) == 2

    def test_one_sum_completed(self):
        assert PlayabilityClassifier.pairing_steps(4, 10, EMPTY, frozenset({10})) == 1

    def test_nothing_playable(self):
        active = frozenset({6, 7, 8})
        assert PlayabilityClassifier.pairing_steps(4, 10, active, EMPTY) == 0


class TestMoveType:
    """Tests for PlayabilityClassifier.move_type()."""

    def test_invalid_pairing(self):
        assert PlayabilityClassifier.move_type(4, 10, frozenset({6, 7, 8}), EMPTY) is None

    def test_advance_active(self):
        result = PlayabilityClassifier.move_type(6, 8, frozenset({6, 7, 8}), EMPTY)
        assert result == MoveType.ADVANCE_ACTIVE

    def test_advance_active_ignores_unplayable_sum(self):
        result = PlayabilityClassifier.move_type(6, 10, frozenset({6, 7, 8}), EMPTY)
        assert result == MoveType.ADVANCE_ACTIVE

    def test_start_new(self):
        assert PlayabilityClassifier.move_type(4, 10, EMPTY, EMPTY) == MoveType.START_NEW

    def test_advance_and_start(self):
        result = PlayabilityClassifier.move_type(5, 10, frozenset({5}), EMPTY)
        assert result == MoveType.ADVANCE_AND_START


class TestPairingOption:
    """Tests for PlayabilityClassifier.pairing_option()."""

    def test_needs_choice_when_one_slot_left(self):
        option = PlayabilityClassifier.pairing_option(4, 10, frozenset({5, 9}), EMPTY)
        assert option.sum1_playable and option.sum2_playable
        assert option.needs_choice is True
        assert option.choices() == ((4,), (10,))

    def test_no_choice_for_doubled_sum(self):
        option = PlayabilityClassifier.pairing_option(7, 7, frozenset({5, 9}), EMPTY)
        assert option.needs_choice is False
        assert option.choices() == ((7, 7),)

    def test_single_playable_sum(self):
        option = PlayabilityClassifier.pairing_option(6, 10, frozenset({6, 7, 8}), EMPTY)
        assert option.sum1_playable is True
        assert option.sum2_playable is False
        assert option.choices() == ((6,),)

    def test_invalid_pairing_has_no_choices(self):
        option = PlayabilityClassifier.pairing_option(4, 10, frozenset({6, 7, 8}), EMPTY)
        assert option.is_valid is False
        assert option.choices() == ()
