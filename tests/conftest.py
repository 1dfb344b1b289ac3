"""
Can't Stop Odds - Test Configuration and Fixtures

Common fixtures and test data for all test modules.
"""

from itertools import product
from typing import Any

import pytest

from src.engine.expected_value import ExpectedValueModel
from src.engine.statistics import AggregateStatistics


def _count_busts(active: set[int], completed: set[int]) -> int:
    def playable(total: int) -> bool:
        return total not in completed and (total in active or len(active) < 3)

    busts = 0
    for dice in product(range(1, 7), repeat=4):
        safe = False
        for i, j in ((0, 1), (0, 2), (0, 3)):
            rest = [k for k in range(4) if k not in (i, j)]
            if playable(dice[i] + dice[j]) or playable(dice[rest[0]] + dice[rest[1]]):
                safe = True
                break
        if not safe:
            busts += 1
    return busts


@pytest.fixture
def brute_force_bust_count():
    """Independent bust counter: every ordered roll, every way to pair the dice."""
    return _count_busts


@pytest.fixture(autouse=True)
def _clear_engine_caches():
    """Each test starts with cold memoisation caches."""
    AggregateStatistics.cache_clear()
    ExpectedValueModel.cache_clear()
    yield
    AggregateStatistics.cache_clear()
    ExpectedValueModel.cache_clear()


# =============================================================================
# BOARD STATES
# =============================================================================

@pytest.fixture
def saturated_board() -> tuple[frozenset[int], frozenset[int]]:
    """Three runners on 6, 7, 8 with every other column completed."""
    return frozenset({6, 7, 8}), frozenset({2, 3, 4, 5, 9, 10, 11, 12})


@pytest.fixture
def board_states() -> list[tuple[set[int], set[int]]]:
    """A spread of (active, completed) states."""
    return [
        (set(), set()),
        ({7}, set()),
        ({5}, set()),
        ({2, 12}, set()),
        ({6, 7, 8}, set()),
        ({2, 3, 12}, set()),
        ({4, 10}, {7}),
        ({6, 8}, {2, 3, 11, 12}),
        ({6, 7, 8}, {2, 3, 4, 5, 9, 10, 11, 12}),
        (set(), {5, 6, 7, 8, 9}),
        ({2, 3, 4}, {10, 11, 12}),
    ]


# =============================================================================
# SERVER STATE FIXTURES
# =============================================================================

@pytest.fixture
def server_state() -> dict[str, Any]:
    """Game server JSON for player 1 mid-turn, awaiting a choice."""
    return {
        "current_player": 1,
        "player1_name": "Ada",
        "player2_name": "Grace",
        "column_lengths": {
            "2": 3, "3": 5, "4": 7, "5": 9, "6": 11, "7": 13,
            "8": 11, "9": 9, "10": 7, "11": 5, "12": 3,
        },
        "player1_permanent": {"5": 3, "7": 4},
        "player2_permanent": {"8": 2, "12": 3},
        "player1_completed": [],
        "player2_completed": [12],
        "temp_progress": {"5": 2, "9": 1},
        "active_runners": [5, 9],
        "current_dice": [1, 4, 3, 6],
        "available_pairings": [[5, 9], [4, 10], [7, 7]],
        "valid_pairings": [[5, 9], [4, 10], [7, 7]],
        "pairing_playability": [
            {"sum1_playable": True, "sum2_playable": True, "needs_choice": False},
            {"sum1_playable": True, "sum2_playable": True, "needs_choice": True},
            {"sum1_playable": True, "sum2_playable": True, "needs_choice": False},
        ],
        "last_chosen_pairing_index": None,
        "is_bust": False,
        "game_over": False,
        "winner": None,
        "can_undo": True,
        "can_redo": False,
    }
