"""
Can't Stop Odds - Input Validation Utilities

Provides validation functions for engine inputs. All validators either
return normalized data or raise descriptive ValueError exceptions.
"""

from typing import Iterable, Mapping, Sequence

from src.engine.base import (
    COLUMNS,
    DIE_FACES,
    MAX_COLUMN,
    MAX_RUNNERS,
    MIN_COLUMN,
    NUM_DICE,
    BoardSnapshot,
)


def validate_column(column: int) -> int:
    """
    Validate a single column id.

    Raises:
        ValueError: If the id is not an integer in 2-12
    """
    if isinstance(column, bool) or not isinstance(column, int):
        raise ValueError(f"Column id must be an integer, got {type(column).__name__}.")
    if not (MIN_COLUMN <= column <= MAX_COLUMN):
        raise ValueError(
            f"Column id {column} is out of range. Must be between {MIN_COLUMN} and {MAX_COLUMN}."
        )
    return column


def validate_columns(columns: Iterable[int]) -> frozenset[int]:
    """Validate a collection of column ids and return them as a frozenset."""
    return frozenset(validate_column(c) for c in columns)


def validate_active_runners(active: Iterable[int]) -> frozenset[int]:
    """
    Validate the set of active runner columns.

    Raises:
        ValueError: On duplicate runners, bad ids, or more than 3 runners
    """
    active_list = list(active)
    active_set = validate_columns(active_list)

    if len(active_set) != len(active_list):
        raise ValueError(f"Active runners contain duplicates: {sorted(active_list)}.")

    if len(active_set) > MAX_RUNNERS:
        raise ValueError(
            f"At most {MAX_RUNNERS} active runners allowed, got {len(active_set)}."
        )

    return active_set


def validate_completion_records(
    player1: Iterable[int],
    player2: Iterable[int],
) -> tuple[frozenset[int], frozenset[int]]:
    """
    Validate both players' completed columns.

    Raises:
        ValueError: If a column appears in both players' records
    """
    first = validate_columns(player1)
    second = validate_columns(player2)

    shared = first & second
    if shared:
        raise ValueError(
            f"Columns {sorted(shared)} are marked completed by both players."
        )

    return first, second


def validate_board(
    active: Iterable[int],
    completed: Iterable[int],
) -> tuple[frozenset[int], frozenset[int]]:
    """
    Validate an (active, completed) pair as used by the statistics pass.

    Raises:
        ValueError: If an active runner sits on a completed column
    """
    active_set = validate_active_runners(active)
    completed_set = validate_columns(completed)

    overlap = active_set & completed_set
    if overlap:
        raise ValueError(
            f"Active runners {sorted(overlap)} are on completed columns."
        )

    return active_set, completed_set


def validate_temp_progress(
    temp: Mapping[int, int],
    active: frozenset[int],
) -> dict[int, int]:
    """
    Validate this turn's uncommitted progress.

    Raises:
        ValueError: On negative steps or progress on a non-active column
    """
    normalized: dict[int, int] = {}
    for column, steps in temp.items():
        validate_column(column)
        if isinstance(steps, bool) or not isinstance(steps, int):
            raise ValueError(
                f"Temp progress for column {column} must be an integer, got {type(steps).__name__}."
            )
        if steps < 0:
            raise ValueError(f"Temp progress for column {column} cannot be negative, got {steps}.")
        if column not in active:
            raise ValueError(f"Temp progress on column {column} without an active runner.")
        normalized[column] = steps
    return normalized


def validate_dice_values(values: Sequence[int]) -> tuple[int, ...]:
    """
    Validate a four-die roll.

    Raises:
        ValueError: If there are not exactly 4 dice or a value is out of range
    """
    values_tuple = tuple(values)
    if len(values_tuple) != NUM_DICE:
        raise ValueError(f"Exactly {NUM_DICE} dice required, got {len(values_tuple)}.")

    for i, value in enumerate(values_tuple):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"Die value at index {i} must be an integer, got {type(value).__name__}.")
        if not (1 <= value <= DIE_FACES):
            raise ValueError(
                f"Die value at index {i} is {value}, must be between 1 and {DIE_FACES}."
            )

    return values_tuple


def validate_player(player: int) -> int:
    """Validate the current player number (1 or 2)."""
    if player not in (1, 2):
        raise ValueError(f"Current player must be 1 or 2, got {player}.")
    return player


def validate_column_lengths(lengths: Mapping[int, int]) -> dict[int, int]:
    """
    Validate the board's column lengths.

    Raises:
        ValueError: On a bad column id, a missing column, or a non-positive length
    """
    normalized: dict[int, int] = {}
    for column, length in lengths.items():
        validate_column(column)
        if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
            raise ValueError(
                f"Length of column {column} must be a positive integer, got {length!r}."
            )
        normalized[column] = length

    missing = sorted(set(COLUMNS) - set(normalized))
    if missing:
        raise ValueError(f"Column lengths missing for columns {missing}.")
    return normalized


def validate_permanent_progress(
    progress: Mapping[int, int],
    lengths: Mapping[int, int],
    player: int,
) -> dict[int, int]:
    """
    Validate one player's confirmed progress against the column lengths.

    Raises:
        ValueError: On a bad column id or progress outside 0..length
    """
    normalized: dict[int, int] = {}
    for column, steps in progress.items():
        validate_column(column)
        if isinstance(steps, bool) or not isinstance(steps, int):
            raise ValueError(
                f"Player {player} progress on column {column} must be an integer, "
                f"got {type(steps).__name__}."
            )
        if not (0 <= steps <= lengths[column]):
            raise ValueError(
                f"Player {player} progress on column {column} is {steps}, "
                f"must be between 0 and {lengths[column]}."
            )
        normalized[column] = steps
    return normalized


def validate_snapshot(snapshot: BoardSnapshot) -> None:
    """
    Validate every part of a board snapshot before analysis.

    Raises:
        ValueError: If any column id, length, progress value, runner or
            pairing sum is malformed
    """
    validate_player(snapshot.current_player)
    lengths = validate_column_lengths(snapshot.column_lengths)
    for player, progress in enumerate(snapshot.permanent, start=1):
        validate_permanent_progress(progress, lengths, player)
    first, second = validate_completion_records(*snapshot.completed)
    validate_board(snapshot.active_runners, first | second)
    validate_temp_progress(snapshot.temp_progress, frozenset(snapshot.active_runners))
    for option in snapshot.pairings:
        for total in option.sums:
            validate_column(total)
