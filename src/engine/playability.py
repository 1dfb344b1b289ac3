"""
Can't Stop Odds - Playability Classifier

Decides which sums a roll can use. A sum is playable when its column is not
completed by either player and it either already carries a runner or a
runner slot is still free.

All methods are stateless class methods operating on frozensets; they run
thousands of times per statistics pass and only do set membership.
"""

from typing import ClassVar

from src.engine.base import COLUMNS, MAX_RUNNERS, MoveType, PairingOption


class PlayabilityClassifier:
    """Stateless playability rules for a single board state."""

    MAX_RUNNERS: ClassVar[int] = MAX_RUNNERS

    @classmethod
    def is_playable(cls, total: int, active: frozenset[int], completed: frozenset[int]) -> bool:
        """Return True if ``total`` can be placed this roll."""
        if total in completed:
            return False
        return total in active or len(active) < cls.MAX_RUNNERS

    @classmethod
    def playable_columns(cls, active: frozenset[int], completed: frozenset[int]) -> frozenset[int]:
        """All columns a roll could use in this state."""
        return frozenset(c for c in COLUMNS if cls.is_playable(c, active, completed))

    @classmethod
    def locked_columns(cls, active: frozenset[int], completed: frozenset[int]) -> frozenset[int]:
        """Open columns that would need a fourth runner."""
        if len(active) < cls.MAX_RUNNERS:
            return frozenset()
        return frozenset(c for c in COLUMNS if c not in completed and c not in active)

    @classmethod
    def pairing_steps(
        cls,
        first: int,
        second: int,
        active: frozenset[int],
        completed: frozenset[int],
    ) -> int:
        """
        Steps a pairing advances when both sums are placed in turn.

        Placing the first sum may take the last free runner slot, which
        then blocks a second new column. Either order is tried.

        Returns:
            0, 1 or 2
        """
        best = 0
        for a, b in ((first, second), (second, first)):
            if not cls.is_playable(a, active, completed):
                continue
            steps = 1
            if cls.is_playable(b, active | {a}, completed):
                steps = 2
            best = max(best, steps)
            if best == 2:
                break
        return best

    @classmethod
    def move_type(
        cls,
        first: int,
        second: int,
        active: frozenset[int],
        completed: frozenset[int],
    ) -> MoveType | None:
        """
        Classify what a pairing does, or None if it is not valid.

        A pairing whose playable sums all carry runners advances; one whose
        playable sums are all new starts columns; anything else does both.
        """
        playable = [
            total for total in (first, second)
            if cls.is_playable(total, active, completed)
        ]
        if not playable:
            return None
        on_active = [total in active for total in playable]
        if all(on_active):
            return MoveType.ADVANCE_ACTIVE
        if not any(on_active):
            return MoveType.START_NEW
        return MoveType.ADVANCE_AND_START

    @classmethod
    def pairing_option(
        cls,
        first: int,
        second: int,
        active: frozenset[int],
        completed: frozenset[int],
    ) -> PairingOption:
        """Build the playability flags for one pairing of the current roll."""
        sum1_playable = cls.is_playable(first, active, completed)
        sum2_playable = cls.is_playable(second, active, completed)
        needs_choice = (
            sum1_playable
            and sum2_playable
            and cls.pairing_steps(first, second, active, completed) < 2
        )
        return PairingOption(
            sums=(first, second),
            sum1_playable=sum1_playable,
            sum2_playable=sum2_playable,
            needs_choice=needs_choice,
        )
