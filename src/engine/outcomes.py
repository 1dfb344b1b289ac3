"""
Can't Stop Odds - Outcome Space

The fixed universe of four-die rolls. Every roll splits into two pairs in
exactly three ways, by dice position:

- (d0 + d1, d2 + d3)
- (d0 + d2, d1 + d3)
- (d0 + d3, d1 + d2)

Pairings are positional, so a roll like (3, 3, 4, 4) yields the sums
(6, 8), (7, 7) and (7, 7). The repeated pairing is kept.
"""

from itertools import product
from typing import ClassVar, Iterator, Sequence

from src.engine.base import DIE_FACES, NUM_DICE
from src.engine.validators import validate_dice_values

Pairing = tuple[int, int]
Outcome = tuple[tuple[int, ...], tuple[Pairing, Pairing, Pairing]]


def _pair_up(dice: Sequence[int]) -> tuple[Pairing, Pairing, Pairing]:
    d0, d1, d2, d3 = dice
    return (
        (d0 + d1, d2 + d3),
        (d0 + d2, d1 + d3),
        (d0 + d3, d1 + d2),
    )


class OutcomeSpace:
    """Deterministic enumeration of all 1296 rolls and their pairings."""

    OUTCOMES: ClassVar[tuple[Outcome, ...]] = tuple(
        (dice, _pair_up(dice))
        for dice in product(range(1, DIE_FACES + 1), repeat=NUM_DICE)
    )

    @classmethod
    def size(cls) -> int:
        return len(cls.OUTCOMES)

    @classmethod
    def outcomes(cls) -> Iterator[Outcome]:
        """Iterate ``(dice, pairings)`` in lexicographic dice order."""
        return iter(cls.OUTCOMES)

    @classmethod
    def pairings(cls) -> Iterator[tuple[Pairing, Pairing, Pairing]]:
        """Iterate only the pairings of every outcome."""
        for _, pairings in cls.OUTCOMES:
            yield pairings

    @classmethod
    def pairings_for(cls, dice: Sequence[int]) -> tuple[Pairing, Pairing, Pairing]:
        """
        Pairings of a concrete roll.

        Args:
            dice: Four die values in roll order

        Returns:
            The three positional pairings

        Raises:
            ValueError: If the roll is not four dice in 1-6
        """
        return _pair_up(validate_dice_values(dice))


