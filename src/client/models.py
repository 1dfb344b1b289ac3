"""
Can't Stop Odds - Game Server Models

Pydantic models that mirror the game server's JSON state. Object keys arrive
as strings ("7") and are coerced to integer column ids on validation.
"""

from pydantic import BaseModel, Field

from src.engine.base import DEFAULT_COLUMN_LENGTHS, BoardSnapshot, PairingOption
from src.engine.playability import PlayabilityClassifier


class PairingPlayability(BaseModel):
    """Per-pairing flags, indexed like ``valid_pairings``."""

    sum1_playable: bool = False
    sum2_playable: bool = False
    needs_choice: bool = False


class GameStateResponse(BaseModel):
    """Mirrors the ``state`` object returned by every game endpoint."""

    current_player: int = 1
    player1_name: str = "Player 1"
    player2_name: str = "Player 2"
    column_lengths: dict[int, int] = Field(
        default_factory=lambda: dict(DEFAULT_COLUMN_LENGTHS)
    )
    player1_permanent: dict[int, int] = Field(default_factory=dict)
    player2_permanent: dict[int, int] = Field(default_factory=dict)
    player1_completed: list[int] = Field(default_factory=list)
    player2_completed: list[int] = Field(default_factory=list)
    temp_progress: dict[int, int] = Field(default_factory=dict)
    active_runners: list[int] = Field(default_factory=list)
    current_dice: list[int] | None = None
    available_pairings: list[tuple[int, int]] = Field(default_factory=list)
    valid_pairings: list[tuple[int, int]] = Field(default_factory=list)
    pairing_playability: list[PairingPlayability] = Field(default_factory=list)
    last_chosen_pairing_index: int | None = None
    is_bust: bool = False
    game_over: bool = False
    winner: int | None = None
    can_undo: bool = False
    can_redo: bool = False

    model_config = {"extra": "ignore"}

    @property
    def all_completed(self) -> frozenset[int]:
        return frozenset(self.player1_completed) | frozenset(self.player2_completed)

    @property
    def awaiting_choice(self) -> bool:
        """A roll is on the table and no pairing has been chosen yet."""
        return (
            self.current_dice is not None
            and bool(self.available_pairings)
            and self.last_chosen_pairing_index is None
            and not self.is_bust
        )

    def valid_pairing_index(self, sums: tuple[int, int]) -> int | None:
        """
        Index of ``sums`` in ``valid_pairings``, or None.

        An entry in the same order wins; a reversed entry is the fallback.
        """
        first, second = sums
        for target in ((first, second), (second, first)):
            for index, pairing in enumerate(self.valid_pairings):
                if tuple(pairing) == target:
                    return index
        return None

    def pairing_options(self) -> tuple[PairingOption, ...]:
        """
        Playability of every available pairing of the current roll.

        Uses the server's flags where it sent them and derives the rest
        from the board.
        """
        if not self.awaiting_choice:
            return ()

        active = frozenset(self.active_runners)
        completed = self.all_completed
        options = []
        for first, second in self.available_pairings:
            index = self.valid_pairing_index((first, second))
            if index is not None and index < len(self.pairing_playability):
                flags = self.pairing_playability[index]
                # Server flags are reported for the valid pairing's own order.
                if self.valid_pairings[index][0] != first:
                    sum1, sum2 = flags.sum2_playable, flags.sum1_playable
                else:
                    sum1, sum2 = flags.sum1_playable, flags.sum2_playable
                options.append(PairingOption(
                    sums=(first, second),
                    sum1_playable=sum1,
                    sum2_playable=sum2,
                    needs_choice=flags.needs_choice,
                ))
            else:
                options.append(
                    PlayabilityClassifier.pairing_option(first, second, active, completed)
                )
        return tuple(options)

    def to_snapshot(self) -> BoardSnapshot:
        """Convert to the engine's read-only snapshot."""
        return BoardSnapshot(
            column_lengths=dict(self.column_lengths),
            permanent=(dict(self.player1_permanent), dict(self.player2_permanent)),
            completed=(frozenset(self.player1_completed), frozenset(self.player2_completed)),
            current_player=self.current_player,
            active_runners=frozenset(self.active_runners),
            temp_progress=dict(self.temp_progress),
            pairings=self.pairing_options(),
        )


class NewGameResponse(BaseModel):
    """Response of ``POST /games``."""

    game_id: str
    state: GameStateResponse

    model_config = {"coerce_numbers_to_str": True}
