"""
Actions that agents return and the episode loop applies to the board.
"""
from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from threes.utils.constants import DIRECTION_NAMES, ILLEGAL, tile_value

if TYPE_CHECKING:
    from threes.game.board import Board

SLIDE = "slide"
PLACE = "place"


@dataclass(frozen=True)
class Action:
    """
    A slide (by the player) or a placement (by the environment).

    Use the `slide` and `place` constructors rather than building one directly.
    """
    kind: str
    direction: Optional[int] = None
    pos: Optional[int] = None
    tile: Optional[int] = None
    hint: Optional[int] = None

    @classmethod
    def slide(cls, direction: int) -> 'Action':
        return cls(kind=SLIDE, direction=direction)

    @classmethod
    def place(cls, pos: int, tile: int, hint: int) -> 'Action':
        return cls(kind=PLACE, pos=pos, tile=tile, hint=hint)

    def apply(self, board: 'Board') -> int:
        """
        Apply the action to the board in place.

        Returns:
            The reward, or ILLEGAL if the action had no effect
        """
        if self.kind == SLIDE:
            return board.slide(self.direction)
        if self.kind == PLACE:
            return board.place(self.pos, self.tile, self.hint)
        return ILLEGAL

    def __str__(self) -> str:
        if self.kind == SLIDE:
            return DIRECTION_NAMES[self.direction]
        return f"{self.pos:X}{tile_value(self.tile)}+{tile_value(self.hint)}"
