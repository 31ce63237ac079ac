"""
N-tuple features for Threes! boards.

A feature is an ordered tuple of board cells. Its pattern index packs the rank
found in each cell into a 4-bit field, first cell in the most significant
field:

    | 0 | 1 | 2 | 3 |
    | 4 | 5 | 6 | 7 |
    | 8 | 9 | 10| 11|
    | 12| 13| 14| 15|

A slot may instead hold EMPTY_COUNT (-1), which contributes the number of
empty cells on the board. Every feature is expanded into its orbit under the
eight board symmetries; members of one orbit share a single weight table.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple, TYPE_CHECKING
import numbers

import numpy as np

from threes.utils.constants import (
    NUM_CELLS, EMPTY_COUNT, SLOT_BITS, SLOT_VALUES,
    ROTATE_MATCHING, REFLECT_MATCHING
)

if TYPE_CHECKING:
    from threes.game.board import Board


@dataclass(frozen=True)
class Feature:
    """
    One ordered n-tuple of board cells.

    Construction validates the definition: every slot is a cell in [0, 16) or
    EMPTY_COUNT, and EMPTY_COUNT appears at most once.
    """
    cells: Tuple[int, ...]
    has_empty_count: bool = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        if not tuple(self.cells):
            raise ValueError("Feature needs at least one slot")
        for cell in self.cells:
            if not isinstance(cell, numbers.Integral) or isinstance(cell, (bool, np.bool_)):
                raise ValueError(f"Feature slot must be an int, got {cell!r}")
            if cell != EMPTY_COUNT and not 0 <= cell < NUM_CELLS:
                raise ValueError(f"Feature cell {cell} outside [0, {NUM_CELLS})")
        cells = tuple(int(cell) for cell in self.cells)
        if cells.count(EMPTY_COUNT) > 1:
            raise ValueError(f"Feature {cells} has more than one empty-count slot")
        object.__setattr__(self, 'cells', cells)
        object.__setattr__(self, 'has_empty_count', EMPTY_COUNT in cells)

    def __len__(self) -> int:
        return len(self.cells)

    @property
    def table_size(self) -> int:
        """Number of distinct pattern indices, 16^k for k slots."""
        return SLOT_VALUES ** len(self.cells)

    @property
    def board_cells(self) -> Tuple[int, ...]:
        """The real cells, without the empty-count slot."""
        return tuple(c for c in self.cells if c != EMPTY_COUNT)

    def encode(self, board: 'Board') -> int:
        """
        Pack the contents of the feature's cells into a pattern index.

        The empty count saturates at 15 so it stays inside its field.
        """
        idx = 0
        empty = min(board.empty_count(), SLOT_VALUES - 1) if self.has_empty_count else 0
        for cell in self.cells:
            idx <<= SLOT_BITS
            idx |= empty if cell == EMPTY_COUNT else board[cell]
        return idx

    def canonical_hash(self) -> int:
        """
        Bitmask of the cells used, negated when the empty count is included.

        Only identifies the shape of the feature; two definitions listing the
        same cells in different orders share a hash.
        """
        mask = 0
        for cell in self.board_cells:
            mask |= 1 << cell
        return -mask if self.has_empty_count else mask


def _permute(cells: Iterable[int], matching: Sequence[int]) -> Tuple[int, ...]:
    return tuple(matching[c] for c in cells)


def build_orbit(base: Feature) -> Tuple[Feature, ...]:
    """
    Expand a feature into its distinct images under the board symmetries.

    Collects the identity and three rotations, then the reflection and its
    three rotations. The empty-count slot, if any, is moved to the end of
    every image, the identity included, so slot k means the same thing in
    every member. Images whose canonical hash was already seen are dropped,
    so the identity image always comes first.

    Args:
        base: The feature to expand

    Returns:
        Between 1 and 8 features
    """
    images: List[Tuple[int, ...]] = []
    cells = base.board_cells
    for _ in range(4):
        images.append(cells)
        cells = _permute(cells, ROTATE_MATCHING)
    cells = _permute(cells, REFLECT_MATCHING)
    for _ in range(4):
        images.append(cells)
        cells = _permute(cells, ROTATE_MATCHING)

    suffix = (EMPTY_COUNT,) if base.has_empty_count else ()
    orbit: List[Feature] = []
    seen = set()
    for image in images:
        feature = Feature(image + suffix)
        key = feature.canonical_hash()
        if key in seen:
            continue
        seen.add(key)
        orbit.append(feature)
    return tuple(orbit)


class IsoFeature:
    """
    A feature group: one base feature and its symmetric images.

    All members address the same weight table.
    """

    def __init__(self, base):
        """
        Args:
            base: A Feature, or a sequence of cells to build one from
        """
        self.base = base if isinstance(base, Feature) else Feature(tuple(base))
        self.members: Tuple[Feature, ...] = build_orbit(self.base)

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self):
        return iter(self.members)

    @property
    def table_size(self) -> int:
        return self.base.table_size

    def __repr__(self) -> str:
        return f"IsoFeature(base={self.base.cells}, members={len(self.members)})"


# Named feature sets selectable with tuples=NAME
FEATURE_SETS: Dict[str, Tuple[Tuple[int, ...], ...]] = {
    'six': (
        (0, 1, 2, 3, 4, 5),
        (4, 5, 6, 7, 8, 9),
        (5, 6, 7, 9, 10, 11),
        (9, 10, 11, 13, 14, 15),
    ),
    'row': (
        (0, 1, 2, 3),
        (4, 5, 6, 7),
    ),
    'empty': (
        (6, 7, 9, 10, 11, EMPTY_COUNT),
        (10, 11, 13, 14, 15, EMPTY_COUNT),
    ),
}

DEFAULT_FEATURE_SET = 'six'


def build_feature_groups(definitions: Iterable[Sequence[int]]) -> List[IsoFeature]:
    """Create one IsoFeature per feature definition."""
    return [IsoFeature(Feature(tuple(cells))) for cells in definitions]
