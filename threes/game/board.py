"""
Board class for Threes!.
"""
from typing import List, Optional, Sequence, Tuple

from threes.utils.constants import (
    BOARD_SIZE, NUM_CELLS, UP, RIGHT, DOWN, LEFT,
    NO_SLIDE, ILLEGAL, BASIC_TILES, MAX_RANK, tile_score
)
from threes.utils.renderer import ASCIIRenderer


def _slide_lines(direction: int) -> Tuple[Tuple[int, ...], ...]:
    """Cell indices of every line, ordered from the edge tiles slide toward."""
    span = range(BOARD_SIZE)
    if direction == LEFT:
        return tuple(tuple(r * BOARD_SIZE + c for c in span) for r in span)
    if direction == RIGHT:
        return tuple(tuple(r * BOARD_SIZE + c for c in reversed(span)) for r in span)
    if direction == UP:
        return tuple(tuple(r * BOARD_SIZE + c for r in span) for c in span)
    return tuple(tuple(r * BOARD_SIZE + c for r in reversed(span)) for c in span)


SLIDE_LINES = {op: _slide_lines(op) for op in (UP, RIGHT, DOWN, LEFT)}


def _check_rank(rank) -> int:
    rank = int(rank)
    if not 0 <= rank <= MAX_RANK:
        raise ValueError(f"Tile rank {rank} outside [0, {MAX_RANK}]")
    return rank


def merge_rank(hold: int, tile: int) -> int:
    """
    Rank produced by sliding `tile` onto `hold`, or 0 if they do not merge.

    1 and 2 combine into a 3; equal tiles of rank 3 or more combine into the
    next rank. Tiles already at MAX_RANK do not merge.
    """
    if hold == 0 or tile == 0:
        return 0
    if hold + tile == 3 and hold != tile:
        return 3
    if hold == tile and 3 <= hold < MAX_RANK:
        return hold + 1
    return 0


class Board:
    """
    Represents a 4x4 Threes! board.

    Cells hold tile ranks (0 is empty). The board also carries the bag of
    basic tiles the environment draws from, the hint (the next tile to be
    placed, 0 if none has been drawn yet) and the direction of the last slide.
    """

    def __init__(self, tiles: Optional[Sequence[int]] = None):
        """
        Initialize a board.

        Args:
            tiles: Optional 16 tile ranks in row-major order. Defaults to empty.

        Raises:
            ValueError: On a wrong tile count or a rank outside [0, MAX_RANK]
        """
        if tiles is None:
            tiles = [0] * NUM_CELLS
        if len(tiles) != NUM_CELLS:
            raise ValueError(f"Expected {NUM_CELLS} tiles, got {len(tiles)}")
        self.tiles: List[int] = [_check_rank(t) for t in tiles]
        self.bag: List[int] = list(BASIC_TILES)
        self.hint = 0
        self.last = NO_SLIDE

    def copy(self) -> 'Board':
        """Create a deep copy of the board."""
        new_board = Board.__new__(Board)
        new_board.tiles = self.tiles.copy()
        new_board.bag = self.bag.copy()
        new_board.hint = self.hint
        new_board.last = self.last
        return new_board

    def __getitem__(self, index: int) -> int:
        return self.tiles[index]

    def __setitem__(self, index: int, rank: int):
        self.tiles[index] = _check_rank(rank)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.tiles == other.tiles and self.hint == other.hint
                and sorted(self.bag) == sorted(other.bag) and self.last == other.last)

    def __hash__(self):
        return hash((tuple(self.tiles), self.hint, tuple(sorted(self.bag)), self.last))

    def empty_count(self) -> int:
        """Number of empty cells."""
        return self.tiles.count(0)

    def empty_cells(self, space: Sequence[int] = tuple(range(NUM_CELLS))) -> List[int]:
        """Empty cells among `space`, in order."""
        return [pos for pos in space if self.tiles[pos] == 0]

    def score(self) -> int:
        """Threes! score of the tiles on the board."""
        return sum(tile_score(t) for t in self.tiles)

    def max_tile(self) -> int:
        """Highest rank on the board."""
        return max(self.tiles)

    def slide(self, direction: int) -> int:
        """
        Slide all tiles one step toward `direction`.

        Every tile moves at most one cell and merges at most once. The board is
        left untouched if nothing can move.

        Args:
            direction: UP, RIGHT, DOWN or LEFT

        Returns:
            Score gained by the slide, or ILLEGAL if nothing moved
        """
        if direction not in SLIDE_LINES:
            return ILLEGAL

        before = self.score()
        moved = False
        for line in SLIDE_LINES[direction]:
            for i in range(1, BOARD_SIZE):
                hold_pos, tile_pos = line[i - 1], line[i]
                tile = self.tiles[tile_pos]
                if tile == 0:
                    continue
                hold = self.tiles[hold_pos]
                if hold == 0:
                    self.tiles[hold_pos] = tile
                else:
                    merged = merge_rank(hold, tile)
                    if not merged:
                        continue
                    self.tiles[hold_pos] = merged
                self.tiles[tile_pos] = 0
                moved = True

        if not moved:
            return ILLEGAL
        self.last = direction
        return self.score() - before

    def place(self, pos: int, tile: int, hint: int) -> int:
        """
        Put `tile` on an empty cell and announce `hint` as the next tile.

        Both tiles come out of the bag; once a hint is showing, the placed tile
        must be that hint. The bag refills with one of each basic tile when it
        runs out.

        Returns:
            0 on success, ILLEGAL if the placement breaks the rules
        """
        if not 0 <= pos < NUM_CELLS or self.tiles[pos] != 0:
            return ILLEGAL
        if tile not in BASIC_TILES or hint not in BASIC_TILES:
            return ILLEGAL
        if self.hint:
            if tile != self.hint or hint not in self.bag:
                return ILLEGAL
        else:
            if tile not in self.bag or self.bag.count(hint) - (tile == hint) < 1:
                return ILLEGAL
            self._draw(tile)

        self.tiles[pos] = tile
        self._draw(hint)
        self.hint = hint
        return 0

    def _draw(self, tile: int):
        self.bag.remove(tile)
        if not self.bag:
            self.bag = list(BASIC_TILES)

    def __str__(self) -> str:
        return ASCIIRenderer.format(self)

    def __repr__(self) -> str:
        return f"Board(tiles={self.tiles!r}, hint={self.hint}, last={self.last})"
