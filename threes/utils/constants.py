"""
Constants for the Threes! board and the n-tuple network.
"""

# Board dimensions
# | 0 | 1 | 2 | 3 |
# | 4 | 5 | 6 | 7 |
# | 8 | 9 | 10| 11|
# | 12| 13| 14| 15|
BOARD_SIZE = 4
NUM_CELLS = BOARD_SIZE * BOARD_SIZE

# Slide directions
UP = 0
RIGHT = 1
DOWN = 2
LEFT = 3
DIRECTIONS = (UP, RIGHT, DOWN, LEFT)
DIRECTION_NAMES = ["#U", "#R", "#D", "#L"]

# Board.last before the first slide of an episode
NO_SLIDE = 4

# Reward returned by an action that has no effect
ILLEGAL = -1

# Tiles: rank 0 is empty, ranks 1 and 2 are the basic tiles,
# rank r >= 3 has face value 3 * 2^(r - 3)
BASIC_TILES = (1, 2, 3)
MAX_RANK = 15

# Number of placements before the slider moves for the first time
INITIAL_TILES = 9

# Cells the placer may use after a slide, indexed by Board.last
PLACEMENT_SPACES = {
    UP: (12, 13, 14, 15),
    RIGHT: (0, 4, 8, 12),
    DOWN: (0, 1, 2, 3),
    LEFT: (3, 7, 11, 15),
    NO_SLIDE: tuple(range(NUM_CELLS)),
}

# Feature slot meaning "number of empty cells on the board"
EMPTY_COUNT = -1

# Bits per feature slot in a packed pattern index
SLOT_BITS = 4
SLOT_VALUES = 1 << SLOT_BITS

# Board symmetry generators as index permutations: cell i maps to TABLE[i]
ROTATE_MATCHING = (12, 8, 4, 0, 13, 9, 5, 1, 14, 10, 6, 2, 15, 11, 7, 3)
REFLECT_MATCHING = (15, 11, 7, 3, 14, 10, 6, 2, 13, 9, 5, 1, 12, 8, 4, 0)


def tile_value(rank: int) -> int:
    """Face value printed on a tile of the given rank."""
    if rank < 3:
        return rank
    return 3 << (rank - 3)


def tile_score(rank: int) -> int:
    """Points a tile of the given rank contributes to the board score."""
    if rank < 3:
        return 0
    return 3 ** (rank - 2)
