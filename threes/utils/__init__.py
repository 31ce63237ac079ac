"""
Utilities module for the Threes! implementation.
"""
from threes.utils.constants import (
    BOARD_SIZE, NUM_CELLS, UP, RIGHT, DOWN, LEFT, DIRECTIONS, DIRECTION_NAMES,
    NO_SLIDE, ILLEGAL, BASIC_TILES, MAX_RANK, INITIAL_TILES, PLACEMENT_SPACES,
    EMPTY_COUNT, tile_value, tile_score
)
from threes.utils.renderer import ASCIIRenderer

__all__ = [
    'BOARD_SIZE', 'NUM_CELLS', 'UP', 'RIGHT', 'DOWN', 'LEFT',
    'DIRECTIONS', 'DIRECTION_NAMES', 'NO_SLIDE', 'ILLEGAL', 'BASIC_TILES', 'MAX_RANK',
    'INITIAL_TILES', 'PLACEMENT_SPACES', 'EMPTY_COUNT',
    'tile_value', 'tile_score',
    'ASCIIRenderer'
]
