"""
Random agents for Threes!: the tile placer (environment) and a random slider.
"""
import random
from typing import Optional, TYPE_CHECKING

from threes.agents.agent import Agent
from threes.config import AgentConfig
from threes.game.action import Action
from threes.utils.constants import DIRECTIONS, ILLEGAL, PLACEMENT_SPACES

if TYPE_CHECKING:
    from threes.game.board import Board


class RandomAgent(Agent):
    """
    Base for agents that need randomness; seeded with seed= when given.
    """

    def __init__(self, config: AgentConfig):
        super().__init__(config)
        self.rng = random.Random(config.seed)


class RandomPlacer(RandomAgent):
    """
    Environment agent that places the next tile.

    After a slide the tile goes on a random empty cell of the edge the board
    slid away from; before the first slide it may go anywhere. The placed
    tile is the current hint (or a fresh draw from the bag) and a new hint is
    drawn from the bag.
    """

    def select_move(self, board: 'Board') -> Optional[Action]:
        space = list(PLACEMENT_SPACES[board.last])
        self.rng.shuffle(space)
        for pos in space:
            if board[pos] != 0:
                continue

            bag = board.bag.copy()
            self.rng.shuffle(bag)
            tile = board.hint if board.hint else bag.pop()
            hint = bag.pop()
            return Action.place(pos, tile, hint)
        return None


class RandomSlider(RandomAgent):
    """
    Player agent that picks a random legal direction.
    """

    def select_move(self, board: 'Board') -> Optional[Action]:
        directions = list(DIRECTIONS)
        self.rng.shuffle(directions)
        for direction in directions:
            if board.copy().slide(direction) != ILLEGAL:
                return Action.slide(direction)
        return None
