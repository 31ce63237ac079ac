"""
Greedy slider agents for Threes!.

These look only at the immediate reward of each direction and are mainly
useful as baselines for the learning agent.
"""
from typing import Dict, Optional, Sequence, TYPE_CHECKING

from threes.agents.agent import Agent
from threes.config import AgentConfig
from threes.game.action import Action
from threes.utils.constants import DIRECTIONS, ILLEGAL, UP, RIGHT, DOWN, LEFT

if TYPE_CHECKING:
    from threes.game.board import Board


def legal_rewards(board: 'Board', directions: Sequence[int] = DIRECTIONS) -> Dict[int, int]:
    """
    Immediate reward of every legal direction, in the order given.

    Args:
        board: The board to probe; it is not modified
        directions: Directions to try

    Returns:
        Mapping direction -> reward, without the illegal directions
    """
    rewards = {}
    for direction in directions:
        reward = board.copy().slide(direction)
        if reward != ILLEGAL:
            rewards[direction] = reward
    return rewards


class GreedySlider(Agent):
    """
    Slides in the direction with the largest immediate reward.

    Ties go to the first direction in UP, RIGHT, DOWN, LEFT order.
    """

    def select_move(self, board: 'Board') -> Optional[Action]:
        rewards = legal_rewards(board)
        if not rewards:
            return None
        best = max(rewards, key=lambda d: rewards[d])
        return Action.slide(best)


class UngreedySlider(Agent):
    """
    Slides in the legal direction with the smallest immediate reward.
    """

    def select_move(self, board: 'Board') -> Optional[Action]:
        rewards = legal_rewards(board)
        if not rewards:
            return None
        worst = min(rewards, key=lambda d: rewards[d])
        return Action.slide(worst)


class MoveRestrictedGreedySlider(Agent):
    """
    Greedy between RIGHT and DOWN only; UP and LEFT are used when forced.

    Among RIGHT and DOWN a tie goes to DOWN; among the fallback moves
    a tie goes to UP.
    """

    PREFERRED = (RIGHT, DOWN)
    FALLBACK = (UP, LEFT)

    def select_move(self, board: 'Board') -> Optional[Action]:
        rewards = legal_rewards(board, self.PREFERRED)
        if rewards:
            best = None
            for direction, reward in rewards.items():
                if best is None or reward >= rewards[best]:
                    best = direction
            return Action.slide(best)

        rewards = legal_rewards(board, self.FALLBACK)
        if not rewards:
            return None
        best = max(rewards, key=lambda d: rewards[d])
        return Action.slide(best)


class AlternatingGreedySlider(Agent):
    """
    Alternates between the greedy and the ungreedy choice, starting greedy.
    """

    def __init__(self, config: AgentConfig):
        super().__init__(config)
        self._greedy = GreedySlider(config)
        self._ungreedy = UngreedySlider(config)
        self._use_greedy = True

    def open_episode(self):
        self._use_greedy = True

    def select_move(self, board: 'Board') -> Optional[Action]:
        agent = self._greedy if self._use_greedy else self._ungreedy
        self._use_greedy = not self._use_greedy
        return agent.select_move(board)
