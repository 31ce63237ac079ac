"""
Base Agent class for Threes!.
"""
from abc import ABC, abstractmethod
from typing import Optional, TYPE_CHECKING

from threes.config import AgentConfig

if TYPE_CHECKING:
    from threes.game.action import Action
    from threes.game.board import Board


class Agent(ABC):
    """
    Abstract base class for Threes! agents.

    Both sides of the game are agents: the slider (player) and the placer
    (environment). All agents must implement select_move; episode hooks and
    shutdown are optional.
    """

    def __init__(self, config: AgentConfig):
        """
        Initialize an agent.

        Args:
            config: Parsed agent settings
        """
        self.config = config

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def role(self) -> str:
        return self.config.role

    def open_episode(self):
        """Called before the first move of an episode."""

    def close_episode(self):
        """Called after the last move of an episode."""

    def shutdown(self):
        """Called once when the agent is no longer needed."""

    @abstractmethod
    def select_move(self, board: 'Board') -> Optional['Action']:
        """
        Select an action for the given board.

        Args:
            board: The current board; must not be modified

        Returns:
            The action to apply, or None if no legal action is available
        """
        pass
