"""
Backward TD(0) learning for the n-tuple network.

During an episode the agent records, for every decision point, the board
before its move and the reward that move earned. When the episode closes the
trajectory is replayed newest to oldest:

    V(s_T)  <- V(s_T)  + a/N * (0 - V(s_T))
    V(s_t)  <- V(s_t)  + a/N * (r_t + V(s_t+1) - V(s_t))

where N is the total number of feature members and V(s_t+1) is read after
s_t+1 has already been updated.
"""
from dataclasses import dataclass
from typing import Iterator, List, TYPE_CHECKING

from threes.evaluation.network import NTupleNetwork

if TYPE_CHECKING:
    from threes.game.board import Board


@dataclass
class Step:
    """A board before the agent's move and the reward the move earned."""
    state: 'Board'
    reward: int


class Trajectory:
    """
    Ordered record of one episode's decision points, most recent last.
    """

    def __init__(self):
        self.steps: List[Step] = []

    def clear(self):
        self.steps.clear()

    def append(self, state: 'Board', reward: int):
        self.steps.append(Step(state=state, reward=reward))

    def pop(self) -> Step:
        return self.steps.pop()

    def __len__(self) -> int:
        return len(self.steps)

    def __bool__(self) -> bool:
        return bool(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)


class TDLearner:
    """
    Applies backward TD(0) updates to a network at the end of each episode.
    """

    def __init__(self, network: NTupleNetwork, alpha: float = 0.0):
        """
        Args:
            network: The value function to train
            alpha: Learning rate, shared out over all feature members
        """
        self.network = network
        self.alpha = alpha
        self.trajectory = Trajectory()

    def open_episode(self):
        self.trajectory.clear()

    def record(self, state: 'Board', reward: int):
        """Append a decision point. `state` must not be mutated afterwards."""
        self.trajectory.append(state, reward)

    def update_weight(self, target: float, state: 'Board') -> float:
        """
        Move V(state) toward `target`.

        Returns:
            The increment applied to each addressed slot
        """
        value = self.network.evaluate(state)
        error = self.alpha / self.network.total_variants * (target - value)
        # error is fixed before any slot changes; a slot shared by two members gets it twice
        self.network.adjust(state, error)
        return error

    def close_episode(self):
        """
        Replay the trajectory newest to oldest and drain it.

        Raises:
            RuntimeError: If nothing was recorded this episode
        """
        if not self.trajectory:
            raise RuntimeError("close_episode called with an empty trajectory")

        step = self.trajectory.pop()
        self.update_weight(0.0, step.state)
        successor = step.state
        while self.trajectory:
            step = self.trajectory.pop()
            target = step.reward + self.network.evaluate(successor)
            self.update_weight(target, step.state)
            successor = step.state
