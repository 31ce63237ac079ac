"""
N-tuple network agent for Threes!.

Chooses moves by one-step lookahead over afterstates,

    argmax_a  r(s, a) + V(s'_a)

with V an n-tuple network, and trains V with backward TD(0) at the end of
every episode.
"""
from typing import Optional, Sequence, TYPE_CHECKING

from threes.agents.agent import Agent
from threes.config import AgentConfig
from threes.evaluation.features import FEATURE_SETS, build_feature_groups
from threes.evaluation.learner import TDLearner
from threes.evaluation.network import NTupleNetwork
from threes.evaluation.weights import new_table, load_weights, save_weights
from threes.game.action import Action
from threes.utils.constants import DIRECTIONS, ILLEGAL

if TYPE_CHECKING:
    from threes.game.board import Board


class NTupleAgent(Agent):
    """
    Slider agent backed by a trainable n-tuple network.

    Settings used from the config:
    - tuples: named feature set (ignored if `features` is passed)
    - init: table sizes to allocate, one per feature group
    - load: weight file to start from
    - save: weight file written by shutdown()
    - alpha: learning rate; 0 disables learning
    """

    def __init__(self, config: AgentConfig, features: Optional[Sequence[Sequence[int]]] = None):
        """
        Initialize an n-tuple agent.

        Args:
            config: Parsed agent settings
            features: Custom feature definitions overriding config.tuples

        Raises:
            ValueError: If a feature or the table sizing is malformed
            OSError: If the load= file cannot be read
        """
        super().__init__(config)
        definitions = features if features is not None else FEATURE_SETS[config.tuples]
        groups = build_feature_groups(definitions)

        tables = None
        if config.init is not None:
            expected = NTupleNetwork.table_sizes_for(groups)
            if list(config.init) != expected:
                raise ValueError(f"init={','.join(map(str, config.init))} does not match "
                                 f"the feature table sizes {expected}")
            tables = [new_table(size) for size in config.init]

        self.network = NTupleNetwork(groups, tables)
        if config.load is not None:
            self.network.set_tables(load_weights(config.load))
        self.learner = TDLearner(self.network, config.alpha)

    @property
    def alpha(self) -> float:
        return self.learner.alpha

    def open_episode(self):
        self.learner.open_episode()

    def close_episode(self):
        if self.alpha:
            self.learner.close_episode()
        else:
            self.learner.trajectory.clear()

    def select_move(self, board: 'Board') -> Optional[Action]:
        """
        Pick the direction maximizing reward plus afterstate value.

        Ties go to the first direction in UP, RIGHT, DOWN, LEFT order. The
        board and the chosen reward (0 if no direction is legal) are recorded
        for the end-of-episode update either way.
        """
        best_score = None
        best_direction = None
        best_reward = 0
        for direction in DIRECTIONS:
            after = board.copy()
            reward = after.slide(direction)
            if reward == ILLEGAL:
                continue
            score = self.network.evaluate(after) + reward
            if best_score is None or score > best_score:
                best_score = score
                best_direction = direction
                best_reward = reward

        self.learner.record(board.copy(), best_reward)
        if best_direction is None:
            return None
        return Action.slide(best_direction)

    def save(self, path=None):
        """Write the weight tables to `path` (defaults to save=)."""
        return save_weights(path or self.config.save, self.network.tables)

    def shutdown(self):
        if self.config.save is not None:
            self.save()
