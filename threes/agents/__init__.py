"""
Agents module for the Threes! implementation.
"""
from threes.agents.agent import Agent
from threes.agents.random_agent import RandomAgent, RandomPlacer, RandomSlider
from threes.agents.greedy_agent import (
    GreedySlider, UngreedySlider, MoveRestrictedGreedySlider, AlternatingGreedySlider
)
from threes.agents.ntuple_agent import NTupleAgent

__all__ = [
    'Agent', 'RandomAgent', 'RandomPlacer', 'RandomSlider',
    'GreedySlider', 'UngreedySlider', 'MoveRestrictedGreedySlider',
    'AlternatingGreedySlider', 'NTupleAgent'
]
