"""
Evaluation module for Threes! boards.

Provides n-tuple features, the weight-table value function, its binary
storage and the TD learner that trains it.
"""

from threes.evaluation.features import (
    Feature,
    IsoFeature,
    build_orbit,
    build_feature_groups,
    FEATURE_SETS,
    DEFAULT_FEATURE_SET,
)
from threes.evaluation.weights import (
    new_table,
    serialize_table,
    deserialize_table,
    save_weights,
    load_weights,
)
from threes.evaluation.network import NTupleNetwork
from threes.evaluation.learner import Step, Trajectory, TDLearner

__all__ = [
    'Feature',
    'IsoFeature',
    'build_orbit',
    'build_feature_groups',
    'FEATURE_SETS',
    'DEFAULT_FEATURE_SET',
    'new_table',
    'serialize_table',
    'deserialize_table',
    'save_weights',
    'load_weights',
    'NTupleNetwork',
    'Step',
    'Trajectory',
    'TDLearner',
]
