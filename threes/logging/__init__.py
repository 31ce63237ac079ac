"""
Episode logging module for Threes!.

Provides per-episode move records and block statistics.
"""
from threes.logging.episode import EpisodeRecord, MoveRecord, Stopwatch, PLAYER, ENVIRONMENT
from threes.logging.statistics import Statistics, format_block

__all__ = [
    'EpisodeRecord',
    'MoveRecord',
    'Stopwatch',
    'PLAYER',
    'ENVIRONMENT',
    'Statistics',
    'format_block'
]
