"""
Game module for Threes!: board mechanics and actions.
"""
from threes.game.board import Board, merge_rank
from threes.game.action import Action

__all__ = ['Board', 'Action', 'merge_rank']
