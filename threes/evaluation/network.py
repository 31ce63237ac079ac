"""
Linear value function over n-tuple features.

V(s) = sum over groups g, over members f of g, of table_g[f(s)]
"""
from typing import List, Optional, Sequence, TYPE_CHECKING

import numpy as np

from threes.evaluation.features import IsoFeature
from threes.evaluation.weights import new_table, WEIGHT_DTYPE

if TYPE_CHECKING:
    from threes.game.board import Board


class NTupleNetwork:
    """
    Ensemble of weight tables, one per feature group.

    Every member of a group's orbit reads and writes the group's table.
    """

    def __init__(self, groups: Sequence[IsoFeature], tables: Optional[Sequence[np.ndarray]] = None):
        """
        Args:
            groups: Feature groups, in table order
            tables: Existing tables, one per group. Zero tables are allocated
                when omitted.

        Raises:
            ValueError: If the tables do not match the groups
        """
        self.groups: List[IsoFeature] = list(groups)
        if not self.groups:
            raise ValueError("Network needs at least one feature group")
        if tables is None:
            tables = [new_table(g.table_size) for g in self.groups]
        self.tables: List[np.ndarray] = []
        self.set_tables(tables)
        self.total_variants = sum(len(g) for g in self.groups)

    def set_tables(self, tables: Sequence[np.ndarray]):
        """Replace the weight tables after checking them against the groups."""
        tables = [np.asarray(t, dtype=WEIGHT_DTYPE) for t in tables]
        if len(tables) != len(self.groups):
            raise ValueError(
                f"Got {len(tables)} weight tables for {len(self.groups)} feature groups"
            )
        for i, (group, table) in enumerate(zip(self.groups, tables)):
            if table.ndim != 1 or table.size != group.table_size:
                raise ValueError(
                    f"Weight table {i} has {table.size} entries, "
                    f"feature {group.base.cells} needs {group.table_size}"
                )
        self.tables = tables

    @staticmethod
    def table_sizes_for(groups: Sequence[IsoFeature]) -> List[int]:
        return [g.table_size for g in groups]

    def evaluate(self, board: 'Board') -> float:
        """
        Estimated value of `board`. Read-only.
        """
        total = 0.0
        for group, table in zip(self.groups, self.tables):
            for feature in group.members:
                total += float(table[feature.encode(board)])
        return total

    def indices(self, board: 'Board') -> List[List[int]]:
        """Pattern index of every member of every group, for inspection."""
        return [[f.encode(board) for f in group.members] for group in self.groups]

    def adjust(self, board: 'Board', delta: float):
        """
        Add `delta` to the slot each member of each group addresses on `board`.

        Updates are applied one member at a time, so a slot addressed by two
        members of the same group is incremented twice.
        """
        for group, table in zip(self.groups, self.tables):
            for feature in group.members:
                table[feature.encode(board)] += delta

    def __repr__(self) -> str:
        return f"NTupleNetwork(groups={self.groups}, total_variants={self.total_variants})"
