"""
Unit tests for the n-tuple value function.
"""

import numpy as np
import pytest
from threes.game.board import Board
from threes.evaluation.features import IsoFeature, build_feature_groups
from threes.evaluation.network import NTupleNetwork
from threes.evaluation.weights import new_table


def random_board(rng):
    return Board(rng.integers(0, 8, size=16).tolist())


class TestNTupleNetwork:
    """Tests for NTupleNetwork construction and evaluation."""

    @pytest.fixture
    def row_network(self):
        """Two 4-tuple groups with zero weights."""
        return NTupleNetwork(build_feature_groups([(0, 1, 2, 3), (4, 5, 6, 7)]))

    def test_allocates_zero_tables(self, row_network):
        assert len(row_network.tables) == 2
        for table in row_network.tables:
            assert table.size == 16 ** 4
            assert table.dtype == np.float32
            assert not table.any()

    def test_total_variants(self, row_network):
        assert row_network.total_variants == 8

    def test_zero_weights_evaluate_to_zero(self, row_network):
        rng = np.random.default_rng(0)
        assert row_network.evaluate(Board()) == 0.0
        for _ in range(20):
            assert row_network.evaluate(random_board(rng)) == 0.0

    def test_evaluate_sums_every_member(self, row_network):
        row_network.tables[0][0] = 1.5
        # on the empty board all four members of group 0 address slot 0
        assert row_network.evaluate(Board()) == 6.0

    def test_evaluate_single_member_group(self):
        network = NTupleNetwork([IsoFeature((5, 6, 9, 10))])
        network.tables[0][3] = 2.5
        board = Board()
        board[10] = 3
        assert network.evaluate(board) == 2.5

    def test_evaluate_is_read_only(self, row_network):
        rng = np.random.default_rng(1)
        for table in row_network.tables:
            table[:] = rng.standard_normal(table.size)
        before = [t.copy() for t in row_network.tables]
        board = random_board(rng)
        first = row_network.evaluate(board)
        second = row_network.evaluate(board)
        assert first == second
        for old, new in zip(before, row_network.tables):
            assert np.array_equal(old, new)

    def test_adjust_adds_once_per_member(self, row_network):
        row_network.adjust(Board(), 0.5)
        assert row_network.tables[0][0] == 2.0
        assert row_network.tables[1][0] == 2.0
        assert np.count_nonzero(row_network.tables[0]) == 1

    def test_adjust_touches_distinct_slots(self, row_network):
        board = Board()
        board[0] = 1
        row_network.adjust(board, 1.0)
        indices = row_network.indices(board)[0]
        assert len(set(indices)) == 3
        assert row_network.tables[0].sum() == 4.0

    def test_table_count_mismatch_raises(self):
        groups = build_feature_groups([(0, 1), (2, 3)])
        with pytest.raises(ValueError, match="2 feature groups"):
            NTupleNetwork(groups, [new_table(256)])

    def test_table_size_mismatch_raises(self):
        groups = build_feature_groups([(0, 1)])
        with pytest.raises(ValueError, match="needs 256"):
            NTupleNetwork(groups, [new_table(255)])

    def test_no_groups_raises(self):
        with pytest.raises(ValueError):
            NTupleNetwork([])

    def test_tables_are_shared_not_copied(self):
        groups = build_feature_groups([(0, 1)])
        table = new_table(256)
        network = NTupleNetwork(groups, [table])
        network.adjust(Board(), 1.0)
        assert table[0] == 8.0
