"""
Tests for episode records and block statistics.
"""

import pytest
from threes.logging import EpisodeRecord, Statistics, format_block
from threes.logging.episode import PLAYER, ENVIRONMENT


def make_record(score, max_rank, slider_usec=10, placer_usec=10):
    record = EpisodeRecord(slider="greedy", placer="random")
    record.add_move("03+2", ENVIRONMENT, 0, placer_usec)
    record.add_move("#L", PLAYER, score, slider_usec)
    record.max_rank = max_rank
    return record


class TestEpisodeRecord:
    """Tests for EpisodeRecord."""

    def test_score_counts_slider_rewards_only(self):
        record = make_record(9, 4)
        record.add_move("13+1", ENVIRONMENT, 5, 1)
        assert record.score == 9

    def test_step_counts(self):
        record = make_record(0, 3)
        assert record.step() == 2
        assert record.step(PLAYER) == 1
        assert record.step(ENVIRONMENT) == 1

    def test_max_tile_is_face_value(self):
        assert make_record(0, 5).max_tile == 12

    def test_dict_round_trip(self):
        record = make_record(27, 6)
        restored = EpisodeRecord.from_dict(record.to_dict())
        assert restored == record


class TestFormatBlock:
    """Tests for format_block."""

    def test_header_line(self):
        records = [make_record(3, 3), make_record(9, 4)]
        header = format_block(records, 2).splitlines()[0]
        assert header == "2\tavg = 6, max = 9, ops = 100000 (100000|100000)"

    def test_tile_distribution(self):
        records = [make_record(0, 3), make_record(0, 4), make_record(0, 4), make_record(0, 5)]
        lines = format_block(records, 4).splitlines()[1:]
        assert lines == [
            "\t3\t100.0%\t(25.0%)",
            "\t6\t75.0%\t(50.0%)",
            "\t12\t25.0%\t(25.0%)",
        ]

    def test_zero_time_does_not_divide(self):
        header = format_block([make_record(0, 3, 0, 0)], 1).splitlines()[0]
        assert "ops = 0 (0|0)" in header

    def test_empty_block(self):
        assert format_block([], 0) == "0\tno episodes"


class TestStatistics:
    """Tests for the Statistics keeper."""

    def test_limit_keeps_most_recent(self):
        stats = Statistics(limit=2)
        for score in (1, 2, 3):
            stats.add(make_record(score, 3))
        assert stats.total == 3
        assert len(stats) == 2
        assert [r.score for r in stats.last(5)] == [2, 3]

    def test_show_uses_last_block(self):
        stats = Statistics()
        for score in (3, 30):
            stats.add(make_record(score, 3))
        assert stats.show(1).startswith("2\tavg = 30, max = 30")
        assert stats.summary().startswith("2\tavg = 16, max = 30")

    def test_save_and_load(self, tmp_path):
        stats = Statistics()
        stats.add(make_record(3, 3))
        stats.add(make_record(9, 4))
        path = stats.save(tmp_path / "episodes.jsonl")

        loaded = Statistics()
        loaded.load(path)
        assert loaded.total == 2
        assert list(loaded.records) == list(stats.records)

    def test_load_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            Statistics().load(tmp_path / "missing.jsonl")
