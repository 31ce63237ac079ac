"""
Tests for the episode runner and the command line entry point.
"""

import json

import pytest
from main import parse_agent_spec, create_agent, run_episode, main
from threes.agents import GreedySlider, NTupleAgent, RandomPlacer
from threes.config import AgentConfig
from threes.evaluation.weights import load_weights
from threes.game.board import Board
from threes.logging.episode import PLAYER, ENVIRONMENT
from threes.utils.constants import DIRECTIONS, ILLEGAL, INITIAL_TILES


class TestAgentSpec:
    """Tests for agent specification parsing."""

    def test_plain_type(self):
        assert parse_agent_spec("Greedy") == ("greedy", "")

    def test_type_with_settings(self):
        assert parse_agent_spec("ntuple: alpha=0.1 save=w.bin") == ("ntuple", "alpha=0.1 save=w.bin")

    def test_create_agent_passes_settings(self):
        agent = create_agent("ntuple:tuples=row alpha=0.1", PLAYER)
        assert isinstance(agent, NTupleAgent)
        assert agent.alpha == 0.1
        assert agent.name == "ntuple"
        assert agent.role == PLAYER
        assert len(agent.network.tables) == 2

    def test_create_agent_name_override(self):
        agent = create_agent("random:name=bag seed=1", ENVIRONMENT)
        assert isinstance(agent, RandomPlacer)
        assert agent.name == "bag"

    def test_unknown_type_raises(self):
        with pytest.raises(ValueError, match="Unknown slider type"):
            create_agent("minimax", PLAYER)
        with pytest.raises(ValueError, match="Unknown placer type"):
            create_agent("greedy", ENVIRONMENT)

    def test_bad_settings_raise(self):
        with pytest.raises(ValueError):
            create_agent("greedy:speed=9", PLAYER)


class TestRunEpisode:
    """Tests for run_episode."""

    @pytest.fixture
    def record_and_board(self):
        slider = GreedySlider(AgentConfig(name="greedy", role=PLAYER))
        placer = RandomPlacer(AgentConfig(name="random", role=ENVIRONMENT, seed=21))
        board = Board()
        return run_episode(slider, placer, board), board

    def test_opening_placements(self, record_and_board):
        record, _ = record_and_board
        assert [m.role for m in record.moves[:INITIAL_TILES]] == [ENVIRONMENT] * INITIAL_TILES
        assert record.moves[INITIAL_TILES].role == PLAYER

    def test_turns_alternate(self, record_and_board):
        record, _ = record_and_board
        roles = [m.role for m in record.moves[INITIAL_TILES:]]
        assert all(a != b for a, b in zip(roles, roles[1:]))

    def test_ends_when_an_agent_is_stuck(self, record_and_board):
        record, board = record_and_board
        if record.moves[-1].role == ENVIRONMENT:
            assert all(board.copy().slide(d) == ILLEGAL for d in DIRECTIONS)

    def test_record_matches_board(self, record_and_board):
        record, board = record_and_board
        assert record.max_rank == board.max_tile()
        assert record.score == sum(m.reward for m in record.moves if m.role == PLAYER)
        assert record.slider == "greedy"
        assert record.placer == "random"

    def test_verbose_prints_moves(self, capsys):
        slider = GreedySlider(AgentConfig(name="greedy", role=PLAYER))
        placer = RandomPlacer(AgentConfig(name="random", role=ENVIRONMENT, seed=2))
        run_episode(slider, placer, verbose=True)
        out = capsys.readouterr().out
        assert "Step 1: random plays" in out
        assert "Episode over after" in out


class TestMain:
    """Tests for the command line entry point."""

    def test_runs_and_prints_summary(self, capsys):
        code = main(["--slider", "greedy", "--placer", "random:seed=4",
                     "--total", "4", "--block", "2", "--summary"])
        assert code == 0
        out = capsys.readouterr().out
        assert out.startswith("2\tavg = ")
        assert "\n4\tavg = " in out

    def test_quiet_suppresses_blocks(self, capsys):
        code = main(["--slider", "random:seed=1", "--total", "2", "--block", "1", "--quiet"])
        assert code == 0
        assert capsys.readouterr().out == ""

    def test_ntuple_saves_weights(self, tmp_path):
        path = tmp_path / "weights.bin"
        code = main(["--slider", f"ntuple:tuples=row alpha=0.1 save={path}",
                     "--placer", "random:seed=9", "--total", "3", "--quiet"])
        assert code == 0
        tables = load_weights(path)
        assert [t.size for t in tables] == [65536, 65536]

    def test_saves_episodes(self, tmp_path):
        path = tmp_path / "episodes.jsonl"
        code = main(["--slider", "greedy", "--total", "3", "--quiet",
                     "--save-episodes", str(path)])
        assert code == 0
        lines = path.read_text().splitlines()
        assert len(lines) == 3
        assert json.loads(lines[0])["slider"] == "greedy"

    @pytest.mark.parametrize("slider", [
        "minimax",
        "greedy:bogus=1",
        "ntuple:tuples=row init=16",
    ])
    def test_bad_agent_returns_error(self, capsys, slider):
        assert main(["--slider", slider, "--total", "1"]) == 1
        assert capsys.readouterr().err.startswith("Error: ")

    def test_missing_weight_file_returns_error(self, tmp_path, capsys):
        missing = tmp_path / "missing.bin"
        assert main(["--slider", f"ntuple:tuples=row load={missing}", "--total", "1"]) == 1
        assert "Error: " in capsys.readouterr().err
