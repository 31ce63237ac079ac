"""
Main script to run (and train on) Threes! episodes between a slider and a placer.
"""
import argparse
import sys
from typing import Optional

from threes.agents import (
    Agent, RandomPlacer, RandomSlider, GreedySlider, UngreedySlider,
    MoveRestrictedGreedySlider, AlternatingGreedySlider, NTupleAgent
)
from threes.config import parse_agent_args
from threes.game.board import Board
from threes.logging.episode import EpisodeRecord, Stopwatch, PLAYER, ENVIRONMENT
from threes.logging.statistics import Statistics
from threes.utils.constants import ILLEGAL, INITIAL_TILES
from threes.utils.renderer import ASCIIRenderer

# Agent type mapping, per role
AGENT_TYPES = {
    PLAYER: {
        'random': RandomSlider,
        'greedy': GreedySlider,
        'mr-greedy': MoveRestrictedGreedySlider,
        'ungreedy': UngreedySlider,
        'alternating': AlternatingGreedySlider,
        'ntuple': NTupleAgent,
    },
    ENVIRONMENT: {
        'random': RandomPlacer,
    },
}


def parse_agent_spec(spec: str) -> tuple:
    """
    Parse an agent specification string.

    Formats:
        'greedy'                      -> ('greedy', '')
        'ntuple:alpha=0.1 save=w.bin' -> ('ntuple', 'alpha=0.1 save=w.bin')

    Returns:
        Tuple of (agent_type, settings string)
    """
    if ':' in spec:
        agent_type, settings = spec.split(':', 1)
        return (agent_type.strip().lower(), settings.strip())
    return (spec.strip().lower(), "")


def create_agent(spec: str, role: str) -> Agent:
    """
    Create an agent from a specification string.

    Args:
        spec: Agent specification (e.g., 'random', 'ntuple:alpha=0.1')
        role: PLAYER or ENVIRONMENT

    Returns:
        Agent instance

    Raises:
        ValueError: For an unknown agent type or bad settings
        OSError: If the agent cannot read its weight file
    """
    agent_type, settings = parse_agent_spec(spec)
    types = AGENT_TYPES[role]
    if agent_type not in types:
        raise ValueError(f"Unknown {role} type: {agent_type}. "
                         f"Available: {list(types.keys())}")

    config = parse_agent_args(settings, name=agent_type, role=role)
    return types[agent_type](config)


def run_episode(slider: Agent, placer: Agent, board: Optional[Board] = None,
                verbose: bool = False) -> EpisodeRecord:
    """
    Play one episode.

    The placer puts down the opening tiles, then slider and placer take turns
    until one of them has no legal action.

    Args:
        slider: The player agent
        placer: The environment agent
        board: Optional starting board (a fresh empty board by default)
        verbose: Whether to print every move and board

    Returns:
        The episode record
    """
    if board is None:
        board = Board()

    record = EpisodeRecord(slider=slider.name, placer=placer.name)
    slider.open_episode()
    placer.open_episode()

    episode_clock = Stopwatch()
    step = 0
    while True:
        if step < INITIAL_TILES or (step - INITIAL_TILES) % 2 == 1:
            agent, role = placer, ENVIRONMENT
        else:
            agent, role = slider, PLAYER

        clock = Stopwatch()
        action = agent.select_move(board)
        elapsed = clock.elapsed_usec()
        if action is None:
            if verbose:
                print(f"No legal action for {agent.name} ({role}). Episode over.")
            break

        reward = action.apply(board)
        if reward == ILLEGAL:
            if verbose:
                print(f"Illegal action {action} by {agent.name} ({role}). Episode over.")
            break

        record.add_move(str(action), role, reward, elapsed)
        step += 1
        if verbose:
            print(f"Step {step}: {agent.name} plays {action} (+{reward})")
            ASCIIRenderer.render(board)
            print()

    slider.close_episode()
    placer.close_episode()

    record.max_rank = board.max_tile()
    record.duration_usec = episode_clock.elapsed_usec()
    if verbose:
        print(f"Episode over after {record.step()} actions. "
              f"Score: {record.score}, max tile: {record.max_tile}")
    return record


def main(argv=None) -> int:
    """Main function to parse arguments and run the episodes."""
    parser = argparse.ArgumentParser(
        description='Run Threes! episodes between a slider and a placer.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Agent specification formats:
  TYPE                 Agent with default settings
  TYPE:SETTINGS        Agent with space-separated key=value settings
                       (name, seed, alpha, init, load, save, tuples)

Slider types: random, greedy, mr-greedy, ungreedy, alternating, ntuple
Placer types: random

Examples:
  python main.py --slider "ntuple:alpha=0.1 save=weights.bin" --total 100000 --block 1000
  python main.py --slider "ntuple:load=weights.bin" --total 1000 --summary
  python main.py --slider mr-greedy --placer "random:seed=7" --total 1 --verbose
'''
    )
    parser.add_argument('--slider', type=str, default='ntuple',
                        help='Slider agent specification (default: ntuple)')
    parser.add_argument('--placer', type=str, default='random',
                        help='Placer agent specification (default: random)')
    parser.add_argument('--total', type=int, default=1000,
                        help='Number of episodes to run')
    parser.add_argument('--block', type=int, default=1000,
                        help='Print statistics every BLOCK episodes (0 disables)')
    parser.add_argument('--limit', type=int, default=0,
                        help='Number of recent episodes kept for statistics (0 keeps all)')
    parser.add_argument('--summary', action='store_true',
                        help='Print statistics over all kept episodes at the end')
    parser.add_argument('--save-episodes', type=str, default=None,
                        help='Write the kept episodes to this file as JSON lines')
    parser.add_argument('--verbose', action='store_true',
                        help='Print every move and board')
    parser.add_argument('--quiet', action='store_true',
                        help='Run in quiet mode (no block output)')

    args = parser.parse_args(argv)

    try:
        slider = create_agent(args.slider, PLAYER)
        placer = create_agent(args.placer, ENVIRONMENT)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    stats = Statistics(limit=args.limit)
    for _ in range(args.total):
        stats.add(run_episode(slider, placer, verbose=args.verbose))
        if args.block and not args.quiet and stats.total % args.block == 0:
            print(stats.show(args.block))

    if args.summary:
        print(stats.summary())

    try:
        slider.shutdown()
        placer.shutdown()
        if args.save_episodes:
            stats.save(args.save_episodes)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
