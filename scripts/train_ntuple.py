#!/usr/bin/env python3
"""
Train an n-tuple network for Threes! by self-play with backward TD(0).

Plays the learning slider against the random placer, prints block statistics
and writes the weight tables when training ends.
"""
import argparse
import sys
from pathlib import Path

from tqdm import tqdm

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from threes.agents import NTupleAgent, RandomPlacer
from threes.config import AgentConfig
from threes.evaluation.features import FEATURE_SETS, DEFAULT_FEATURE_SET
from threes.logging.episode import PLAYER, ENVIRONMENT
from threes.logging.statistics import Statistics
from main import run_episode


def main():
    parser = argparse.ArgumentParser(
        description='Train an n-tuple network for Threes!',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Train from scratch with the default 6-tuple features
  python scripts/train_ntuple.py --episodes 100000 --alpha 0.1 --output weights.bin

  # Continue training from saved weights
  python scripts/train_ntuple.py --load weights.bin --episodes 50000 --output weights2.bin

  # Quick run with small features
  python scripts/train_ntuple.py --tuples row --episodes 1000 --block 100 --output test.bin
'''
    )

    # Network options
    parser.add_argument('--tuples', type=str, default=DEFAULT_FEATURE_SET,
                        choices=sorted(FEATURE_SETS),
                        help=f'Feature set (default: {DEFAULT_FEATURE_SET})')
    parser.add_argument('--load', type=str, default=None,
                        help='Weight file to start from (default: zero weights)')

    # Training options
    parser.add_argument('--episodes', type=int, default=10000,
                        help='Number of training episodes (default: 10000)')
    parser.add_argument('--alpha', type=float, default=0.1,
                        help='Learning rate (default: 0.1)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for the placer')
    parser.add_argument('--block', type=int, default=1000,
                        help='Print statistics every BLOCK episodes (default: 1000)')

    # Output options
    parser.add_argument('--output', type=str, required=True,
                        help='Weight file to write (required)')
    parser.add_argument('--save-episodes', type=str, default=None,
                        help='Also write the last block of episodes as JSON lines')
    parser.add_argument('--quiet', action='store_true',
                        help='Suppress progress output')

    args = parser.parse_args()

    verbose = not args.quiet

    try:
        slider = NTupleAgent(AgentConfig(
            name="ntuple", role=PLAYER, alpha=args.alpha,
            tuples=args.tuples, load=args.load, save=args.output
        ))
    except (ValueError, OSError) as e:
        print(f"\nError creating agent: {e}", file=sys.stderr)
        return 1
    placer = RandomPlacer(AgentConfig(name="place", role=ENVIRONMENT, seed=args.seed))

    if verbose:
        print("\n" + "=" * 60)
        print("N-Tuple Network Training")
        print("=" * 60)
        print(f"\nFeatures: {args.tuples} ({len(slider.network.groups)} groups, "
              f"{slider.network.total_variants} isomorphic members)")
        print(f"Alpha: {args.alpha}")
        if args.load:
            print(f"Starting from: {args.load}")

    stats = Statistics(limit=args.block)
    for _ in tqdm(range(args.episodes), disable=not verbose):
        stats.add(run_episode(slider, placer))
        if verbose and args.block and stats.total % args.block == 0:
            tqdm.write(stats.show(args.block))

    try:
        slider.shutdown()
        if args.save_episodes:
            stats.save(args.save_episodes)
    except OSError as e:
        print(f"\nError saving weights: {e}", file=sys.stderr)
        return 1

    if verbose:
        print(f"\nWeights saved to: {args.output}")
        print("\n" + "=" * 60)
        print("Training complete!")
        print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
