"""
Block statistics over finished episodes.
"""
import json
from collections import Counter, deque
from pathlib import Path
from typing import Iterable, List, Optional, Union

from threes.logging.episode import EpisodeRecord, PLAYER, ENVIRONMENT
from threes.utils.constants import tile_value


def format_block(records: List[EpisodeRecord], index: int) -> str:
    """
    Format statistics for a block of episodes.

    The first line holds the episode counter, the average and maximum score
    and the operation rates (overall, slider, placer, in ops per second).
    The following lines list, for every max tile reached in the block, the
    share of episodes that reached at least that tile and the share that
    ended with exactly it.

    Args:
        records: Episodes in the block
        index: Number of episodes played so far

    Returns:
        Formatted string for terminal display
    """
    if not records:
        return f"{index}\tno episodes"

    scores = [r.score for r in records]
    avg = sum(scores) / len(scores)

    def rate(role: Optional[str]) -> float:
        steps = 0
        usec = 0
        for r in records:
            moves = [m for m in r.moves if role is None or m.role == role]
            steps += len(moves)
            usec += sum(m.time_usec for m in moves)
        return steps * 1_000_000 / usec if usec else 0.0

    lines = [
        f"{index}\tavg = {avg:.0f}, max = {max(scores)}, "
        f"ops = {rate(None):.0f} ({rate(PLAYER):.0f}|{rate(ENVIRONMENT):.0f})"
    ]

    ranks = Counter(r.max_rank for r in records)
    reached = len(records)
    for rank in sorted(ranks):
        lines.append(
            f"\t{tile_value(rank)}\t{reached / len(records):.1%}\t({ranks[rank] / len(records):.1%})"
        )
        reached -= ranks[rank]
    return "\n".join(lines)


class Statistics:
    """
    Keeps the most recent episodes and reports on them.

    Usage:
        stats = Statistics(limit=1000)
        stats.add(record)
        if stats.total % 1000 == 0:
            print(stats.show(1000))
    """

    def __init__(self, limit: int = 0):
        """
        Args:
            limit: Number of episodes to keep (0 keeps all)
        """
        self.limit = limit
        self.records = deque(maxlen=limit or None)
        self.total = 0

    def add(self, record: EpisodeRecord):
        self.records.append(record)
        self.total += 1

    def __len__(self) -> int:
        return len(self.records)

    def last(self, block: int) -> List[EpisodeRecord]:
        """The most recent `block` episodes, oldest first."""
        block = min(block, len(self.records))
        return list(self.records)[len(self.records) - block:]

    def show(self, block: Optional[int] = None) -> str:
        """Statistics for the last `block` episodes (all kept ones by default)."""
        records = self.last(block) if block else list(self.records)
        return format_block(records, self.total)

    def summary(self) -> str:
        return self.show()

    def save(self, path: Union[str, Path]) -> Path:
        """Write the kept episodes to `path`, one JSON object per line."""
        path = Path(path)
        with open(path, 'w') as f:
            for record in self.records:
                f.write(json.dumps(record.to_dict()) + "\n")
        return path

    def load(self, path: Union[str, Path]):
        """Append the episodes stored in `path`."""
        with open(path, 'r') as f:
            self.extend(EpisodeRecord.from_dict(json.loads(line)) for line in f if line.strip())

    def extend(self, records: Iterable[EpisodeRecord]):
        for record in records:
            self.add(record)
