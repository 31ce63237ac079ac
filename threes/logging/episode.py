"""
Data structures for episode records.

An EpisodeRecord captures what happened in one game: every action applied,
who applied it, the reward it earned and how long the agent took to choose it.
Records feed the block statistics and can be saved for later analysis.
"""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional
import time
import uuid

from threes.utils.constants import tile_value

PLAYER = "slider"
ENVIRONMENT = "placer"


@dataclass
class MoveRecord:
    """Single action applied during an episode."""
    action: str
    role: str
    reward: int
    time_usec: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MoveRecord':
        """Create from dictionary."""
        return cls(**data)


@dataclass
class EpisodeRecord:
    """
    Complete record of a single episode.
    """
    episode_id: str = ""
    timestamp: str = ""
    slider: str = ""
    placer: str = ""
    moves: List[MoveRecord] = field(default_factory=list)
    max_rank: int = 0
    duration_usec: int = 0

    def __post_init__(self):
        """Generate episode_id and timestamp if not provided."""
        if not self.episode_id:
            self.episode_id = str(uuid.uuid4())
        if not self.timestamp:
            self.timestamp = datetime.utcnow().isoformat() + "Z"

    def add_move(self, action: str, role: str, reward: int, time_usec: int):
        self.moves.append(MoveRecord(action=action, role=role, reward=reward, time_usec=time_usec))

    @property
    def score(self) -> int:
        """Total reward earned by the slider."""
        return sum(m.reward for m in self.moves if m.role == PLAYER)

    @property
    def max_tile(self) -> int:
        """Face value of the largest tile reached."""
        return tile_value(self.max_rank)

    def step(self, role: Optional[str] = None) -> int:
        """Number of actions taken, optionally by one role only."""
        if role is None:
            return len(self.moves)
        return sum(1 for m in self.moves if m.role == role)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "episode_id": self.episode_id,
            "timestamp": self.timestamp,
            "slider": self.slider,
            "placer": self.placer,
            "moves": [m.to_dict() for m in self.moves],
            "max_rank": self.max_rank,
            "duration_usec": self.duration_usec,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EpisodeRecord':
        """Create from dictionary."""
        return cls(
            episode_id=data["episode_id"],
            timestamp=data["timestamp"],
            slider=data.get("slider", ""),
            placer=data.get("placer", ""),
            moves=[MoveRecord.from_dict(m) for m in data.get("moves", [])],
            max_rank=data.get("max_rank", 0),
            duration_usec=data.get("duration_usec", 0),
        )


class Stopwatch:
    """Microsecond timer for move and episode durations."""

    def __init__(self):
        self.start = time.perf_counter()

    def elapsed_usec(self) -> int:
        return int((time.perf_counter() - self.start) * 1_000_000)
