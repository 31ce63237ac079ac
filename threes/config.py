"""
Agent configuration.

Agents are configured with a space-separated list of key=value pairs, e.g.

    "name=learner alpha=0.1 init=16777216,16777216,16777216,16777216 save=w.bin"

The string is parsed once into an AgentConfig; unknown keys and values of the
wrong type are rejected immediately.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from threes.evaluation.features import FEATURE_SETS, DEFAULT_FEATURE_SET


@dataclass(frozen=True)
class AgentConfig:
    """Typed settings shared by every agent."""
    name: str = "unknown"
    role: str = "unknown"
    seed: Optional[int] = None
    alpha: float = 0.0
    init: Optional[Tuple[int, ...]] = None    # weight table sizes, one per feature group
    load: Optional[str] = None                # weight file read at construction
    save: Optional[str] = None                # weight file written on shutdown
    tuples: str = DEFAULT_FEATURE_SET         # key into FEATURE_SETS


def _parse_int(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{key}= expects an integer, got {value!r}") from None


def _parse_float(key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{key}= expects a number, got {value!r}") from None


def _parse_sizes(value: str) -> Tuple[int, ...]:
    parts = [p.strip() for p in value.split(',') if p.strip()]
    if not parts:
        raise ValueError("init= expects a comma-separated list of table sizes")
    sizes = tuple(_parse_int('init', p) for p in parts)
    if any(s <= 0 for s in sizes):
        raise ValueError(f"init= table sizes must be positive, got {value!r}")
    return sizes


def _parse_tuples(value: str) -> str:
    if value not in FEATURE_SETS:
        raise ValueError(f"tuples= expects one of {sorted(FEATURE_SETS)}, got {value!r}")
    return value


_PARSERS = {
    'name': lambda v: v,
    'role': lambda v: v,
    'seed': lambda v: _parse_int('seed', v),
    'alpha': lambda v: _parse_float('alpha', v),
    'init': _parse_sizes,
    'load': lambda v: v,
    'save': lambda v: v,
    'tuples': _parse_tuples,
}


def parse_agent_args(args: str = "", **defaults) -> AgentConfig:
    """
    Parse a key=value argument string into an AgentConfig.

    Args:
        args: Space-separated key=value pairs; later pairs override earlier ones
        **defaults: Values for keys the string does not set (e.g. name, role)

    Returns:
        The parsed configuration

    Raises:
        ValueError: On a pair without '=', an unknown key, or a bad value
    """
    unknown = set(defaults) - set(_PARSERS)
    if unknown:
        raise ValueError(f"Unknown agent setting(s): {sorted(unknown)}")

    values: Dict[str, Any] = dict(defaults)
    for pair in (args or "").split():
        if '=' not in pair:
            raise ValueError(f"Malformed agent setting {pair!r}, expected key=value")
        key, value = pair.split('=', 1)
        if key not in _PARSERS:
            raise ValueError(f"Unknown agent setting {key!r}. "
                             f"Available: {sorted(_PARSERS)}")
        values[key] = _PARSERS[key](value)

    return AgentConfig(**values)

