"""Configuration management for Trade Log Analyzer."""

import os
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional

COMMANDS = ('list-tick', 'profit', 'pos', 'last-price', 'hist-ord', 'graph-pos')

DEFAULT_LABEL_WIDTH = 10
DEFAULT_GRAPH_SCALE = 1000


def _positive_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == '':
        return default
    value = int(raw)
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {raw!r}")
    return value


def get_render_defaults() -> Dict[str, int]:
    """Get label width and graph scale, overridable from the environment."""
    return {
        'label_width': _positive_int_env('TRADELOG_LABEL_WIDTH', DEFAULT_LABEL_WIDTH),
        'graph_scale': _positive_int_env('TRADELOG_GRAPH_SCALE', DEFAULT_GRAPH_SCALE),
    }


@dataclass
class AnalyzerConfig:
    """Everything the filter-and-aggregate pipeline needs for one run."""
    tickers: FrozenSet[str] = field(default_factory=frozenset)
    time_after: Optional[str] = None
    time_before: Optional[str] = None
    command: Optional[str] = None
    bar_width: Optional[int] = None
    label_width: int = DEFAULT_LABEL_WIDTH
    graph_scale: int = DEFAULT_GRAPH_SCALE
