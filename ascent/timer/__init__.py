"""Timer package."""

from .config import TimerConfig
from .duration import normalize, to_seconds, split_time, format_mmss
from .engine import TimerEngine, DisplayState
from .plan import (
    SegmentKind,
    Segment,
    SessionPlan,
    build_plan,
    PAIR_PATTERN,
    RING_PATTERN,
    MAX_SETS,
)
from .state import Lifecycle, EngineState
from .summary import SessionSummary, summarize

__all__ = [
    "TimerConfig",
    "normalize",
    "to_seconds",
    "split_time",
    "format_mmss",
    "TimerEngine",
    "DisplayState",
    "SegmentKind",
    "Segment",
    "SessionPlan",
    "build_plan",
    "PAIR_PATTERN",
    "RING_PATTERN",
    "MAX_SETS",
    "Lifecycle",
    "EngineState",
    "SessionSummary",
    "summarize",
]
