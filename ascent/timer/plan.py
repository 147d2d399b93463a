"""Segment plan builder.

A session is ``set_count`` repetitions of a fixed per-set *pattern* of
segment kinds, flattened into one ordered tuple of :class:`Segment`.
The plan is built once when a session starts and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from string import ascii_uppercase


class SegmentKind(Enum):
    PRACTICE = "practice"
    REST = "rest"


# ── stock patterns ───────────────────────────────────────────────────────

PAIR_PATTERN: tuple[SegmentKind, ...] = (SegmentKind.PRACTICE, SegmentKind.REST)
RING_PATTERN: tuple[SegmentKind, ...] = (
    SegmentKind.PRACTICE,
    SegmentKind.REST,
    SegmentKind.PRACTICE,
    SegmentKind.REST,
)

PATTERNS: dict[str, tuple[SegmentKind, ...]] = {
    "pair": PAIR_PATTERN,
    "ring": RING_PATTERN,
}

MIN_SETS = 1
MAX_SETS = 12


def clamp_set_count(value: int) -> int:
    return min(MAX_SETS, max(MIN_SETS, int(value)))


@dataclass(frozen=True)
class Segment:
    """One timed phase of a session."""

    kind: SegmentKind
    duration_sec: int
    label: str
    set_index: int          # 1-based
    position: int           # 0-based slot within the set
    marks_phase_start: bool = False

    @property
    def is_practice(self) -> bool:
        return self.kind is SegmentKind.PRACTICE


@dataclass(frozen=True)
class SessionPlan:
    segments: tuple[Segment, ...]
    set_count: int
    pattern: tuple[SegmentKind, ...]

    def __len__(self) -> int:
        return len(self.segments)

    def __getitem__(self, index: int) -> Segment:
        return self.segments[index]

    def __iter__(self):
        return iter(self.segments)

    @property
    def total_seconds(self) -> int:
        return sum(seg.duration_sec for seg in self.segments)

    def practice_segments(self) -> list[Segment]:
        return [seg for seg in self.segments if seg.is_practice]

    def shape(self) -> list[tuple[SegmentKind, int]]:
        """``(kind, duration)`` per segment; equal shapes mean equal plans."""
        return [(seg.kind, seg.duration_sec) for seg in self.segments]


def _practice_labels(pattern: tuple[SegmentKind, ...]) -> dict[int, str]:
    slots = [i for i, kind in enumerate(pattern) if kind is SegmentKind.PRACTICE]
    if len(slots) == 1:
        return {slots[0]: "Practice"}
    return {
        slot: f"Practice {ascii_uppercase[n % 26]}"
        for n, slot in enumerate(slots)
    }


def build_plan(
    practice_sec: int,
    rest_sec: int,
    set_count: int,
    pattern: tuple[SegmentKind, ...] | list[SegmentKind] = RING_PATTERN,
    b_practice_sec: int | None = None,
) -> SessionPlan:
    """Flatten ``set_count × pattern`` into a :class:`SessionPlan`.

    ``set_count`` is clamped to ``[1, 12]``.  Every practice slot gets
    *practice_sec* except the second practice slot of each set, which
    gets *b_practice_sec* when one is given.  That same slot is flagged
    ``marks_phase_start``.
    """
    pattern = tuple(pattern)
    if not pattern:
        raise ValueError("pattern must contain at least one segment kind")

    sets = clamp_set_count(set_count)
    practice = max(0, int(practice_sec))
    rest = max(0, int(rest_sec))
    b_practice = practice if b_practice_sec is None else max(0, int(b_practice_sec))

    labels = _practice_labels(pattern)
    practice_slots = [i for i, k in enumerate(pattern) if k is SegmentKind.PRACTICE]
    b_slot = practice_slots[1] if len(practice_slots) > 1 else None

    segments: list[Segment] = []
    for set_index in range(1, sets + 1):
        for position, kind in enumerate(pattern):
            if kind is SegmentKind.PRACTICE:
                duration = b_practice if position == b_slot else practice
                label = labels[position]
            else:
                duration = rest
                label = "Rest"
            segments.append(Segment(
                kind=kind,
                duration_sec=duration,
                label=label,
                set_index=set_index,
                position=position,
                marks_phase_start=position == b_slot,
            ))

    return SessionPlan(segments=tuple(segments), set_count=sets, pattern=pattern)
