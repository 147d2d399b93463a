"""Engine-facing timer configuration.

The UI hands over plain numeric fields (minutes, seconds, set count,
an "A/B separate" flag).  :class:`TimerConfig` normalizes them once so
the plan builder and the engine only ever see canonical durations.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from .duration import MAX_PHASE_SECONDS, STEP_SECONDS, normalize, to_seconds
from .plan import (
    PATTERNS, RING_PATTERN, SegmentKind, SessionPlan, build_plan, clamp_set_count,
)

if TYPE_CHECKING:
    from ..settings import Settings


DEFAULT_PRACTICE_SECONDS = 5 * 60
DEFAULT_REST_SECONDS = 2 * 60


@dataclass(frozen=True)
class TimerConfig:
    practice_sec: int = DEFAULT_PRACTICE_SECONDS
    rest_sec: int = DEFAULT_REST_SECONDS
    set_count: int = 1
    pattern: tuple[SegmentKind, ...] = RING_PATTERN
    b_practice_sec: int | None = None
    step_sec: int = STEP_SECONDS
    max_sec: int = MAX_PHASE_SECONDS

    def __post_init__(self) -> None:
        # frozen: normalize through object.__setattr__
        object.__setattr__(self, "practice_sec", self._norm(self.practice_sec))
        object.__setattr__(self, "rest_sec", self._norm(self.rest_sec))
        object.__setattr__(self, "set_count", clamp_set_count(self.set_count))
        object.__setattr__(self, "pattern", tuple(self.pattern) or RING_PATTERN)
        if self.b_practice_sec is not None:
            object.__setattr__(self, "b_practice_sec", self._norm(self.b_practice_sec))

    def _norm(self, seconds: float) -> int:
        return normalize(seconds, self.step_sec, self.max_sec)

    # ── constructors ──────────────────────────────────────────────────

    @classmethod
    def from_fields(
        cls,
        practice_minutes: float,
        practice_seconds: float,
        rest_minutes: float,
        rest_seconds: float,
        set_count: int = 1,
        *,
        separate_ab: bool = False,
        b_minutes: float = 0,
        b_seconds: float = 0,
        pattern: tuple[SegmentKind, ...] = RING_PATTERN,
        step_sec: int = STEP_SECONDS,
        max_sec: int = MAX_PHASE_SECONDS,
    ) -> "TimerConfig":
        """Build from the raw stepper fields of the settings form."""
        return cls(
            practice_sec=to_seconds(practice_minutes, practice_seconds),
            rest_sec=to_seconds(rest_minutes, rest_seconds),
            set_count=set_count,
            pattern=pattern,
            b_practice_sec=to_seconds(b_minutes, b_seconds) if separate_ab else None,
            step_sec=step_sec,
            max_sec=max_sec,
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "TimerConfig":
        return cls(
            practice_sec=settings.practice_seconds,
            rest_sec=settings.rest_seconds,
            set_count=settings.set_count,
            pattern=PATTERNS.get(settings.pattern, RING_PATTERN),
            b_practice_sec=(
                settings.b_practice_seconds if settings.separate_ab else None
            ),
            step_sec=settings.step_seconds,
            max_sec=settings.max_phase_seconds,
        )

    # ── derived ───────────────────────────────────────────────────────

    @property
    def separate_ab(self) -> bool:
        return self.b_practice_sec is not None

    def with_changes(self, **changes) -> "TimerConfig":
        return replace(self, **changes)

    def build(self) -> SessionPlan:
        return build_plan(
            self.practice_sec,
            self.rest_sec,
            self.set_count,
            self.pattern,
            self.b_practice_sec,
        )

    @property
    def first_segment_seconds(self) -> int:
        """Countdown shown while configuring: the first segment's length."""
        return self.build()[0].duration_sec

    @property
    def total_seconds(self) -> int:
        return self.build().total_seconds
