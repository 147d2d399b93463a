"""Tests for the duration model: rounding, clamping, minute/second input."""

import pytest

from ascent.timer.duration import (
    normalize, to_seconds, split_time, format_mmss,
    STEP_SECONDS, MAX_PHASE_SECONDS,
)


class TestNormalize:

    @pytest.mark.parametrize("raw", range(0, 700, 7))
    def test_output_is_stepped_and_in_range(self, raw):
        out = normalize(raw)
        assert out % STEP_SECONDS == 0
        assert 0 <= out <= MAX_PHASE_SECONDS

    @pytest.mark.parametrize("raw", range(0, MAX_PHASE_SECONDS + 1, 11))
    def test_within_half_a_step(self, raw):
        assert abs(normalize(raw) - raw) <= STEP_SECONDS / 2

    def test_ties_round_to_even_step(self):
        assert normalize(15) == 0       # 0.5 steps → 0
        assert normalize(45) == 60      # 1.5 steps → 2
        assert normalize(75) == 60      # 2.5 steps → 2

    def test_clamps_negative_to_zero(self):
        assert normalize(-200) == 0

    def test_clamps_to_max(self):
        assert normalize(3600) == MAX_PHASE_SECONDS
        assert normalize(700, 30, 600) == 600

    def test_custom_step(self):
        assert normalize(61, step_sec=1, max_sec=3600) == 61
        assert normalize(62, step_sec=5, max_sec=3600) == 60

    def test_float_input(self):
        assert normalize(299.6) == 300


class TestToSeconds:

    def test_sum(self):
        assert to_seconds(5, 30) == 330

    def test_floors_components(self):
        assert to_seconds(1.9, 30.7) == 90

    def test_negative_components_become_zero(self):
        assert to_seconds(-3, 20) == 20
        assert to_seconds(2, -10) == 120


class TestDisplayHelpers:

    def test_split_time(self):
        assert split_time(330) == (5, 30)
        assert split_time(314) == (5, 0)
        assert split_time(10_000) == (10, 0)

    def test_format_mmss(self):
        assert format_mmss(0) == "00:00"
        assert format_mmss(412) == "06:52"
        assert format_mmss(-5) == "00:00"
