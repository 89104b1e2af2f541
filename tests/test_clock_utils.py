"""Tests for clock expansion."""

import itertools

import pytest

from wavescribe.clock_utils import clock_states, expand_clock, expand_clocks, clock_phase_offset
from wavescribe.parser import parse_line, parse_document


def _runs(states):
    return [(c, len(list(g))) for c, g in itertools.groupby(states)]


class TestClockStates:

    def test_toggle_every_step(self):
        assert clock_states(1, 6) == "^_^_^_"

    def test_runs_of_half_period(self):
        assert clock_states(2, 8) == "^^__^^__"

    def test_last_run_may_be_short(self):
        assert clock_states(3, 8) == "^^^___^^"

    def test_zero_half_period_rejected(self):
        with pytest.raises(ValueError):
            clock_states(0, 4)


class TestExpandClock:

    @pytest.mark.parametrize("half_minus_one,width", [(0, 1), (0, 6), (1, 12), (2, 5), (4, 3)])
    def test_length_and_runs(self, half_minus_one, width):
        sig = parse_line(f"+{half_minus_one} clk", 1)
        expand_clock(sig, width)

        h = half_minus_one + 1
        assert len(sig.states) == width + 2 * h
        assert set(sig.states) <= {"^", "_"}
        assert sig.states[0] == "^"
        runs = _runs(sig.states)
        assert all(length == h for _, length in runs[:-1])
        assert 1 <= runs[-1][1] <= h

    def test_data_track_rejected(self):
        with pytest.raises(ValueError):
            expand_clock(parse_line("^_ a", 1), 4)

    def test_expand_clocks_only_touches_clocks(self):
        signals = parse_document("+0 clk\n\n^^^___ a\n")
        assert expand_clocks(signals, 6) == 1
        assert signals[0].states == "^_^_^_^_"
        assert signals[2].states == "^^^___"


class TestPhaseOffset:

    def test_phase_shift_in_pixels(self):
        sig = parse_line("+1,.25 aclk", 1)
        assert clock_phase_offset(sig, 32.0) == pytest.approx(0.25 * 32.0 * 2)

    def test_no_shift_for_data(self):
        assert clock_phase_offset(parse_line("^_ a", 1), 32.0) == 0.0
