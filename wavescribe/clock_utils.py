"""Clock track utilities: state synthesis and phase offsets."""

from typing import Iterable

from .data_model import Signal, State


def clock_states(half_period: int, count: int) -> str:
    """Build an idealized square wave of `count` characters.

    Algorithm:
    1. Start high
    2. Emit runs of `half_period` characters, alternating high and low
    3. Stop at exactly `count` characters (the last run may be short)
    """
    if half_period < 1:
        raise ValueError(f"half period must be at least 1, got {half_period}")
    levels = (State.HIGH.value, State.LOW.value)
    return "".join(levels[(k // half_period) % 2] for k in range(count))


def expand_clock(sig: Signal, width: int) -> None:
    """Fill a clock signal's states so it spans the widest data track.

    One full period of headroom is added on top of `width` so that a phase
    shift never uncovers the right end of the track.
    """
    if not sig.is_clock:
        raise ValueError(f"signal {sig.name!r} is not a clock")
    sig.states = clock_states(sig.half_period, width + sig.period)


def expand_clocks(signals: Iterable[Signal], width: int) -> int:
    """Expand every clock track in place; returns how many were expanded."""
    count = 0
    for sig in signals:
        if sig.is_clock:
            expand_clock(sig, width)
            count += 1
    return count


def clock_phase_offset(sig: Signal, full: float) -> float:
    """Leftward pixel shift of a track; non-zero only for phased clocks."""
    if not sig.is_clock:
        return 0.0
    return sig.phase * full * sig.half_period
