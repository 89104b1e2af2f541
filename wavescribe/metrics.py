"""Per-signal and document-wide sizing metrics.

step is the number of minimum time units one rendered column has to span so
that every labeled bus segment has room for its text; width is the number of
trace characters. Both feed the layout engine.
"""

from dataclasses import dataclass
from typing import Iterable, Tuple

from .config import RENDERING
from .data_model import Signal, State


def _label_step(label: str, segment: int) -> int:
    """Smallest positive d with d * segment >= chevron reserve + label length."""
    needed = RENDERING.LABEL_CHEVRON_RESERVE + len(label)
    d = 1
    while needed > d * segment:
        d += 1
    return d


def signal_metrics(sig: Signal) -> Tuple[int, int]:
    """Compute (step, width) for one signal.

    Clock tracks report width 0 whether or not they have been expanded; their
    length follows from the data tracks.
    """
    if sig.is_spacer:
        return 0, 0
    if sig.is_clock:
        return sig.period, 0

    states = sig.states
    width = len(states)
    if not sig.labels:
        return 1, width

    step = 0
    i = 0
    for label in sig.labels:
        i = states.find(State.BUS_OPEN.value, i)
        if i < 0:
            break
        start = i
        i = states.find(State.BUS_CLOSE.value, i)
        if i < 0:
            i = width
        else:
            i += 1
        step = max(step, _label_step(label, i - start))
    return step, width


@dataclass(frozen=True)
class DocumentMetrics:
    """Document-wide maxima: column step, trace width and name length."""
    step: int = RENDERING.MIN_STEP
    width: int = RENDERING.MIN_WIDTH
    text: int = RENDERING.MIN_TEXT

    @classmethod
    def collect(cls, signals: Iterable[Signal]) -> "DocumentMetrics":
        step = RENDERING.MIN_STEP
        width = RENDERING.MIN_WIDTH
        text = RENDERING.MIN_TEXT
        for sig in signals:
            n, w = signal_metrics(sig)
            step = max(step, n)
            width = max(width, w)
            text = max(text, len(sig.name))
        return cls(step=step, width=width, text=text)
