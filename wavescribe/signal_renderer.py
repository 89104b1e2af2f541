"""Waveform transition renderer.

Purpose
- Turn every track of a compiled document into drawing primitives: the row
  band, the trace, bus labels and the name in the left margin.
- Keep the painter backend dumb: this module decides geometry only and emits
  Stroke/Fill/Rect/Text records; nothing here touches Qt.

Key ideas
- A trace is walked as a sliding window of two characters. The first
  character only seeds the window; the pair ending at character i is drawn in
  column i, whose left edge is `right + full*(i-1) - phase`.
- Each pair maps to exactly one Transition through TRANSITION_TABLE, a closed
  table over (State, State). Pairs outside the table (including characters
  outside the alphabet) are reported once per (signal, pair) and leave their
  column blank.
- Y axis inside a row: the high rail sits `demi` above the mid line and the
  low rail `demi` below it; tri-state is drawn dashed on the mid line.
- Bus segments: `x<` and `><` open a segment at the column midpoint, `><` and
  `>x` close it and draw the next unconsumed label centered over it. `>>`
  keeps the chevron shape without consuming a label.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from .clock_utils import clock_phase_offset
from .config import RENDERING, COLORS, RenderOptions
from .data_model import Signal, State, Transition
from .errors import UnexpandedClockError, UnrecognizedTransition
from .layout import Layout, RowBand
from .primitives import Primitive, Point, Stroke, Fill, Rect, Text, TextAnchor, rectangle

logger = logging.getLogger(__name__)


def _pairs(*combos: str) -> List[Tuple[State, State]]:
    return [(State(c[0]), State(c[1])) for c in combos]


_RULES: Dict[Transition, List[Tuple[State, State]]] = {
    Transition.HIGH: _pairs("^^", "/^", "%^", "^%"),
    Transition.LOW: _pairs("__", "\\_", "%_", "_%"),
    Transition.FALL: _pairs("^_"),
    Transition.RISE: _pairs("_^"),
    Transition.RAMP_FALL: _pairs("^\\"),
    Transition.RAMP_RISE: _pairs("_/"),
    Transition.BUS_SWAP: _pairs("><"),
    Transition.BUS_HOLD: _pairs(">>"),
    Transition.BUS_CLOSE: _pairs(">x"),
    Transition.BUS_OPEN: _pairs("x<"),
    Transition.HIGH_TO_UNDEFINED: _pairs("^x"),
    Transition.LOW_TO_UNDEFINED: _pairs("_x"),
    Transition.UNDEFINED_TO_HIGH: _pairs("x^"),
    Transition.UNDEFINED_TO_LOW: _pairs("x_"),
    Transition.UNDEFINED: _pairs("xx", "<-", "->", "--", "x%", "%x", "-%", "%-"),
    Transition.TRISTATE_ENTER: _pairs("_z"),
    Transition.TRISTATE_EXIT: _pairs("zx"),
    Transition.TRISTATE: _pairs("zz", "z%", "%z"),
    Transition.BREAK: _pairs("%%"),
}

TRANSITION_TABLE: Dict[Tuple[State, State], Transition] = {
    pair: rule for rule, pairs in _RULES.items() for pair in pairs
}


def classify_pair(previous: str, current: str) -> Optional[Transition]:
    """Look up the drawing rule for a character pair, None if there is none."""
    try:
        key = (State(previous), State(current))
    except ValueError:
        return None
    return TRANSITION_TABLE.get(key)


@dataclass(frozen=True)
class Column:
    """Geometry of one column inside a row band."""
    start: float
    full: float
    mid: float
    demi: float

    @property
    def half(self) -> float:
        return 0.5 * self.full

    @property
    def stop(self) -> float:
        return self.start + self.full

    @property
    def hi(self) -> float:
        return self.mid - self.demi

    @property
    def lo(self) -> float:
        return self.mid + self.demi

    def x(self, halves: float) -> float:
        """X coordinate `halves` half columns right of the column start."""
        return self.start + self.half * halves


@dataclass(frozen=True)
class BusMark:
    """Bus segment bookkeeping produced by chevron rules."""
    opens_at: Optional[float] = None
    closes_at: Optional[float] = None
    show_label: bool = False


class SignalRenderer:
    """Emit primitives for a laid out document.

    The renderer is single use: create one per document, call render(), then
    read `diagnostics` for the non-fatal problems found along the way.
    """

    def __init__(self, layout: Layout, options: Optional[RenderOptions] = None,
                 source: Optional[str] = None) -> None:
        self._layout = layout
        self._source = source
        self._options = options or RenderOptions(font_size=layout.font_size)
        self._primitives: List[Primitive] = []
        self._reported: Set[Tuple[str, str]] = set()
        self.diagnostics: List[UnrecognizedTransition] = []
        self._rules: Dict[Transition, Callable[[Column], Optional[BusMark]]] = {
            Transition.HIGH: self._draw_high,
            Transition.LOW: self._draw_low,
            Transition.FALL: self._draw_fall,
            Transition.RISE: self._draw_rise,
            Transition.RAMP_FALL: self._draw_ramp_fall,
            Transition.RAMP_RISE: self._draw_ramp_rise,
            Transition.BUS_SWAP: self._draw_bus_swap,
            Transition.BUS_HOLD: self._draw_bus_hold,
            Transition.BUS_CLOSE: self._draw_bus_close,
            Transition.BUS_OPEN: self._draw_bus_open,
            Transition.HIGH_TO_UNDEFINED: self._draw_high_to_undefined,
            Transition.LOW_TO_UNDEFINED: self._draw_low_to_undefined,
            Transition.UNDEFINED_TO_HIGH: self._draw_undefined_to_high,
            Transition.UNDEFINED_TO_LOW: self._draw_undefined_to_low,
            Transition.UNDEFINED: self._draw_undefined,
            Transition.TRISTATE_ENTER: self._draw_tristate_enter,
            Transition.TRISTATE_EXIT: self._draw_tristate_exit,
            Transition.TRISTATE: self._draw_tristate,
            Transition.BREAK: self._draw_break,
        }

    @property
    def primitives(self) -> List[Primitive]:
        return self._primitives

    def render(self, signals: Sequence[Signal]) -> List[Primitive]:
        """Render the whole document in painting order."""
        layout = self._layout
        self._primitives.append(rectangle(0, 0, layout.wide, layout.high, COLORS.BACKGROUND))
        if self._options.debug:
            self._draw_gridlines()
        for index, sig in enumerate(signals):
            if sig.is_spacer:
                continue
            self.render_signal(sig, layout.row_for(index))
        width, height = layout.image_size
        self._primitives.append(Rect(0.5, 0.5, width - 1, height - 1, COLORS.BORDER))
        return self._primitives

    def render_signal(self, sig: Signal, row: RowBand) -> None:
        """Render one named track into its row band."""
        if not sig.is_expanded:
            raise UnexpandedClockError(
                f"clock {sig.name!r} was not expanded", self._source, sig.line_no)

        layout = self._layout
        fs = layout.font_size
        self._primitives.append(rectangle(0, row.top + 1, layout.wide, row.bot - 1, COLORS.ROW_BAND))

        phase = clock_phase_offset(sig, layout.full)
        label_no = 0
        last_start = 0.0
        last_end = 0.0
        states = sig.states
        for i in range(1, len(states)):
            combo = states[i - 1:i + 1]
            rule = classify_pair(combo[0], combo[1])
            if rule is None:
                self._report(sig, combo, i)
                continue

            column = Column(start=layout.column_start(i, phase), full=layout.full,
                            mid=row.mid, demi=layout.demi)
            mark = self._rules[rule](column)
            if mark is None:
                continue

            if mark.closes_at is not None:
                last_end = mark.closes_at
            if mark.show_label and label_no < len(sig.labels):
                self._primitives.append(Text(
                    sig.labels[label_no],
                    0.5 * (last_start + last_end),
                    row.bot - RENDERING.LABEL_BASELINE * fs,
                    RENDERING.LABEL_FONT_SCALE * fs,
                    COLORS.TEXT,
                    TextAnchor.CENTER,
                ))
                label_no += 1
            if mark.opens_at is not None:
                last_start = mark.opens_at

        # Blank the margin so phase-shifted clocks do not run under the name
        self._primitives.append(rectangle(0, row.top + 1, layout.right, row.bot - 1, COLORS.BACKGROUND))
        self._primitives.append(Text(
            sig.name,
            layout.right - RENDERING.NAME_PADDING * fs,
            row.bot - RENDERING.NAME_BASELINE * fs,
            fs,
            COLORS.TEXT,
            TextAnchor.RIGHT,
        ))

    def _report(self, sig: Signal, combo: str, column: int) -> None:
        key = (sig.name, combo)
        if key in self._reported:
            return
        self._reported.add(key)
        diagnostic = UnrecognizedTransition(signal=sig.name, pair=combo, column=column)
        self.diagnostics.append(diagnostic)
        logger.warning("%s", diagnostic)

    def _draw_gridlines(self) -> None:
        layout = self._layout
        for i in range(layout.width):
            x = layout.right + layout.full * (0.5 + i)
            self._primitives.append(Stroke(((x, 0.0), (x, float(layout.high))), COLORS.GRID))

    # Primitive helpers

    def _line(self, *points: Point) -> None:
        self._primitives.append(Stroke(tuple(points), self._options.trace_color))

    def _dashed(self, *points: Point) -> None:
        fs = self._layout.font_size
        dash = (RENDERING.DASH_ON * fs, RENDERING.DASH_OFF * fs)
        self._primitives.append(Stroke(tuple(points), self._options.trace_color, dash))

    # Transition rules

    def _draw_high(self, c: Column) -> None:
        self._line((c.start, c.hi), (c.stop, c.hi))

    def _draw_low(self, c: Column) -> None:
        self._line((c.start, c.lo), (c.stop, c.lo))

    def _draw_fall(self, c: Column) -> None:
        self._line((c.start, c.hi), (c.x(1), c.hi), (c.x(1), c.lo), (c.stop, c.lo))

    def _draw_rise(self, c: Column) -> None:
        self._line((c.start, c.lo), (c.x(1), c.lo), (c.x(1), c.hi), (c.stop, c.hi))

    def _draw_ramp_fall(self, c: Column) -> None:
        self._line((c.start, c.hi), (c.x(RENDERING.RAMP_NEAR), c.hi),
                   (c.x(RENDERING.RAMP_FAR), c.lo), (c.stop, c.lo))

    def _draw_ramp_rise(self, c: Column) -> None:
        self._line((c.start, c.lo), (c.x(RENDERING.RAMP_NEAR), c.lo),
                   (c.x(RENDERING.RAMP_FAR), c.hi), (c.stop, c.hi))

    def _draw_chevrons(self, c: Column) -> None:
        near, far = c.x(RENDERING.RAMP_NEAR), c.x(RENDERING.RAMP_FAR)
        self._line((c.start, c.hi), (near, c.hi), (far, c.lo), (c.stop, c.lo))
        self._line((c.start, c.lo), (near, c.lo), (far, c.hi), (c.stop, c.hi))

    def _draw_bus_swap(self, c: Column) -> BusMark:
        self._draw_chevrons(c)
        return BusMark(opens_at=c.x(1), closes_at=c.x(1), show_label=True)

    def _draw_bus_hold(self, c: Column) -> BusMark:
        self._draw_chevrons(c)
        return BusMark(opens_at=c.x(1), closes_at=c.x(1))

    def _draw_bus_close(self, c: Column) -> BusMark:
        near = c.x(RENDERING.RAMP_NEAR)
        self._line((c.start, c.hi), (near, c.hi), (c.x(1), c.mid), (near, c.lo), (c.start, c.lo))
        self._line((c.stop, c.lo), (c.x(1), c.mid), (c.stop, c.hi))
        return BusMark(closes_at=c.x(1), show_label=True)

    def _draw_bus_open(self, c: Column) -> BusMark:
        notch = c.x(RENDERING.BUS_OPEN_NOTCH)
        self._line((c.start, c.lo), (c.x(1), c.mid), (c.start, c.hi))
        self._line((c.stop, c.hi), (notch, c.hi), (c.x(1), c.mid), (notch, c.lo), (c.stop, c.lo))
        return BusMark(opens_at=c.x(1))

    def _draw_high_to_undefined(self, c: Column) -> None:
        self._line((c.start, c.hi), (c.stop, c.hi))
        self._line((c.x(1), c.hi), (c.stop, c.lo))

    def _draw_low_to_undefined(self, c: Column) -> None:
        self._line((c.start, c.lo), (c.stop, c.lo))
        self._line((c.x(1), c.lo), (c.stop, c.hi))

    def _draw_undefined_to_high(self, c: Column) -> None:
        self._line((c.start, c.lo), (c.x(1), c.hi))
        self._line((c.start, c.hi), (c.stop, c.hi))

    def _draw_undefined_to_low(self, c: Column) -> None:
        self._line((c.start, c.hi), (c.x(1), c.lo))
        self._line((c.start, c.lo), (c.stop, c.lo))

    def _draw_undefined(self, c: Column) -> None:
        self._line((c.start, c.lo), (c.stop, c.lo))
        self._line((c.start, c.hi), (c.stop, c.hi))

    def _draw_tristate_enter(self, c: Column) -> None:
        self._line((c.start, c.lo), (c.x(1), c.lo))
        self._dashed((c.x(1), c.lo), (c.x(1), c.mid), (c.stop, c.mid))

    def _draw_tristate_exit(self, c: Column) -> None:
        self._dashed((c.start, c.mid), (c.x(1), c.mid))
        self._line((c.stop, c.lo), (c.x(1), c.mid), (c.stop, c.hi))

    def _draw_tristate(self, c: Column) -> None:
        self._dashed((c.start, c.mid), (c.stop, c.mid))

    def _draw_break(self, c: Column) -> None:
        vert = self._layout.pitch * 0.5
        waist = vert * RENDERING.BREAK_WAIST
        slant = c.half * RENDERING.BREAK_SLANT
        self._primitives.append(Fill((
            (c.start, c.mid - vert),
            (c.start - slant, c.mid + waist),
            (c.start + slant, c.mid + waist),
            (c.start, c.mid + vert),
            (c.stop, c.mid + vert),
            (c.stop + slant, c.mid - waist),
            (c.stop - slant, c.mid - waist),
            (c.stop, c.mid - vert),
        ), COLORS.BREAK_FILL))
