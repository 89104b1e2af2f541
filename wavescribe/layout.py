"""Canvas layout for a compiled document.

Rows are stacked top to bottom with a TOP_MARGIN_ROWS margin. Each named track
takes one row pitch (SPACER * fs) and each spacer row half a pitch. The canvas
height is `ceil(SPACER * fs * (2 + track_count))` where a pair of spacer rows
counts as one track; the half-row bottom margin absorbs an odd spacer, so the
last band always fits.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from .config import RENDERING
from .data_model import Signal
from .metrics import DocumentMetrics


@dataclass(frozen=True)
class RowBand:
    """Vertical extent of one named track."""
    index: int      # position of the signal in the document
    top: float
    bot: float

    @property
    def mid(self) -> float:
        return 0.5 * (self.top + self.bot)


@dataclass(frozen=True)
class Layout:
    font_size: float
    step: int
    width: int
    right: float        # left text margin, where column 0 starts
    full: float         # pixel width of one column
    wide: float
    high: int
    track_count: int
    rows: Tuple[RowBand, ...]
    _by_index: Dict[int, RowBand] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_by_index", {row.index: row for row in self.rows})

    @property
    def half(self) -> float:
        return 0.5 * self.full

    @property
    def demi(self) -> float:
        """Distance from the mid rail to the high and low rails."""
        return 0.5 * self.font_size

    @property
    def pitch(self) -> float:
        return RENDERING.SPACER * self.font_size

    @property
    def image_size(self) -> Tuple[int, int]:
        return int(math.ceil(self.wide)), self.high

    def row_for(self, index: int) -> RowBand:
        try:
            return self._by_index[index]
        except KeyError:
            raise KeyError(f"signal {index} has no row band") from None

    def column_start(self, i: int, phase_pixels: float = 0.0) -> float:
        """Left edge of the column drawn for the pair ending at character i."""
        return self.right + self.full * (i - 1) - phase_pixels


def compute_layout(signals: Sequence[Signal], font_size: float) -> Layout:
    """Size the canvas for the given (already expanded) signals.

    Pure: calling it twice on the same signals gives equal layouts.
    """
    metrics = DocumentMetrics.collect(signals)
    pitch = RENDERING.SPACER * font_size

    rows: List[RowBand] = []
    named = 0
    spacers = 0
    cursor = RENDERING.TOP_MARGIN_ROWS
    for index, sig in enumerate(signals):
        if sig.is_spacer:
            spacers += 1
            cursor += RENDERING.SPACER_ROW_FRACTION
            continue
        named += 1
        top = cursor * pitch
        rows.append(RowBand(index=index, top=top, bot=top + pitch))
        cursor += 1

    track_count = named + spacers // 2
    right = metrics.text * font_size
    full = 0.5 * font_size * metrics.step
    wide = right + full * (metrics.width - 1)
    high = int(math.ceil(pitch * (2 + track_count)))

    return Layout(
        font_size=font_size,
        step=metrics.step,
        width=metrics.width,
        right=right,
        full=full,
        wide=wide,
        high=high,
        track_count=track_count,
        rows=tuple(rows),
    )
