"""Drawing primitives emitted by the renderer and executed by the painter.

The renderer only decides what to draw and where; primitives carry plain
floats and color strings so they can be inspected without Qt.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

Point = Tuple[float, float]


class TextAnchor(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Stroke:
    """Open polyline through points; dash is (on, off) in pixels or None."""
    points: Tuple[Point, ...]
    color: str
    dash: Optional[Tuple[float, float]] = None

    @property
    def dashed(self) -> bool:
        return self.dash is not None


@dataclass(frozen=True)
class Fill:
    """Closed polygon filled without outline."""
    points: Tuple[Point, ...]
    color: str


@dataclass(frozen=True)
class Rect:
    """Axis aligned rectangle outline."""
    x: float
    y: float
    width: float
    height: float
    color: str


@dataclass(frozen=True)
class Text:
    """Text at baseline y; x is the anchor point selected by `anchor`."""
    text: str
    x: float
    y: float
    size: float
    color: str
    anchor: TextAnchor = TextAnchor.LEFT


Primitive = Union[Stroke, Fill, Rect, Text]


def rectangle(left: float, top: float, right: float, bottom: float, color: str) -> Fill:
    """Filled rectangle given its edges."""
    return Fill(((left, bottom), (right, bottom), (right, top), (left, top)), color)
