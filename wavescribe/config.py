"""Centralized configuration for wavescribe.

This module contains the geometry constants, colors and magic numbers used
by the layout engine, the transition renderer and the painter backend, plus
the per-run RenderOptions passed explicitly into the composer.
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class RenderingConfig:
    """Configuration for track geometry and text placement."""
    # Row pitch in font-size units
    SPACER: float = 1.8
    TOP_MARGIN_ROWS: float = 1.5
    SPACER_ROW_FRACTION: float = 0.5

    # Ramps put the diagonal between 0.7 and 1.3 half columns
    RAMP_NEAR: float = 0.7
    RAMP_FAR: float = 1.3
    BUS_OPEN_NOTCH: float = 1.1

    # Break glyph ("%%") geometry
    BREAK_SLANT: float = 0.2
    BREAK_WAIST: float = 0.1

    # Tri-state dash pattern in font-size units
    DASH_ON: float = 0.3
    DASH_OFF: float = 0.2

    # Text
    FONT_FAMILY: str = "Monospace"
    LABEL_FONT_SCALE: float = 0.8
    LABEL_CHEVRON_RESERVE: int = 3  # columns reserved around a label for the chevrons
    NAME_BASELINE: float = 0.4
    LABEL_BASELINE: float = 0.5
    NAME_PADDING: float = 0.5

    # Layout minima
    MIN_TEXT: int = 1
    MIN_WIDTH: int = 1
    MIN_STEP: int = 1

    LINE_WIDTH: float = 1.0


@dataclass(frozen=True)
class ColorScheme:
    """Color scheme for rendered diagrams."""
    BACKGROUND: str = "#ffffff"
    ROW_BAND: str = "#cccccc"
    TRACE: str = "#0000ff"
    TEXT: str = "#000000"
    BORDER: str = "#000000"
    GRID: str = "#000000"
    BREAK_FILL: str = "#ffffff"


# Global instances for easy access
RENDERING = RenderingConfig()
COLORS = ColorScheme()

DEFAULT_FONT_SIZE = 16.0


@dataclass
class RenderOptions:
    """Per-run options consumed by the composer.

    These used to be process-wide flags; they are now passed explicitly so
    the compiler can run side by side with different settings.
    """
    font_size: float = DEFAULT_FONT_SIZE
    debug: bool = False
    font_family: str = RENDERING.FONT_FAMILY
    trace_color: str = COLORS.TRACE

    def __post_init__(self) -> None:
        if not math.isfinite(self.font_size) or self.font_size <= 0:
            raise ValueError(f"font size must be a positive finite number, got {self.font_size}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
