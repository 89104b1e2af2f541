"""Compile-and-render pipeline.

The pipeline runs in explicit phases, each consuming the previous one's
output:

    parse -> collect metrics -> expand clocks -> layout -> render primitives

Clock expansion needs the document-wide width, so it can only run after every
line has been measured. render_diagram() hands the primitives to the Qt
painter backend; render_file() adds reading the input and writing the image.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from PySide6.QtGui import QImage

from .clock_utils import expand_clocks
from .config import RenderOptions
from .data_model import Signal
from .errors import UnrecognizedTransition
from .layout import Layout, compute_layout
from .metrics import DocumentMetrics
from .painter import QtPainterBackend, save_image
from .parser import parse_document
from .primitives import Primitive
from .signal_renderer import SignalRenderer

logger = logging.getLogger(__name__)


@dataclass
class Diagram:
    """Everything known about one compiled document."""
    source: str
    signals: List[Signal]
    metrics: DocumentMetrics
    layout: Layout
    primitives: List[Primitive] = field(default_factory=list, repr=False)
    diagnostics: List[UnrecognizedTransition] = field(default_factory=list)

    @property
    def size(self):
        return self.layout.image_size


def compile_signals(signals: List[Signal], options: Optional[RenderOptions] = None,
                    source: str = "<input>") -> Diagram:
    """Run metrics, clock expansion, layout and rendering over parsed signals."""
    options = options or RenderOptions()

    metrics = DocumentMetrics.collect(signals)
    expanded = expand_clocks(signals, metrics.width)
    layout = compute_layout(signals, options.font_size)
    logger.debug("%s: step=%d width=%d clocks=%d size=%s",
                 source, metrics.step, metrics.width, expanded, layout.image_size)

    renderer = SignalRenderer(layout, options, source)
    primitives = renderer.render(signals)
    return Diagram(
        source=source,
        signals=signals,
        metrics=metrics,
        layout=layout,
        primitives=primitives,
        diagnostics=list(renderer.diagnostics),
    )


def compile_text(text: str, source: str = "<input>",
                 options: Optional[RenderOptions] = None) -> Diagram:
    """Compile a .wvy document into a Diagram.

    Raises:
        MalformedLine, InvalidClockSpec: the document does not parse.
    """
    return compile_signals(parse_document(text, source), options, source)


def render_diagram(diagram: Diagram, options: Optional[RenderOptions] = None) -> QImage:
    """Paint a compiled diagram into a new QImage."""
    backend = QtPainterBackend(diagram.size, options)
    return backend.paint(diagram.primitives)


def render_file(input_path: Union[str, Path], output_path: Union[str, Path],
                options: Optional[RenderOptions] = None) -> Diagram:
    """Compile input_path and write the rendered image to output_path."""
    options = options or RenderOptions()
    input_path = Path(input_path)
    text = input_path.read_text(encoding="utf-8")

    diagram = compile_text(text, str(input_path), options)
    image = render_diagram(diagram, options)
    save_image(image, output_path)

    if diagram.diagnostics:
        logger.info("%s: %d unrecognized transitions", input_path, len(diagram.diagnostics))
    logger.debug("wrote %s (%dx%d)", output_path, *diagram.size)
    return diagram
