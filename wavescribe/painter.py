"""QPainter backend: executes drawing primitives on a QImage.

Qt needs a QGuiApplication before fonts can be used, even when painting into
an offscreen image. ensure_gui_application() creates one on the offscreen
platform when no display platform was requested.
"""

import os
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import (QGuiApplication, QImage, QPainter, QPen, QBrush, QColor,
                           QFont, QFontMetricsF, QPolygonF)

from .config import RENDERING, COLORS, RenderOptions
from .errors import OutputError
from .primitives import Primitive, Stroke, Fill, Rect, Text, TextAnchor


def ensure_gui_application() -> QGuiApplication:
    """Return the running Qt application, creating an offscreen one if needed."""
    app = QGuiApplication.instance()
    if app is None:
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
        app = QGuiApplication([])
    return app


def make_font(family: str, size: float) -> QFont:
    font = QFont(family)
    font.setStyleHint(QFont.StyleHint.Monospace)
    font.setPixelSize(max(1, round(size)))
    return font


class QtPainterBackend:
    """Paints primitives into a QImage of a fixed size."""

    def __init__(self, size: Tuple[int, int], options: Optional[RenderOptions] = None) -> None:
        ensure_gui_application()
        self._options = options or RenderOptions()
        width, height = size
        self.image = QImage(max(1, width), max(1, height), QImage.Format.Format_RGB32)
        self.image.fill(QColor(COLORS.BACKGROUND))

    def paint(self, primitives: Iterable[Primitive]) -> QImage:
        painter = QPainter(self.image)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
            painter.setRenderHint(QPainter.RenderHint.TextAntialiasing, True)
            for primitive in primitives:
                if isinstance(primitive, Stroke):
                    self._stroke(painter, primitive)
                elif isinstance(primitive, Fill):
                    self._fill(painter, primitive)
                elif isinstance(primitive, Rect):
                    self._rect(painter, primitive)
                elif isinstance(primitive, Text):
                    self._text(painter, primitive)
                else:
                    raise TypeError(f"unknown primitive {primitive!r}")
        finally:
            painter.end()
        return self.image

    def _stroke(self, painter: QPainter, stroke: Stroke) -> None:
        pen = QPen(QColor(stroke.color))
        pen.setWidthF(RENDERING.LINE_WIDTH)
        if stroke.dash is not None:
            on, off = stroke.dash
            # Dash pattern entries are in units of the pen width
            pen.setDashPattern([on / RENDERING.LINE_WIDTH, off / RENDERING.LINE_WIDTH])
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolyline(QPolygonF([QPointF(x, y) for x, y in stroke.points]))

    def _fill(self, painter: QPainter, fill: Fill) -> None:
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(QColor(fill.color)))
        painter.drawPolygon(QPolygonF([QPointF(x, y) for x, y in fill.points]))

    def _rect(self, painter: QPainter, rect: Rect) -> None:
        pen = QPen(QColor(rect.color))
        pen.setWidthF(RENDERING.LINE_WIDTH)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(QRectF(rect.x, rect.y, rect.width, rect.height))

    def _text(self, painter: QPainter, text: Text) -> None:
        font = make_font(self._options.font_family, text.size)
        painter.setFont(font)
        painter.setPen(QColor(text.color))
        width = QFontMetricsF(font).horizontalAdvance(text.text)
        x = text.x
        if text.anchor is TextAnchor.CENTER:
            x -= 0.5 * width
        elif text.anchor is TextAnchor.RIGHT:
            x -= width
        painter.drawText(QPointF(x, text.y), text.text)


def save_image(image: QImage, path: Union[str, Path]) -> None:
    """Write the image; the format follows the file extension."""
    if not image.save(str(path)):
        raise OutputError(f"error saving image to {str(path)!r}")
