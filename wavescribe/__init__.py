"""wavescribe - compile .wvy waveform descriptions into timing diagram images."""

__version__ = "0.1.0"

from .data_model import Signal, State, Transition
from .errors import (
    WaveformError, MalformedLine, InvalidClockSpec, UnexpandedClockError,
    ConfigError, OutputError, UnrecognizedTransition
)
from .parser import parse_line, parse_document
from .metrics import signal_metrics, DocumentMetrics
from .clock_utils import expand_clock, expand_clocks
from .layout import Layout, RowBand, compute_layout
from .signal_renderer import SignalRenderer, classify_pair
from .composer import Diagram, compile_text, compile_signals, render_diagram, render_file
from .persistence import load_options, save_options
from .config import RENDERING, COLORS, RenderOptions

__all__ = [
    'Signal', 'State', 'Transition',
    'WaveformError', 'MalformedLine', 'InvalidClockSpec', 'UnexpandedClockError',
    'ConfigError', 'OutputError', 'UnrecognizedTransition',
    'parse_line', 'parse_document', 'signal_metrics', 'DocumentMetrics',
    'expand_clock', 'expand_clocks', 'Layout', 'RowBand', 'compute_layout',
    'SignalRenderer', 'classify_pair',
    'Diagram', 'compile_text', 'compile_signals', 'render_diagram', 'render_file',
    'load_options', 'save_options',
    'RENDERING', 'COLORS', 'RenderOptions'
]
