"""Error types raised while compiling and rendering waveform documents.

Fatal conditions are exceptions derived from WaveformError and abort the whole
compile. UnrecognizedTransition is a plain diagnostic record: the renderer
collects it, logs it and keeps going.
"""

from dataclasses import dataclass
from typing import Optional


class WaveformError(Exception):
    """Base class for fatal wavescribe errors."""

    def __init__(self, message: str, source: Optional[str] = None,
                 line_no: Optional[int] = None) -> None:
        self.message = message
        self.source = source
        self.line_no = line_no
        super().__init__(self._format())

    def _format(self) -> str:
        if self.source is not None and self.line_no is not None:
            return f"{self.source}:{self.line_no}: {self.message}"
        if self.source is not None:
            return f"{self.source}: {self.message}"
        if self.line_no is not None:
            return f"line {self.line_no}: {self.message}"
        return self.message


class MalformedLine(WaveformError):
    """A non-blank line has fewer than two space separated fields."""


class InvalidClockSpec(WaveformError):
    """A clock line whose half period or phase does not parse."""


class UnexpandedClockError(WaveformError):
    """A clock track reached the renderer before its states were synthesized."""


class ConfigError(WaveformError):
    """An options file could not be understood."""


class OutputError(WaveformError):
    """The rendered image could not be written."""


@dataclass(frozen=True)
class UnrecognizedTransition:
    """A character pair missing from the transition table."""
    signal: str
    pair: str
    column: int

    def __str__(self) -> str:
        return f"unrecognized signal pair {self.signal!r}:{self.column} = {self.pair!r}"
