"""Line-oriented parser for .wvy waveform descriptions.

Each line is one of:

    <blank>                         half height spacer row
    +<uint>[,<float>] <name>        clock track, half period minus one and phase
    <states> <name>[ <l1>,<l2>...]  data track with optional bus labels

Fields are separated by single spaces.
"""

import logging
import math
import re
from typing import List

from .data_model import Signal
from .errors import MalformedLine, InvalidClockSpec

logger = logging.getLogger(__name__)

CLOCK_PREFIX = "+"

_HALF_PERIOD_RE = re.compile(r"\+?\d+", re.ASCII)
_PHASE_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def _parse_clock(spec: str, sig: Signal, line_no: int, source: str) -> None:
    parts = spec[len(CLOCK_PREFIX):].split(",")
    if len(parts) > 2:
        raise InvalidClockSpec(
            f"clock signal requires number[,phase]: {spec!r}", source, line_no)

    if not _HALF_PERIOD_RE.fullmatch(parts[0]):
        raise InvalidClockSpec(
            f"clock half period is not a non-negative integer: {parts[0]!r}", source, line_no)
    sig.clk_half_period_minus_one = int(parts[0])

    if len(parts) == 2:
        phase = float(parts[1]) if _PHASE_RE.fullmatch(parts[1]) else math.nan
        if not math.isfinite(phase):
            raise InvalidClockSpec(
                f"clock phase parse error: {parts[1]!r}", source, line_no)
        sig.phase = phase


def parse_line(line: str, line_no: int, source: str = "<input>") -> Signal:
    """Turn one input line into a Signal.

    A blank line yields a spacer Signal with an empty name.

    Raises:
        MalformedLine: the line has fewer than two fields.
        InvalidClockSpec: a clock field fails to parse.
    """
    line = line.rstrip("\r")
    sig = Signal(line_no=line_no)
    if not line:
        return sig

    fields = line.split(" ")
    if len(fields) < 2:
        raise MalformedLine(
            f"need two or more fields: got {len(fields)}", source, line_no)

    if fields[0].startswith(CLOCK_PREFIX):
        sig.is_clock = True
        _parse_clock(fields[0], sig, line_no, source)
    else:
        sig.states = fields[0]

    sig.name = fields[1]
    if len(fields) > 2:
        sig.labels = fields[2].split(",")
    return sig


def parse_document(text: str, source: str = "<input>") -> List[Signal]:
    """Parse a whole document into its ordered list of Signals.

    A blank first line is ignored and a single trailing empty-name Signal
    (what a final newline leaves behind) is dropped.
    """
    signals: List[Signal] = []
    for index, line in enumerate(text.split("\n")):
        if index == 0 and not line.rstrip("\r"):
            continue
        signals.append(parse_line(line, index + 1, source))

    if len(signals) > 1 and signals[-1].is_spacer:
        signals.pop()

    logger.debug("%s: parsed %d signals", source, len(signals))
    return signals
