"""Core data structures for wavescribe.

A document is a flat list of Signal records, one per input line:

    [Signal]
    ├── Signal (clock track)
    │   ├── name: "clk"
    │   ├── is_clock: True
    │   ├── clk_half_period_minus_one: 0
    │   └── states: "^_^_^_^_"    (filled by the clock expander)
    ├── Signal (spacer row, from a blank line)
    │   └── name: ""
    └── Signal (data track)
        ├── name: "data"
        ├── states: "x<--><-->x"
        └── labels: ["A0", "A1"]

Signals are created by the parser, mutated exactly once by the clock expander
(clock tracks only) and read-only afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


class State(Enum):
    """Characters allowed in a trace."""
    TRISTATE = "z"
    UNDEFINED = "x"
    HIGH = "^"
    LOW = "_"
    RISE = "/"
    FALL = "\\"
    BUS_OPEN = "<"
    BUS_CLOSE = ">"
    BUS_BODY = "-"
    BREAK = "%"


class Transition(Enum):
    """Drawing rules of the transition table, one per class of character pair."""
    HIGH = "high"
    LOW = "low"
    FALL = "fall"
    RISE = "rise"
    RAMP_FALL = "ramp_fall"
    RAMP_RISE = "ramp_rise"
    BUS_SWAP = "bus_swap"
    BUS_HOLD = "bus_hold"
    BUS_CLOSE = "bus_close"
    BUS_OPEN = "bus_open"
    HIGH_TO_UNDEFINED = "high_to_undefined"
    LOW_TO_UNDEFINED = "low_to_undefined"
    UNDEFINED_TO_HIGH = "undefined_to_high"
    UNDEFINED_TO_LOW = "undefined_to_low"
    UNDEFINED = "undefined"
    TRISTATE_ENTER = "tristate_enter"
    TRISTATE_EXIT = "tristate_exit"
    TRISTATE = "tristate"
    BREAK = "break"


@dataclass
class Signal:
    """One track of the diagram. An empty name marks a spacer row."""
    name: str = ""
    is_clock: bool = False
    states: str = ""
    phase: float = 0.0
    clk_half_period_minus_one: int = 0
    labels: List[str] = field(default_factory=list)
    line_no: int = 0                    # 1-based source line, 0 if synthesized

    @property
    def is_spacer(self) -> bool:
        return self.name == ""

    @property
    def half_period(self) -> int:
        """Length of one high or low run of an expanded clock."""
        return self.clk_half_period_minus_one + 1

    @property
    def period(self) -> int:
        return 2 * self.half_period

    @property
    def is_expanded(self) -> bool:
        return not self.is_clock or bool(self.states)
