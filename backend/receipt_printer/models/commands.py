"""
Print commands - the output alphabet of the receipt renderer

A rendered receipt is a flat list of these commands. Sinks (ESC/POS printer,
console preview) consume them in order.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Init:
    """Reset the printer to its power-on state"""


@dataclass(frozen=True)
class WriteLine:
    """Write text followed by a line terminator"""
    text: str


@dataclass(frozen=True)
class Feed:
    """Feed n blank lines"""
    lines: int = 1


@dataclass(frozen=True)
class Cut:
    """Cut the paper, terminal for a receipt"""


@dataclass(frozen=True)
class Bold:
    on: bool


@dataclass(frozen=True)
class Underline:
    on: bool


@dataclass(frozen=True)
class Reverse:
    """White-on-black printing"""
    on: bool


@dataclass(frozen=True)
class Size:
    """Character magnification, 1..8 in each direction"""
    width: int = 1
    height: int = 1


@dataclass(frozen=True)
class Align:
    alignment: str = "left"  # left | center | right


@dataclass(frozen=True)
class QRCode:
    content: str
    size: int = 6


@dataclass(frozen=True)
class Barcode:
    content: str
    format: str = "CODE128"
    height: int = 100
    width: int = 3
    show_text: bool = True


PrintCommand = Union[
    Init,
    WriteLine,
    Feed,
    Cut,
    Bold,
    Underline,
    Reverse,
    Size,
    Align,
    QRCode,
    Barcode,
]


# Style state the sink is in between elements
STYLE_RESET = (
    Bold(False),
    Underline(False),
    Reverse(False),
    Size(1, 1),
    Align("left"),
)
