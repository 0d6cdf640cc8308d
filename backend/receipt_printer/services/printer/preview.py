"""
Console preview - replays print commands as plain text

Handy for checking a template without paper: alignment and feeds are
applied, styles are dropped, QR codes and barcodes become placeholders.
"""

from typing import Iterable, List

from receipt_printer.models.commands import (
    Align,
    Barcode,
    Cut,
    Feed,
    Init,
    PrintCommand,
    QRCode,
    Size,
    WriteLine,
)
from receipt_printer.services.receipt.text_layout import pad

CUT_MARK = "✂ - - - - - -"


class TextPreview:
    """
    Text sink

    Args:
        paper_width: Columns per line, used for center/right alignment
    """

    def __init__(self, paper_width: int = 48):
        self.paper_width = paper_width

    def render(self, commands: Iterable[PrintCommand]) -> List[str]:
        lines: List[str] = []
        align = "left"
        size_width = 1

        def place(text: str) -> str:
            width = max(self.paper_width // size_width, 1)
            return pad(text, width, align).rstrip() if align != "left" else text

        for command in commands:
            if isinstance(command, Init):
                align, size_width = "left", 1
            elif isinstance(command, Align):
                align = command.alignment
            elif isinstance(command, Size):
                size_width = command.width
            elif isinstance(command, WriteLine):
                lines.append(place(command.text))
            elif isinstance(command, Feed):
                lines.extend([""] * command.lines)
            elif isinstance(command, QRCode):
                lines.append(place(f"[QR: {command.content}]"))
            elif isinstance(command, Barcode):
                lines.append(place(f"[{command.format}: {command.content}]"))
            elif isinstance(command, Cut):
                lines.append(pad(CUT_MARK, self.paper_width, "center").rstrip())
            # Bold / Underline / Reverse have no plain-text form

        return lines

    def to_text(self, commands: Iterable[PrintCommand]) -> str:
        return "\n".join(self.render(commands))
