"""
ESC/POS sink - replays print commands on a python-escpos printer

Works with any escpos.escpos.Escpos implementation (Usb, Network, Serial,
Win32Raw ...). Opening the device is the caller's business; Dummy() is
used to capture the raw bytes without a printer.
"""

import logging
from typing import Iterable

from escpos.printer import Dummy

from receipt_printer.models.commands import (
    Align,
    Barcode,
    Bold,
    Cut,
    Feed,
    Init,
    PrintCommand,
    QRCode,
    Reverse,
    Size,
    Underline,
    WriteLine,
)

logger = logging.getLogger(__name__)

CODE128_CODE_SETS = ("{A", "{B", "{C")


def barcode_payload(command: Barcode) -> str:
    """CODE128 data must start with a code set selector, default to set B"""
    if command.format.upper() == "CODE128" and not command.content.startswith(CODE128_CODE_SETS):
        return "{B" + command.content
    return command.content


class EscposSink:
    """
    Sink writing to an ESC/POS printer

    Args:
        printer: python-escpos printer instance
    """

    def __init__(self, printer):
        self.printer = printer

    def send(self, commands: Iterable[PrintCommand]) -> int:
        """
        Replay commands in order

        Returns:
            Number of commands sent
        """
        count = 0
        for command in commands:
            self._apply(command)
            count += 1
        logger.debug(f"Sent {count} commands to {type(self.printer).__name__}")
        return count

    def _apply(self, command: PrintCommand) -> None:
        p = self.printer

        if isinstance(command, Init):
            p.hw("INIT")
        elif isinstance(command, WriteLine):
            p.textln(command.text)
        elif isinstance(command, Feed):
            p.ln(command.lines)
        elif isinstance(command, Cut):
            p.cut()
        elif isinstance(command, Bold):
            p.set(bold=command.on)
        elif isinstance(command, Underline):
            p.set(underline=1 if command.on else 0)
        elif isinstance(command, Reverse):
            p.set(invert=command.on)
        elif isinstance(command, Size):
            if command.width == 1 and command.height == 1:
                p.set(normal_textsize=True)
            else:
                p.set(custom_size=True, width=command.width, height=command.height)
        elif isinstance(command, Align):
            p.set(align=command.alignment)
        elif isinstance(command, QRCode):
            p.qr(command.content, size=command.size)
        elif isinstance(command, Barcode):
            p.barcode(
                barcode_payload(command),
                command.format,
                height=command.height,
                width=command.width,
                pos="BELOW" if command.show_text else "OFF",
                align_ct=False,
            )
        else:
            raise TypeError(f"Unknown print command: {command!r}")


def render_escpos_bytes(commands: Iterable[PrintCommand]) -> bytes:
    """Raw ESC/POS byte stream for the commands (no device needed)"""
    printer = Dummy()
    EscposSink(printer).send(commands)
    return printer.output
