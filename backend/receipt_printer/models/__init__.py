"""
Pydantic schemas and the print command model
"""

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
from receipt_printer.models.receipt import ReceiptData, ReceiptItem
from receipt_printer.models.template import Element, ReceiptTemplate, Section

__all__ = [
    "Align",
    "Barcode",
    "Bold",
    "Cut",
    "Feed",
    "Init",
    "PrintCommand",
    "QRCode",
    "Reverse",
    "Size",
    "Underline",
    "WriteLine",
    "ReceiptData",
    "ReceiptItem",
    "Element",
    "ReceiptTemplate",
    "Section",
]
