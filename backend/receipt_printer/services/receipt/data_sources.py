"""
Data sources - named row sets for tables, charts and leaderboards

"items" is built from the order lines; any other name is looked up in the
custom bag and must be a JSON array of objects. Everything else yields no
rows.
"""

import logging
from typing import Any, Dict, List

from receipt_printer.models.receipt import ReceiptData, ReceiptItem
from receipt_printer.services.receipt.variables import json_scalar_text

logger = logging.getLogger(__name__)

Row = Dict[str, str]

ITEMS_SOURCE = "items"


def _item_row(item: ReceiptItem) -> Row:
    row = {
        "name": item.name,
        "quantity": str(item.quantity),
        "price": f"{item.price:.2f}",
        "total": f"{item.total:.2f}",
    }
    if item.modifiers:
        row["modifiers"] = ", ".join(item.modifiers)
    return row


def _cell_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json_scalar_text(value)


def get_rows(name: str, data: ReceiptData) -> List[Row]:
    """
    Materialize a data source

    Args:
        name: Source name ("items" or a custom-bag key)
        data: Receipt record

    Returns:
        Rows as string maps, in source order (fresh list, safe to keep)
    """
    if name == ITEMS_SOURCE:
        return [_item_row(item) for item in data.items]

    value = data.custom.get(name)
    if not isinstance(value, list):
        if value is not None:
            logger.debug(f"Data source '{name}' is not an array, ignoring")
        return []

    return [
        {key: _cell_text(cell) for key, cell in entry.items()}
        for entry in value
        if isinstance(entry, dict)
    ]


def count_rows(name: str, data: ReceiptData) -> int:
    if name == ITEMS_SOURCE:
        return len(data.items)
    return len(get_rows(name, data))
