"""
Variable resolver - {{name}} placeholders

Lookup order: well-known receipt fields, then the custom bag. Unknown names
resolve to "" so substitution never fails. Substitution is single pass:
resolved values are not scanned again.
"""

import json
import re
from typing import Any, Callable, Dict

from receipt_printer.models.receipt import ReceiptData

PLACEHOLDER_RE = re.compile(r"\{\{([A-Za-z_][A-Za-z0-9_]*)\}\}")


def _text(value) -> str:
    return "" if value is None else str(value)


def _money(value) -> str:
    return f"{value:.2f}"


def _money_or_zero(value) -> str:
    return f"{value:.2f}" if value is not None else "0.00"


# name -> formatter(ReceiptData)
WELL_KNOWN_FIELDS: Dict[str, Callable[[ReceiptData], str]] = {
    # Store
    "store_name": lambda d: _text(d.store_name),
    "store_address": lambda d: _text(d.store_address),
    "store_phone": lambda d: _text(d.store_phone),
    "store_website": lambda d: _text(d.store_website),
    "store_email": lambda d: _text(d.store_email),
    "established_year": lambda d: _text(d.established_year),
    # Order
    "order_id": lambda d: d.order_id,
    "timestamp": lambda d: d.timestamp,
    "date": lambda d: d.date if d.date is not None else _timestamp_part(d.timestamp, 0),
    "time": lambda d: d.time if d.time is not None else _timestamp_part(d.timestamp, 1),
    "cashier_name": lambda d: _text(d.cashier_name),
    "server_name": lambda d: _text(d.server_name),
    "table_number": lambda d: _text(d.table_number),
    # Totals
    "subtotal": lambda d: _money(d.subtotal),
    "tax": lambda d: _money(d.tax),
    "tax_rate": lambda d: f"{d.tax_rate:.1f}" if d.tax_rate is not None else "",
    "discount": lambda d: _money_or_zero(d.discount),
    "tip": lambda d: _money_or_zero(d.tip),
    "service_charge": lambda d: _money_or_zero(d.service_charge),
    "service_rate": lambda d: f"{d.service_rate:.0f}" if d.service_rate is not None else "0",
    "total": lambda d: _money(d.total),
    "change": lambda d: _money_or_zero(d.change),
    # Payment / footer
    "payment_method": lambda d: d.payment_method,
    "footer_message": lambda d: _text(d.footer_message),
    "receipt_url": lambda d: _text(d.receipt_url),
}


def _timestamp_part(timestamp: str, index: int) -> str:
    parts = timestamp.split()
    return parts[index] if len(parts) > index else ""


def json_scalar_text(value: Any) -> str:
    """Canonical JSON text of a value: true/false, 3.5, {"a":1} ..."""
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))


def custom_value_text(value: Any) -> str:
    """String form of a custom-bag value used for {{name}} substitution"""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json_scalar_text(value).strip('"')


class VariableResolver:
    """
    Resolves placeholders against one ReceiptData record

    Args:
        data: Receipt record (never modified)
    """

    def __init__(self, data: ReceiptData):
        self.data = data

    def lookup(self, name: str) -> str:
        """Value of a single variable, "" when unknown"""
        formatter = WELL_KNOWN_FIELDS.get(name)
        if formatter is not None:
            return formatter(self.data)

        if name in self.data.custom:
            return custom_value_text(self.data.custom[name])

        return ""

    def resolve(self, text: str) -> str:
        """
        Substitute every {{NAME}} in text

        Args:
            text: Template string, e.g. "Order #{{order_id}}"

        Returns:
            The string with placeholders replaced
        """
        if "{{" not in text:
            return text
        return PLACEHOLDER_RE.sub(lambda match: self.lookup(match.group(1)), text)
