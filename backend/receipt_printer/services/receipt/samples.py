"""
Built-in test receipt and default template

Used for test prints and the `sample` CLI command.
"""

from datetime import datetime

from receipt_printer.models.receipt import ReceiptData
from receipt_printer.models.template import ReceiptTemplate

DEFAULT_TEMPLATE = {
    "id": "default",
    "name": "Default receipt",
    "version": "1.0",
    "supports_qr": True,
    "layout": {
        "sections": [
            {
                "type": "header",
                "elements": [
                    {"type": "text", "content": "{{store_name}}", "align": "center", "bold": True, "font_size": 2},
                    {"type": "text", "content": "{{store_address}}", "align": "center",
                     "condition": "store_address != null"},
                    {"type": "divider", "style": "double"},
                ],
                "spacing": {"after": 1},
            },
            {
                "type": "order",
                "elements": [
                    {"type": "row", "left": "Order #{{order_id}}", "right": "{{date}}"},
                    {"type": "row", "left": "Cashier: {{cashier_name}}", "right": "{{time}}",
                     "condition": "cashier_name != null"},
                    {"type": "divider", "style": "single"},
                ],
            },
            {
                "type": "items",
                "condition": "items.length > 0",
                "elements": [
                    {
                        "type": "table",
                        "data_source": "items",
                        "columns": [
                            {"header": "Qty", "field": "quantity", "width": 3, "align": "right"},
                            {"header": "Item", "field": "name"},
                            {"header": "Total", "field": "total", "width": 9, "align": "right", "format": "currency"},
                        ],
                        "modifiers": {"indent": 6, "prefix": "+ "},
                    },
                    {"type": "divider", "style": "single"},
                ],
            },
            {
                "type": "totals",
                "elements": [
                    {"type": "row", "left": "Subtotal", "right": "${{subtotal}}"},
                    {"type": "row", "left": "Tax ({{tax_rate}}%)", "right": "${{tax}}", "condition": "tax > 0"},
                    {"type": "row", "left": "Discount", "right": "-${{discount}}", "condition": "discount > 0"},
                    {"type": "row", "left": "TOTAL", "right": "${{total}}", "bold": True, "font_size": 2},
                    {"type": "row", "left": "Paid by", "right": "{{payment_method}}"},
                    {"type": "row", "left": "Change", "right": "${{change}}", "condition": "change > 0"},
                ],
                "spacing": {"before": 1},
            },
            {
                "type": "footer",
                "elements": [
                    {"type": "space"},
                    {"type": "text", "content": "{{footer_message}}", "align": "center",
                     "condition": "footer_message != null"},
                    {"type": "qr", "content": "{{receipt_url}}", "size": 5, "condition": "receipt_url != null"},
                ],
            },
        ]
    },
}


def default_template() -> ReceiptTemplate:
    return ReceiptTemplate.model_validate(DEFAULT_TEMPLATE)


def sample_receipt_data() -> ReceiptData:
    """Test receipt with two items, stamped with the current time"""
    return ReceiptData(
        store_name="Test Store",
        store_address="123 Test St",
        order_id="TEST-001",
        timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        cashier_name="Test User",
        items=[
            {"name": "Test Item 1", "quantity": 2, "price": 10.00, "total": 20.00},
            {"name": "Test Item 2", "quantity": 1, "price": 15.50, "total": 15.50,
             "modifiers": ["Extra cheese", "No onions"]},
        ],
        subtotal=35.50,
        tax=2.84,
        tax_rate=8.0,
        total=38.34,
        payment_method="Test Payment",
        footer_message="This is a test receipt",
    )
