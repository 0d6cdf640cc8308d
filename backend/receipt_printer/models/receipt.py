"""
Receipt data - the record a template is rendered against

Well-known fields are typed; every other top-level key of the incoming JSON
lands in `custom` unchanged and backs user variables and data sources.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ReceiptItem(BaseModel):
    """Order line"""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    name: str
    quantity: int = Field(default=1, ge=0)
    price: float = 0.0
    total: float = 0.0
    modifiers: Optional[List[str]] = None

    @model_validator(mode="before")
    @classmethod
    def _default_total(cls, data: Any) -> Any:
        # Line total is normally computed by the POS; fall back to qty * price
        if isinstance(data, dict) and data.get("total") is None:
            try:
                total = float(data.get("quantity", 1)) * float(data.get("price", 0.0))
            except (TypeError, ValueError):
                return data
            return {**data, "total": total}
        return data


class ReceiptData(BaseModel):
    """
    Receipt record

    Only order_id and timestamp are required; everything else defaults so
    that a partially filled record still prints.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    # Store
    store_name: Optional[str] = None
    store_address: Optional[str] = None
    store_phone: Optional[str] = None
    store_website: Optional[str] = None
    store_email: Optional[str] = None
    established_year: Optional[int] = None

    # Order
    order_id: str
    timestamp: str
    date: Optional[str] = None
    time: Optional[str] = None
    cashier_name: Optional[str] = None
    server_name: Optional[str] = None
    table_number: Optional[str] = None

    items: List[ReceiptItem] = Field(default_factory=list)

    # Totals (pre-computed by the caller)
    subtotal: float = 0.0
    tax: float = 0.0
    tax_rate: Optional[float] = None
    discount: Optional[float] = None
    tip: Optional[float] = None
    service_charge: Optional[float] = None
    service_rate: Optional[float] = None
    total: float = 0.0
    change: Optional[float] = None

    payment_method: str = ""

    # Footer
    footer_message: Optional[str] = None
    receipt_url: Optional[str] = None

    # Everything else from the incoming JSON
    custom: Dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_custom(cls, data: Any) -> Any:
        """Move unknown top-level keys into the custom bag"""
        if not isinstance(data, dict):
            return data

        # A top-level "custom" key is just another user field
        known = set(cls.model_fields) - {"custom"}
        values: Dict[str, Any] = {}
        custom: Dict[str, Any] = {}

        for key, value in data.items():
            if key in known:
                values[key] = value
            else:
                custom[key] = value

        if values.get("items") is None:
            values["items"] = []

        values["custom"] = custom
        return values
