"""
Receipt template schema

A template is JSON produced by the template editor:
{
  "id": "default-80mm",
  "name": "Default receipt",
  "version": "1.0",
  "paper_width": 48,
  "layout": {
    "sections": [
      {"type": "header", "elements": [{"type": "text", "content": "{{store_name}}", "align": "center", "bold": true}]},
      {"type": "body", "elements": [{"type": "table", "data_source": "items", "columns": [...]}]}
    ]
  }
}

Elements are tagged by "type"; an unknown tag is a validation error.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

Alignment = Literal["left", "center", "right"]


class SchemaModel(BaseModel):
    """Base for every template record: immutable, unknown keys ignored"""

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)


class ElementBase(SchemaModel):
    condition: Optional[str] = None


# ============================================================================
# SIMPLE ELEMENTS
# ============================================================================

class TextElement(ElementBase):
    type: Literal["text"] = "text"
    content: str
    align: Alignment = "left"
    bold: bool = False
    underline: bool = False
    invert: bool = False
    font_size: int = Field(default=1, ge=1, le=8)
    font_width: int = Field(default=1, ge=1, le=8)
    letter_spacing: int = Field(default=0, ge=0)

    # Accepted for compatibility with the editor, not rendered
    font_weight: Optional[Any] = None
    font_style: Optional[str] = None
    italic: Optional[bool] = None
    background: Optional[str] = None


class LogoElement(ElementBase):
    type: Literal["logo"] = "logo"
    source: Optional[str] = None
    align: Alignment = "center"
    max_width: Optional[int] = None
    max_height: Optional[int] = None


class DividerElement(ElementBase):
    type: Literal["divider"] = "divider"
    pattern: Optional[str] = None  # diamond | wave | dot | star | elegant | fancy | line
    style: Optional[str] = None    # single | double | dashed | dotted | thick | solid | thin | elegant | gradient | custom
    character: Optional[str] = None
    align: Alignment = "left"

    # Not rendered
    length: Optional[str] = None
    thickness: Optional[int] = None
    width: Optional[int] = None


class RowElement(ElementBase):
    type: Literal["row"] = "row"
    left: Optional[str] = None
    right: Optional[str] = None
    center: Optional[str] = None
    bold: bool = False
    invert: bool = False
    font_size: int = Field(default=1, ge=1, le=8)

    # Not rendered
    separator: Optional[str] = None


class SpaceElement(ElementBase):
    type: Literal["space"] = "space"
    lines: int = Field(default=1, ge=0)


class QRElement(ElementBase):
    type: Literal["qr"] = "qr"
    content: str
    size: int = Field(default=6, ge=1, le=8)
    align: Alignment = "center"


class BarcodeElement(ElementBase):
    type: Literal["barcode"] = "barcode"
    content: str
    format: str = "CODE128"
    height: int = Field(default=100, ge=1, le=255)  # dots
    width: int = Field(default=3, ge=2, le=6)  # module width
    show_text: bool = True
    align: Alignment = "center"


# ============================================================================
# TABLE
# ============================================================================

class TableColumn(SchemaModel):
    header: Optional[str] = None
    field: str
    width: Optional[int] = Field(default=None, ge=0)
    align: Alignment = "left"
    format: Optional[str] = None  # only "currency" is recognised


class RowDetail(SchemaModel):
    """Secondary line printed under a table row, e.g. an item note"""
    field: str
    prefix: str = ""
    suffix: str = ""
    font_size: Optional[int] = Field(default=None, ge=1, le=8)
    condition: Optional[str] = None  # when set, empty values are skipped


class ModifiersConfig(SchemaModel):
    """How the comma separated "modifiers" column of a row is printed"""
    indent: int = Field(default=2, ge=0)
    prefix: str = ""
    font_size: Optional[int] = Field(default=None, ge=1, le=8)


class TableElement(ElementBase):
    type: Literal["table"] = "table"
    columns: List[TableColumn]
    data_source: str
    show_header: bool = True
    header_bold: bool = True
    header_divider: bool = True
    alternating_rows: bool = False
    row_details: List[RowDetail] = Field(default_factory=list)
    modifiers: Optional[ModifiersConfig] = None


# ============================================================================
# WIDGETS
# ============================================================================

class GridCell(SchemaModel):
    label: str = ""
    value: str = ""


class GridElement(ElementBase):
    type: Literal["grid"] = "grid"
    columns: int = Field(default=2, ge=1)
    data: List[GridCell] = Field(default_factory=list)
    gap: int = Field(default=1, ge=0)


class BarChartElement(ElementBase):
    type: Literal["bar_chart"] = "bar_chart"
    data_source: str
    value_field: str


class LeaderboardFields(SchemaModel):
    rank: str = "rank"
    name: str = "name"
    shift: Optional[str] = None
    sales: Optional[str] = None
    transactions: Optional[str] = None


class LeaderboardElement(ElementBase):
    type: Literal["leaderboard"] = "leaderboard"
    data_source: str
    fields: LeaderboardFields = Field(default_factory=LeaderboardFields)
    highlight_top: int = Field(default=0, ge=0)


class BoxElement(ElementBase):
    type: Literal["box"] = "box"
    elements: List["Element"] = Field(default_factory=list)
    style: Literal["default", "filled", "shaded"] = "default"
    border: int = Field(default=0, ge=0)
    border_position: str = "all"
    padding: int = Field(default=0, ge=0)


Element = Annotated[
    Union[
        TextElement,
        LogoElement,
        DividerElement,
        RowElement,
        QRElement,
        BarcodeElement,
        TableElement,
        SpaceElement,
        BoxElement,
        GridElement,
        BarChartElement,
        LeaderboardElement,
    ],
    Field(discriminator="type"),
]

BoxElement.model_rebuild()


# ============================================================================
# TEMPLATE
# ============================================================================

class Spacing(SchemaModel):
    before: Optional[int] = Field(default=None, ge=0)
    after: Optional[int] = Field(default=None, ge=0)


class Section(SchemaModel):
    type: str  # header | body | footer ... label only
    name: Optional[str] = None
    condition: Optional[str] = None
    elements: List[Element] = Field(default_factory=list)
    spacing: Optional[Spacing] = None


class TemplateLayout(SchemaModel):
    sections: List[Section] = Field(default_factory=list)


class ReceiptTemplate(SchemaModel):
    id: str
    name: str
    version: str = "1.0"
    paper_width: Optional[int] = Field(default=None, ge=1)
    supports_logo: bool = False
    supports_qr: bool = False
    supports_barcode: bool = False
    variables: Optional[Any] = None  # advisory, not enforced
    layout: TemplateLayout = Field(default_factory=TemplateLayout)

    def __repr__(self):
        return f"<ReceiptTemplate {self.id} v{self.version} ({len(self.layout.sections)} sections)>"
