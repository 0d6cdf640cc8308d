"""
Table element - column aligned rows over a data source

Layout: columns with an explicit width keep it; the columns without one
share what is left of the paper width after the fixed columns and the
single-space separators (integer division, leftover columns stay unused).
"""

import math
from typing import List, Optional, Sequence

from receipt_printer.models.commands import Bold, Reverse, Size, WriteLine
from receipt_printer.models.template import ModifiersConfig, RowDetail, TableColumn, TableElement
from receipt_printer.services.receipt.context import RenderContext
from receipt_printer.services.receipt.data_sources import Row
from receipt_printer.services.receipt.text_layout import fit, truncate

CURRENCY_FORMAT = "currency"
COLUMN_SEPARATOR = " "


def column_widths(columns: Sequence[TableColumn], paper_width: int) -> List[int]:
    """
    Resolve the width of every column

    Args:
        columns: Table columns
        paper_width: Line width in columns

    Returns:
        Width per column, same order
    """
    fixed = sum(column.width for column in columns if column.width is not None)
    flexible = sum(1 for column in columns if column.width is None)
    separators = len(columns) - 1 if columns else 0

    share = 0
    if flexible:
        share = max(paper_width - fixed - separators, 0) // flexible

    return [column.width if column.width is not None else share for column in columns]


def format_currency(raw: str) -> str:
    """Format "3.5" as "$3.50"; anything that is not a number passes through"""
    if raw != raw.strip() or "_" in raw:
        return raw
    try:
        value = float(raw)
    except ValueError:
        return raw
    if not math.isfinite(value):
        return raw
    return f"${value:.2f}"


def format_cell(value: str, column: TableColumn) -> str:
    if column.format == CURRENCY_FORMAT:
        return format_currency(value)
    return value


def format_row(cells: Sequence[str], columns: Sequence[TableColumn], widths: Sequence[int], paper_width: int) -> str:
    parts = [fit(cell, width, column.align) for cell, column, width in zip(cells, columns, widths)]
    return truncate(COLUMN_SEPARATOR.join(parts), paper_width)


def _write_sized(ctx: RenderContext, line: str, font_size: Optional[int]) -> None:
    if font_size:
        ctx.emit(Size(font_size, font_size), WriteLine(truncate(line, ctx.paper_width // font_size)), Size(1, 1))
    else:
        ctx.emit(WriteLine(truncate(line, ctx.paper_width)))


def _render_details(ctx: RenderContext, details: Sequence[RowDetail], row: Row) -> None:
    for detail in details:
        if detail.field not in row:
            continue
        value = row[detail.field]
        if detail.condition is not None and not value:
            continue
        _write_sized(ctx, f"  {detail.prefix}{value}{detail.suffix}", detail.font_size)


def _render_modifiers(ctx: RenderContext, config: ModifiersConfig, row: Row) -> None:
    if "modifiers" not in row:
        return
    indent = " " * config.indent
    for modifier in row["modifiers"].split(","):
        modifier = modifier.strip()
        if modifier:
            _write_sized(ctx, f"{indent}{config.prefix}{modifier}", config.font_size)


def render_table(ctx: RenderContext, element: TableElement) -> None:
    columns = element.columns
    widths = column_widths(columns, ctx.paper_width)

    if element.show_header:
        headers = [column.header if column.header is not None else column.field for column in columns]
        if element.header_bold:
            ctx.emit(Bold(True))
        ctx.emit(WriteLine(format_row(headers, columns, widths, ctx.paper_width)))
        if element.header_bold:
            ctx.emit(Bold(False))
        if element.header_divider:
            ctx.emit(WriteLine("-" * ctx.paper_width))

    for index, row in enumerate(ctx.rows(element.data_source)):
        cells = [format_cell(row.get(column.field, ""), column) for column in columns]
        line = WriteLine(format_row(cells, columns, widths, ctx.paper_width))

        if element.alternating_rows and index % 2 == 1:
            ctx.emit(Reverse(True), line, Reverse(False))
        else:
            ctx.emit(line)

        _render_details(ctx, element.row_details, row)
        if element.modifiers is not None:
            _render_modifiers(ctx, element.modifiers, row)
