"""
Composite widgets: box, grid, bar chart, leaderboard
"""

import logging
import math
import re
from typing import FrozenSet, List, Optional, Tuple

from receipt_printer.models.commands import Bold, Feed, Reverse, WriteLine
from receipt_printer.models.template import (
    BarChartElement,
    BoxElement,
    GridElement,
    LeaderboardElement,
)
from receipt_printer.services.receipt.context import RenderContext
from receipt_printer.services.receipt.text_layout import fit, pad, truncate

logger = logging.getLogger(__name__)


# ============================================================================
# BOX
# ============================================================================

BORDER_CHAR = "━"
BOX_EDGES = frozenset({"top", "bottom", "left", "right"})
FILLED_STYLES = ("filled", "shaded")


def parse_border_edges(position: str) -> FrozenSet[str]:
    """
    "all" | "top-bottom" | "top,left" ... -> set of edges

    Unknown words are ignored.
    """
    edges = set()
    for token in re.split(r"[\s,\-_|/]+", position.strip().lower()):
        if token == "all":
            edges |= BOX_EDGES
        elif token in BOX_EDGES:
            edges.add(token)
    return frozenset(edges)


def render_box(ctx: RenderContext, element: BoxElement) -> None:
    if ctx.depth >= ctx.max_box_depth:
        logger.warning(f"⚠️  Box nesting deeper than {ctx.max_box_depth}, skipping nested box")
        return

    filled = element.style in FILLED_STYLES
    edges = parse_border_edges(element.border_position) if element.border > 0 else frozenset()
    border = BORDER_CHAR * ctx.paper_width

    if filled:
        ctx.emit(Reverse(True))
    if "top" in edges:
        ctx.emit(WriteLine(border))
    ctx.emit(*[Feed(1)] * element.padding)

    ctx.depth += 1
    try:
        for child in element.elements:
            # Nested elements reset the style, keep the fill going
            if ctx.render_element(child) and filled:
                ctx.emit(Reverse(True))
    finally:
        ctx.depth -= 1

    ctx.emit(*[Feed(1)] * element.padding)
    if "bottom" in edges:
        ctx.emit(WriteLine(border))
    if filled:
        ctx.emit(Reverse(False))


# ============================================================================
# GRID
# ============================================================================

def render_grid(ctx: RenderContext, element: GridElement) -> None:
    count = element.columns
    gap = element.gap
    cell_width = max((ctx.paper_width - (count - 1) * gap) // count, 0)

    for start in range(0, len(element.data), count):
        cells = [
            fit(f"{cell.label}: {ctx.resolve(cell.value)}", cell_width)
            for cell in element.data[start:start + count]
        ]
        ctx.emit(WriteLine(truncate((" " * gap).join(cells), ctx.paper_width)))


# ============================================================================
# BAR CHART
# ============================================================================

BAR_CHAR = "█"
CHART_MARGIN = 10  # label (5) + " │" + slack


def _parse_float(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def render_bar_chart(ctx: RenderContext, element: BarChartElement) -> None:
    points: List[Tuple[str, float]] = []
    for row in ctx.rows(element.data_source):
        value = _parse_float(row.get(element.value_field, ""))
        if value is None:
            continue
        points.append((row.get("hour") or row.get("label") or "", value))

    if not points:
        return
    peak = max(value for _, value in points)
    if peak <= 0:
        return

    chart_width = max(ctx.paper_width - CHART_MARGIN, 0)
    for label, value in points:
        bar_len = max(math.floor(value / peak * chart_width), 0)
        ctx.emit(WriteLine(f"{pad(label, 5, 'right')} │{BAR_CHAR * bar_len}"))


# ============================================================================
# LEADERBOARD
# ============================================================================

def render_leaderboard(ctx: RenderContext, element: LeaderboardElement) -> None:
    fields = element.fields

    for index, row in enumerate(ctx.rows(element.data_source)):
        rank = row.get(fields.rank, "")
        name = row.get(fields.name, "")
        shift = row.get(fields.shift, "") if fields.shift else ""
        sales = row.get(fields.sales, "") if fields.sales else ""

        if shift:
            line = f"{pad(rank, 2, 'right')}. {pad(name, 15)} {pad(shift, 8, 'right')} ${sales}"
        else:
            line = f"{pad(rank, 2, 'right')}. {pad(name, 20)} ${sales}"

        if index < element.highlight_top:
            ctx.emit(Bold(True), Reverse(True), WriteLine(line), Bold(False), Reverse(False))
        else:
            ctx.emit(WriteLine(line))
