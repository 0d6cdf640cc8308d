"""
Renderers for the basic elements: text, divider, row, space, qr, barcode, logo

Every renderer leaves the sink in the default style (bold/underline/invert
off, size 1x1, align left) when it returns.
"""

import logging

from receipt_printer.models.commands import (
    STYLE_RESET,
    Align,
    Barcode,
    Bold,
    Feed,
    QRCode,
    Reverse,
    Size,
    Underline,
    WriteLine,
)
from receipt_printer.models.template import (
    BarcodeElement,
    DividerElement,
    LogoElement,
    QRElement,
    RowElement,
    SpaceElement,
    TextElement,
)
from receipt_printer.services.receipt.context import RenderContext
from receipt_printer.services.receipt.text_layout import (
    display_width,
    space_letters,
    truncate,
    wrap,
)

logger = logging.getLogger(__name__)


# ============================================================================
# TEXT
# ============================================================================

def render_text(ctx: RenderContext, element: TextElement) -> None:
    if element.bold:
        ctx.emit(Bold(True))
    if element.underline:
        ctx.emit(Underline(True))
    if element.invert:
        ctx.emit(Reverse(True))
    if element.font_width > 1 or element.font_size > 1:
        ctx.emit(Size(element.font_width, element.font_size))
    ctx.emit(Align(element.align))

    text = space_letters(ctx.resolve(element.content), element.letter_spacing)

    # Magnified text takes font_width cells per character
    line_width = ctx.paper_width // element.font_width
    for paragraph in text.split("\n"):
        for line in wrap(paragraph, line_width):
            ctx.emit(WriteLine(line))

    ctx.emit(*STYLE_RESET)


# ============================================================================
# DIVIDER
# ============================================================================

DIVIDER_PATTERNS = {
    "diamond": "◆ ",
    "wave": "~",
    "dot": "·",
    "star": "* ",
    "elegant": "─",
    "fancy": "━",
    "line": "─",
}

DIVIDER_STYLES = {
    "single": "-",
    "double": "=",
    "dashed": "-",
    "dotted": ".",
    "thick": "━",
    "solid": "━",
    "thin": "─",
    "elegant": "─",
    "gradient": "━",
}

DEFAULT_DIVIDER = "-"


def divider_unit(element: DividerElement) -> str:
    """Repeating unit for a divider; pattern wins over style"""
    if element.pattern in DIVIDER_PATTERNS:
        return DIVIDER_PATTERNS[element.pattern]
    if element.style == "custom" and element.character:
        return element.character
    return DIVIDER_STYLES.get(element.style or "", DEFAULT_DIVIDER)


def divider_line(unit: str, width: int) -> str:
    """Repeat unit to exactly fill width columns"""
    unit_width = display_width(unit)
    if unit_width <= 0:
        unit, unit_width = DEFAULT_DIVIDER, 1
    return truncate(unit * (width // unit_width + 1), width)


def render_divider(ctx: RenderContext, element: DividerElement) -> None:
    line = divider_line(divider_unit(element), ctx.paper_width)
    ctx.emit(Align(element.align), WriteLine(line), Align("left"))


# ============================================================================
# ROW
# ============================================================================

def row_line(left: str, right: str, width: int, center: str = "") -> str:
    """
    Compose a left/center/right line of exactly `width` columns

    When the parts do not fit, the left text is shortened so the right
    value (usually an amount) stays readable.
    """
    lw, rw = display_width(left), display_width(right)

    if center:
        cw = display_width(center)
        start = max((width - cw) // 2, lw + 1 if left else 0)
        end = width - rw - (1 if right else 0)
        if start + cw <= end:
            line = left + " " * (start - lw) + center
            return line + " " * (width - display_width(line) - rw) + right
        left = " ".join(part for part in (left, center) if part)
        lw = display_width(left)

    if lw + rw < width:
        return left + " " * (width - lw - rw) + right
    if not right:
        return truncate(left, width)

    room = width - rw - 1
    if not left or room <= 0:
        return truncate(right, width)
    return truncate(left, room) + " " + right


def render_row(ctx: RenderContext, element: RowElement) -> None:
    left = ctx.resolve(element.left or "")
    right = ctx.resolve(element.right or "")
    center = ctx.resolve(element.center or "")

    if element.bold:
        ctx.emit(Bold(True))
    if element.invert:
        ctx.emit(Reverse(True))
    if element.font_size > 1:
        ctx.emit(Size(1, element.font_size))

    ctx.emit(WriteLine(row_line(left, right, ctx.paper_width, center)))
    ctx.emit(*STYLE_RESET)


# ============================================================================
# SPACE / CODES / LOGO
# ============================================================================

def render_space(ctx: RenderContext, element: SpaceElement) -> None:
    ctx.emit(Feed(max(1, element.lines)))


def render_qr(ctx: RenderContext, element: QRElement) -> None:
    ctx.emit(
        Align(element.align),
        QRCode(content=ctx.resolve(element.content), size=element.size),
        Align("left"),
    )


def render_barcode(ctx: RenderContext, element: BarcodeElement) -> None:
    ctx.emit(
        Align(element.align),
        Barcode(
            content=ctx.resolve(element.content),
            format=element.format,
            height=element.height,
            width=element.width,
            show_text=element.show_text,
        ),
        Align("left"),
    )


def render_logo(ctx: RenderContext, element: LogoElement) -> None:
    # TODO: raster logo support needs a bitmap command in the sink protocol
    logger.warning(f"⚠️  Logo elements are not supported yet, skipping (source={element.source!r})")
