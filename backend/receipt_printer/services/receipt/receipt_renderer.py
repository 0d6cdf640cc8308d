"""
Receipt Renderer - template + receipt data -> print commands

Pure transformation, no I/O: the result is a list of PrintCommand that a
sink (ESC/POS printer, console preview) replays.
"""

import logging
from typing import Callable, Dict, List, Optional

from receipt_printer.core.config import settings
from receipt_printer.models.commands import Cut, Feed, Init, PrintCommand
from receipt_printer.models.receipt import ReceiptData
from receipt_printer.models.template import ReceiptTemplate, Section
from receipt_printer.services.receipt import elements, tables, widgets
from receipt_printer.services.receipt.conditions import ConditionEvaluator
from receipt_printer.services.receipt.context import RenderContext
from receipt_printer.services.receipt.variables import VariableResolver

logger = logging.getLogger(__name__)

TRAILING_FEED = 3

ELEMENT_RENDERERS: Dict[str, Callable] = {
    "text": elements.render_text,
    "logo": elements.render_logo,
    "divider": elements.render_divider,
    "row": elements.render_row,
    "space": elements.render_space,
    "qr": elements.render_qr,
    "barcode": elements.render_barcode,
    "table": tables.render_table,
    "box": widgets.render_box,
    "grid": widgets.render_grid,
    "bar_chart": widgets.render_bar_chart,
    "leaderboard": widgets.render_leaderboard,
}


class RenderError(RuntimeError):
    """Internal invariant violated while rendering"""


class TemplateRenderer:
    """
    Renders receipt templates for a fixed-width thermal printer

    Paper width:
    - 48 columns: 80mm paper, font A
    - 32 columns: 58mm paper, font A

    A template that declares its own paper_width overrides the renderer
    width unless honor_template_width is off.
    """

    def __init__(
        self,
        paper_width: Optional[int] = None,
        strict_conditions: Optional[bool] = None,
        honor_template_width: Optional[bool] = None,
        max_box_depth: Optional[int] = None,
    ):
        """
        Args:
            paper_width: Columns per line (default settings.PAPER_WIDTH)
            strict_conditions: Raise on unparseable conditions instead of printing
            honor_template_width: Prefer ReceiptTemplate.paper_width when set
            max_box_depth: Nesting limit for box elements
        """
        self._paper_width = paper_width if paper_width is not None else settings.PAPER_WIDTH
        if self._paper_width < 1:
            raise ValueError(f"paper_width must be positive, got {self._paper_width}")

        self._strict = settings.STRICT_CONDITIONS if strict_conditions is None else strict_conditions
        self._honor_template_width = (
            settings.HONOR_TEMPLATE_WIDTH if honor_template_width is None else honor_template_width
        )
        self._max_box_depth = settings.MAX_BOX_DEPTH if max_box_depth is None else max_box_depth

    @property
    def paper_width(self) -> int:
        return self._paper_width

    @property
    def strict_conditions(self) -> bool:
        return self._strict

    def effective_width(self, template: ReceiptTemplate) -> int:
        """Paper width used for this template"""
        if self._honor_template_width and template.paper_width:
            return template.paper_width
        return self._paper_width

    def render(self, template: ReceiptTemplate, data: ReceiptData) -> List[PrintCommand]:
        """
        Render a receipt

        Args:
            template: Parsed receipt template
            data: Receipt record

        Returns:
            Commands starting with Init and ending with Feed(3), Cut

        Raises:
            ConditionSyntaxError: strict mode only, on an unsupported condition
        """
        resolver = VariableResolver(data)
        ctx = RenderContext(
            data=data,
            paper_width=self.effective_width(template),
            resolver=resolver,
            conditions=ConditionEvaluator(data, resolver, strict=self._strict),
            renderers=ELEMENT_RENDERERS,
            max_box_depth=self._max_box_depth,
        )

        ctx.emit(Init())
        for section in template.layout.sections:
            self._render_section(ctx, section)
        ctx.emit(Feed(TRAILING_FEED), Cut())

        if ctx.depth != 0:
            raise RenderError(f"Unbalanced box nesting after render (depth={ctx.depth})")

        logger.debug(
            f"Rendered template '{template.id}' for order #{data.order_id}: "
            f"{len(ctx.commands)} commands, width {ctx.paper_width}"
        )
        return ctx.commands

    def _render_section(self, ctx: RenderContext, section: Section) -> None:
        if not ctx.conditions.evaluate(section.condition):
            return

        spacing = section.spacing
        if spacing is not None and spacing.before:
            ctx.emit(Feed(spacing.before))

        for element in section.elements:
            ctx.render_element(element)

        if spacing is not None and spacing.after:
            ctx.emit(Feed(spacing.after))
