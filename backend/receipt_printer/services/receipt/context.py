"""
Per-render state shared by the element renderers
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List

from receipt_printer.models.commands import PrintCommand
from receipt_printer.models.receipt import ReceiptData
from receipt_printer.services.receipt.conditions import ConditionEvaluator
from receipt_printer.services.receipt.data_sources import Row, get_rows
from receipt_printer.services.receipt.variables import VariableResolver


@dataclass
class RenderContext:
    """
    Scratch state of one render call

    The command list is append-only; `depth` tracks box nesting.
    """
    data: ReceiptData
    paper_width: int
    resolver: VariableResolver
    conditions: ConditionEvaluator
    renderers: Dict[str, Callable[["RenderContext", object], None]]
    max_box_depth: int = 32
    commands: List[PrintCommand] = field(default_factory=list)
    depth: int = 0

    def emit(self, *commands: PrintCommand) -> None:
        self.commands.extend(commands)

    def resolve(self, text: str) -> str:
        return self.resolver.resolve(text)

    def rows(self, source: str) -> List[Row]:
        return get_rows(source, self.data)

    def render_element(self, element) -> bool:
        """
        Render one element if its condition holds

        Returns:
            True if the element was rendered
        """
        if not self.conditions.evaluate(element.condition):
            return False
        self.renderers[element.type](self, element)
        return True
