"""
Condition evaluator

A condition is one comparison of a variable (or a data source length) with
a literal:

    discount > 0
    server_name != null
    is_member == true
    payment_method == "Cash"
    items.length > 0

Anything that does not parse is treated as true so a typo never hides part
of a receipt, unless the evaluator runs in strict mode.
"""

import logging
import re
from typing import Optional, Tuple

from receipt_printer.models.receipt import ReceiptData
from receipt_printer.services.receipt.data_sources import count_rows
from receipt_printer.services.receipt.variables import VariableResolver

logger = logging.getLogger(__name__)

IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
LENGTH_SUFFIX = ".length"

TRUE_VALUES = ("true", "1")
FALSE_VALUES = ("false", "0", "")


class ConditionSyntaxError(ValueError):
    """Raised in strict mode for a condition the evaluator does not understand"""


def unquote(literal: str) -> str:
    literal = literal.strip()
    if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "'\"":
        return literal[1:-1]
    return literal


def _parse_number(text: str) -> Optional[float]:
    try:
        return float(text.strip())
    except ValueError:
        return None


def _split(condition: str) -> Optional[Tuple[str, str, str]]:
    """(left, operator, right) or None; operators tried as >, !=, =="""
    if ">" in condition:
        left, _, right = condition.partition(">")
        if right.startswith("="):
            return None  # >= is not supported
        return left.strip(), ">", right.strip()

    for operator in ("!=", "=="):
        if operator in condition:
            left, _, right = condition.partition(operator)
            return left.strip(), operator, right.strip()

    return None


class ConditionEvaluator:
    """
    Evaluates element and section guards

    Args:
        data: Receipt record
        resolver: Variable resolver over the same record
        strict: Raise ConditionSyntaxError instead of passing unknown forms
    """

    def __init__(self, data: ReceiptData, resolver: VariableResolver, strict: bool = False):
        self.data = data
        self.resolver = resolver
        self.strict = strict

    def evaluate(self, condition: Optional[str]) -> bool:
        """True when the guarded part should be printed"""
        if condition is None or not condition.strip():
            return True

        parsed = _split(condition)
        if parsed is None:
            return self._unrecognized(condition)

        left, operator, right = parsed
        if not left or not right:
            return self._unrecognized(condition)

        if operator == ">":
            if left.endswith(LENGTH_SUFFIX):
                return self._length_greater(left[: -len(LENGTH_SUFFIX)].strip(), right, condition)
            return self._greater(left, right)

        if not IDENTIFIER_RE.match(left):
            return self._unrecognized(condition)

        value = self.resolver.lookup(left)
        literal = unquote(right)

        if operator == "!=":
            if literal == "null":
                return value != ""
            return value != literal

        if literal == "true":
            return value in TRUE_VALUES
        if literal == "false":
            return value in FALSE_VALUES
        return value == literal

    # ------------------------------------------------------------------------

    def _operand(self, text: str) -> str:
        if IDENTIFIER_RE.match(text):
            return self.resolver.lookup(text)
        return unquote(text)

    def _greater(self, left: str, right: str) -> bool:
        left_number = _parse_number(self._operand(left))
        right_number = _parse_number(unquote(right))
        if left_number is None or right_number is None:
            return False
        return left_number > right_number

    def _length_greater(self, source: str, right: str, condition: str) -> bool:
        if not IDENTIFIER_RE.match(source):
            return self._unrecognized(condition)
        limit = _parse_number(unquote(right))
        if limit is None:
            return False
        return count_rows(source, self.data) > limit

    def _unrecognized(self, condition: str) -> bool:
        if self.strict:
            raise ConditionSyntaxError(f"Unsupported condition: {condition!r}")
        logger.debug(f"Unrecognized condition {condition!r}, treating as true")
        return True
