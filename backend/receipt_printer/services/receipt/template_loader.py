"""
Template / receipt data loading

Accepts already-decoded dicts, JSON text (str or bytes) or a path to a JSON
file and validates it against the pydantic schemas. Validation problems
are raised as LoadError subclasses with the pydantic error chained.
"""

import json
import logging
from pathlib import Path
from typing import Any, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from receipt_printer.models.receipt import ReceiptData
from receipt_printer.models.template import ReceiptTemplate

logger = logging.getLogger(__name__)

Source = Union[dict, str, bytes, Path]
ModelT = TypeVar("ModelT", bound=BaseModel)


class LoadError(ValueError):
    """Input could not be decoded or does not match the schema"""


class TemplateLoadError(LoadError):
    pass


class DataLoadError(LoadError):
    pass


def _decode(source: Source) -> Any:
    if isinstance(source, Path):
        source = source.read_text(encoding="utf-8")
    if isinstance(source, (str, bytes)):
        return json.loads(source)
    return source


def _load(source: Source, model: Type[ModelT], error: Type[LoadError], what: str) -> ModelT:
    try:
        payload = _decode(source)
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid {what} JSON: {e}")
        raise error(f"Invalid {what} JSON: {e}") from e

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Invalid {what}: {e.error_count()} validation error(s)")
        raise error(f"Invalid {what}: {e}") from e


def load_template(source: Source) -> ReceiptTemplate:
    """
    Parse a receipt template

    Args:
        source: dict, JSON text or path to a .json file

    Returns:
        ReceiptTemplate

    Raises:
        TemplateLoadError: bad JSON, unknown element type, missing field
    """
    return _load(source, ReceiptTemplate, TemplateLoadError, "template")


def load_receipt_data(source: Source) -> ReceiptData:
    """
    Parse a receipt record

    Unknown top-level keys are kept in ReceiptData.custom.

    Raises:
        DataLoadError: bad JSON or missing order_id / timestamp
    """
    return _load(source, ReceiptData, DataLoadError, "receipt data")
