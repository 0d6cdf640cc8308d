"""Pytest configuration and fixtures."""

import pytest

from receipt_printer.models.commands import WriteLine
from receipt_printer.models.receipt import ReceiptData
from receipt_printer.models.template import ReceiptTemplate
from receipt_printer.services.receipt.receipt_renderer import TemplateRenderer


@pytest.fixture
def make_data():
    """Factory for ReceiptData with a minimal valid record"""

    def factory(**overrides):
        payload = {"order_id": "42", "timestamp": "2024-01-15 14:30:00"}
        payload.update(overrides)
        return ReceiptData.model_validate(payload)

    return factory


@pytest.fixture
def make_template():
    """Factory for a one-section template around the given elements"""

    def factory(*elements, **fields):
        payload = {
            "id": "test",
            "name": "Test template",
            "version": "1.0",
            "layout": {"sections": [{"type": "body", "elements": list(elements)}]},
        }
        payload.update(fields)
        return ReceiptTemplate.model_validate(payload)

    return factory


@pytest.fixture
def render(make_template, make_data):
    """
    Render elements and return the commands between Init and Feed(3), Cut
    """

    def run(*elements, data=None, width=48, strict=False):
        renderer = TemplateRenderer(paper_width=width, strict_conditions=strict)
        commands = renderer.render(make_template(*elements), data or make_data())
        return commands[1:-2]

    return run


@pytest.fixture
def lines():
    """Texts of the WriteLine commands"""

    def extract(commands):
        return [command.text for command in commands if isinstance(command, WriteLine)]

    return extract
