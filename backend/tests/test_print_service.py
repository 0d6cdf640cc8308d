import threading

import pytest

from receipt_printer.models.commands import Cut, Init
from receipt_printer.services.printer.print_service import (
    NoActiveTemplateError,
    PrintService,
    TemplateNotFoundError,
)
from receipt_printer.services.receipt.receipt_renderer import TemplateRenderer
from receipt_printer.services.receipt.samples import DEFAULT_TEMPLATE

ORDER = {"order_id": "1001", "timestamp": "2024-01-15 12:00:00", "total": 9.5}


class FakeSink:
    def __init__(self, error=None):
        self.receipts = []
        self.error = error

    def send(self, commands):
        if self.error is not None:
            raise self.error
        self.receipts.append(list(commands))
        return len(commands)


def template(template_id, name="Template"):
    return {
        "id": template_id,
        "name": name,
        "layout": {"sections": [{"type": "body", "elements": [{"type": "text", "content": "#{{order_id}}"}]}]},
    }


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def service(sink):
    return PrintService(sink=sink, renderer=TemplateRenderer(paper_width=32))


def test_print_with_active_template(service, sink):
    service.set_template(template("a"))

    result = service.print_receipt(ORDER)

    assert result["success"] is True
    assert result["message"] == "Receipt printed successfully (Order #1001)"
    assert len(sink.receipts) == 1
    receipt = sink.receipts[0]
    assert receipt[0] == Init() and receipt[-1] == Cut()
    assert result["commands"] == len(receipt)


def test_not_connected():
    result = PrintService(sink=None).print_receipt(ORDER)
    assert result == {"success": False, "message": "Printer not connected", "commands": 0}


def test_no_active_template(service, sink):
    result = service.print_receipt(ORDER)
    assert result["success"] is False
    assert "no active template" in result["message"].lower()
    assert sink.receipts == []


def test_unknown_template_id(service):
    service.set_template(template("a"))
    result = service.print_receipt(ORDER, template_id="missing")
    assert result["success"] is False
    assert "not found" in result["message"]


def test_invalid_data(service):
    service.set_template(template("a"))
    result = service.print_receipt({"order_id": "1"})
    assert result["success"] is False
    assert result["commands"] == 0


def test_inline_template_becomes_active(service):
    service.set_template(template("a"))
    assert service.print_receipt(ORDER, template=template("b"))["success"] is True
    assert service.active_template_id == "b"


def test_sink_failure_is_reported(service):
    service.sink = FakeSink(error=OSError("paper out"))
    service.set_template(template("a"))

    result = service.print_receipt(ORDER)

    assert result == {"success": False, "message": "Print failed: paper out", "commands": 0}


def test_strict_condition_failure_is_reported(sink):
    service = PrintService(sink=sink, renderer=TemplateRenderer(strict_conditions=True))
    bad = template("strict")
    bad["layout"]["sections"][0]["condition"] = "total < 5"
    service.set_template(bad)

    result = service.print_receipt(ORDER)

    assert result["success"] is False
    assert "Unsupported condition" in result["message"]


def test_template_cache(service):
    service.set_template(template("a", "First"))
    service.set_template(template("b", "Second"))

    assert service.active_template_id == "b"
    assert service.list_templates() == [
        {"template_id": "a", "name": "First", "version": "1.0", "active": False},
        {"template_id": "b", "name": "Second", "version": "1.0", "active": True},
    ]

    service.activate("a")
    assert service.active_template.name == "First"

    with pytest.raises(TemplateNotFoundError):
        service.get_template("zzz")

    service.clear_cache()
    assert service.list_templates() == []
    assert service.active_template is None


def test_render_without_template_raises(service):
    with pytest.raises(NoActiveTemplateError):
        service.render(ORDER)


def test_test_print(service, sink):
    assert service.test_print() == {"success": False, "message": "No active template set", "commands": 0}

    service.set_template(DEFAULT_TEMPLATE)
    result = service.test_print()

    assert result["success"] is True
    assert "TEST-001" in result["message"]
    assert len(sink.receipts) == 1


def test_cache_is_usable_while_printing(service):
    service.set_template(template("a"))
    seen = []

    class SlowSink:
        def send(self, commands):
            # Another thread reads and updates the cache mid-print
            worker = threading.Thread(target=lambda: seen.append(
                (service.list_templates(), service.set_template(template("b")).id)
            ))
            worker.start()
            worker.join(timeout=5)
            assert not worker.is_alive()

    service.sink = SlowSink()

    assert service.print_receipt(ORDER)["success"] is True
    assert len(seen) == 1
    assert seen[0][1] == "b"
