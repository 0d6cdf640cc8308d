from concurrent.futures import ThreadPoolExecutor

import pytest

from receipt_printer.core.config import settings
from receipt_printer.models.commands import (
    Align,
    Bold,
    Cut,
    Feed,
    Init,
    Reverse,
    Size,
    Underline,
    WriteLine,
)
from receipt_printer.models.template import ReceiptTemplate
from receipt_printer.services.receipt.conditions import ConditionSyntaxError
from receipt_printer.services.receipt.receipt_renderer import TemplateRenderer
from receipt_printer.services.receipt.samples import default_template, sample_receipt_data
from receipt_printer.services.receipt.text_layout import display_width


def final_style(commands):
    """Style state after replaying the commands"""
    state = {"bold": False, "underline": False, "reverse": False, "size": (1, 1), "align": "left"}
    for command in commands:
        if isinstance(command, Bold):
            state["bold"] = command.on
        elif isinstance(command, Underline):
            state["underline"] = command.on
        elif isinstance(command, Reverse):
            state["reverse"] = command.on
        elif isinstance(command, Size):
            state["size"] = (command.width, command.height)
        elif isinstance(command, Align):
            state["align"] = command.alignment
    return state


def test_minimal_text(make_template, make_data):
    template = make_template({"type": "text", "content": "Hi {{order_id}}", "align": "center"})

    commands = TemplateRenderer(paper_width=48).render(template, make_data())

    assert commands == [
        Init(),
        Align("center"),
        WriteLine("Hi 42"),
        Bold(False),
        Underline(False),
        Reverse(False),
        Size(1, 1),
        Align("left"),
        Feed(3),
        Cut(),
    ]


def test_row_alignment(render, lines, make_data):
    commands = render({"type": "row", "left": "Total:", "right": "${{total}}"}, data=make_data(total=5.0), width=20)
    assert lines(commands) == ["Total:         $5.00"]


def test_conditional_suppression(make_template, make_data):
    template = make_template({"type": "text", "content": "DISCOUNT", "condition": "discount > 0"})
    commands = TemplateRenderer(paper_width=48).render(template, make_data(discount=None))
    assert commands == [Init(), Feed(3), Cut()]


def test_zero_sections(make_data):
    template = ReceiptTemplate.model_validate({"id": "empty", "name": "Empty"})
    assert TemplateRenderer().render(template, make_data()) == [Init(), Feed(3), Cut()]


def test_section_guard_and_spacing(make_data):
    template = ReceiptTemplate.model_validate({
        "id": "t",
        "name": "Sections",
        "layout": {"sections": [
            {"type": "header", "spacing": {"before": 2, "after": 1}, "elements": [{"type": "space"}]},
            {"type": "promo", "condition": "is_member == true", "elements": [{"type": "text", "content": "VIP"}]},
            {"type": "footer", "spacing": {"before": 0}, "elements": [{"type": "space", "lines": 2}]},
        ]},
    })

    commands = TemplateRenderer().render(template, make_data())

    assert commands == [Init(), Feed(2), Feed(1), Feed(1), Feed(2), Feed(3), Cut()]


def test_template_width_overrides_renderer_width(make_template, make_data):
    template = make_template({"type": "divider"}, paper_width=20)

    honored = TemplateRenderer(paper_width=48, honor_template_width=True).render(template, make_data())
    ignored = TemplateRenderer(paper_width=48, honor_template_width=False).render(template, make_data())

    assert WriteLine("-" * 20) in honored
    assert WriteLine("-" * 48) in ignored


def test_defaults_come_from_settings():
    renderer = TemplateRenderer()
    assert renderer.paper_width == settings.PAPER_WIDTH
    assert renderer.strict_conditions == settings.STRICT_CONDITIONS


def test_invalid_paper_width():
    with pytest.raises(ValueError):
        TemplateRenderer(paper_width=0)


def test_strict_conditions(make_template, make_data):
    template = make_template({"type": "text", "content": "x", "condition": "total < 5"})

    with pytest.raises(ConditionSyntaxError):
        TemplateRenderer(strict_conditions=True).render(template, make_data())

    commands = TemplateRenderer(strict_conditions=False).render(template, make_data())
    assert WriteLine("x") in commands


def test_paper_width_one(render, lines, make_data):
    data = make_data(total=5, items=[{"name": "Coffee", "quantity": 1, "price": 3}])
    commands = render(
        {"type": "text", "content": "hello world"},
        {"type": "row", "left": "Total:", "right": "${{total}}"},
        {"type": "divider", "pattern": "diamond"},
        {"type": "table", "data_source": "items", "columns": [{"field": "name"}, {"field": "total"}]},
        {"type": "grid", "columns": 2, "data": [{"label": "a", "value": "b"}]},
        data=data,
        width=1,
    )

    assert lines(commands)
    assert all(display_width(line) <= 1 for line in lines(commands))


def test_sample_receipt_is_well_formed():
    data = sample_receipt_data()
    commands = TemplateRenderer(paper_width=48).render(default_template(), data)

    assert commands[0] == Init()
    assert commands[-2:] == [Feed(3), Cut()]
    assert final_style(commands) == {
        "bold": False,
        "underline": False,
        "reverse": False,
        "size": (1, 1),
        "align": "left",
    }
    assert all(display_width(c.text) <= 48 for c in commands if isinstance(c, WriteLine))

    texts = [c.text for c in commands if isinstance(c, WriteLine)]
    assert any("Test Item 2" in text for text in texts)
    assert "      + Extra cheese" in texts
    assert any(text.startswith("TOTAL") and text.endswith("$38.34") for text in texts)


def test_render_is_repeatable_and_thread_safe(make_data):
    renderer = TemplateRenderer(paper_width=32)
    template = default_template()
    data = make_data(store_name="Cafe", items=[{"name": "Tea", "quantity": 1, "price": 2}], total=2)

    expected = renderer.render(template, data)
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda _: renderer.render(template, data), range(8)))

    assert all(result == expected for result in results)
