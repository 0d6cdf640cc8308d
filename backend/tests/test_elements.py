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
from receipt_printer.services.receipt.elements import row_line
from receipt_printer.services.receipt.text_layout import display_width


# ============================================================================
# TEXT
# ============================================================================

def test_text_style_order(render):
    commands = render({
        "type": "text",
        "content": "Big",
        "bold": True,
        "underline": True,
        "invert": True,
        "font_size": 2,
        "font_width": 2,
        "align": "right",
    })

    assert commands == [
        Bold(True),
        Underline(True),
        Reverse(True),
        Size(2, 2),
        Align("right"),
        WriteLine("Big"),
        *STYLE_RESET,
    ]


def test_text_resets_even_when_plain(render):
    assert render({"type": "text", "content": "x"}) == [Align("left"), WriteLine("x"), *STYLE_RESET]


def test_text_letter_spacing(render, lines):
    assert lines(render({"type": "text", "content": "abc", "letter_spacing": 1})) == ["a b c"]
    assert lines(render({"type": "text", "content": "abc", "letter_spacing": 0})) == ["abc"]


def test_text_letter_spacing_wider_than_paper(render, lines):
    written = lines(render({"type": "text", "content": "ab", "letter_spacing": 10}, width=4))
    assert written[0].startswith("a")
    assert written[-1] == "b"
    assert all(display_width(line) <= 4 for line in written)


def test_text_wraps_to_paper_width(render, lines):
    commands = render({"type": "text", "content": "hello wonderful world"}, width=10)
    assert lines(commands) == ["hello", "wonderful", "world"]


def test_text_wraps_to_magnified_width(render, lines):
    commands = render({"type": "text", "content": "abcdefgh", "font_width": 2}, width=10)
    assert lines(commands) == ["abcde", "fgh"]


def test_text_newlines_split_lines(render, lines, make_data):
    commands = render({"type": "text", "content": "{{store_name}}\n{{order_id}}"}, data=make_data(store_name="Cafe"))
    assert lines(commands) == ["Cafe", "42"]


def test_condition_suppresses_element(render):
    assert render({"type": "text", "content": "DISCOUNT", "condition": "discount > 0"}) == []


# ============================================================================
# DIVIDER
# ============================================================================

def test_divider_default_and_styles(render, lines):
    assert lines(render({"type": "divider"}, width=10)) == ["-" * 10]
    assert lines(render({"type": "divider", "style": "double"}, width=5)) == ["====="]
    assert lines(render({"type": "divider", "style": "dotted"}, width=3)) == ["..."]
    assert lines(render({"type": "divider", "style": "thick"}, width=3)) == ["━━━"]


def test_divider_pattern_wins_over_style(render, lines):
    commands = render({"type": "divider", "pattern": "diamond", "style": "double"}, width=9)
    assert lines(commands) == ["◆ ◆ ◆ ◆ ◆"]


def test_divider_custom_character(render, lines):
    assert lines(render({"type": "divider", "style": "custom", "character": "#"}, width=4)) == ["####"]
    assert lines(render({"type": "divider", "style": "custom"}, width=4)) == ["----"]
    assert lines(render({"type": "divider", "style": "custom", "character": "日"}, width=5)) == ["日日"]


def test_divider_alignment(render):
    commands = render({"type": "divider", "align": "center"}, width=3)
    assert commands == [Align("center"), WriteLine("---"), Align("left")]


# ============================================================================
# ROW
# ============================================================================

def test_row_line_pads_between():
    assert row_line("Total:", "$5.00", 20) == "Total:         $5.00"


def test_row_line_shortens_left_on_overflow():
    line = row_line("A very long item name", "$12.00", 16)
    assert line == "A very lo $12.00"
    assert display_width(line) == 16


def test_row_line_edge_cases():
    assert row_line("abc", "", 2) == "ab"
    assert row_line("", "123456", 4) == "1234"
    assert row_line("", "", 3) == "   "


def test_row_line_center():
    assert row_line("L", "R", 11, center="C") == "L    C    R"
    assert row_line("Left", "Right", 10, center="Middle") == "Left Right"


def test_row_styles(render):
    commands = render(
        {"type": "row", "left": "TOTAL", "right": "${{total}}", "bold": True, "invert": True, "font_size": 2},
        width=12,
    )
    assert commands == [
        Bold(True),
        Reverse(True),
        Size(1, 2),
        WriteLine("TOTAL  $0.00"),
        *STYLE_RESET,
    ]


# ============================================================================
# SPACE / CODES / LOGO
# ============================================================================

def test_space_feeds_at_least_one_line(render):
    assert render({"type": "space", "lines": 0}) == [Feed(1)]
    assert render({"type": "space", "lines": 3}) == [Feed(3)]
    assert render({"type": "space"}) == [Feed(1)]


def test_qr(render):
    commands = render({"type": "qr", "content": "https://r.example/{{order_id}}"})
    assert commands == [Align("center"), QRCode("https://r.example/42", 6), Align("left")]


def test_barcode(render):
    commands = render({"type": "barcode", "content": "{{order_id}}", "format": "EAN13", "show_text": False,
                       "align": "left"})
    assert commands == [
        Align("left"),
        Barcode(content="42", format="EAN13", height=100, width=3, show_text=False),
        Align("left"),
    ]


def test_logo_is_skipped_with_warning(render, caplog):
    with caplog.at_level(logging.WARNING):
        assert render({"type": "logo", "source": "logo.png"}) == []
    assert "Logo elements are not supported" in caplog.text
