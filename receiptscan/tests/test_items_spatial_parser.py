"""Tests for spatial line-item extraction."""

import re
from decimal import Decimal

import pytest

from receiptscan.domain.receipt import BoundingBox, Word
from receiptscan.receipt.ocr_parser import items_spatial_parser
from receiptscan.receipt.ocr_parser.items_spatial_parser import (
    MalformedPriceError,
    _extract_line_items,
    _parse_line_item,
    _parse_price_token,
)


def _word(text: str, x0: float, y0: float, x1: float, y1: float) -> Word:
    return Word(text=text, confidence=95.0, bounds=BoundingBox(x0, y0, x1, y1))


def test_parse_line_item_splits_description_and_trailing_price() -> None:
    line = (
        _word("Milk", 10, 100, 60, 118),
        _word("2", 70, 101, 80, 118),
        _word("$3.99", 300, 99, 360, 117),
    )

    item = _parse_line_item(line)

    assert item is not None
    assert item.description == "Milk 2"
    assert item.amount == Decimal("3.99")


def test_parse_line_item_orders_words_left_to_right() -> None:
    line = (
        _word("$3.99", 300, 100, 360, 118),
        _word("2", 70, 100, 80, 118),
        _word("Milk", 10, 100, 60, 118),
    )

    item = _parse_line_item(line)

    assert item is not None
    assert item.description == "Milk 2"
    assert item.amount == Decimal("3.99")


def test_parse_line_item_bounds_cover_whole_line() -> None:
    line = (
        _word("Eggs", 12, 98, 70, 120),
        _word("Large", 80, 101, 140, 116),
        _word("4.50", 300, 100, 350, 119),
    )

    item = _parse_line_item(line)

    assert item is not None
    assert item.bounds == BoundingBox(12, 98, 350, 120)
    assert all(item.bounds.contains(word.bounds) for word in line)


def test_price_only_line_has_empty_description() -> None:
    item = _parse_line_item((_word("12", 300, 10, 330, 20),))

    assert item is not None
    assert item.description == ""
    assert item.amount == Decimal("12")


def test_line_without_trailing_price_yields_nothing() -> None:
    line = (_word("Soup", 10, 10, 60, 20), _word("N/A", 300, 10, 340, 20))

    assert _parse_line_item(line) is None


def test_trailing_token_must_be_entirely_a_price() -> None:
    line = (_word("Till", 10, 10, 60, 20), _word("10:42", 300, 10, 340, 20))

    assert _parse_line_item(line) is None


@pytest.mark.parametrize("token", ["3.99H", "3.99T", "$3.99j"])
def test_trailing_tax_flag_is_not_part_of_the_amount(token: str) -> None:
    line = (_word("Soap", 10, 10, 60, 20), _word(token, 300, 10, 350, 20))

    item = _parse_line_item(line)

    assert item is not None
    assert item.description == "Soap"
    assert item.amount == Decimal("3.99")


def test_only_one_trailing_flag_letter_is_tolerated() -> None:
    assert _parse_line_item((_word("Soap", 10, 10, 60, 20), _word("3.99HT", 300, 10, 350, 20))) is None
    assert _parse_line_item((_word("Soap", 10, 10, 60, 20), _word("3.99kg", 300, 10, 350, 20))) is None


def test_empty_line_yields_nothing() -> None:
    assert _parse_line_item(()) is None


def test_parse_price_token_rejects_unparseable_amounts() -> None:
    with pytest.raises(MalformedPriceError) as excinfo:
        _parse_price_token("$1.2.3", "Widget $1.2.3")

    assert excinfo.value.token == "$1.2.3"
    assert excinfo.value.line_text == "Widget $1.2.3"


def test_extract_line_items_empty_input() -> None:
    assert _extract_line_items([]) == []


def test_extract_line_items_keeps_top_to_bottom_order() -> None:
    words = [
        _word("Bread", 10, 140, 60, 158),
        _word("$2.49", 300, 141, 360, 158),
        _word("FRESH", 10, 10, 80, 28),
        _word("MART", 90, 11, 150, 29),
        _word("Milk", 10, 100, 60, 118),
        _word("$3.99", 300, 102, 360, 118),
    ]

    items = _extract_line_items(words)

    assert [(item.description, item.amount) for item in items] == [
        ("Milk", Decimal("3.99")),
        ("Bread", Decimal("2.49")),
    ]


def test_malformed_price_only_skips_its_own_line(monkeypatch: pytest.MonkeyPatch) -> None:
    # Loosen the price pattern so a non-numeric token reaches the amount parser.
    monkeypatch.setattr(items_spatial_parser, "PRICE_TOKEN_PATTERN", re.compile(r"(?P<amount>\S+)"))
    words = [
        _word("Widget", 10, 10, 60, 20),
        _word("N/A", 300, 10, 340, 20),
        _word("Gadget", 10, 50, 60, 60),
        _word("5.00", 300, 50, 340, 60),
    ]

    items = _extract_line_items(words)

    assert [(item.description, item.amount) for item in items] == [("Gadget", Decimal("5.00"))]
