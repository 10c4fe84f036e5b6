"""Tests for receipt domain models."""

import pytest

from receiptscan.domain.receipt import BoundingBox, StructuredReceipt


def test_inverted_bounding_box_is_rejected() -> None:
    with pytest.raises(ValueError):
        BoundingBox(10, 0, 5, 10)


def test_union_is_min_max_envelope() -> None:
    union = BoundingBox.union([BoundingBox(5, 10, 20, 30), BoundingBox(0, 12, 15, 40)])

    assert union == BoundingBox(0, 10, 20, 40)
    assert union.contains(BoundingBox(5, 10, 20, 30))
    assert not BoundingBox(5, 10, 20, 30).contains(union)


def test_union_of_nothing_is_an_error() -> None:
    with pytest.raises(ValueError):
        BoundingBox.union([])


def test_default_receipt_is_empty_on_the_wire() -> None:
    assert StructuredReceipt().to_dict() == {
        "date": "",
        "total": "",
        "merchant": "",
        "line_items": [],
        "words": [],
    }
