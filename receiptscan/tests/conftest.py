"""Shared pytest fixtures for receiptscan tests."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def grocery_ocr_result() -> dict[str, Any]:
    """A small receipt as delivered by the OCR collaborator."""

    def word(text: str, x0: int, y0: int, x1: int, y1: int, confidence: float = 92.0) -> dict[str, Any]:
        return {"text": text, "confidence": confidence, "bounds": {"x0": x0, "y0": y0, "x1": x1, "y1": y1}}

    return {
        "text": "FRESH MART\n123 Main St\n03/15/2024 10:42\nMilk 2 $3.99\nBread $2.49\nTOTAL DUE $6.48\n",
        "words": [
            word("FRESH", 40, 10, 120, 30),
            word("MART", 130, 11, 200, 31),
            word("123", 40, 40, 70, 58),
            word("Main", 80, 41, 130, 59),
            word("St", 140, 40, 160, 58),
            word("03/15/2024", 40, 70, 160, 88),
            word("10:42", 170, 71, 220, 89),
            word("Milk", 40, 100, 90, 118),
            word("2", 100, 102, 110, 118),
            word("$3.99", 300, 99, 360, 117),
            word("Bread", 40, 130, 100, 148),
            word("$2.49", 300, 131, 360, 149),
            word("TOTAL", 40, 170, 110, 188),
            word("DUE", 120, 170, 160, 188),
            word("$6.48", 300, 171, 360, 189),
        ],
    }
