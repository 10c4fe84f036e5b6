"""Data models for receipt extraction."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned rectangle in image pixel coordinates."""

    x0: float
    y0: float
    x1: float
    y1: float

    def __post_init__(self) -> None:
        if self.x0 > self.x1 or self.y0 > self.y1:
            raise ValueError(f"Inverted bounding box: ({self.x0}, {self.y0}, {self.x1}, {self.y1})")

    @classmethod
    def union(cls, boxes: Iterable["BoundingBox"]) -> "BoundingBox":
        """Return the smallest box enclosing every box in `boxes`."""
        boxes = list(boxes)
        if not boxes:
            raise ValueError("Cannot take the union of zero boxes")
        return cls(
            x0=min(box.x0 for box in boxes),
            y0=min(box.y0 for box in boxes),
            x1=max(box.x1 for box in boxes),
            y1=max(box.y1 for box in boxes),
        )

    def contains(self, other: "BoundingBox") -> bool:
        return self.x0 <= other.x0 and self.y0 <= other.y0 and self.x1 >= other.x1 and self.y1 >= other.y1

    def to_dict(self) -> dict[str, float]:
        return {"x0": self.x0, "y0": self.y0, "x1": self.x1, "y1": self.y1}


@dataclass(frozen=True)
class Word:
    """A single OCR-recognized token."""

    text: str
    confidence: float  # 0-100, as reported by the engine
    bounds: BoundingBox

    def to_dict(self) -> dict[str, Any]:
        return {"text": self.text, "confidence": self.confidence, "bounds": self.bounds.to_dict()}


# Words judged to share one visual row of the image.
Line = tuple[Word, ...]


@dataclass(frozen=True)
class LineItem:
    """A single purchased entry on a receipt."""

    description: str
    amount: Decimal
    bounds: BoundingBox

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "amount": float(self.amount),
            "bounds": self.bounds.to_dict(),
        }


@dataclass(frozen=True)
class StructuredReceipt:
    """Extraction result for one OCR pass.

    `date`, `total` and `merchant` are None when the field was not found.
    `to_dict()` renders the wire shape, where a missing field is "".
    """

    date: str | None = None
    total: str | None = None
    merchant: str | None = None
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)
    words: tuple[Word, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date or "",
            "total": self.total or "",
            "merchant": self.merchant or "",
            "line_items": [item.to_dict() for item in self.line_items],
            "words": [word.to_dict() for word in self.words],
        }
