"""Core domain models for receipt extraction.

This module provides the data models shared by the parser and runtime layers:
- BoundingBox, Word, Line: OCR geometry
- LineItem, StructuredReceipt: extraction output

Usage:
    from receiptscan.domain import StructuredReceipt, Word
"""

from receiptscan.domain.receipt import BoundingBox, Line, LineItem, StructuredReceipt, Word

__all__ = [
    "BoundingBox",
    "Line",
    "LineItem",
    "StructuredReceipt",
    "Word",
]
