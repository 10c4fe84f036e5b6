"""Parse an OCR result into a StructuredReceipt."""

from collections.abc import Mapping
from typing import Any

from receiptscan.domain.receipt import StructuredReceipt
from receiptscan.runtime.logging import get_logger

from .ocr_parser import _extract_date, _extract_line_items, _extract_merchant, _extract_total
from .word_adapter import MalformedOCRResult, words_from_ocr_result

logger = get_logger(__name__)


class OCRTextMissing(ValueError):
    """Raised when the OCR stage produced no text, so there is nothing to extract."""


def parse_receipt(ocr_result: Mapping[str, Any]) -> StructuredReceipt:
    """
    Parse an OCR result into a StructuredReceipt.

    This is a best-effort parser: a field that cannot be found is left as
    None and never fails the extraction.

    Args:
        ocr_result: `{"text": str, "words": [{"text", "confidence", "bounds"}]}`
            as produced by the OCR collaborator. `words` may be absent.

    Returns:
        StructuredReceipt with the extracted fields, line items and the
        input words passed through.

    Raises:
        OCRTextMissing: the OCR pass produced no text.
        MalformedOCRResult: the result or one of its words is malformed.
    """
    if not isinstance(ocr_result, Mapping):
        raise MalformedOCRResult(f"OCR result must be a mapping, got {type(ocr_result).__name__}")

    full_text = ocr_result.get("text")
    if full_text is None or not str(full_text).strip():
        raise OCRTextMissing("OCR result contains no text")
    full_text = str(full_text)

    words = words_from_ocr_result(ocr_result)
    logger.debug("Parsing OCR result: %d chars, %d words", len(full_text), len(words))

    receipt = StructuredReceipt(
        date=_extract_date(full_text),
        total=_extract_total(full_text),
        merchant=_extract_merchant(full_text),
        line_items=tuple(_extract_line_items(words)),
        words=tuple(words),
    )
    logger.debug(
        "Parsed receipt: merchant=%r date=%r total=%r items=%d",
        receipt.merchant,
        receipt.date,
        receipt.total,
        len(receipt.line_items),
    )
    return receipt
