"""Normalize OCR engine output into Word records."""

from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any

from receiptscan.domain.receipt import BoundingBox, Word

from .ocr_parser.line_clusterer import _cluster_lines


class MalformedOCRResult(ValueError):
    """Raised when OCR output does not have the expected structure."""


def _bounding_box(raw: Any) -> BoundingBox:
    if not isinstance(raw, Mapping):
        raise MalformedOCRResult(f"Word bounds must be a mapping, got {type(raw).__name__}")
    coords = {}
    for key in ("x0", "y0", "x1", "y1"):
        if key not in raw:
            raise MalformedOCRResult(f"Word bounds missing {key!r}")
        value = raw[key]
        # bool is an int subclass but never a coordinate
        if isinstance(value, bool) or not isinstance(value, Real):
            raise MalformedOCRResult(f"Word bound {key}={value!r} is not a number")
        coords[key] = value
    try:
        return BoundingBox(**coords)
    except ValueError as e:
        raise MalformedOCRResult(str(e)) from e


def _confidence(raw: Any) -> float:
    try:
        return float(raw)
    except (TypeError, ValueError) as e:
        raise MalformedOCRResult(f"Word confidence {raw!r} is not a number") from e


def words_from_ocr_result(ocr_result: Mapping[str, Any]) -> list[Word]:
    """
    Convert `{"words": [{"text", "confidence", "bounds"}, ...]}` to Words.

    Recognition order is preserved and boxes are copied verbatim. A result
    without a word list yields no words. Tesseract.js names the box `bbox`;
    both keys are accepted.
    """
    raw_words = ocr_result.get("words")
    if raw_words is None:
        return []
    if isinstance(raw_words, (str, bytes)) or not isinstance(raw_words, Sequence):
        raise MalformedOCRResult(f"OCR words must be a list, got {type(raw_words).__name__}")

    words: list[Word] = []
    for raw in raw_words:
        if not isinstance(raw, Mapping):
            raise MalformedOCRResult(f"OCR word must be a mapping, got {type(raw).__name__}")
        bounds = raw.get("bounds", raw.get("bbox"))
        words.append(
            Word(
                text=str(raw.get("text", "")),
                confidence=_confidence(raw.get("confidence", 0)),
                bounds=_bounding_box(bounds),
            )
        )
    return words


def words_from_tesseract_data(data: Mapping[str, Sequence[Any]]) -> list[Word]:
    """
    Convert `pytesseract.image_to_data(..., output_type=Output.DICT)` columns.

    Blank tokens and layout rows (conf == -1) are dropped.
    """
    words: list[Word] = []
    for i, raw_text in enumerate(data.get("text", [])):
        text = (raw_text or "").strip()
        if not text:
            continue
        try:
            confidence = float(data["conf"][i])
        except (ValueError, TypeError):
            confidence = -1.0
        if confidence < 0:
            continue
        x, y, w, h = data["left"][i], data["top"][i], data["width"][i], data["height"][i]
        words.append(Word(text=text, confidence=confidence, bounds=BoundingBox(x, y, x + w, y + h)))
    return words


def words_from_paddle_detections(raw_result: Mapping[str, Any]) -> list[Word]:
    """
    Convert a PaddleOCR service response to Words.

    Each detection is `[quad, [text, confidence]]`; the quad is reduced to its
    axis-aligned envelope and the 0-1 confidence is scaled to 0-100.
    """
    detections = raw_result.get("detections", [])
    if isinstance(detections, (str, bytes)) or not isinstance(detections, Sequence):
        raise MalformedOCRResult(f"OCR detections must be a list, got {type(detections).__name__}")

    words: list[Word] = []
    for detection in detections:
        try:
            quad, (text, confidence) = detection
            xs = [float(point[0]) for point in quad]
            ys = [float(point[1]) for point in quad]
            confidence = float(confidence)
            bounds = BoundingBox(min(xs), min(ys), max(xs), max(ys))
        except (TypeError, ValueError, IndexError) as e:
            raise MalformedOCRResult(f"Unrecognized detection: {detection!r}") from e
        words.append(
            Word(
                text=str(text),
                confidence=confidence * 100,
                bounds=bounds,
            )
        )
    return words


def text_from_words(words: Sequence[Word]) -> str:
    """Rebuild a newline-separated text blob from positioned words."""
    lines = _cluster_lines(words)
    return "\n".join(" ".join(word.text for word in sorted(line, key=lambda w: w.bounds.x0)) for line in lines)


def paddle_to_ocr_result(raw_result: Mapping[str, Any]) -> dict[str, Any]:
    """Convert a PaddleOCR service response to the `{text, words}` input shape."""
    words = words_from_paddle_detections(raw_result)
    return {
        "text": text_from_words(words),
        "words": [word.to_dict() for word in words],
    }
