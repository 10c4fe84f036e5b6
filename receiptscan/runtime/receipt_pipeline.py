"""Runtime helpers for talking to the OCR service and rendering results."""

import io
import os
import time
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx

from receiptscan.domain.receipt import StructuredReceipt
from receiptscan.receipt.word_adapter import MalformedOCRResult, paddle_to_ocr_result
from receiptscan.runtime.logging import get_logger

logger = get_logger(__name__)

OCR_SERVICE_URL = os.environ.get("RECEIPTSCAN_OCR_URL", "http://localhost:8001")
OCR_TIMEOUT_SECONDS = 60.0


class OCRServiceUnavailable(RuntimeError):
    """Raised when the OCR service cannot be reached or returns an error."""


def to_ocr_result(raw_result: dict[str, Any]) -> dict[str, Any]:
    """Normalize an OCR service response to the `{text, words}` shape.

    PaddleOCR-style services answer with `detections`; anything else is
    assumed to already be `{text, words}`.
    """
    if "detections" in raw_result:
        return paddle_to_ocr_result(raw_result)
    return raw_result


def _check_response(response: httpx.Response) -> dict[str, Any]:
    if response.status_code != 200:
        # TODO(security): response.text may echo OCR payload text with PII; redact before non-localhost use.
        logger.error("OCR service error: %s - %s", response.status_code, response.text)
        raise OCRServiceUnavailable(f"OCR service error: {response.status_code}")
    try:
        result = response.json()
    except ValueError as e:
        logger.error("OCR service returned a non-JSON body: %s", e)
        raise OCRServiceUnavailable("OCR service returned a non-JSON body") from e
    if not isinstance(result, dict):
        raise OCRServiceUnavailable(f"OCR service returned {type(result).__name__}, expected an object")
    return result


def _ocr_result_from_response(response: httpx.Response) -> tuple[dict[str, Any], dict[str, Any]]:
    raw_result = _check_response(response)
    try:
        return raw_result, to_ocr_result(raw_result)
    except MalformedOCRResult as e:
        logger.error("OCR service returned malformed detections: %s", e)
        raise OCRServiceUnavailable(f"OCR service returned malformed detections: {e}") from e


class OCRSession:
    """
    Scoped connection to the OCR service for a batch of recognitions.

    The underlying HTTP client is opened on enter and closed on exit, so no
    OCR connection state outlives the batch:

        with OCRSession(url) as session:
            for path in images:
                raw, ocr_result = session.recognize_file(path)
    """

    def __init__(
        self,
        ocr_url: str = OCR_SERVICE_URL,
        timeout: float = OCR_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.ocr_url = ocr_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> "OCRSession":
        self._client = httpx.Client(base_url=self.ocr_url, timeout=self.timeout, transport=self._transport)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def recognize(self, image_bytes: bytes, filename: str = "receipt.jpg") -> tuple[dict[str, Any], dict[str, Any]]:
        """
        Send one image to the OCR service.

        Returns:
            Tuple of (raw_result, ocr_result) where ocr_result is `{text, words}`.
        """
        if self._client is None:
            raise RuntimeError("OCRSession is not open; use it as a context manager")

        logger.info("Sending %s to OCR service at %s...", filename, self.ocr_url)
        start_time = time.time()
        try:
            response = self._client.post("/ocr", files={"file": (filename, image_bytes, "image/jpeg")})
        except httpx.RequestError as e:
            logger.error("Failed to connect to OCR service: %s", e)
            raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e
        logger.info("OCR service returned in %.2f seconds", time.time() - start_time)

        return _ocr_result_from_response(response)

    def recognize_file(self, image_path: Path) -> tuple[dict[str, Any], dict[str, Any]]:
        return self.recognize(image_path.read_bytes(), filename=image_path.name)


def call_ocr_service(image_path: Path, ocr_url: str = OCR_SERVICE_URL) -> tuple[dict[str, Any], dict[str, Any]]:
    """Recognize a single image in its own OCR session."""
    with OCRSession(ocr_url) as session:
        return session.recognize_file(image_path)


async def recognize_image_async(
    image_bytes: bytes,
    filename: str,
    ocr_url: str = OCR_SERVICE_URL,
) -> dict[str, Any]:
    """Async variant of OCRSession.recognize used by the HTTP server."""
    ocr_url = ocr_url.rstrip("/")
    try:
        async with httpx.AsyncClient(timeout=OCR_TIMEOUT_SECONDS) as client:
            response = await client.post(
                f"{ocr_url}/ocr",
                files={"file": (filename, image_bytes, "image/jpeg")},
            )
    except httpx.RequestError as e:
        logger.error("OCR service unavailable: %s", e)
        raise OCRServiceUnavailable(f"Failed to connect to OCR service: {e}") from e
    _, ocr_result = _ocr_result_from_response(response)
    return ocr_result


def _confidence_color(confidence: float) -> tuple[int, int, int]:
    if confidence > 90:
        return (0, 255, 0)  # Green
    if confidence > 70:
        return (255, 255, 0)  # Yellow
    return (255, 0, 0)  # Red


def create_debug_overlay(
    image_path: Path,
    receipt: StructuredReceipt,
    output_path: Path | None = None,
) -> Path:
    """
    Draw word boxes (colored by confidence) and line-item boxes on the image.

    Boxes are drawn in the image's own pixel space, which is the space the
    OCR engine reported them in.
    """
    from PIL import Image, ImageDraw, ImageFont

    img = Image.open(io.BytesIO(image_path.read_bytes())).convert("RGB")
    img_width, img_height = img.size
    draw = ImageDraw.Draw(img)

    try:
        font_size = max(14, int(img_height / 150))
        font = ImageFont.truetype("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", font_size)
    except OSError:
        font = ImageFont.load_default()

    line_width = max(2, int(img_width / 500))

    for word in receipt.words:
        box = word.bounds
        draw.rectangle((box.x0, box.y0, box.x1, box.y1), outline=_confidence_color(word.confidence), width=line_width)

    for i, item in enumerate(receipt.line_items):
        box = item.bounds
        draw.rectangle((box.x0, box.y0, box.x1, box.y1), outline=(0, 0, 255), width=line_width)
        description = item.description[:30] + "..." if len(item.description) > 30 else item.description
        label = f"{i}: {description} ${item.amount}"
        text_bbox = draw.textbbox((box.x0, box.y0 - 18), label, font=font)
        draw.rectangle(text_bbox, fill=(255, 255, 255))
        draw.text((box.x0, box.y0 - 18), label, fill=(0, 0, 0), font=font)

    if output_path is None:
        output_path = image_path.parent / f"{image_path.stem}_debug.png"

    img.save(output_path)
    logger.info("Debug overlay saved to: %s", output_path)
    return output_path
