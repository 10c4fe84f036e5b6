"""FastAPI server exposing receipt extraction over HTTP."""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from receiptscan.receipt.ocr_result_parser import OCRTextMissing, parse_receipt
from receiptscan.receipt.word_adapter import MalformedOCRResult
from receiptscan.runtime import receipt_pipeline
from receiptscan.runtime.logging import get_logger
from receiptscan.runtime.receipt_pipeline import OCRServiceUnavailable

logger = get_logger(__name__)

app = FastAPI(title="Receipt Extractor")


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message}, status_code=status_code)


def _parse_to_response(ocr_result: Any, malformed_status: int = 400) -> JSONResponse:
    try:
        receipt = parse_receipt(ocr_result)
    except OCRTextMissing as e:
        logger.warning("Rejected OCR result: %s", e)
        return _error(str(e), 422)
    except MalformedOCRResult as e:
        logger.warning("Malformed OCR result: %s", e)
        return _error(str(e), malformed_status)

    logger.info(
        "Parsed: %s, %s, %s, %d items",
        receipt.merchant,
        receipt.date,
        receipt.total,
        len(receipt.line_items),
    )
    return JSONResponse(receipt.to_dict())


@app.post("/parse")
async def parse_ocr_result(request: Request) -> JSONResponse:
    """Extract a structured receipt from an OCR result `{text, words}`."""
    try:
        ocr_result = await request.json()
    except ValueError:
        return _error("Request body must be JSON", 400)
    return _parse_to_response(ocr_result)


@app.post("/upload")
async def upload_receipt(request: Request) -> JSONResponse:
    """Receive a receipt image, run it through the OCR service, and extract it."""
    form = await request.form()

    file = None
    for key, value in form.items():
        logger.debug("Form field: key=%r, type=%s", key, type(value))
        if hasattr(value, "read"):
            file = value
            break

    if not file:
        return _error("No file found in request", 400)

    filename = getattr(file, "filename", None) or "receipt.jpg"
    contents = await file.read()

    try:
        ocr_result = await receipt_pipeline.recognize_image_async(
            contents, filename, ocr_url=receipt_pipeline.OCR_SERVICE_URL
        )
    except OCRServiceUnavailable as e:
        return _error(str(e), 502)

    # The words came from the OCR service, not the client.
    return _parse_to_response(ocr_result, malformed_status=502)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
