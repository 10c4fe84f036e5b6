"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from receiptscan.domain.receipt import StructuredReceipt
from receiptscan.receipt.ocr_result_parser import OCRTextMissing, parse_receipt
from receiptscan.receipt.word_adapter import MalformedOCRResult
from receiptscan.runtime import get_logger

logger = get_logger(__name__)


def _load_ocr_json(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.error("OCR JSON not found: %s", path)
        print(f"Error: OCR JSON not found: {path}")
        sys.exit(1)
    try:
        data: dict[str, Any] = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        print(f"Error: {path} is not valid JSON: {e}")
        sys.exit(1)
    return data


def _parse_or_exit(ocr_result: dict[str, Any]) -> StructuredReceipt:
    try:
        return parse_receipt(ocr_result)
    except (OCRTextMissing, MalformedOCRResult) as e:
        logger.error("%s", e)
        print(f"Extraction failed: {e}")
        sys.exit(1)


def _print_receipt(receipt: StructuredReceipt, as_json: bool) -> None:
    if as_json:
        print(json.dumps(receipt.to_dict(), indent=2))
        return

    print("=" * 60)
    print("PARSED RECEIPT")
    print("=" * 60)
    print(f"Merchant: {receipt.merchant or 'UNKNOWN'}")
    print(f"Date: {receipt.date or 'UNKNOWN'}")
    print(f"Total: {receipt.total or 'UNKNOWN'}")
    print(f"\nItems ({len(receipt.line_items)}):")
    for i, item in enumerate(receipt.line_items, 1):
        print(f"  {i}. {item.description or '(no description)'} - ${item.amount}")
    print("=" * 60)


def cmd_parse(args: argparse.Namespace) -> None:
    """Extract a receipt from a saved OCR result JSON file."""
    ocr_result = _load_ocr_json(Path(args.ocr_json))
    receipt = _parse_or_exit(ocr_result)
    _print_receipt(receipt, args.json)


def cmd_scan(args: argparse.Namespace) -> None:
    """Send one or more receipt images to the OCR service and extract each."""
    from receiptscan.runtime.receipt_pipeline import OCRServiceUnavailable, OCRSession

    image_paths = [Path(image) for image in args.images]
    missing = [path for path in image_paths if not path.exists()]
    if missing:
        print(f"Error: Receipt file not found: {missing[0]}")
        sys.exit(1)

    try:
        with OCRSession(args.ocr_url) as session:
            for image_path in image_paths:
                _, ocr_result = session.recognize_file(image_path)
                receipt = _parse_or_exit(ocr_result)
                if not args.json:
                    print(f"\n{image_path.name}")
                _print_receipt(receipt, args.json)
    except OCRServiceUnavailable as e:
        logger.error("%s", e)
        print(f"OCR service unavailable: {e}")
        print("Make sure the OCR service is running before scanning receipts.")
        sys.exit(1)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start the FastAPI extraction server."""
    import uvicorn

    from receiptscan.runtime import receipt_server as server

    print(f"Starting receipt server on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/parse | /upload | /health")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)


def cmd_overlay(args: argparse.Namespace) -> None:
    """Render word and line-item boxes from an OCR JSON onto its image."""
    from receiptscan.runtime.receipt_pipeline import create_debug_overlay

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"Error: Receipt file not found: {image_path}")
        sys.exit(1)

    receipt = _parse_or_exit(_load_ocr_json(Path(args.ocr_json)))
    output_path = create_debug_overlay(image_path, receipt, Path(args.output) if args.output else None)
    print(f"Overlay saved to: {output_path}")
