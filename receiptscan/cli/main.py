#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence

from receiptscan.runtime.receipt_pipeline import OCR_SERVICE_URL


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Run a command handler that may call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Receipt extraction CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <ocr.json>           Extract a receipt from a saved OCR result
  scan <image> [<image>...]  OCR receipt images and extract them
  serve [--host] [--port]    Start the extraction HTTP server
  overlay <image> <ocr.json> Draw word and item boxes on the image
""",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Extract a receipt from an OCR result JSON")
    parse_parser.add_argument("ocr_json", help="Path to OCR result JSON ({text, words})")
    parse_parser.add_argument("--json", action="store_true", help="Print the structured receipt as JSON")

    scan_parser = subparsers.add_parser("scan", help="Scan receipt images")
    scan_parser.add_argument("images", nargs="+", help="Path(s) to receipt images")
    scan_parser.add_argument(
        "--ocr-url", default=OCR_SERVICE_URL, help=f"OCR service URL (default: {OCR_SERVICE_URL})"
    )
    scan_parser.add_argument("--json", action="store_true", help="Print structured receipts as JSON")

    serve_parser = subparsers.add_parser("serve", help="Start extraction server")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    overlay_parser = subparsers.add_parser("overlay", help="Render a debug overlay")
    overlay_parser.add_argument("image", help="Path to receipt image")
    overlay_parser.add_argument("ocr_json", help="Path to OCR result JSON for that image")
    overlay_parser.add_argument("-o", "--output", default=None, help="Output PNG (default: <image>_debug.png)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    from receiptscan.cli import receipt as commands

    handlers: dict[str, Callable[[argparse.Namespace], None]] = {
        "parse": commands.cmd_parse,
        "scan": commands.cmd_scan,
        "serve": commands.cmd_serve,
        "overlay": commands.cmd_overlay,
    }
    return _run_command(handlers[args.command], args)


if __name__ == "__main__":
    raise SystemExit(main())
