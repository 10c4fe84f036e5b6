"""Unified command-line interface for receiptscan.

Usage:
    receiptscan parse <ocr.json> [--json]
    receiptscan scan <image> [<image> ...] [--ocr-url URL]
    receiptscan serve [--host] [--port]
    receiptscan overlay <image> <ocr.json> [-o out.png]
"""
