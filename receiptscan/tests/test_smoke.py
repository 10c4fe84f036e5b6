"""Public smoke tests for basic module wiring.

Keep these minimal and free of any real-world data.
"""

from __future__ import annotations


def test_imports() -> None:
    import receiptscan.cli.main
    import receiptscan.domain
    import receiptscan.receipt.ocr_result_parser
    import receiptscan.runtime
    import receiptscan.runtime.receipt_server

    assert receiptscan.cli.main is not None
    assert receiptscan.domain is not None
    assert receiptscan.receipt.ocr_result_parser is not None
    assert receiptscan.runtime is not None
    assert receiptscan.runtime.receipt_server.app is not None
