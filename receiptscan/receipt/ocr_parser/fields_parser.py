"""Merchant/date/total extraction helpers.

Each extractor is a pure function of the OCR text blob and returns None when
the field is not present. They share no state and may run in any order.
"""

from .common import (
    CURRENCY_AMOUNT_PATTERN,
    DATE_DMY_PATTERN,
    DATE_PATTERN,
    MERCHANT_SEARCH_LINES,
    TOTAL_PATTERN,
)


def _extract_date(full_text: str) -> str | None:
    """
    Extract the first date-like substring from receipt text.

    Both day-month-year and year-first forms are searched in one scan, so the
    earliest date in the text wins and "2024-03-15" is never cut down to
    "24-03-15". The match is returned as printed on the receipt; ambiguous
    orders ("03/04/24") are not reinterpreted.
    """
    match = DATE_PATTERN.search(full_text)
    return match.group(0) if match else None


def _extract_total(full_text: str) -> str | None:
    """
    Extract the keyword-anchored total, formatted as "$<digits>".

    Bare numbers without a total/amount/sum/due/balance keyword before them
    are ignored so item prices are never mistaken for the total.
    """
    match = TOTAL_PATTERN.search(full_text)
    if match is None:
        return None
    return f"${match.group(1)}"


def _looks_like_date_or_amount(line: str) -> bool:
    return DATE_DMY_PATTERN.search(line) is not None or CURRENCY_AMOUNT_PATTERN.search(line) is not None


def _extract_merchant(full_text: str) -> str | None:
    """Return the first non-blank header line that is not a date or an amount."""
    for line in full_text.split("\n")[:MERCHANT_SEARCH_LINES]:
        if _looks_like_date_or_amount(line):
            continue
        if line.strip():
            return line.strip()
    return None
