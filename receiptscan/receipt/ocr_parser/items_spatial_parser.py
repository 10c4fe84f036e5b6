"""Spatial (bbox-based) receipt line-item extraction."""

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation

from receiptscan.domain.receipt import BoundingBox, Line, LineItem, Word
from receiptscan.runtime.logging import get_logger

from .common import LINE_Y_THRESHOLD, PRICE_TOKEN_PATTERN
from .line_clusterer import _cluster_lines

logger = get_logger(__name__)


class MalformedPriceError(ValueError):
    """Raised when a line's trailing price token cannot be read as an amount."""

    def __init__(self, token: str, line_text: str) -> None:
        super().__init__(f"Malformed price {token!r} in line {line_text!r}")
        self.token = token
        self.line_text = line_text


def _parse_price_token(token: str, line_text: str) -> Decimal:
    try:
        amount = Decimal(token.replace("$", ""))
    except InvalidOperation as exc:
        raise MalformedPriceError(token, line_text) from exc
    if not amount.is_finite() or amount < 0:
        raise MalformedPriceError(token, line_text)
    return amount


def _parse_line_item(line: Iterable[Word]) -> LineItem | None:
    """
    Turn one visual line into a line item.

    The rightmost word must be a price token, optionally followed by a
    one-letter tax flag ("3.99H"); everything to its left is the
    description (possibly empty). The item's box covers the whole line, not
    just the price. Lines without a trailing price (headers, addresses)
    yield None.

    Raises:
        MalformedPriceError: the trailing token looks like a price but is not
            a usable amount.
    """
    words = sorted(line, key=lambda word: word.bounds.x0)
    if not words:
        return None

    price_word = words[-1]
    price_match = PRICE_TOKEN_PATTERN.fullmatch(price_word.text)
    if price_match is None:
        return None

    line_text = " ".join(word.text for word in words)
    amount = _parse_price_token(price_match.group("amount"), line_text)
    description = " ".join(word.text for word in words[:-1]).strip()
    return LineItem(
        description=description,
        amount=amount,
        bounds=BoundingBox.union(word.bounds for word in words),
    )


def _extract_line_items(words: Iterable[Word], threshold: float = LINE_Y_THRESHOLD) -> list[LineItem]:
    """
    Cluster words into lines and parse each line into at most one item.

    A line with a malformed price is logged and skipped; the remaining lines
    are still parsed.
    """
    lines: list[Line] = _cluster_lines(words, threshold=threshold)
    items: list[LineItem] = []
    for line in lines:
        try:
            item = _parse_line_item(line)
        except MalformedPriceError as e:
            logger.warning("Skipping line with malformed price: %s", e)
            continue
        if item is not None:
            items.append(item)

    logger.debug("Parsed %d line items from %d lines", len(items), len(lines))
    return items
