"""Composable OCR receipt parser components."""

from .common import LINE_Y_THRESHOLD
from .fields_parser import _extract_date, _extract_merchant, _extract_total
from .items_spatial_parser import MalformedPriceError, _extract_line_items, _parse_line_item
from .line_clusterer import _cluster_lines

__all__ = [
    "LINE_Y_THRESHOLD",
    "MalformedPriceError",
    "_cluster_lines",
    "_extract_date",
    "_extract_line_items",
    "_extract_merchant",
    "_extract_total",
    "_parse_line_item",
]
