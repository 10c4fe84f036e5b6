"""Shared constants and patterns for OCR receipt parsing."""

import re

# Max vertical distance (pixels) between a word's top edge and the top edge of
# the first word of the open line for both to share a line.
LINE_Y_THRESHOLD = 5

# Day-month-year style dates, e.g. "03/15/2024", "1-2-24", "15.03.2024"
DATE_DMY_PATTERN = re.compile(r"\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4}")
# Year-first dates, e.g. "2024-03-15", "2024/3/5"
DATE_YMD_PATTERN = re.compile(r"\d{4}[-/.]\d{1,2}[-/.]\d{1,2}")
# Leftmost date of either form; day-first wins when both start at one position.
DATE_PATTERN = re.compile(f"(?:{DATE_DMY_PATTERN.pattern})|(?:{DATE_YMD_PATTERN.pattern})")

# Keyword-anchored total; the amount must follow the keyword on the same line.
TOTAL_PATTERN = re.compile(r"(?:total|amount|sum|due|balance).*?\$?\s*(\d+\.?\d*)", re.IGNORECASE)

# Lines carrying a currency amount are never the merchant name
CURRENCY_AMOUNT_PATTERN = re.compile(r"\$?\d+\.\d{2}")

# Loose price token: "$3.99", "3.99", "12", "4.", with an optional tax flag ("3.99H")
PRICE_TOKEN_PATTERN = re.compile(r"\$?(?P<amount>\d+\.?\d*)[HhTtJj]?")

# Only the top of the receipt is searched for the merchant name
MERCHANT_SEARCH_LINES = 3
