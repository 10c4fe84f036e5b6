"""Group OCR words into visual text lines by vertical position."""

from collections.abc import Iterable

from receiptscan.domain.receipt import Line, Word

from .common import LINE_Y_THRESHOLD


def _cluster_lines(words: Iterable[Word], threshold: float = LINE_Y_THRESHOLD) -> list[Line]:
    """
    Reconstruct text lines from an unordered bag of words.

    Words are scanned top to bottom (stable sort on the top edge). A word joins
    the open line when its top edge is within `threshold` of the top edge of
    the line's FIRST word; otherwise the open line is emitted and a new one
    starts. The reference never moves while a line is open, so a line that
    drifts gradually stays merged until one word lands past the threshold.

    Every word ends up in exactly one line, and lines come out in ascending
    vertical order.
    """
    sorted_words = sorted(words, key=lambda word: word.bounds.y0)
    if not sorted_words:
        return []

    lines: list[Line] = []
    current_line = [sorted_words[0]]
    current_y = sorted_words[0].bounds.y0

    for word in sorted_words[1:]:
        if abs(word.bounds.y0 - current_y) <= threshold:
            current_line.append(word)
        else:
            lines.append(tuple(current_line))
            current_line = [word]
            current_y = word.bounds.y0

    lines.append(tuple(current_line))
    return lines
