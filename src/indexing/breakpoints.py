"""Locating split positions inside a span of text."""

import re

# One or more blank (or whitespace-only) lines after a line break
PARAGRAPH_BREAK_PATTERN = re.compile(r"\n(?:[ \t]*\n)+")
WHITESPACE_PATTERN = re.compile(r"\s+")


def find_natural_break_points(text: str) -> list[int]:
    """Return the offsets immediately following each blank-line run, ascending."""
    return [match.end() for match in PARAGRAPH_BREAK_PATTERN.finditer(text)]


def closest_break_point(
    break_points: list[int], low: int, high: int, target: int
) -> int | None:
    """Pick the break point strictly inside ``(low, high)`` closest to ``target``.

    Ties go to the earlier offset.
    """
    best: int | None = None
    for point in break_points:
        if point <= low:
            continue
        if point >= high:
            break
        if best is None or abs(point - target) < abs(best - target):
            best = point
    return best


def find_word_boundary(text: str, target: int, low: int, high: int) -> int | None:
    """Return the whitespace offset nearest ``target`` within ``[low, high]``.

    The returned offset lies inside a whitespace run, so text before it ends
    on a whole word. Returns None when the window holds no whitespace.
    """
    low = max(low, 0)
    high = min(high, len(text))
    best: int | None = None
    for match in WHITESPACE_PATTERN.finditer(text, low, high):
        # Any offset inside the run is a word boundary; take the one nearest target
        candidate = min(max(target, match.start()), match.end())
        if candidate <= low:
            continue
        if best is None or abs(candidate - target) < abs(best - target):
            best = candidate
    return best


def find_last_word_boundary(text: str, low: int, high: int) -> int | None:
    """Return the start of the last whitespace run in ``(low, high]``, else None."""
    best: int | None = None
    for match in WHITESPACE_PATTERN.finditer(text, max(low, 0), min(high + 1, len(text))):
        if match.start() > low:
            best = match.start()
    return best


def find_token_end(text: str, start: int) -> int:
    """Return the offset of the first whitespace at or after ``start``, else len(text)."""
    match = WHITESPACE_PATTERN.search(text, start)
    return match.start() if match else len(text)
