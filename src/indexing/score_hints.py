"""Structural signal detection for the downstream relevance scorer."""

import re
from collections.abc import Callable
from dataclasses import dataclass

from src.models.chunk import ScoreHints

ROLL_RANGE_PATTERN = re.compile(r"\b[1-6]\s*[-–]\s*[1-6]\b")
D6_TOKEN_PATTERN = re.compile(r"\b[dD]66?\b")
NUMBERED_ROW_PATTERN = re.compile(r"^\s*\d+\.?\s")
BULLET_PATTERN = re.compile(r"^\s*[-•*]\s")
NUMBERED_LIST_PATTERN = re.compile(r"^\s*\d+[.)]\s")
DICE_NOTATION_PATTERN = re.compile(r"\b\d*[dD]\d+(?:\+\d+)?\b")

# More than this many matching lines counts as a table or list layout
MIN_PATTERN_LINES = 3


def _content_lines(text: str) -> list[str]:
    return [line for line in text.split("\n") if line.strip()]


def has_roll_ranges(text: str) -> bool:
    return bool(ROLL_RANGE_PATTERN.search(text) or D6_TOKEN_PATTERN.search(text))


def has_table_pattern(text: str) -> bool:
    lines = _content_lines(text)
    if any("\t" in line for line in lines):
        return True
    numbered_rows = sum(1 for line in lines if NUMBERED_ROW_PATTERN.match(line))
    return numbered_rows > MIN_PATTERN_LINES


def has_list_pattern(text: str) -> bool:
    list_lines = sum(
        1
        for line in _content_lines(text)
        if BULLET_PATTERN.match(line) or NUMBERED_LIST_PATTERN.match(line)
    )
    return list_lines > MIN_PATTERN_LINES


def has_dice_notation(text: str) -> bool:
    return bool(DICE_NOTATION_PATTERN.search(text))


@dataclass(frozen=True)
class HintDetector:
    """One independent detector: the ScoreHints field it sets, and its test."""

    field: str
    detect: Callable[[str], bool]


SCORE_HINT_DETECTORS: tuple[HintDetector, ...] = (
    HintDetector("has_roll_ranges", has_roll_ranges),
    HintDetector("has_table_pattern", has_table_pattern),
    HintDetector("has_list_pattern", has_list_pattern),
    HintDetector("has_dice_notation", has_dice_notation),
)


class ScoreHintAnalyzer:
    """Runs every detector over a span and collects the flags that fired.

    Args:
        detectors: Detector table to apply. Defaults to SCORE_HINT_DETECTORS.
    """

    def __init__(self, detectors: tuple[HintDetector, ...] = SCORE_HINT_DETECTORS) -> None:
        unknown = [d.field for d in detectors if d.field not in ScoreHints.model_fields]
        if unknown:
            raise ValueError(f"Unknown score hint fields: {', '.join(unknown)}")
        self._detectors = detectors

    def analyze(self, text: str) -> ScoreHints:
        """Return ScoreHints with only the detected flags set."""
        detected = {d.field: True for d in self._detectors if d.detect(text)}
        return ScoreHints(**detected)
