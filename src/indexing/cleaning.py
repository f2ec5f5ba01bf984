"""Removal of common PDF extraction artifacts from page text."""

import re
from collections import Counter
from collections.abc import Sequence

from src.config import CleaningConfig
from src.models.page import PageText

# (pattern, replacement) pairs applied in order by clean_text
CLEANUP_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\r\n?"), "\n"),
    # Bare page numbers: "12", "Page 12", "- 12 -"
    (re.compile(r"^[ \t]*\d+[ \t]*$", re.MULTILINE), ""),
    (re.compile(r"^[ \t]*Page[ \t]+\d+[ \t]*$", re.MULTILINE | re.IGNORECASE), ""),
    (re.compile(r"^[ \t]*-[ \t]*\d+[ \t]*-[ \t]*$", re.MULTILINE), ""),
    # Copyright footers
    (re.compile(r"^.*(?:©|\(c\) \d{4}).*$", re.MULTILINE), ""),
    (re.compile(r"^.*All Rights Reserved.*$", re.MULTILINE | re.IGNORECASE), ""),
    # Control characters other than tab and newline
    (re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]"), ""),
    # Tabs are kept: they mark table columns
    (re.compile(r" {2,}"), " "),
    (re.compile(r"^ +| +$", re.MULTILINE), ""),
    (re.compile(r"\n{3,}"), "\n\n"),
)

EDGE_LINES = 5
MAX_REPEATED_LINE_LENGTH = 100


def clean_text(text: str) -> str:
    """Normalise line endings and strip page numbers, footers and stray spacing."""
    cleaned = text
    for pattern, replacement in CLEANUP_RULES:
        cleaned = pattern.sub(replacement, cleaned)
    return cleaned.strip()


def find_repeated_lines(texts: Sequence[str], ratio: float) -> set[str]:
    """Return normalised lines that recur near the top or bottom of many pages.

    Args:
        texts: Page texts.
        ratio: Fraction of pages a line must appear on.

    Returns:
        Lower-cased, trimmed lines considered running headers or footers.
    """
    frequency: Counter[str] = Counter()
    for text in texts:
        lines = text.split("\n")
        edge = lines[:EDGE_LINES] + lines[-EDGE_LINES:]
        frequency.update({line.strip().lower() for line in edge if line.strip()})

    threshold = len(texts) * ratio
    return {
        line
        for line, count in frequency.items()
        if count >= threshold and len(line) < MAX_REPEATED_LINE_LENGTH
    }


class PageCleaner:
    """Applies text cleanup to every page of a document.

    Args:
        config: CleaningConfig controlling repeated-line removal.
    """

    def __init__(self, config: CleaningConfig | None = None) -> None:
        self._config = config or CleaningConfig()

    def clean(self, pages: Sequence[PageText]) -> list[PageText]:
        """Return cleaned copies of ``pages``; page numbers are unchanged."""
        texts = [clean_text(page.text) for page in pages]

        if (
            self._config.remove_repeated_lines
            and len(texts) >= self._config.min_pages_for_repeat_detection
        ):
            repeated = find_repeated_lines(texts, self._config.repeated_line_ratio)
            if repeated:
                texts = [
                    "\n".join(
                        line
                        for line in text.split("\n")
                        if line.strip().lower() not in repeated
                    ).strip()
                    for text in texts
                ]

        return [
            PageText(text=text, page_number=page.page_number)
            for page, text in zip(pages, texts)
        ]
