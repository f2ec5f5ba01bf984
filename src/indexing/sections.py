"""Header detection and section recovery for unmarked rulebook text."""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import NamedTuple

from src.config import SectionConfig
from src.models.page import PageText
from src.models.section import Section, make_section_id

logger = logging.getLogger(__name__)

UPPERCASE_LETTER_PATTERN = re.compile(r"[A-Z]")
DIGITS_ONLY_PATTERN = re.compile(r"^\d+$")
# "2.1. Combat", "3. Movement"
NUMBERED_HEADING_PATTERN = re.compile(r"^((?:\d+\.)+)\s+[A-Z]")
TITLE_CASE_PATTERN = re.compile(r"^[A-Z][a-z]")


class PageLine(NamedTuple):
    """One line of the flattened document."""

    text: str
    page_number: int
    line_index: int


def all_caps_level(line: str, next_line: str | None) -> int | None:
    """Level 1 for an all-uppercase line with letters, e.g. ``COMBAT``."""
    if (
        line.upper() == line
        and UPPERCASE_LETTER_PATTERN.search(line)
        and not DIGITS_ONLY_PATTERN.match(line)
    ):
        return 1
    return None


def numbered_heading_level(line: str, next_line: str | None) -> int | None:
    """One level per dotted number in the prefix: ``2.1. Combat`` is level 2."""
    match = NUMBERED_HEADING_PATTERN.match(line)
    if match:
        return match.group(1).count(".")
    return None


def title_case_before_blank_level(line: str, next_line: str | None) -> int | None:
    """Level 2 for a capitalised line without a final period, followed by a
    blank line or the end of the document."""
    if TITLE_CASE_PATTERN.match(line) and not line.endswith(".") and not next_line:
        return 2
    return None


@dataclass(frozen=True)
class HeaderRule:
    """A named header heuristic returning a level, or None for no match."""

    name: str
    classify: Callable[[str, str | None], int | None]


# Evaluated in order; the first rule that matches decides the level.
HEADER_RULES: tuple[HeaderRule, ...] = (
    HeaderRule("all_caps", all_caps_level),
    HeaderRule("numbered_heading", numbered_heading_level),
    HeaderRule("title_case_before_blank", title_case_before_blank_level),
)


class DetectedHeader(NamedTuple):
    position: int  # Index into the flattened line list
    title: str
    level: int
    rule: str


class SectionExtractor:
    """Recovers a flat outline of sections from a document's pages.

    Every line is tested against the header rules. Each detected header
    starts a section whose body runs until the next header (or the end of
    the document), across page boundaries.

    Args:
        config: SectionConfig with header length limits.
        rules: Ordered header rules. Defaults to HEADER_RULES.
    """

    def __init__(
        self,
        config: SectionConfig | None = None,
        rules: Sequence[HeaderRule] = HEADER_RULES,
    ) -> None:
        self._config = config or SectionConfig()
        self._rules = tuple(rules)

    def extract(self, pages: Sequence[PageText], source_id: str = "") -> list[Section]:
        """Detect headers and capture the body text under each.

        Args:
            pages: Pages in ascending page_number order.
            source_id: Id of the source document.

        Returns:
            Sections in detection order; empty when no header is found.
        """
        lines = self.flatten(pages)
        if not lines:
            return []

        headers = self.detect_headers(lines)
        last_page = pages[-1].page_number
        sections: list[Section] = []

        for ordinal, header in enumerate(headers):
            if ordinal + 1 < len(headers):
                body_end = headers[ordinal + 1].position
                page_end = lines[body_end - 1].page_number
            else:
                body_end = len(lines)
                page_end = last_page

            body_lines = lines[header.position + 1 : body_end]
            body = "\n".join(line.text for line in body_lines).strip()

            sections.append(
                Section(
                    id=make_section_id(source_id, ordinal),
                    source_id=source_id,
                    title=header.title,
                    section_path=[header.title],
                    page_start=lines[header.position].page_number,
                    page_end=page_end,
                    text=body or None,
                    level=header.level,
                )
            )
            logger.debug(
                "Section %r (%s, level %d) pages %d-%d",
                header.title,
                header.rule,
                header.level,
                sections[-1].page_start,
                page_end,
            )

        logger.info(
            "Extracted %d sections from %d pages of source %s",
            len(sections),
            len(pages),
            source_id or "<unnamed>",
        )
        return sections

    def flatten(self, pages: Sequence[PageText]) -> list[PageLine]:
        """Split every non-blank page into lines tagged with their page."""
        lines: list[PageLine] = []
        for page in pages:
            if not page.text.strip():
                continue
            for index, text in enumerate(page.text.splitlines()):
                lines.append(PageLine(text, page.page_number, index))
        return lines

    def detect_headers(self, lines: Sequence[PageLine]) -> list[DetectedHeader]:
        """Return every line that some header rule accepts, in document order."""
        headers: list[DetectedHeader] = []
        min_length = self._config.min_header_length
        max_length = self._config.max_header_length

        for position, line in enumerate(lines):
            trimmed = line.text.strip()
            if not min_length <= len(trimmed) <= max_length:
                continue

            next_line = lines[position + 1].text.strip() if position + 1 < len(lines) else None
            for rule in self._rules:
                level = rule.classify(trimmed, next_line)
                if level is not None:
                    headers.append(DetectedHeader(position, trimmed, level, rule.name))
                    break

        return headers
