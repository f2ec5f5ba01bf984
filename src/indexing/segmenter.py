"""Overlapping, boundary-aware segmentation of one text span into chunks."""

import logging
from collections.abc import Sequence

from src.config import ChunkingConfig
from src.indexing.breakpoints import (
    closest_break_point,
    find_last_word_boundary,
    find_natural_break_points,
    find_token_end,
    find_word_boundary,
)
from src.indexing.keywords import KeywordExtractor
from src.indexing.score_hints import ScoreHintAnalyzer
from src.models.chunk import Chunk

logger = logging.getLogger(__name__)


class TextSegmenter:
    """Splits a section's or a page's text into retrieval-sized chunks.

    Split priority for each chunk:
    1. Paragraph break strictly between ``min_size`` and ``max_size`` from the
       chunk start, closest to ``target_size``
    2. Whitespace within ``word_boundary_window`` characters of the target
    3. End of the span, when the target already reaches it
    4. Last whitespace before the target, so a long token starts its own chunk
    5. End of the unbroken token at the target (yields one oversized chunk
       rather than cutting a word)

    Consecutive chunks overlap by ``overlap_size`` characters.

    Args:
        config: ChunkingConfig with the four size bounds.
        keyword_extractor: Annotates each chunk's keywords.
        hint_analyzer: Annotates each chunk's score hints.
    """

    def __init__(
        self,
        config: ChunkingConfig,
        keyword_extractor: KeywordExtractor | None = None,
        hint_analyzer: ScoreHintAnalyzer | None = None,
    ) -> None:
        self._config = config
        self._keywords = keyword_extractor or KeywordExtractor()
        self._hints = hint_analyzer or ScoreHintAnalyzer()

    def segment(
        self,
        text: str,
        page_number: int,
        start_index: int = 0,
        section_path: Sequence[str] = (),
        section_id: str | None = None,
        source_id: str = "",
    ) -> list[Chunk]:
        """Split ``text`` into chunks numbered from ``start_index``.

        Args:
            text: The span to split.
            page_number: Page reported as both page_start and page_end.
            start_index: order_index of the first emitted chunk.
            section_path: Path of the owning section, empty for raw pages.
            section_id: Id of the owning section, None for raw pages.
            source_id: Id of the source document.

        Returns:
            Chunks in order, with contiguous order_index values.
        """
        config = self._config

        def make_chunk(chunk_text: str, order_index: int) -> Chunk:
            return Chunk(
                source_id=source_id,
                section_id=section_id,
                text=chunk_text,
                page_start=page_number,
                page_end=page_number,
                section_path=list(section_path),
                order_index=order_index,
                keywords=self._keywords.extract(chunk_text),
                score_hints=self._hints.analyze(chunk_text),
            )

        if len(text) <= config.target_size:
            stripped = text.strip()
            return [make_chunk(stripped, start_index)] if stripped else []

        break_points = find_natural_break_points(text)
        length = len(text)
        chunks: list[Chunk] = []
        order_index = start_index
        current_start = 0
        previous_end = 0

        while current_start < length:
            break_point = self._next_break_point(
                text, current_start, break_points, floor=previous_end
            )
            if break_point - current_start > config.max_size and previous_end > current_start:
                # An oversized token chunk carries no overlap from its predecessor
                current_start = previous_end
            chunk_text = text[current_start:break_point].strip()

            if chunk_text:
                if len(chunk_text) > config.max_size:
                    logger.warning(
                        "Emitting oversized chunk (%d > %d chars) on page %d: "
                        "no break point found",
                        len(chunk_text),
                        config.max_size,
                        page_number,
                    )
                chunks.append(make_chunk(chunk_text, order_index))
                order_index += 1

            if break_point >= length:
                break

            next_start = break_point - config.overlap_size
            if next_start <= current_start:
                # Overlap would stall the walk; continue from the break instead
                next_start = break_point
            previous_end = break_point
            current_start = next_start

        logger.debug(
            "Segmented %d chars on page %d into %d chunks",
            length,
            page_number,
            len(chunks),
        )
        return chunks

    def _next_break_point(
        self, text: str, current_start: int, break_points: list[int], floor: int = 0
    ) -> int:
        """Choose where the chunk starting at ``current_start`` ends.

        ``floor`` is where the previous chunk ended. Always returns an offset
        greater than ``current_start``.
        """
        config = self._config
        length = len(text)
        target_end = current_start + config.target_size

        natural = closest_break_point(
            break_points,
            low=current_start + config.min_size,
            high=current_start + config.max_size,
            target=target_end,
        )
        if natural is not None:
            return natural

        if target_end >= length:
            return length

        window = config.word_boundary_window
        boundary = find_word_boundary(
            text,
            target=target_end,
            low=max(target_end - window, current_start),
            high=min(target_end + window, current_start + config.max_size),
        )
        if boundary is not None:
            return boundary

        # End before the long token so only the token itself can run oversized
        boundary = find_last_word_boundary(text, low=max(current_start, floor), high=target_end)
        if boundary is not None:
            return boundary

        return find_token_end(text, target_end)
