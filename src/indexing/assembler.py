"""Assembles the ordered chunk list for a whole source document."""

import logging
from collections.abc import Sequence

from src.indexing.segmenter import TextSegmenter
from src.models.chunk import Chunk
from src.models.page import PageText
from src.models.section import Section

logger = logging.getLogger(__name__)


class ChunkAssembler:
    """Drives the segmenter over each section, or over each page when the
    document has no sections, numbering chunks 0..n-1 across the source.

    Args:
        segmenter: TextSegmenter used for every span.
    """

    def __init__(self, segmenter: TextSegmenter) -> None:
        self._segmenter = segmenter

    def assemble(
        self,
        pages: Sequence[PageText],
        sections: Sequence[Section] = (),
        source_id: str = "",
    ) -> list[Chunk]:
        """Chunk a source document.

        Args:
            pages: Pages in ascending page_number order.
            sections: Sections from SectionExtractor, possibly empty.
            source_id: Id of the source document.

        Returns:
            Chunks with strictly increasing, gap-free order_index from 0.
        """
        if sections:
            chunks = self._chunk_sections(sections, source_id)
        else:
            chunks = self._chunk_pages(pages, source_id)

        logger.info(
            "Assembled %d chunks for source %s (%s-based)",
            len(chunks),
            source_id or "<unnamed>",
            "section" if sections else "page",
        )
        return chunks

    def _chunk_sections(self, sections: Sequence[Section], source_id: str) -> list[Chunk]:
        chunks: list[Chunk] = []
        for section in sections:
            if not section.text:
                logger.debug("Skipping section %r with no body text", section.title)
                continue
            chunks.extend(
                self._segmenter.segment(
                    section.text,
                    page_number=section.page_start,
                    start_index=len(chunks),
                    section_path=section.section_path,
                    section_id=section.id,
                    source_id=source_id,
                )
            )
        return chunks

    def _chunk_pages(self, pages: Sequence[PageText], source_id: str) -> list[Chunk]:
        chunks: list[Chunk] = []
        for page in pages:
            if not page.text.strip():
                continue
            chunks.extend(
                self._segmenter.segment(
                    page.text,
                    page_number=page.page_number,
                    start_index=len(chunks),
                    source_id=source_id,
                )
            )
        return chunks
