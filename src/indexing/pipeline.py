"""Rulebook indexing pipeline: pages in, sections and chunks out."""

import logging
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor

from src.config import AppConfig
from src.indexing.assembler import ChunkAssembler
from src.indexing.cleaning import PageCleaner
from src.indexing.keywords import KeywordExtractor
from src.indexing.score_hints import ScoreHintAnalyzer
from src.indexing.sections import SectionExtractor
from src.indexing.segmenter import TextSegmenter
from src.models.index_result import IndexingError, IndexResult, IndexStats
from src.models.page import PageText

logger = logging.getLogger(__name__)


class IndexingStageError(Exception):
    """Raised when a pipeline stage fails; records which stage."""

    def __init__(self, stage: str, cause: Exception) -> None:
        super().__init__(f"{stage}: {cause}")
        self.stage = stage
        self.cause = cause


def validate_page_order(pages: Sequence[PageText]) -> None:
    """Check that page numbers strictly increase (gaps are allowed).

    Raises:
        ValueError: If a page number does not exceed the one before it.
    """
    for previous, page in zip(pages, pages[1:]):
        if page.page_number <= previous.page_number:
            raise ValueError(
                f"Pages must be in strictly increasing order: page "
                f"{page.page_number} follows page {previous.page_number}"
            )


class RulesIndexer:
    """Turns a source document's pages into sections and chunks.

    The indexer holds only read-only configuration, so a single instance
    can index many documents at once.

    Args:
        config: AppConfig; only the chunking, sections, cleaning and
                indexing settings are used.
    """

    def __init__(self, config: AppConfig | None = None) -> None:
        self._config = config or AppConfig()
        self._cleaner = PageCleaner(self._config.cleaning)
        self._extractor = SectionExtractor(self._config.sections)
        self._assembler = ChunkAssembler(
            TextSegmenter(
                self._config.chunking,
                keyword_extractor=KeywordExtractor(),
                hint_analyzer=ScoreHintAnalyzer(),
            )
        )

    def index(self, pages: Sequence[PageText], source_id: str) -> IndexResult:
        """Index one source document.

        Args:
            pages: Pages in ascending page_number order.
            source_id: Id stamped on every section and chunk.

        Returns:
            An ``indexed`` IndexResult.

        Raises:
            IndexingStageError: If any stage fails, e.g. on out-of-order pages.
        """
        pages = list(pages)
        try:
            validate_page_order(pages)
        except ValueError as exc:
            raise IndexingStageError("validate", exc) from exc

        if self._config.cleaning.enabled:
            pages = self._cleaner.clean(pages)

        try:
            sections = self._extractor.extract(pages, source_id=source_id)
        except Exception as exc:
            raise IndexingStageError("sections", exc) from exc

        try:
            chunks = self._assembler.assemble(pages, sections, source_id=source_id)
        except Exception as exc:
            raise IndexingStageError("chunks", exc) from exc

        stats = IndexStats(pages=len(pages), sections=len(sections), chunks=len(chunks))
        logger.info(
            "Indexed source %s: %d pages, %d sections, %d chunks",
            source_id,
            stats.pages,
            stats.sections,
            stats.chunks,
        )
        return IndexResult(
            source_id=source_id, sections=sections, chunks=chunks, stats=stats
        )

    def index_safely(self, pages: Sequence[PageText], source_id: str) -> IndexResult:
        """Like index(), but a failure yields a ``failed`` result with no chunks."""
        try:
            return self.index(pages, source_id)
        except IndexingStageError as exc:
            logger.exception("Failed to index source %s at stage %s", source_id, exc.stage)
            return IndexResult(
                source_id=source_id,
                status="failed",
                stats=IndexStats(pages=len(pages)),
                error=IndexingError(stage=exc.stage, message=str(exc.cause)),
            )

    def index_many(self, documents: Mapping[str, Sequence[PageText]]) -> list[IndexResult]:
        """Index independent documents concurrently.

        Args:
            documents: Pages keyed by source id.

        Returns:
            One IndexResult per document, in the mapping's order.
        """
        if not documents:
            return []

        workers = min(self._config.indexing.workers, len(documents))
        logger.info("Indexing %d sources with %d workers", len(documents), workers)
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(self.index_safely, pages, source_id)
                for source_id, pages in documents.items()
            ]
            return [future.result() for future in futures]
