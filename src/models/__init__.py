"""Data models for the rulebook indexer."""

from src.models.chunk import Chunk, ScoreHints
from src.models.index_result import IndexingError, IndexResult, IndexStats
from src.models.page import PageText
from src.models.section import Section, make_section_id

__all__ = [
    "Chunk",
    "IndexResult",
    "IndexStats",
    "IndexingError",
    "PageText",
    "ScoreHints",
    "Section",
    "make_section_id",
]
