"""Rulebook indexing: section recovery and chunking."""

from src.indexing.assembler import ChunkAssembler
from src.indexing.keywords import KeywordExtractor
from src.indexing.loader import PageLoader
from src.indexing.pipeline import IndexingStageError, RulesIndexer
from src.indexing.score_hints import ScoreHintAnalyzer
from src.indexing.sections import SectionExtractor
from src.indexing.segmenter import TextSegmenter

__all__ = [
    "ChunkAssembler",
    "IndexingStageError",
    "KeywordExtractor",
    "PageLoader",
    "RulesIndexer",
    "ScoreHintAnalyzer",
    "SectionExtractor",
    "TextSegmenter",
]
