"""Indexing result data models."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from src.models.chunk import Chunk
from src.models.section import Section


class IndexStats(BaseModel):
    """Counts of what was produced for one source."""

    pages: int = 0
    sections: int = 0
    chunks: int = 0


class IndexingError(BaseModel):
    """Why indexing a source failed, and at which stage."""

    stage: str  # "validate", "sections", "chunks"
    message: str
    timestamp: datetime = Field(default_factory=datetime.now)


class IndexResult(BaseModel):
    """Sections and chunks produced for one source document."""

    source_id: str
    status: Literal["indexed", "failed"] = "indexed"
    sections: list[Section] = Field(default_factory=list)
    chunks: list[Chunk] = Field(default_factory=list)
    stats: IndexStats = Field(default_factory=IndexStats)
    error: IndexingError | None = None

    def to_records(self) -> dict[str, list[dict[str, Any]]]:
        """Return the two ordered record lists handed to storage."""
        return {
            "sections": [section.model_dump() for section in self.sections],
            "chunks": [chunk.to_record() for chunk in self.chunks],
        }
