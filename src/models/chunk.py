"""Chunk data model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScoreHints(BaseModel):
    """Structural flags precomputed for the downstream relevance scorer.

    A flag left as ``None`` means "not detected"; consumers treat it the
    same as ``False``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    has_roll_ranges: bool | None = Field(default=None, alias="hasRollRanges")
    has_table_pattern: bool | None = Field(default=None, alias="hasTablePattern")
    has_list_pattern: bool | None = Field(default=None, alias="hasListPattern")
    has_dice_notation: bool | None = Field(default=None, alias="hasDiceNotation")

    def to_dict(self) -> dict[str, bool]:
        """Return only the detected flags, keyed by their camelCase names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Chunk(BaseModel):
    """A retrieval-sized slice of a section's or a page's text."""

    model_config = ConfigDict(frozen=True)

    source_id: str = ""
    section_id: str | None = None
    text: str
    page_start: int = Field(ge=1)
    page_end: int = Field(ge=1)
    section_path: list[str] = Field(default_factory=list)
    order_index: int = Field(ge=0)
    keywords: list[str] = Field(default_factory=list)
    score_hints: ScoreHints = Field(default_factory=ScoreHints)

    @model_validator(mode="after")
    def _check_chunk(self) -> "Chunk":
        if not self.text.strip():
            raise ValueError("Chunk text must not be empty")
        if self.page_start > self.page_end:
            raise ValueError(
                f"page_start ({self.page_start}) is after page_end ({self.page_end})"
            )
        return self

    def to_record(self) -> dict[str, Any]:
        """Serialize for the persistence layer (no storage-assigned fields)."""
        record = self.model_dump(exclude={"score_hints"})
        record["score_hints"] = self.score_hints.to_dict()
        return record
