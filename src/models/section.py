"""Section data model."""

from uuid import NAMESPACE_URL, uuid5

from pydantic import BaseModel, ConfigDict, Field, model_validator


def make_section_id(source_id: str, ordinal: int) -> str:
    """Build a stable identifier for the ``ordinal``-th section of a source.

    Identical input always produces identical ids, so chunk back-references
    survive re-indexing and concurrent runs.
    """
    return str(uuid5(NAMESPACE_URL, f"rules-source:{source_id}/section:{ordinal}"))


class Section(BaseModel):
    """A structural unit recovered from a rulebook: a detected header plus
    the body text captured up to the next header.

    Sections are flat; ``section_path`` holds just ``[title]``. ``text`` is
    ``None`` when nothing was captured, so a section can exist purely as a
    structural marker.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    source_id: str = ""
    title: str
    section_path: list[str] = Field(default_factory=list)
    page_start: int = Field(ge=1)
    page_end: int = Field(ge=1)
    text: str | None = None
    level: int = 1  # Header level reported by the matching header rule
    keywords: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_section(self) -> "Section":
        if self.page_start > self.page_end:
            raise ValueError(
                f"page_start ({self.page_start}) is after page_end ({self.page_end})"
            )
        if self.text is not None and not self.text.strip():
            raise ValueError("Section text must be None rather than blank")
        return self
