"""Page text data model."""

from pydantic import BaseModel, ConfigDict, Field


class PageText(BaseModel):
    """Text of one source page, as supplied by the text-extraction step."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    text: str = ""
    page_number: int = Field(ge=1, alias="pageNumber")
