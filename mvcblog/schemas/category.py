"""Category request/response schemas, plus the selection-control option model."""

from datetime import datetime

from pydantic import BaseModel, Field


class CategoryInput(BaseModel):
    """Body of POST /api/categories."""

    name: str = Field(max_length=255, description="Category display name")

    model_config = {"extra": "forbid", "str_strip_whitespace": True}


class CategoryResponse(BaseModel):
    id: int = Field(description="Unique category identifier")
    name: str = Field(description="Category display name")
    created_at: datetime = Field(description="When the category was created (UTC)")

    model_config = {"from_attributes": True}


class CategoryOption(BaseModel):
    """
    One <option> of the category selection control.

    selected is True only for the category whose id equals the post's
    current category_id.
    """
    id: int
    name: str
    selected: bool = False
