"""
MVC Blog - Post Request/Response Schemas
========================================

What:  Pydantic models defining the post API contract and the validated
       input structure built at the HTML form boundary.
How:   FastAPI validates JSON bodies against PostInput; the HTML routes build
       PostInput from form fields before calling the service.

Design Decision:
    PostInput declares exactly the writable fields (title, content,
    category_id) and forbids anything else. This is the allow-list for
    create and update: no other column can be assigned from a request.
    Presence rules (non-blank text, existing category) are business rules
    and live in PostService, so the HTML form and the JSON API reject
    the same inputs with the same error.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Input Models
# ══════════════════════════════════════════════════════════════════════════


class PostInput(BaseModel):
    """Fields a client may write on create and update (full overwrite)."""

    title: str = Field(max_length=255, description="Post headline")
    content: str = Field(description="Post body")
    category_id: int = Field(description="ID of an existing category")

    model_config = {"extra": "forbid", "str_strip_whitespace": True}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """
    What:  Full representation of a post.
    Who:   Returned by the JSON API and handed to the HTML templates.

    category_name comes from an explicit join. It is None when the stored
    category_id points at a category that no longer exists.
    """
    id: int = Field(description="Unique post identifier")
    title: str = Field(description="Post headline")
    content: str = Field(description="Post body")
    category_id: int = Field(description="Referenced category ID")
    category_name: Optional[str] = Field(
        default=None,
        description="Name of the referenced category (null if dangling)",
    )
    created_at: datetime = Field(description="When the post was created (UTC)")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="When the post was last updated (null if never)",
    )

    model_config = {"from_attributes": True}


class PostListResponse(BaseModel):
    """Wrapper for the post list endpoint."""
    posts: List[PostResponse] = Field(description="Posts ordered by ID")
    total_count: int = Field(description="Number of posts returned")
