"""
MVC Blog - JSON API Route Handlers
==================================

What:  Programmatic access to posts and categories.
How:   Same services as the HTML resource; JSON in, JSON out.

Route Inventory:
    GET    /api/posts                   list (optional ?category_id=N)
    GET    /api/posts/{id}              show
    POST   /api/posts                   create  → 201
    PUT    /api/posts/{id}              update (full overwrite)
    DELETE /api/posts/{id}              delete  → 204
    GET    /api/categories              list
    GET    /api/categories/{id}         show
    POST   /api/categories              create  → 201
    GET    /api/categories/{id}/posts   posts in one category

Request bodies are checked for shape by FastAPI (422 on a malformed body);
business rules such as a blank title or an unknown category come back as 400
from the service layer.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from mvcblog.database import get_db_session
from mvcblog.schemas.category import CategoryInput, CategoryResponse
from mvcblog.schemas.common import ErrorResponse
from mvcblog.schemas.post import PostInput, PostListResponse, PostResponse
from mvcblog.services.category_service import category_service
from mvcblog.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["API"])


# ══════════════════════════════════════════════════════════════════════════
# Posts
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/posts",
    response_model=PostListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List posts",
    name="api_list_posts",
)
async def api_list_posts(
    response: Response,
    category_id: Optional[int] = Query(
        default=None,
        description="Only include posts in this category",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> PostListResponse:
    """
    List every post, optionally filtered by category.

    X-Total-Count carries the count for clients that only read headers.
    """
    result = await post_service.list_posts(db, category_id=category_id)
    response.headers["X-Total-Count"] = str(result.total_count)
    return result


@router.get(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Get a single post by ID",
    name="api_get_post",
)
async def api_get_post(
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.get_post(db, post_id)


@router.post(
    "/posts",
    status_code=201,
    response_model=PostResponse,
    responses={400: {"description": "Invalid post data", "model": ErrorResponse}},
    summary="Create a post",
    name="api_create_post",
)
async def api_create_post(
    data: PostInput,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.create_post(db, data)


@router.put(
    "/posts/{post_id}",
    response_model=PostResponse,
    responses={
        400: {"description": "Invalid post data", "model": ErrorResponse},
        404: {"description": "Post not found", "model": ErrorResponse},
    },
    summary="Overwrite a post",
    name="api_update_post",
)
async def api_update_post(
    post_id: int,
    data: PostInput,
    db: AsyncSession = Depends(get_db_session),
) -> PostResponse:
    return await post_service.update_post(db, post_id, data)


@router.delete(
    "/posts/{post_id}",
    status_code=204,
    responses={404: {"description": "Post not found", "model": ErrorResponse}},
    summary="Delete a post",
    name="api_delete_post",
)
async def api_delete_post(
    post_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await post_service.delete_post(db, post_id)
    return Response(status_code=204)


# ══════════════════════════════════════════════════════════════════════════
# Categories
# ══════════════════════════════════════════════════════════════════════════


@router.get(
    "/categories",
    response_model=List[CategoryResponse],
    summary="List categories",
    name="api_list_categories",
)
async def api_list_categories(
    db: AsyncSession = Depends(get_db_session),
) -> List[CategoryResponse]:
    return await category_service.list_categories(db)


@router.get(
    "/categories/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Get a single category by ID",
    name="api_get_category",
)
async def api_get_category(
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    return await category_service.get_category(db, category_id)


@router.post(
    "/categories",
    status_code=201,
    response_model=CategoryResponse,
    responses={400: {"description": "Invalid category data", "model": ErrorResponse}},
    summary="Create a category",
    name="api_create_category",
)
async def api_create_category(
    data: CategoryInput,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryResponse:
    return await category_service.create_category(db, data)


@router.get(
    "/categories/{category_id}/posts",
    response_model=PostListResponse,
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="List the posts of one category",
    name="api_list_category_posts",
)
async def api_list_category_posts(
    category_id: int,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PostListResponse:
    """Inverse view of the post → category reference. 404 if the category is missing."""
    await category_service.get_category(db, category_id)
    result = await post_service.list_posts(db, category_id=category_id)
    response.headers["X-Total-Count"] = str(result.total_count)
    return result
