"""
MVC Blog - Post Service (Business Logic)
========================================

What:  Every rule about posts: validation, not-found handling, persistence.
Who:   Called by the HTML post resource routes and the JSON API.
When:  For every list / show / create / update / delete of a post.

Operation Rules:
    list    → every post ordered by id, optionally filtered by category_id.
              An empty table yields an empty list.
    show    → NotFoundError when the id has no row.
    create  → title and content must be non-blank and category_id must name
              an existing category, checked before any write.
    update  → NotFoundError first, then the same validation as create, then
              all three writable fields are overwritten, changed or not.
              Applying the same update twice yields the same row.
    delete  → NotFoundError when the id has no row.

Joins:
    Posts reference categories by a plain foreign key. Reads join
    `categories` explicitly (outer join) to fetch the category name, so a
    post whose category has vanished still renders, with no name.

Error Handling Strategy:
    SQLAlchemy errors are wrapped in DatabaseError (details logged, generic
    message returned). NotFoundError and ValidationError propagate as-is.
    Nothing is retried.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import asc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mvcblog.database import is_storable_id
from mvcblog.exceptions import DatabaseError, NotFoundError, ValidationError
from mvcblog.models.category import Category
from mvcblog.models.post import Post
from mvcblog.schemas.post import PostInput, PostListResponse, PostResponse

logger = logging.getLogger(__name__)


def _to_response(post: Post, category_name: Optional[str]) -> PostResponse:
    """Builds the response model from an ORM row plus the joined category name."""
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        category_id=post.category_id,
        category_name=category_name,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _with_category_name():
    """SELECT posts.*, categories.name FROM posts LEFT JOIN categories ..."""
    return select(Post, Category.name).outerjoin(
        Category, Category.id == Post.category_id
    )


class PostService:
    """
    Business logic layer for post operations.

    Stateless: the session is passed into every call, so each request keeps
    its own transaction and tests can hand in a mock.
    """

    async def list_posts(
        self,
        db: AsyncSession,
        category_id: Optional[int] = None,
    ) -> PostListResponse:
        """
        List posts, optionally only those in one category.

        Query plan:
            SELECT posts.*, categories.name FROM posts
            LEFT JOIN categories ON categories.id = posts.category_id
            [WHERE posts.category_id = :category_id]  → idx_posts_category_id
            ORDER BY posts.id

        A category_id that no row can have matches nothing.
        """
        if category_id is not None and not is_storable_id(category_id):
            return PostListResponse(posts=[], total_count=0)

        query = _with_category_name()
        if category_id is not None:
            query = query.where(Post.category_id == category_id)
        query = query.order_by(asc(Post.id))

        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve posts. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        posts = [_to_response(post, name) for post, name in rows]
        return PostListResponse(posts=posts, total_count=len(posts))

    async def get_post(self, db: AsyncSession, post_id: int) -> PostResponse:
        """
        Retrieve a single post with its category name.

        Raises:
            NotFoundError: No post with this ID (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        if not is_storable_id(post_id):
            raise NotFoundError(resource="post", resource_id=str(post_id))

        try:
            result = await db.execute(_with_category_name().where(Post.id == post_id))
            row = result.first()
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": post_id},
            ) from e

        if row is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))

        post, category_name = row
        return _to_response(post, category_name)

    async def create_post(self, db: AsyncSession, data: PostInput) -> PostResponse:
        """
        Insert a new post from validated input.

        Raises:
            ValidationError: Blank title/content or unknown category (→ 400)
            DatabaseError:   Insert failed (→ 500)
        """
        category = await self._validate(db, data)

        post = Post(**{field: getattr(data, field) for field in Post.WRITABLE_FIELDS})
        try:
            db.add(post)
            await db.flush()  # Assigns the ID without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the post. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Post %s created in category %s", post.id, post.category_id)
        return _to_response(post, category.name)

    async def update_post(
        self, db: AsyncSession, post_id: int, data: PostInput
    ) -> PostResponse:
        """
        Overwrite title, content and category_id of an existing post.

        Raises:
            NotFoundError:   No post with this ID (→ 404), checked first
            ValidationError: Blank title/content or unknown category (→ 400)
            DatabaseError:   Update failed (→ 500)
        """
        post = await self._load(db, post_id)
        category = await self._validate(db, data)

        for field in Post.WRITABLE_FIELDS:
            setattr(post, field, getattr(data, field))
        post.updated_at = datetime.now(timezone.utc)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the post. Please try again.",
                context={"post_id": post_id},
            ) from e

        logger.info("Post %s updated", post_id)
        return _to_response(post, category.name)

    async def delete_post(self, db: AsyncSession, post_id: int) -> None:
        """
        Remove a post.

        Raises:
            NotFoundError: No post with this ID (→ 404)
            DatabaseError: Delete failed (→ 500)
        """
        post = await self._load(db, post_id)
        try:
            await db.delete(post)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the post. Please try again.",
                context={"post_id": post_id},
            ) from e

        logger.info("Post %s deleted", post_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _load(self, db: AsyncSession, post_id: int) -> Post:
        """Fetches the ORM row for a write, converting a miss into NotFoundError."""
        if not is_storable_id(post_id):
            raise NotFoundError(resource="post", resource_id=str(post_id))

        try:
            post = await db.get(Post, post_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": post_id},
            ) from e

        if post is None:
            raise NotFoundError(resource="post", resource_id=str(post_id))
        return post

    async def _validate(self, db: AsyncSession, data: PostInput) -> Category:
        """
        Business-rule validation shared by create and update.

        Returns the referenced category so callers can render its name
        without a second query.
        """
        if not data.title:
            raise ValidationError(message="Title must not be empty", field="title")
        if not data.content:
            raise ValidationError(message="Content must not be empty", field="content")

        category = None
        if is_storable_id(data.category_id):
            try:
                category = await db.get(Category, data.category_id)
            except SQLAlchemyError as e:
                logger.error("Database error checking category %s: %s", data.category_id, str(e))
                raise DatabaseError(
                    message="Could not validate the category. Please try again.",
                    context={"category_id": data.category_id},
                ) from e

        if category is None:
            raise ValidationError(
                message=f"Category with ID '{data.category_id}' does not exist",
                field="category_id",
                context={"category_id": data.category_id},
            )
        return category


# ── Singleton Instance ────────────────────────────────────────────────────
post_service = PostService()
