"""
MVC Blog - Category Service
===========================

What:  Reads and creates categories.
Who:   Called by the HTML post routes (to fill the selection control) and
       by the category JSON API.
"""

import logging
from typing import List

from sqlalchemy import asc, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mvcblog.database import is_storable_id
from mvcblog.exceptions import DatabaseError, NotFoundError, ValidationError
from mvcblog.models.category import Category
from mvcblog.schemas.category import CategoryInput, CategoryResponse

logger = logging.getLogger(__name__)


class CategoryService:
    """Stateless business logic for categories; receives the session per call."""

    async def list_categories(self, db: AsyncSession) -> List[CategoryResponse]:
        """All categories ordered by name (then id, for equal names)."""
        try:
            result = await db.execute(
                select(Category).order_by(asc(Category.name), asc(Category.id))
            )
            categories = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing categories: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve categories. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [CategoryResponse.model_validate(category) for category in categories]

    async def get_category(self, db: AsyncSession, category_id: int) -> CategoryResponse:
        """
        Retrieve a single category by ID.

        Raises:
            NotFoundError: No category with this ID (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        if not is_storable_id(category_id):
            raise NotFoundError(resource="category", resource_id=str(category_id))

        try:
            category = await db.get(Category, category_id)
        except SQLAlchemyError as e:
            logger.error("Database error fetching category %s: %s", category_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the category. Please try again.",
                context={"category_id": category_id},
            ) from e

        if category is None:
            raise NotFoundError(resource="category", resource_id=str(category_id))
        return CategoryResponse.model_validate(category)

    async def create_category(
        self, db: AsyncSession, data: CategoryInput
    ) -> CategoryResponse:
        """
        Insert a new category.

        Raises:
            ValidationError: Blank name (→ 400)
            DatabaseError:   Insert failed (→ 500)
        """
        if not data.name:
            raise ValidationError(message="Category name must not be empty", field="name")

        category = Category(name=data.name)
        try:
            db.add(category)
            await db.flush()  # Assigns the ID without committing
        except SQLAlchemyError as e:
            logger.error("Database error creating category: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the category. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Category %s created: %s", category.id, category.name)
        return CategoryResponse.model_validate(category)


# ── Singleton Instance ────────────────────────────────────────────────────
category_service = CategoryService()
