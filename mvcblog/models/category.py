"""
MVC Blog - Category SQLAlchemy Model
====================================

What:  ORM model for the `categories` table.
Who:   Read by CategoryService and PostService (existence checks, joins,
       the category selection control); tracked by Alembic.

Categories are created through the administrative JSON API. No
relationship() attribute is declared: posts reference categories by
`category_id` and services join explicitly when they need the name.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from mvcblog.database import Base


class Category(Base):
    """A named grouping that posts belong to."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="System-assigned identifier",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name shown in the category selection control",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this category was created (UTC)",
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"
