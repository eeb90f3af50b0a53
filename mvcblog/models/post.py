"""
MVC Blog - Post SQLAlchemy Model
================================

What:  ORM model representing the `posts` table.
Who:   Used by PostService for CRUD operations and by Alembic for schema management.

Table Design Rationale:
    - Integer primary key: assigned by the database on insert
    - title: VARCHAR(255), shown in lists and page titles
    - content: TEXT, no artificial length limit
    - category_id: NOT NULL foreign key to categories.id. The service checks
      that the category exists before every write, so the constraint is a
      second line rather than the only one (SQLite does not enforce it).
    - updated_at: NULL until the first update

    Index on category_id:
        Serves the equality-filtered lookup "posts in category N" without
        a full table scan.

Lifecycle:
    absent → created (store) → overwritten (update)* → deleted (destroy)
    No soft delete and no versioning.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from mvcblog.database import Base


class Post(Base):
    """
    A blog article with a title, content and one category reference.

    Query Patterns:
        - List posts:        SELECT ... ORDER BY posts.id
        - Posts by category: SELECT ... WHERE category_id = :id
          → Uses idx_posts_category_id
        - Single post:       SELECT ... WHERE id = :id (primary key)
    """

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="System-assigned identifier",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Post headline",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Post body",
    )

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        comment="Category this post belongs to",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this post was created (UTC)",
    )

    # Set by PostService.update_post; NULL means never edited
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="When this post was last updated (UTC)",
    )

    __table_args__ = (
        Index("idx_posts_category_id", "category_id"),
    )

    # Fields a create/update may write. Everything else is system-managed.
    WRITABLE_FIELDS = ("title", "content", "category_id")

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}', category_id={self.category_id})>"
