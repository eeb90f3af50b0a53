"""Create categories and posts tables

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates `categories` and `posts`, with posts.category_id referencing
       categories.id and an index on it for the by-category lookup.

Rollback: downgrade() drops both tables (destructive, all data lost).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create both tables; categories first so the foreign key can resolve."""
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False,
                  comment="System-assigned identifier"),
        sa.Column("name", sa.String(255), nullable=False,
                  comment="Display name shown in the category selection control"),
        sa.Column("created_at", sa.DateTime(timezone=True),
                  server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False,
                  comment="When this category was created (UTC)"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "posts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False,
                  comment="System-assigned identifier"),
        sa.Column("title", sa.String(255), nullable=False, comment="Post headline"),
        sa.Column("content", sa.Text(), nullable=False, comment="Post body"),
        sa.Column("category_id", sa.Integer(), nullable=False,
                  comment="Category this post belongs to"),
        sa.Column("created_at", sa.DateTime(timezone=True),
                  server_default=sa.text("CURRENT_TIMESTAMP"), nullable=False,
                  comment="When this post was created (UTC)"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True,
                  comment="When this post was last updated (UTC)"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"]),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_index("idx_posts_category_id", "posts", ["category_id"])


def downgrade() -> None:
    """Drop posts before categories (foreign key order)."""
    op.drop_index("idx_posts_category_id", table_name="posts")
    op.drop_table("posts")
    op.drop_table("categories")
