"""ORM models. Importing this package registers every table on Base.metadata."""

from mvcblog.models.category import Category
from mvcblog.models.post import Post

__all__ = ["Category", "Post"]
