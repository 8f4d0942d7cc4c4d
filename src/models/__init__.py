"""SQLAlchemy models."""
from models.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from models.tag import Tag, bookmark_tags  # Must be before bookmark due to import
from models.bookmark import Bookmark
from models.category import Category
from models.note import Note
from models.user import User

__all__ = [
    "Base",
    "Bookmark",
    "Category",
    "CreatedAtMixin",
    "Note",
    "Tag",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "bookmark_tags",
]
