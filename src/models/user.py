"""User model for registered accounts."""
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from models.bookmark import Bookmark
    from models.category import Category
    from models.note import Note
    from models.tag import Tag


class User(Base, UUIDMixin, TimestampMixin):
    """
    User model - one row per registered identity.

    `password_hash` holds the encoded argon2id string (algorithm, parameters, salt
    and digest) and is never serialized in API responses.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255))
    name: Mapped[str] = mapped_column(String(255))

    bookmarks: Mapped[list["Bookmark"]] = relationship(
        back_populates="user",
        passive_deletes=True,
    )
    notes: Mapped[list["Note"]] = relationship(back_populates="user", passive_deletes=True)
    tags: Mapped[list["Tag"]] = relationship(back_populates="user", passive_deletes=True)
    categories: Mapped[list["Category"]] = relationship(
        back_populates="user",
        passive_deletes=True,
    )
