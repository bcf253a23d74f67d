"""
Postboard: Post SQLAlchemy Model
================================

What:  ORM model representing the `posts` table.
Who:   Used by PostRepository for every storage operation and by Alembic.

Table Design:
    - id: 24-char hex string assigned in Python at insert (see object_id.py)
    - title / body: TEXT, no length limit
    - tags: JSON array of strings, order preserved
    - created_at: UTC timestamp with timezone, set once at insert

    Index on created_at: the list operation returns posts in creation order.
"""

from datetime import datetime, timezone
from typing import List

from sqlalchemy import JSON, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from postboard.database import Base
from postboard.object_id import OBJECT_ID_LENGTH, new_object_id


class Post(Base):
    """
    A single blog post.

    Lifecycle:
        1. Inserted by PostRepository.create (id and created_at assigned here)
        2. Fields merged by PostRepository.find_by_id_and_update
        3. Removed by PostRepository.find_by_id_and_remove
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(
        String(OBJECT_ID_LENGTH),
        primary_key=True,
        default=new_object_id,
        comment="24-character hex identifier, assigned once at creation",
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    body: Mapped[str] = mapped_column(Text, nullable=False)

    # Replaced wholesale on update; never mutated in place
    tags: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Ordered list of tag strings",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        comment="When this post was created (UTC)",
    )

    __table_args__ = (
        Index("idx_posts_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title={self.title!r}, tags={self.tags})>"
