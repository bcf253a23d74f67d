"""
Postboard: Post Repository
==========================

What:  Document-store style access to posts on top of an AsyncSession.
Who:   Built per request by `get_post_repository` and handed to the handlers.

Operations:
    create(title, body, tags)               → Post (id, created_at assigned)
    find_all()                              → [Post] in creation order
    find_by_id(post_id)                     → Post | None
    find_by_id_and_remove(post_id)          → removed Post | None
    find_by_id_and_update(post_id, changes) → Post after merge | None

Every operation is a single-document unit: writes commit before returning,
so there is never work pending across operations.

Error Handling:
    Any exception raised while talking to the database is logged and
    re-raised as RepositoryError, carrying the operation name and the
    original error text in its context. The exception handler in main.py
    turns it into a 500.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.exceptions import RepositoryError
from postboard.models.post import Post

logger = logging.getLogger(__name__)

# Fields a partial update may overwrite; id and created_at are fixed at creation
UPDATABLE_FIELDS = ("title", "body", "tags")


class PostRepository:
    """Persistence operations for Post documents."""

    def __init__(self, session: AsyncSession):
        self.session = session

    @contextmanager
    def _failure_boundary(self, operation: str, **context: Any) -> Iterator[None]:
        try:
            yield
        except Exception as e:
            logger.error(
                "Post repository %s failed: %s | Context: %s",
                operation,
                str(e),
                context,
                exc_info=True,
            )
            raise RepositoryError(
                context={
                    "operation": operation,
                    "reason": str(e),
                    "error_type": type(e).__name__,
                    **context,
                },
            ) from e

    async def create(self, title: str, body: str, tags: Iterable[str]) -> Post:
        """Insert a new post. The id and creation timestamp are assigned here."""
        with self._failure_boundary("create"):
            post = Post(title=title, body=body, tags=list(tags))
            self.session.add(post)
            await self.session.commit()
        logger.info("Post %s created (%d tags)", post.id, len(post.tags))
        return post

    async def find_all(self) -> List[Post]:
        """Every stored post, oldest first."""
        with self._failure_boundary("find_all"):
            result = await self.session.execute(
                select(Post).order_by(Post.created_at, Post.id)
            )
            return list(result.scalars().all())

    async def find_by_id(self, post_id: str) -> Optional[Post]:
        with self._failure_boundary("find_by_id", post_id=post_id):
            return await self.session.get(Post, post_id)

    async def find_by_id_and_remove(self, post_id: str) -> Optional[Post]:
        """
        Delete a post if it exists.

        Returns the removed post, or None when nothing had that id. A missing
        post is not an error here; callers decide what that means.
        """
        with self._failure_boundary("find_by_id_and_remove", post_id=post_id):
            post = await self.session.get(Post, post_id)
            if post is None:
                return None
            await self.session.delete(post)
            await self.session.commit()
        logger.info("Post %s removed", post_id)
        return post

    async def find_by_id_and_update(
        self, post_id: str, changes: Dict[str, Any]
    ) -> Optional[Post]:
        """
        Merge `changes` into a stored post and return it after the update.

        Only keys in UPDATABLE_FIELDS are applied; anything else is ignored.
        Fields absent from `changes` keep their stored values.
        Returns None when no post has this id.
        """
        updates = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
        with self._failure_boundary("find_by_id_and_update", post_id=post_id):
            post = await self.session.get(Post, post_id)
            if post is None:
                return None
            for field, value in updates.items():
                # Lists are copied so the JSON column sees a new value
                setattr(post, field, list(value) if field == "tags" else value)
            if updates:
                await self.session.commit()
        logger.info("Post %s updated: %s", post_id, sorted(updates))
        return post
