"""
Postboard: Route Dependencies
=============================

check_object_id:
    Runs ahead of every handler on /api/posts/{post_id}. A malformed id
    answers 400 before the session or repository is created, so no database
    work happens for it. Existence is not checked here.

get_post_repository:
    Builds a PostRepository around the request's database session. Tests
    override this (or get_db_session) through app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.database import get_db_session
from postboard.exceptions import ValidationError
from postboard.object_id import is_valid_object_id
from postboard.repositories.post import PostRepository


async def check_object_id(post_id: str) -> str:
    """Validate the `{post_id}` path parameter and return it normalized to lowercase."""
    if not is_valid_object_id(post_id):
        raise ValidationError(
            message=f"'{post_id}' is not a valid post id",
            field="post_id",
            context={"value": post_id},
        )
    return post_id.lower()


async def get_post_repository(
    db: AsyncSession = Depends(get_db_session),
) -> PostRepository:
    return PostRepository(db)
