"""
Postboard: Post Route Handlers
==============================

What:  The five post operations.
How:   Each handler validates shape, makes exactly one repository call, and
       turns its outcome (post / None / RepositoryError) into a response.

Route Table:
    collection router (prefix /api/posts)
        POST   /api/posts             create  → 201 + Post
        GET    /api/posts             list    → 200 + [Post]
    item router (prefix /api/posts/{post_id}, check_object_id on every route)
        GET    /api/posts/{post_id}   read    → 200 + Post | 404
        DELETE /api/posts/{post_id}   delete  → 204 (also when nothing was stored)
        PATCH  /api/posts/{post_id}   update  → 200 + Post | 404

Error responses (global exception handlers in main.py):
    400: malformed id (ValidationError) or body violation (RequestValidationError)
    404: NotFoundError, empty body
    500: RepositoryError
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from postboard.exceptions import NotFoundError
from postboard.repositories.post import PostRepository
from postboard.routes.dependencies import check_object_id, get_post_repository
from postboard.schemas.post import (
    ErrorResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
)

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
# Mounted under settings.api_prefix by main.create_app()
collection_router = APIRouter(prefix="/posts", tags=["Posts"])

item_router = APIRouter(
    prefix="/posts/{post_id}",
    tags=["Posts"],
    dependencies=[Depends(check_object_id)],
    responses={
        400: {"description": "Malformed post id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
)


# ══════════════════════════════════════════════════════════════════════════
# Collection Routes
# ══════════════════════════════════════════════════════════════════════════


@collection_router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PostResponse,
    responses={
        201: {"description": "Post created", "model": PostResponse},
        400: {"description": "Invalid post body", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a post",
)
async def create_post(
    payload: PostCreate,
    posts: PostRepository = Depends(get_post_repository),
) -> PostResponse:
    """
    Create a post from {title, body, tags}.

    The repository assigns `id` and `createdAt`; the stored post is returned.
    """
    post = await posts.create(title=payload.title, body=payload.body, tags=payload.tags)
    return PostResponse.model_validate(post)


@collection_router.get(
    "",
    response_model=List[PostResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all posts",
)
async def list_posts(
    posts: PostRepository = Depends(get_post_repository),
) -> List[PostResponse]:
    """Every stored post, oldest first. No paging or filtering."""
    return [PostResponse.model_validate(post) for post in await posts.find_all()]


# ══════════════════════════════════════════════════════════════════════════
# Item Routes
# ══════════════════════════════════════════════════════════════════════════


@item_router.get(
    "",
    response_model=PostResponse,
    responses={404: {"description": "Post not found (empty body)"}},
    summary="Get a single post",
)
async def read_post(
    post_id: str = Depends(check_object_id),
    posts: PostRepository = Depends(get_post_repository),
) -> PostResponse:
    post = await posts.find_by_id(post_id)
    if post is None:
        raise NotFoundError(resource="post", resource_id=post_id)
    return PostResponse.model_validate(post)


@item_router.delete(
    "",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={204: {"description": "Post removed, or no post had this id"}},
    summary="Delete a post",
)
async def delete_post(
    post_id: str = Depends(check_object_id),
    posts: PostRepository = Depends(get_post_repository),
) -> Response:
    """
    Remove a post.

    No existence check: deleting an id that is not stored still answers 204.
    """
    removed = await posts.find_by_id_and_remove(post_id)
    if removed is None:
        logger.info("Delete of missing post %s treated as success", post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@item_router.patch(
    "",
    response_model=PostResponse,
    responses={
        400: {"description": "Malformed post id or invalid body", "model": ErrorResponse},
        404: {"description": "Post not found (empty body)"},
    },
    summary="Partially update a post",
)
async def update_post(
    payload: PostUpdate,
    post_id: str = Depends(check_object_id),
    posts: PostRepository = Depends(get_post_repository),
) -> PostResponse:
    """
    Merge the supplied fields into the post and return the updated post.

    Omitted fields keep their stored values; an empty body changes nothing.
    """
    post = await posts.find_by_id_and_update(post_id, payload.changes())
    if post is None:
        raise NotFoundError(resource="post", resource_id=post_id)
    return PostResponse.model_validate(post)
