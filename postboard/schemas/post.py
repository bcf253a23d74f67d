"""
Postboard: Pydantic Request/Response Schemas
============================================

What:  Pydantic models defining the API contract for posts.
How:   FastAPI validates request bodies against PostCreate / PostUpdate before a
       handler runs, and serializes PostResponse on the way out.

Validation Rules:
    PostCreate: title, body (strings) and tags (list of strings) are required;
                tags may be an empty list.
    PostUpdate: the same three fields, all optional. A field that is present
                must have the same type as on creation and must not be null.

    Non-string values are not coerced: {"title": 5} and {"tags": "a"} fail.
    Unknown fields are ignored and never reach the repository.
"""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class PostCreate(BaseModel):
    """Body of POST /api/posts."""

    title: str = Field(description="Post title")
    body: str = Field(description="Post content")
    tags: List[str] = Field(description="Ordered tags, may be empty")

    model_config = {
        "extra": "ignore",
        "json_schema_extra": {
            "examples": [{"title": "제목", "body": "내용", "tags": ["태그1", "태그2"]}]
        },
    }


class PostUpdate(BaseModel):
    """
    Body of PATCH /api/posts/{post_id}.

    Only fields the client actually sent are applied (merge semantics);
    `model_dump(exclude_unset=True)` yields exactly those.
    """

    title: Optional[str] = Field(default=None, description="New title")
    body: Optional[str] = Field(default=None, description="New content")
    tags: Optional[List[str]] = Field(default=None, description="Replacement tag list")

    model_config = {
        "extra": "ignore",
        "json_schema_extra": {"examples": [{"title": "수정", "tags": ["수정", "태그"]}]},
    }

    @field_validator("title", "body", "tags", mode="before")
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        # Omitted fields keep their default and skip this validator;
        # an explicit null would erase a required field.
        if v is None:
            raise ValueError("must not be null")
        return v

    def changes(self) -> dict:
        """The fields supplied by the client, ready to merge into a stored post."""
        return self.model_dump(exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """
    Wire representation of a post.

    Example:
        {
            "id": "6530f1c2a4b1e9d3f0c8e7a1",
            "title": "제목",
            "body": "내용",
            "tags": ["a", "b"],
            "createdAt": "2024-01-15T12:00:00+00:00"
        }
    """

    id: str = Field(description="24-character hex identifier")
    title: str
    body: str
    tags: List[str]
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "created_at"),
        serialization_alias="createdAt",
        description="Creation timestamp (UTC, ISO 8601)",
    )

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """SQLite hands back naive datetimes; everything is stored as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Error body for 400 and 500 responses. 404 responses have no body.

    Fields:
        error: Machine-readable code ("validation_error", "server_error", ...)
        message: Human-readable description
        details: Extra context (violated fields, or the failure reason when
                 EXPOSE_ERROR_DETAILS is on)
        request_id: Correlation ID, also sent as the X-Request-ID header
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
