"""
Postboard: Schema Validation Tests
==================================

What:  Tests for PostCreate / PostUpdate / PostResponse.
Why:   These models are the input validator; a bad body must never reach
       the repository.

What we test:
    ✅ Create requires title, body and tags (tags may be empty)
    ✅ Types are not coerced (numbers are not strings, a string is not a list)
    ✅ Update accepts any subset, rejects explicit nulls
    ✅ Unknown fields are dropped
    ✅ Response serializes created_at as createdAt
"""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from pydantic import ValidationError as PydanticValidationError

from postboard.schemas.post import PostCreate, PostResponse, PostUpdate


class TestPostCreate:

    def test_valid(self):
        post = PostCreate(title="제목", body="내용", tags=["a", "b"])
        assert post.tags == ["a", "b"]

    def test_empty_tags_allowed(self):
        assert PostCreate(title="t", body="b", tags=[]).tags == []

    @pytest.mark.parametrize("missing", ["title", "body", "tags"])
    def test_missing_field_rejected(self, missing):
        data = {"title": "t", "body": "b", "tags": []}
        del data[missing]
        with pytest.raises(PydanticValidationError) as exc_info:
            PostCreate(**data)
        assert exc_info.value.errors()[0]["loc"] == (missing,)

    @pytest.mark.parametrize("data", [
        {"title": 5, "body": "b", "tags": []},
        {"title": "t", "body": None, "tags": []},
        {"title": "t", "body": "b", "tags": "a"},
        {"title": "t", "body": "b", "tags": [1, 2]},
        {"title": "t", "body": "b", "tags": None},
    ])
    def test_wrong_types_rejected(self, data):
        with pytest.raises(PydanticValidationError):
            PostCreate(**data)

    def test_unknown_fields_dropped(self):
        post = PostCreate(title="t", body="b", tags=[], author="someone")
        assert "author" not in post.model_dump()


class TestPostUpdate:

    def test_empty_update_has_no_changes(self):
        assert PostUpdate().changes() == {}

    def test_only_supplied_fields_in_changes(self):
        """Merge semantics: omitted fields must not appear as None."""
        assert PostUpdate(title="X").changes() == {"title": "X"}

    def test_all_fields(self):
        changes = PostUpdate(title="t", body="b", tags=["c"]).changes()
        assert changes == {"title": "t", "body": "b", "tags": ["c"]}

    @pytest.mark.parametrize("field", ["title", "body", "tags"])
    def test_explicit_null_rejected(self, field):
        with pytest.raises(PydanticValidationError, match="must not be null"):
            PostUpdate(**{field: None})

    def test_wrong_type_rejected(self):
        with pytest.raises(PydanticValidationError):
            PostUpdate(tags="c")

    def test_unknown_fields_dropped(self):
        assert PostUpdate(id="507f1f77bcf86cd799439011", title="t").changes() == {"title": "t"}


class TestPostResponse:

    def test_from_orm_object_serializes_created_at_alias(self):
        created = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)
        post = SimpleNamespace(
            id="507f1f77bcf86cd799439011", title="t", body="b", tags=["a"], created_at=created
        )
        data = PostResponse.model_validate(post).model_dump(by_alias=True, mode="json")
        assert data == {
            "id": "507f1f77bcf86cd799439011",
            "title": "t",
            "body": "b",
            "tags": ["a"],
            "createdAt": "2024-01-15T12:00:00Z",
        }

    def test_naive_datetime_treated_as_utc(self):
        post = SimpleNamespace(
            id="507f1f77bcf86cd799439011", title="t", body="b", tags=[],
            created_at=datetime(2024, 1, 15, 12, 0),
        )
        assert PostResponse.model_validate(post).created_at.tzinfo == timezone.utc

    def test_accepts_alias_on_input(self):
        """FastAPI re-validates dumped responses, which use the alias."""
        response = PostResponse.model_validate({
            "id": "507f1f77bcf86cd799439011", "title": "t", "body": "b", "tags": [],
            "createdAt": "2024-01-15T12:00:00+00:00",
        })
        assert response.created_at.year == 2024
