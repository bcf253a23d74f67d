"""
Postboard: Error Handling Tests
===============================

What:  Tests for the failure paths shared by every endpoint.
How:   get_post_repository is overridden with a repository on a failing
       session (driver errors) or with a recording stub.

What we test:
    ✅ Repository failures on all five operations become 500
    ✅ 500 bodies are opaque by default and carry the request ID
    ✅ EXPOSE_ERROR_DETAILS adds the failure reason
    ✅ Malformed ids never reach the repository
    ✅ X-Request-ID is generated or echoed
    ✅ Unexpected exceptions fall back to a generic 500
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from postboard.config import settings
from postboard.repositories.post import PostRepository
from postboard.routes.dependencies import get_post_repository

POSTS = "/api/posts"
VALID_ID = "507f1f77bcf86cd799439011"

ALL_OPERATIONS = [
    ("post", POSTS, {"json": {"title": "t", "body": "b", "tags": []}}),
    ("get", POSTS, {}),
    ("get", f"{POSTS}/{VALID_ID}", {}),
    ("delete", f"{POSTS}/{VALID_ID}", {}),
    ("patch", f"{POSTS}/{VALID_ID}", {"json": {"title": "X"}}),
]


@pytest.fixture
def broken_app(app, failing_session):
    app.dependency_overrides[get_post_repository] = lambda: PostRepository(failing_session)
    return app


@pytest_asyncio.fixture
async def broken_client(broken_app):
    transport = ASGITransport(app=broken_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


class TestRepositoryFailures:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method, url, kwargs", ALL_OPERATIONS)
    async def test_returns_500(self, broken_client, method, url, kwargs):
        response = await getattr(broken_client, method)(url, **kwargs)

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "server_error"
        assert data["details"] is None
        assert "connection refused" not in response.text

    @pytest.mark.asyncio
    async def test_request_id_matches_header(self, broken_client):
        response = await broken_client.get(POSTS, headers={"X-Request-ID": "trace-42"})

        assert response.status_code == 500
        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"

    @pytest.mark.asyncio
    async def test_details_exposed_when_configured(self, broken_client, monkeypatch):
        monkeypatch.setattr(settings, "expose_error_details", True)

        response = await broken_client.get(POSTS)

        assert response.status_code == 500
        assert "connection refused" in response.json()["details"]["reason"]


class TestIdCheckedBeforeRepository:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("method", ["get", "delete", "patch"])
    async def test_repository_never_built(self, app, test_client, method):
        built = []

        def recording_repository():
            built.append(True)
            return MagicMock(spec=PostRepository)

        app.dependency_overrides[get_post_repository] = recording_repository
        kwargs = {"json": {"title": "X"}} if method == "patch" else {}

        response = await getattr(test_client, method)(f"{POSTS}/not-an-id", **kwargs)

        assert response.status_code == 400
        assert built == []

    @pytest.mark.asyncio
    async def test_invalid_body_never_reaches_repository(self, app, test_client):
        repo = MagicMock(spec=PostRepository)
        repo.create = AsyncMock()
        app.dependency_overrides[get_post_repository] = lambda: repo

        response = await test_client.post(POSTS, json={"title": "t"})

        assert response.status_code == 400
        repo.create.assert_not_awaited()


class TestRequestId:

    @pytest.mark.asyncio
    async def test_generated_when_absent(self, test_client):
        response = await test_client.get(POSTS)
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_validation_error_carries_request_id(self, test_client):
        response = await test_client.get(f"{POSTS}/bad", headers={"X-Request-ID": "abc"})
        assert response.json()["request_id"] == "abc"


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_generic_500(self, app):
        repo = MagicMock(spec=PostRepository)
        repo.find_all = AsyncMock(side_effect=RuntimeError("boom"))
        app.dependency_overrides[get_post_repository] = lambda: repo

        # ServerErrorMiddleware re-raises after responding
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get(POSTS)

        assert response.status_code == 500
        data = response.json()
        assert data["error"] == "internal_server_error"
        assert "boom" not in data["message"]
