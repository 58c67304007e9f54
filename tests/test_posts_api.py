"""
Blog API — HTTP Endpoint Tests
================================

What:  End-to-end tests of the REST surface against a real SQLite database.
How:   test_client (conftest.py) runs the app in-process with its lifespan
       entered, so the posts table exists and every request uses a real
       session from the app's own session factory.
"""

import asyncio
import uuid

import pytest
from httpx import ASGITransport, AsyncClient

from blog_api.config import Settings
from blog_api.database import get_db_session
from blog_api.main import create_app


async def _create(client, title="T", body="B"):
    response = await client.post("/api/posts", json={"title": title, "body": body})
    assert response.status_code == 200
    return response.json()


class TestCreateAndList:

    @pytest.mark.asyncio
    async def test_create_then_list_returns_single_post(self, test_client):
        created = await _create(test_client)

        response = await test_client.get("/api/posts")

        assert response.status_code == 200
        posts = response.json()
        assert len(posts) == 1
        assert posts[0]["title"] == "T"
        assert posts[0]["body"] == "B"
        assert isinstance(posts[0]["id"], str) and posts[0]["id"]
        assert posts[0]["id"] == created["id"]

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client):
        response = await test_client.get("/api/posts")

        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_create_with_missing_fields_stores_null(self, test_client):
        response = await test_client.post("/api/posts", json={"title": "Only title"})

        assert response.status_code == 200
        assert response.json()["title"] == "Only title"
        assert response.json()["body"] is None

    @pytest.mark.asyncio
    async def test_numbers_are_coerced_to_strings(self, test_client):
        response = await test_client.post("/api/posts", json={"title": 42, "body": "B"})

        assert response.status_code == 200
        assert response.json()["title"] == "42"

    @pytest.mark.asyncio
    async def test_uncoercible_fields_are_500_not_422(self, test_client):
        """No validation error class: a body the schema cannot use is a plain 500."""
        response = await test_client.post("/api/posts", json={"title": True, "body": ["x"]})

        assert response.status_code == 500
        assert "body.title" in response.json()["error"]
        assert (await test_client.get("/api/posts")).json() == []

    @pytest.mark.asyncio
    async def test_invalid_json_body_is_500(self, test_client):
        response = await test_client.post(
            "/api/posts",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 500
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_concurrent_creates_get_distinct_ids(self, test_client):
        first, second = await asyncio.gather(
            _create(test_client, "First", "1"),
            _create(test_client, "Second", "2"),
        )

        assert first["id"] != second["id"]
        ids = {post["id"] for post in (await test_client.get("/api/posts")).json()}
        assert ids == {first["id"], second["id"]}

    @pytest.mark.asyncio
    async def test_responses_carry_request_id(self, test_client):
        response = await test_client.get("/api/posts", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"


class TestUpdate:

    @pytest.mark.asyncio
    async def test_update_keeps_id(self, test_client):
        created = await _create(test_client)

        response = await test_client.put(
            f"/api/posts/{created['id']}", json={"title": "T2", "body": "B2"}
        )

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "title": "T2", "body": "B2"}
        posts = (await test_client.get("/api/posts")).json()
        assert posts == [{"id": created["id"], "title": "T2", "body": "B2"}]

    @pytest.mark.asyncio
    async def test_update_unknown_id_is_500(self, test_client):
        response = await test_client.put(
            f"/api/posts/{uuid.uuid4()}", json={"title": "T", "body": "B"}
        )

        assert response.status_code == 500
        assert "not found" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_update_malformed_id_is_500(self, test_client):
        response = await test_client.put("/api/posts/12345", json={"title": "T", "body": "B"})

        assert response.status_code == 500
        assert "error" in response.json()


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete_removes_post(self, test_client):
        keep = await _create(test_client, "Keep", "k")
        gone = await _create(test_client, "Gone", "g")

        response = await test_client.delete(f"/api/posts/{gone['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Deleted"}
        ids = [post["id"] for post in (await test_client.get("/api/posts")).json()]
        assert ids == [keep["id"]]

    @pytest.mark.asyncio
    async def test_delete_unknown_id_is_500(self, test_client):
        response = await test_client.delete(f"/api/posts/{uuid.uuid4()}")

        assert response.status_code == 500
        assert "not found" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_delete_twice_fails_second_time(self, test_client):
        created = await _create(test_client)

        assert (await test_client.delete(f"/api/posts/{created['id']}")).status_code == 200
        assert (await test_client.delete(f"/api/posts/{created['id']}")).status_code == 500


class TestDbCheck:

    @pytest.mark.asyncio
    async def test_db_check_ok(self, test_client):
        response = await test_client.get("/api/db-check")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_db_check_unreachable_database(self, tmp_path):
        """App whose database file cannot be opened reports 500 with details."""
        bad_settings = Settings(
            database_url=f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'posts.db'}",
            log_level="WARNING",
        )
        app = create_app(bad_settings)
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/db-check")
        await app.state.engine.dispose()

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Database not connected"
        assert "unable to open database file" in body["details"]


class TestFrontend:

    @pytest.mark.asyncio
    async def test_root_serves_index(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert "Blog Posts" in response.text
        assert response.headers["content-type"].startswith("text/html")

    @pytest.mark.asyncio
    async def test_unknown_page_falls_back_to_index(self, test_client):
        response = await test_client.get("/some/client/route")

        assert response.status_code == 200
        assert "Blog Posts" in response.text

    @pytest.mark.asyncio
    async def test_static_file_served_verbatim(self, test_client):
        response = await test_client.get("/app.js")

        assert response.status_code == 200
        assert response.text == "fetchPosts();\n"

    @pytest.mark.asyncio
    async def test_path_traversal_gets_index(self, test_client):
        response = await test_client.get("/..%2F..%2Fetc%2Fpasswd")

        assert response.status_code == 200
        assert "Blog Posts" in response.text

    @pytest.mark.asyncio
    async def test_unknown_api_path_is_not_the_page(self, test_client):
        response = await test_client.get("/api/unknown")

        assert response.status_code == 404
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_null_byte_in_path_gets_index(self, test_client):
        response = await test_client.get("/a%00b")

        assert response.status_code == 200
        assert "Blog Posts" in response.text

    @pytest.mark.asyncio
    async def test_overlong_path_gets_index(self, test_client):
        response = await test_client.get("/" + "a" * 5000)

        assert response.status_code == 200
        assert "Blog Posts" in response.text

    @pytest.mark.asyncio
    async def test_non_get_page_request_gets_index(self, test_client):
        response = await test_client.post("/some/page", json={})

        assert response.status_code == 200
        assert "Blog Posts" in response.text

    @pytest.mark.asyncio
    async def test_head_request_gets_index_headers(self, test_client):
        response = await test_client.head("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")


class TestUnexpectedErrors:

    @pytest.mark.asyncio
    async def test_unhandled_error_is_500_with_request_id(self, test_app, test_client):
        """Errors outside the exception hierarchy still get a JSON 500 and the request ID."""
        async def broken_session():
            raise RuntimeError("session factory exploded")

        test_app.dependency_overrides[get_db_session] = broken_session
        try:
            response = await test_client.get("/api/posts", headers={"X-Request-ID": "feedbeef"})
        finally:
            test_app.dependency_overrides.clear()

        assert response.status_code == 500
        assert response.json() == {"error": "session factory exploded"}
        assert response.headers["X-Request-ID"] == "feedbeef"
