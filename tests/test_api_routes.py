"""
MVC Blog - JSON API Tests
=========================

What we test:
    ✅ Post CRUD over JSON with the documented status codes
    ✅ Error envelope {error, message, details?, request_id}
    ✅ Category list/create and the posts-of-a-category view
    ✅ Storage failures surface as a generic 500
    ✅ Health check
"""

import pytest
from unittest.mock import AsyncMock, patch

from mvcblog.exceptions import DatabaseError
from mvcblog.services.post_service import post_service


class TestPostsApi:

    @pytest.mark.asyncio
    async def test_crud_scenario(self, test_client, categories):
        news = categories["News"]

        created = await test_client.post(
            "/api/posts", json={"title": "Hello", "content": "World", "category_id": news}
        )
        assert created.status_code == 201
        body = created.json()
        post_id = body["id"]
        assert body["title"] == "Hello"
        assert body["category_name"] == "News"

        shown = await test_client.get(f"/api/posts/{post_id}")
        assert shown.status_code == 200
        assert {k: shown.json()[k] for k in ("title", "content", "category_id")} == {
            "title": "Hello", "content": "World", "category_id": news,
        }

        updated = await test_client.put(
            f"/api/posts/{post_id}",
            json={"title": "Hi", "content": "World", "category_id": news},
        )
        assert updated.status_code == 200
        assert updated.json()["title"] == "Hi"
        assert updated.json()["updated_at"] is not None

        shown = await test_client.get(f"/api/posts/{post_id}")
        assert shown.json()["title"] == "Hi"

        deleted = await test_client.delete(f"/api/posts/{post_id}")
        assert deleted.status_code == 204

        missing = await test_client.get(f"/api/posts/{post_id}")
        assert missing.status_code == 404
        error = missing.json()
        assert error["error"] == "not_found"
        assert error["request_id"] == missing.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_list_with_category_filter(self, test_client, categories):
        news, tech = categories["News"], categories["Tech"]
        for title, category_id in (("A", news), ("B", tech), ("C", news)):
            await test_client.post(
                "/api/posts", json={"title": title, "content": "x", "category_id": category_id}
            )

        everything = await test_client.get("/api/posts")
        only_news = await test_client.get("/api/posts", params={"category_id": news})

        assert everything.json()["total_count"] == 3
        assert everything.headers["X-Total-Count"] == "3"
        assert [p["title"] for p in only_news.json()["posts"]] == ["A", "C"]

    @pytest.mark.asyncio
    async def test_unknown_category_is_400_with_field(self, test_client, categories):
        response = await test_client.post(
            "/api/posts", json={"title": "Hello", "content": "World", "category_id": 999}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "category_id"

    @pytest.mark.asyncio
    async def test_blank_title_is_400(self, test_client, categories):
        response = await test_client.post(
            "/api/posts",
            json={"title": "", "content": "World", "category_id": categories["News"]},
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "title"

    @pytest.mark.asyncio
    async def test_extra_fields_are_rejected(self, test_client, categories):
        response = await test_client.post(
            "/api/posts",
            json={"title": "Hello", "content": "World", "category_id": categories["News"], "id": 5},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_missing_post_is_404(self, test_client, categories):
        response = await test_client.put(
            "/api/posts/999",
            json={"title": "Hi", "content": "World", "category_id": categories["News"]},
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_missing_post_is_404(self, test_client):
        response = await test_client.delete("/api/posts/999")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_oversized_category_id_is_400(self, test_client, categories):
        response = await test_client.post(
            "/api/posts", json={"title": "t", "content": "c", "category_id": 2**63}
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "category_id"

    @pytest.mark.asyncio
    async def test_oversized_post_id_is_404(self, test_client, categories):
        big = 2**63
        body = {"title": "t", "content": "c", "category_id": categories["News"]}

        shown = await test_client.get(f"/api/posts/{big}")
        updated = await test_client.put(f"/api/posts/{big}", json=body)
        deleted = await test_client.delete(f"/api/posts/{big}")

        assert [shown.status_code, updated.status_code, deleted.status_code] == [404, 404, 404]
        assert shown.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_oversized_category_filter_lists_nothing(self, test_client, categories):
        await test_client.post(
            "/api/posts", json={"title": "A", "content": "a", "category_id": categories["News"]}
        )

        response = await test_client.get("/api/posts", params={"category_id": 2**63})

        assert response.status_code == 200
        assert response.json()["posts"] == []

    @pytest.mark.asyncio
    async def test_database_error_is_generic_500(self, test_client):
        failing = AsyncMock(side_effect=DatabaseError(context={"table": "posts"}))
        with patch.object(post_service, "list_posts", failing):
            response = await test_client.get("/api/posts")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "posts" not in body["message"]
        assert "details" not in body


class TestCategoriesApi:

    @pytest.mark.asyncio
    async def test_create_and_list(self, test_client):
        created = await test_client.post("/api/categories", json={"name": "Travel"})
        await test_client.post("/api/categories", json={"name": "Art"})

        assert created.status_code == 201
        assert created.json()["name"] == "Travel"

        listing = await test_client.get("/api/categories")
        assert [c["name"] for c in listing.json()] == ["Art", "Travel"]

        fetched = await test_client.get(f"/api/categories/{created.json()['id']}")
        assert fetched.json()["name"] == "Travel"

    @pytest.mark.asyncio
    async def test_blank_name_is_400(self, test_client):
        response = await test_client.post("/api/categories", json={"name": " "})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_missing_category_is_404(self, test_client):
        response = await test_client.get("/api/categories/999")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_posts_of_category(self, test_client, categories):
        tech = categories["Tech"]
        await test_client.post(
            "/api/posts", json={"title": "A", "content": "a", "category_id": categories["News"]}
        )
        await test_client.post(
            "/api/posts", json={"title": "B", "content": "b", "category_id": tech}
        )

        response = await test_client.get(f"/api/categories/{tech}/posts")

        assert response.status_code == 200
        assert [p["title"] for p in response.json()["posts"]] == ["B"]
        assert response.headers["X-Total-Count"] == "1"

    @pytest.mark.asyncio
    async def test_posts_of_missing_category_is_404(self, test_client):
        response = await test_client.get("/api/categories/999/posts")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_oversized_category_id_is_404(self, test_client):
        shown = await test_client.get(f"/api/categories/{2**63}")
        posts = await test_client.get(f"/api/categories/{2**63}/posts")

        assert shown.status_code == 404
        assert posts.status_code == 404


class TestHealth:

    @pytest.mark.asyncio
    async def test_health_reports_database(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
