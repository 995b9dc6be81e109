import asyncio

from fastapi.testclient import TestClient

from main import app
from shortener_app.cache.factory import CacheFactory
from shortener_app.config import settings
from shortener_app.database.connection import get_db
from shortener_app.dependencies import get_cache
from shortener_app.exceptions import StoreNotConfigured
from shortener_app.schemas.url import MAX_EXPIRES_IN


def create(client: TestClient, **body):
    return client.post("/api/shorten", json=body)


class TestShorten:
    """Test POST /api/shorten"""

    def test_create_generated_code(self, client: TestClient):
        response = create(client, url="https://example.com")
        assert response.status_code == 201

        data = response.json()
        assert data["success"] is True
        assert len(data["code"]) == 6
        assert data["original_url"] == "https://example.com"

    def test_create_custom_code(self, client: TestClient):
        response = create(client, url="https://ziglang.org", code="zig", expires_in=3600)
        assert response.status_code == 201
        assert response.json()["code"] == "zig"

    def test_duplicate_code(self, client: TestClient):
        create(client, url="https://ziglang.org", code="zig")

        response = create(client, url="https://other.example.org", code="zig")
        assert response.status_code == 409
        assert response.json() == {"error": "Short code already exists"}

    def test_short_custom_code(self, client: TestClient):
        response = create(client, url="https://x.com/y", code="ab")
        assert response.status_code == 400
        assert "between 3 and 32" in response.json()["error"]

        assert client.get("/api/urls/ab").status_code == 404

    def test_custom_code_bad_characters(self, client: TestClient):
        response = create(client, url="https://example.com", code="no/slash")
        assert response.status_code == 400

    def test_invalid_url(self, client: TestClient):
        response = create(client, url="not-a-valid-url")
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid URL format")

    def test_missing_url(self, client: TestClient):
        response = create(client, code="zig")
        assert response.status_code == 400
        assert response.json() == {"error": "Missing required field: url"}

    def test_invalid_json(self, client: TestClient):
        response = client.post(
            "/api/shorten",
            content="{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON body"}

    def test_non_positive_expiration(self, client: TestClient):
        response = create(client, url="https://example.com", expires_in=0)
        assert response.status_code == 400

    def test_expiration_beyond_ceiling(self, client: TestClient):
        response = create(client, url="https://example.com", code="big", expires_in=10**12)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid value for field: expires_in"}

        assert client.get("/api/urls/big").status_code == 404

    def test_expiration_at_ceiling(self, client: TestClient):
        response = create(client, url="https://example.com", code="long", expires_in=MAX_EXPIRES_IN)
        assert response.status_code == 201


class TestRedirect:
    """Test GET /{code}"""

    def test_redirect_and_count_click(self, client: TestClient):
        create(client, url="https://ziglang.org", code="zig", expires_in=3600)

        response = client.get("/zig", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://ziglang.org"

        stats = client.get("/api/stats/zig").json()
        assert stats["clicks"] == 1

    def test_redirect_from_store_on_cache_miss(self, client: TestClient, cache):
        create(client, url="https://ziglang.org", code="zig")
        asyncio.run(cache.delete("zig"))

        response = client.get("/zig", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://ziglang.org"

    def test_redirect_after_update(self, client: TestClient):
        create(client, url="https://ziglang.org", code="zig")
        client.get("/zig", follow_redirects=False)

        client.put("/api/urls/zig", json={"url": "https://newsite.org"})

        response = client.get("/zig", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://newsite.org"

    def test_redirect_nonexistent_url(self, client: TestClient):
        response = client.get("/nonexistent", follow_redirects=False)
        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found"}


class TestManagement:
    """Test list, get, update, delete and stats endpoints"""

    def test_health(self, client: TestClient):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": settings.service_name,
            "version": settings.app_version,
        }

    def test_list_newest_first(self, client: TestClient):
        for code in ("one", "two", "three"):
            create(client, url=f"https://example.com/{code}", code=code)

        response = client.get("/api/urls")
        assert response.status_code == 200

        codes = [u["code"] for u in response.json()["urls"]]
        assert codes == ["three", "two", "one"]

    def test_get_url_info(self, client: TestClient):
        create(client, url="https://ziglang.org", code="zig", expires_in=3600)

        response = client.get("/api/urls/zig")
        assert response.status_code == 200

        data = response.json()
        assert data["code"] == "zig"
        assert data["original_url"] == "https://ziglang.org"
        assert data["clicks"] == 0
        assert data["created_at"]
        assert data["expires_at"]

    def test_get_nonexistent_url(self, client: TestClient):
        response = client.get("/api/urls/nonexistent")
        assert response.status_code == 404
        assert response.json() == {"error": "URL not found"}

    def test_update_url(self, client: TestClient):
        create(client, url="https://ziglang.org", code="zig")

        response = client.put("/api/urls/zig", json={"url": "https://newsite.org"})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "code": "zig",
            "original_url": "https://newsite.org",
        }

    def test_update_invalid_url(self, client: TestClient):
        create(client, url="https://ziglang.org", code="zig")

        response = client.put("/api/urls/zig", json={"url": "nope"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid URL format"}

    def test_update_nonexistent_url(self, client: TestClient):
        response = client.put("/api/urls/nonexistent", json={"url": "https://newsite.org"})
        assert response.status_code == 404

    def test_delete_url(self, client: TestClient):
        create(client, url="https://www.python.org", code="pyth")

        response = client.delete("/api/urls/pyth")
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "URL deleted"}

        response = client.get("/pyth", follow_redirects=False)
        assert response.status_code == 404

        response = client.delete("/api/urls/pyth")
        assert response.status_code == 404

    def test_stats(self, client: TestClient):
        create(client, url="https://www.stackoverflow.com", code="sof")
        client.get("/sof", follow_redirects=False)
        client.get("/sof", follow_redirects=False)

        response = client.get("/api/stats/sof")
        assert response.status_code == 200

        data = response.json()
        assert data["code"] == "sof"
        assert data["clicks"] == 2
        assert "created_at" in data

    def test_stats_nonexistent_url(self, client: TestClient):
        assert client.get("/api/stats/nonexistent").status_code == 404


class TestConfiguration:
    """Test responses when a store is not configured"""

    def test_database_not_configured(self, client: TestClient):
        def not_configured():
            raise StoreNotConfigured("Database not configured")

        app.dependency_overrides[get_db] = not_configured

        response = client.get("/zig", follow_redirects=False)
        assert response.status_code == 500
        assert response.json() == {"error": "Database not configured"}

        response = client.get("/api/urls")
        assert response.status_code == 500

    def test_cache_not_configured(self, client: TestClient, monkeypatch):
        app.dependency_overrides.pop(get_cache)
        CacheFactory.clear_instance()
        monkeypatch.setattr(settings, "cache_backend", "")

        response = create(client, url="https://ziglang.org", code="zig")
        assert response.status_code == 500
        assert response.json() == {"error": "Cache not configured"}


class TestErrorShape:
    """Test that every error response uses {"error": message}"""

    def test_unknown_path(self, client: TestClient):
        response = client.get("/api/stats/")
        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    def test_wrong_method(self, client: TestClient):
        response = client.post("/api/urls", json={"url": "https://example.com"})
        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}

    def test_error_model_is_documented(self, client: TestClient):
        schema = client.get("/openapi.json").json()
        assert "ErrorResponse" in schema["components"]["schemas"]

        shorten = schema["paths"]["/api/shorten"]["post"]["responses"]
        assert shorten["409"]["content"]["application/json"]["schema"] == {
            "$ref": "#/components/schemas/ErrorResponse"
        }
