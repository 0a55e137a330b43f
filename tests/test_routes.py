# =============================================================================
# tests/test_routes.py - API Endpoint Tests
# =============================================================================
# End-to-end tests through the FastAPI app with the in-memory Supabase:
# - Public catalog browsing (active products only)
# - Quotation submission and the admin quotation inbox
# - Admin product create / update / delete over multipart
# - Health endpoints
#
# Run with: poetry run pytest tests/test_routes.py -v
# =============================================================================

import json
from unittest.mock import patch
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from core.models import DEFAULT_CATEGORIES


@pytest.fixture
def fabric(client):
    """The seeded Fabric category."""
    return client.get("/api/categories/fabric").json()


def _files(make_image, count: int) -> list[tuple]:
    return [
        ("images", (f"photo-{i}.png", make_image(1200, 900), "image/png"))
        for i in range(count)
    ]


# =============================================================================
# Public Catalog
# =============================================================================

class TestCategories:
    """Tests for /api/categories."""

    def test_defaults_seeded_on_startup(self, client):
        response = client.get("/api/categories")

        assert response.status_code == 200
        names = [c["name"] for c in response.json()]
        assert names == sorted(c.name for c in DEFAULT_CATEGORIES)

    def test_seeding_failure_does_not_stop_startup(self, fake_supabase):
        from app.main import app

        with patch(
            "app.main.CategoryService.ensure_default_categories",
            side_effect=Exception("database unavailable"),
        ) as seed:
            with TestClient(app) as test_client:
                response = test_client.get("/api/health")

        seed.assert_called_once()
        assert response.status_code == 200
        assert fake_supabase.rows("categories") == []

    def test_get_by_slug(self, client, fabric):
        assert fabric["slug"] == "fabric"
        assert fabric["name"] == "Fabric"

    def test_unknown_slug(self, client):
        response = client.get("/api/categories/unknown")

        assert response.status_code == 404
        assert response.json()["code"] == "CATEGORY_NOT_FOUND"

    def test_category_products(self, client, fake_supabase, fabric):
        fake_supabase.seed("products", name="Denim", slug="denim", category_id=fabric["id"])
        fake_supabase.seed("products", name="Hidden", slug="hidden", category_id=fabric["id"], is_active=False)

        response = client.get(f"/api/categories/{fabric['id']}/products")

        assert [p["slug"] for p in response.json()] == ["denim"]


class TestPublicProducts:
    """Tests for /api/products."""

    @pytest.fixture
    def seeded(self, fake_supabase, fabric):
        fake_supabase.seed(
            "products", name="Denim Fabric", slug="denim", category_id=fabric["id"],
            specifications={"Material": "Cotton", "Weight": "12oz"}, price="15.00",
        )
        fake_supabase.seed(
            "products", name="Secret Fabric", slug="secret", category_id=fabric["id"], is_active=False,
        )
        fake_supabase.seed(
            "products", name="Linen Fabric", slug="linen", category_id=fabric["id"],
            price="99.00", price_on_request=True,
        )

    def test_list_active_newest_first(self, client, seeded):
        response = client.get("/api/products")

        assert response.status_code == 200
        assert [p["slug"] for p in response.json()] == ["linen", "denim"]

    def test_filters(self, client, seeded, fabric):
        response = client.get("/api/products", params={"categoryId": fabric["id"], "search": "Denim"})

        assert [p["slug"] for p in response.json()] == ["denim"]

    def test_get_by_slug_shapes_product(self, client, seeded):
        body = client.get("/api/products/denim").json()

        assert body["specifications"] == [
            {"key": "Material", "value": "Cotton"},
            {"key": "Weight", "value": "12oz"},
        ]
        assert body["images"] == []
        assert body["price"] == "15.00"

    def test_price_hidden_when_on_request(self, client, seeded):
        body = client.get("/api/products/linen").json()

        assert body["price_on_request"] is True
        assert body["price"] is None

    @pytest.mark.parametrize("path", [
        "/api/products?categoryId=not-a-uuid",
        "/api/categories/not-a-uuid/products",
    ])
    def test_non_uuid_category_filter(self, client, seeded, path):
        assert client.get(path).status_code == 422

    def test_inactive_product_not_found(self, client, seeded):
        response = client.get("/api/products/secret")

        assert response.status_code == 404
        assert response.json()["code"] == "PRODUCT_NOT_FOUND"


# =============================================================================
# Quotations
# =============================================================================

QUOTATION = {
    "userType": "buyer",
    "name": "Jane Doe",
    "email": "jane@x.com",
    "company": "",
    "message": "Need 500m of denim",
}


class TestQuotations:
    """Tests for quotation submission and the admin inbox."""

    def test_submit_stores_and_notifies(self, client, fake_supabase):
        with patch(
            "app.routers.quotations.NotificationService.send_quotation_notification",
            return_value=True,
        ) as notify:
            response = client.post("/api/quotations", json=QUOTATION)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Quotation submitted successfully"
        assert body["quotation"]["status"] == "new"
        assert body["quotation"]["company"] is None
        notify.assert_called_once()
        assert notify.call_args.args[0]["id"] == body["quotation"]["id"]
        assert len(fake_supabase.rows("quotations")) == 1

    def test_email_failure_does_not_fail_request(self, client):
        with patch(
            "app.routers.quotations.NotificationService.send_quotation_notification",
            return_value=False,
        ):
            response = client.post("/api/quotations", json=QUOTATION)

        assert response.status_code == 200

    def test_invalid_body(self, client, fake_supabase):
        response = client.post("/api/quotations", json={**QUOTATION, "userType": "broker"})

        assert response.status_code == 422
        assert fake_supabase.rows("quotations") == []

    def test_admin_inbox_and_status_update(self, client, admin_headers):
        with patch("app.routers.quotations.NotificationService.send_quotation_notification", return_value=True):
            first = client.post("/api/quotations", json={**QUOTATION, "name": "First"}).json()["quotation"]
            second = client.post("/api/quotations", json={**QUOTATION, "name": "Second"}).json()["quotation"]

        listing = client.get("/api/admin/quotations", headers=admin_headers).json()
        assert [q["id"] for q in listing] == [second["id"], first["id"]]

        response = client.put(
            f"/api/admin/quotations/{first['id']}/status",
            json={"status": "completed"},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["status"] == "completed"

        completed = client.get("/api/admin/quotations", params={"status": "completed"}, headers=admin_headers)
        assert [q["id"] for q in completed.json()] == [first["id"]]

        detail = client.get(f"/api/admin/quotations/{second['id']}", headers=admin_headers)
        assert detail.json()["name"] == "Second"

    def test_invalid_status(self, client, admin_headers):
        response = client.put(
            f"/api/admin/quotations/{uuid4()}/status",
            json={"status": "archived"},
            headers=admin_headers,
        )

        assert response.status_code == 422

    def test_unknown_quotation(self, client, admin_headers):
        response = client.put(
            f"/api/admin/quotations/{uuid4()}/status",
            json={"status": "processing"},
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "QUOTATION_NOT_FOUND"


# =============================================================================
# Admin Products
# =============================================================================

class TestAdminProducts:
    """Tests for /api/admin/products."""

    def _create(self, client, admin_headers, fabric, make_image, count=2, **fields):
        data = {"name": "Denim", "slug": "denim", "categoryId": fabric["id"], **fields}
        return client.post(
            "/api/admin/products",
            data=data,
            files=_files(make_image, count),
            headers=admin_headers,
        )

    def test_create_with_images(self, client, fake_supabase, admin_headers, fabric, make_image):
        response = self._create(
            client, admin_headers, fabric, make_image, count=3,
            price="12.50", specifications=json.dumps({"Material": "Cotton"}),
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["images"]) == 3
        assert all(url.endswith(".webp") for url in body["images"])
        assert body["specifications"] == [{"key": "Material", "value": "Cotton"}]
        assert body["price"] == "12.50"
        assert len(fake_supabase.storage.buckets[settings.STORAGE_BUCKET]) == 3

    def test_create_invalid_specifications(self, client, fake_supabase, admin_headers, fabric, make_image):
        response = self._create(client, admin_headers, fabric, make_image, specifications="{oops")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_SPECIFICATIONS"
        assert fake_supabase.rows("products") == []
        assert fake_supabase.storage.upload_attempts == 0

    def test_create_missing_name(self, client, admin_headers, fabric):
        response = client.post(
            "/api/admin/products",
            data={"slug": "denim", "categoryId": fabric["id"]},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_FAILED"

    def test_create_non_uuid_category(self, client, fake_supabase, admin_headers, make_image):
        response = client.post(
            "/api/admin/products",
            data={"name": "Denim", "slug": "denim", "categoryId": "not-a-uuid"},
            files=_files(make_image, 1),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_FAILED"
        assert response.json()["details"] == {"field": "category_id"}
        assert fake_supabase.storage.upload_attempts == 0

    def test_update_non_uuid_category(self, client, admin_headers, fabric, make_image):
        created = self._create(client, admin_headers, fabric, make_image, count=0).json()

        response = client.put(
            f"/api/admin/products/{created['id']}",
            data={"categoryId": "not-a-uuid"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert client.get(f"/api/admin/products/{created['id']}", headers=admin_headers).json()["category_id"] == fabric["id"]

    def test_create_undecodable_image(self, client, fake_supabase, admin_headers, fabric):
        response = client.post(
            "/api/admin/products",
            data={"name": "Denim", "slug": "denim", "categoryId": fabric["id"]},
            files=[("images", ("notes.png", b"not an image", "image/png"))],
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_IMAGE"
        assert fake_supabase.rows("products") == []

    def test_create_upload_failure(self, client, fake_supabase, admin_headers, fabric, make_image):
        fake_supabase.storage.fail_upload_at = 1

        response = self._create(client, admin_headers, fabric, make_image, count=2)

        assert response.status_code == 500
        assert fake_supabase.rows("products") == []
        assert fake_supabase.storage.buckets.get(settings.STORAGE_BUCKET, {}) == {}

    def test_too_many_images(self, client, admin_headers, fabric, make_image):
        response = self._create(client, admin_headers, fabric, make_image, count=settings.MAX_PRODUCT_IMAGES + 1)

        assert response.status_code == 400
        assert response.json()["code"] == "TOO_MANY_IMAGES"

    def test_update_replaces_images(self, client, fake_supabase, admin_headers, fabric, make_image):
        created = self._create(client, admin_headers, fabric, make_image, count=2).json()

        response = client.put(
            f"/api/admin/products/{created['id']}",
            data={"name": "Denim Blue"},
            files=_files(make_image, 1),
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Denim Blue"
        assert len(body["images"]) == 1
        assert len(fake_supabase.storage.buckets[settings.STORAGE_BUCKET]) == 1

    def test_update_without_files_keeps_images(self, client, admin_headers, fabric, make_image):
        created = self._create(client, admin_headers, fabric, make_image, count=2).json()

        response = client.put(
            f"/api/admin/products/{created['id']}",
            data={"isActive": "false", "price": ""},
            headers=admin_headers,
        )

        body = response.json()
        assert body["images"] == created["images"]
        assert body["is_active"] is False
        assert body["price"] is None

    def test_admin_sees_inactive(self, client, admin_headers, fabric, make_image):
        created = self._create(client, admin_headers, fabric, make_image, count=0, isActive="false").json()

        listing = client.get("/api/admin/products", headers=admin_headers).json()
        detail = client.get(f"/api/admin/products/{created['id']}", headers=admin_headers)

        assert [p["id"] for p in listing] == [created["id"]]
        assert detail.status_code == 200
        assert client.get("/api/products/denim").status_code == 404

    def test_delete(self, client, fake_supabase, admin_headers, fabric, make_image):
        created = self._create(client, admin_headers, fabric, make_image, count=2).json()

        response = client.delete(f"/api/admin/products/{created['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], "message": "Product deleted successfully"}
        assert fake_supabase.rows("products") == []
        assert fake_supabase.storage.buckets[settings.STORAGE_BUCKET] == {}

    def test_delete_missing(self, client, admin_headers):
        response = client.delete(f"/api/admin/products/{uuid4()}", headers=admin_headers)

        assert response.status_code == 404


# =============================================================================
# Health
# =============================================================================

class TestHealth:
    """Tests for the health endpoints."""

    def test_health(self, client):
        body = client.get("/api/health").json()

        assert body["status"] == "healthy"
        assert body["environment"] == settings.ENVIRONMENT

    def test_ready(self, client):
        body = client.get("/api/health/ready").json()

        assert body["status"] == "ready"
        assert body["checks"] == {"database": "healthy", "storage": "healthy", "email": "disabled"}

    def test_ready_degraded_when_database_fails(self, client, fake_supabase):
        fake_supabase.fail("categories", "select")

        body = client.get("/api/health/ready").json()

        assert body["status"] == "degraded"
        assert body["checks"]["database"].startswith("unhealthy")
        assert body["checks"]["storage"] == "healthy"

    def test_live(self, client):
        assert client.get("/api/health/live").json()["status"] == "alive"

    def test_root(self, client):
        assert client.get("/").json()["name"] == "Catalog API"
