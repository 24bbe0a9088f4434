"""Admin catalog, accessory maintenance, users, analytics and broadcast endpoints."""

from datetime import datetime, timezone
from urllib.parse import quote

import pytest

from app.shared.utils.datetime import utc_now


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/api/v1/admin/users"),
        ("get", "/api/v1/admin/analytics/search"),
        ("post", "/api/v1/admin/categories"),
        ("delete", "/api/v1/admin/accessories/g1"),
        ("post", "/api/v1/admin/notifications"),
    ],
)
async def test_admin_routes_reject_regular_users(client, user_headers, method, path) -> None:
    resp = await client.request(method, path, headers=user_headers)
    assert resp.status_code == 403


async def test_admin_routes_require_a_token(client) -> None:
    resp = await client.get("/api/v1/admin/users")
    assert resp.status_code == 401


class TestAccessoryMaintenance:
    async def test_create_add_remove_delete(self, client, admin_headers, fake_store) -> None:
        created = await client.post(
            "/api/v1/admin/accessories",
            json={"accessoryType": "Case", "models": ["Pixel 8", "Pixel 8 Pro"]},
            headers=admin_headers,
        )
        assert created.status_code == 201
        group_id = created.json()["id"]
        assert created.json()["contributor"]["name"] == "Admin"

        added = await client.post(
            f"/api/v1/admin/accessories/{group_id}/models",
            json={"name": "Pixel 9", "contributorName": "Ravi"},
            headers=admin_headers,
        )
        assert [m["name"] for m in added.json()["models"]] == ["Pixel 8", "Pixel 8 Pro", "Pixel 9"]

        removed = await client.delete(
            f"/api/v1/admin/accessories/{group_id}/models/pixel 8 pro", headers=admin_headers
        )
        assert [m["name"] for m in removed.json()["models"]] == ["Pixel 8", "Pixel 9"]

        raw = await client.get(f"/api/v1/admin/accessories/{group_id}/raw", headers=admin_headers)
        assert raw.json()["accessoryType"] == "Case"

        deleted = await client.delete(f"/api/v1/admin/accessories/{group_id}", headers=admin_headers)
        assert deleted.status_code == 204
        assert fake_store.get(f"accessories/{group_id}") is None

    async def test_remove_model_with_slash_in_name(self, client, admin_headers, fake_store) -> None:
        fake_store.put("accessories/g1", {
            "accessoryType": "Tempered Glass",
            "models": ["Galaxy S23/S23+", {"name": "Pixel 8"}],
        })

        removed = await client.delete(
            f"/api/v1/admin/accessories/g1/models/{quote('galaxy s23/s23+', safe='')}",
            headers=admin_headers,
        )

        assert removed.status_code == 200
        assert fake_store.get("accessories/g1")["models"] == [{"name": "Pixel 8"}]

    async def test_csv_import(self, client, admin_headers, fake_store) -> None:
        fake_store.put("accessories/g1", {"accessoryType": "Case", "models": ["Pixel 7"]})
        csv_body = "model,category,accessoryId\nGalaxy S23|Galaxy S23+,Tempered Glass,\nPixel 7a,,g1\n"

        resp = await client.post(
            "/api/v1/admin/accessories/import",
            files={"file": ("groups.csv", csv_body.encode(), "text/csv")},
            headers=admin_headers,
        )

        assert resp.status_code == 200
        assert resp.json() == {"created": 1, "merged": 1, "skipped": 0, "batches": 1}
        assert fake_store.get("accessories/g1")["models"] == ["Pixel 7", {"name": "Pixel 7a"}]

    async def test_csv_without_model_column_is_400(self, client, admin_headers) -> None:
        resp = await client.post(
            "/api/v1/admin/accessories/import",
            files={"file": ("groups.csv", b"category\nCase\n", "text/csv")},
            headers=admin_headers,
        )
        assert resp.status_code == 400


class TestCatalog:
    async def test_categories(self, client, admin_headers) -> None:
        created = await client.post("/api/v1/admin/categories", json={"name": "Back Cover"}, headers=admin_headers)
        assert created.status_code == 201
        duplicate = await client.post("/api/v1/admin/categories", json={"name": "back cover"}, headers=admin_headers)
        assert duplicate.status_code == 409
        assert duplicate.json()["error"] == "CATEGORY_ALREADY_EXISTS"

        category_id = created.json()["id"]
        deleted = await client.delete(f"/api/v1/admin/categories/{category_id}", headers=admin_headers)
        assert deleted.status_code == 204
        assert (await client.get("/api/v1/categories")).json() == []

    async def test_master_models(self, client, admin_headers) -> None:
        created = await client.post("/api/v1/admin/master-models", json={"name": "Pixel 8"}, headers=admin_headers)
        assert created.json()["id"] == "Pixel 8"
        duplicate = await client.post("/api/v1/admin/master-models", json={"name": "Pixel 8"}, headers=admin_headers)
        assert duplicate.status_code == 409

        imported = await client.post(
            "/api/v1/admin/master-models/import",
            files={"file": ("models.csv", b"name\nPixel 8\nPixel 9\n", "text/csv")},
            headers=admin_headers,
        )
        assert imported.json() == {"added": 1, "skipped": 1}


class TestUsers:
    async def test_list_and_update_role_and_suspension(self, client, admin_headers, user_headers) -> None:
        users = await client.get("/api/v1/admin/users", headers=admin_headers)
        assert {u["uid"] for u in users.json()} == {"admin-uid", "user-uid", "suspended-uid"}

        promoted = await client.patch(
            "/api/v1/admin/users/user-uid/role", json={"role": "admin"}, headers=admin_headers
        )
        assert promoted.json()["role"] == "admin"
        assert (await client.get("/api/v1/admin/users", headers=user_headers)).status_code == 200

        suspended = await client.patch(
            "/api/v1/admin/users/user-uid/suspension", json={"isSuspended": True}, headers=admin_headers
        )
        assert suspended.json()["isSuspended"] is True

    async def test_unknown_role_is_422(self, client, admin_headers) -> None:
        resp = await client.patch(
            "/api/v1/admin/users/user-uid/role", json={"role": "owner"}, headers=admin_headers
        )
        assert resp.status_code == 422


class TestAnalytics:
    @pytest.fixture(autouse=True)
    def logs(self, fake_store) -> None:
        now = utc_now()
        fake_store.put("search_logs/a", {"term": "pixel 8", "category": "Case", "timestamp": now})
        fake_store.put("search_logs/b", {"term": "Pixel 8", "category": None, "timestamp": now})
        fake_store.put("search_logs/c", {
            "term": "s23", "category": "Glass", "timestamp": datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        })

    async def test_stats(self, client, admin_headers) -> None:
        resp = await client.get("/api/v1/admin/analytics/search", headers=admin_headers)
        body = resp.json()
        assert body["today"] == 2
        assert body["last7"] == 2
        assert body["last30"] == 2
        assert body["total"] == 3
        assert body["topTerms"][0] == {"term": "PIXEL 8", "count": 2}

    async def test_export(self, client, admin_headers) -> None:
        resp = await client.get("/api/v1/admin/analytics/search/export", headers=admin_headers)
        assert resp.headers["content-type"].startswith("text/csv")
        assert resp.headers["content-disposition"].startswith('attachment; filename="search_analytics_')
        lines = resp.text.splitlines()
        assert lines[0] == "Date,Time,Term,Category"
        assert lines[-1] == '2020-01-02,03:04:05,"s23",Glass'
        assert any(line.endswith('"Pixel 8",Unknown') for line in lines)


class TestBroadcast:
    async def test_broadcast_removes_dead_tokens(self, app, client, admin_headers, user_headers, fake_store) -> None:
        for token in ("tok-live", "tok-dead"):
            resp = await client.post(
                "/api/v1/notifications/tokens", json={"token": token}, headers=user_headers
            )
            assert resp.status_code == 204
        app.state.push_sender.dead = {"tok-dead"}

        resp = await client.post(
            "/api/v1/admin/notifications",
            json={"title": "New models", "body": "Galaxy S24 added", "url": "/search"},
            headers=admin_headers,
        )

        assert resp.json() == {"sent": 1, "failed": 1, "removedTokens": 1}
        assert len(app.state.push_sender.sent) == 2
        assert len(fake_store.collection("push_tokens")) == 1

    async def test_broadcast_without_sender_is_503(self, app, client, admin_headers) -> None:
        app.state.push_sender = None
        resp = await client.post(
            "/api/v1/admin/notifications", json={"title": "t", "body": "b"}, headers=admin_headers
        )
        assert resp.status_code == 503
