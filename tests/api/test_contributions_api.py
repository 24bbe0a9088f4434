"""Contribution submission and the admin review queue over HTTP."""

import pytest


@pytest.fixture(autouse=True)
def catalog(fake_store) -> None:
    fake_store.put("categories/c1", {"name": "Tempered Glass"})
    fake_store.put("accessories/g1", {"accessoryType": "Back Cover", "models": ["Pixel 7"]})


async def _submit(client, headers, **body):
    return await client.post("/api/v1/contributions", json=body, headers=headers)


class TestSubmit:
    async def test_new_chain(self, client, user_headers, fake_store) -> None:
        resp = await _submit(
            client, user_headers, accessoryType="Tempered Glass", models=["Galaxy S23", "Galaxy S23+"]
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "pending"
        assert body["submittedBy"] == "user-uid"
        assert body["source"] == "User Chain Creation"
        assert fake_store.get(f"contributions/{body['id']}")["accessoryType"] == "Tempered Glass"

    async def test_add_to_existing_group(self, client, user_headers) -> None:
        resp = await _submit(client, user_headers, addToAccessoryId="g1", models=["pixel 7", "Pixel 7a"])
        assert resp.status_code == 201
        body = resp.json()
        assert body["models"] == ["Pixel 7a"]
        assert body["accessoryType"] == "Back Cover"
        assert body["addToAccessoryId"] == "g1"

    async def test_single_model_chain_is_400(self, client, user_headers) -> None:
        resp = await _submit(client, user_headers, accessoryType="Tempered Glass", models=["Galaxy S23"])
        assert resp.status_code == 400
        assert resp.json()["details"]["field"] == "models"

    async def test_unknown_category_is_400(self, client, user_headers) -> None:
        resp = await _submit(client, user_headers, accessoryType="Skins", models=["A", "B"])
        assert resp.status_code == 400

    async def test_requires_token(self, client) -> None:
        resp = await _submit(client, {}, accessoryType="Tempered Glass", models=["A", "B"])
        assert resp.status_code == 401
        assert resp.json()["error"] == "AUTHENTICATION_ERROR"

    async def test_invalid_token(self, client) -> None:
        resp = await _submit(
            client, {"Authorization": "Bearer forged"}, accessoryType="Tempered Glass", models=["A", "B"]
        )
        assert resp.status_code == 401

    async def test_suspended_user_is_403(self, client, suspended_headers, fake_store) -> None:
        resp = await _submit(client, suspended_headers, accessoryType="Tempered Glass", models=["A", "B"])
        assert resp.status_code == 403
        assert resp.json()["error"] == "ACCOUNT_SUSPENDED"
        assert fake_store.collection("contributions") == {}


class TestReview:
    async def _pending_id(self, client, user_headers) -> str:
        resp = await _submit(
            client, user_headers, accessoryType="Tempered Glass", models=["Galaxy S23", "Galaxy S23+"]
        )
        return resp.json()["id"]

    async def test_queue_requires_admin(self, client, user_headers) -> None:
        resp = await client.get("/api/v1/admin/contributions", headers=user_headers)
        assert resp.status_code == 403
        assert resp.json()["error"] == "PERMISSION_DENIED"

    async def test_approve_flow(self, client, user_headers, admin_headers, fake_store) -> None:
        contribution_id = await self._pending_id(client, user_headers)

        queue = await client.get("/api/v1/admin/contributions", headers=admin_headers)
        assert [c["id"] for c in queue.json()] == [contribution_id]

        resp = await client.post(
            f"/api/v1/admin/contributions/{contribution_id}/approve", headers=admin_headers
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["createdGroup"] is True
        assert body["pointsAwarded"] == 10
        assert body["addedModels"] == ["Galaxy S23", "Galaxy S23+"]
        assert fake_store.get("users/user-uid")["points"] == 15

        again = await client.post(
            f"/api/v1/admin/contributions/{contribution_id}/approve", headers=admin_headers
        )
        assert again.status_code == 409
        assert again.json()["error"] == "CONTRIBUTION_ALREADY_REVIEWED"

        mine = await client.get("/api/v1/users/me/contributions", headers=user_headers)
        assert mine.json()[0]["status"] == "approved"
        assert mine.json()[0]["accessoryId"] == body["accessoryId"]

    async def test_approve_with_custom_points(self, client, user_headers, admin_headers, fake_store) -> None:
        contribution_id = await self._pending_id(client, user_headers)
        resp = await client.post(
            f"/api/v1/admin/contributions/{contribution_id}/approve",
            json={"points": 25},
            headers=admin_headers,
        )
        assert resp.json()["pointsAwarded"] == 25
        assert fake_store.get("users/user-uid")["points"] == 30

    async def test_reject_then_edit_returns_to_queue(self, client, user_headers, admin_headers) -> None:
        contribution_id = await self._pending_id(client, user_headers)

        rejected = await client.post(
            f"/api/v1/admin/contributions/{contribution_id}/reject",
            json={"reason": "Typo in model name"},
            headers=admin_headers,
        )
        assert rejected.json()["status"] == "rejected"
        assert rejected.json()["rejectionReason"] == "Typo in model name"

        listed = await client.get(
            "/api/v1/admin/contributions", params={"status": "rejected"}, headers=admin_headers
        )
        assert [c["id"] for c in listed.json()] == [contribution_id]

        edited = await client.patch(
            f"/api/v1/admin/contributions/{contribution_id}",
            json={"models": ["Galaxy S24", "Galaxy S24+"]},
            headers=admin_headers,
        )
        assert edited.json()["status"] == "pending"
        assert edited.json()["models"] == ["Galaxy S24", "Galaxy S24+"]

    async def test_delete(self, client, user_headers, admin_headers, fake_store) -> None:
        contribution_id = await self._pending_id(client, user_headers)
        resp = await client.delete(f"/api/v1/admin/contributions/{contribution_id}", headers=admin_headers)
        assert resp.status_code == 204
        assert fake_store.get(f"contributions/{contribution_id}") is None
        missing = await client.get(f"/api/v1/admin/contributions/{contribution_id}", headers=admin_headers)
        assert missing.status_code == 404
