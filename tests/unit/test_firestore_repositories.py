"""Firestore repositories against the REST fake."""

from datetime import datetime, timedelta, timezone

import pytest

from app.application.dtos.accessory import AccessoryCreate
from app.application.dtos.user import ProfileUpdate, TokenClaims
from app.domain.enums import ContributionStatus, UserRole
from app.domain.exceptions import (
    CategoryAlreadyExistsException,
    MasterModelAlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from app.infrastructure.firebase.repositories import (
    FirestoreAccessoryRepository,
    FirestoreCategoryRepository,
    FirestoreContributionRepository,
    FirestoreMasterModelRepository,
    FirestorePushTokenRepository,
    FirestoreSearchLogRepository,
    FirestoreUserRepository,
)
from app.infrastructure.firebase.repositories.push_token_repo_firestore import token_doc_id


class TestAccessoryRepository:
    async def test_reads_both_model_encodings(self, fake_store, firestore_client) -> None:
        fake_store.put("accessories/g1", {
            "accessoryType": "Case",
            "models": ["Pixel 8", {"name": "Pixel 8 Pro", "contributorUid": "u1"}, {"x": 1}],
            "contributor": {"uid": "u1", "name": "Asha", "points": 10},
        })
        group = await FirestoreAccessoryRepository(firestore_client).get_by_id("g1")
        assert group.model_names == ["Pixel 8", "Pixel 8 Pro"]
        assert group.models[1].contributor_uid == "u1"
        assert group.contributor.points == 10

    async def test_list_by_category(self, fake_store, firestore_client) -> None:
        fake_store.put("accessories/g1", {"accessoryType": "Case", "models": ["A"]})
        fake_store.put("accessories/g2", {"accessoryType": "Glass", "models": ["B"]})
        repo = FirestoreAccessoryRepository(firestore_client)
        assert [g.id for g in await repo.list_by_category("Glass")] == ["g2"]
        assert sorted(g.id for g in await repo.list_by_category(None)) == ["g1", "g2"]

    async def test_create_manual_entry(self, fake_store, firestore_client) -> None:
        repo = FirestoreAccessoryRepository(firestore_client)
        group = await repo.create(AccessoryCreate(accessory_type=" Case ", models=["A", "a", " B "]))
        stored = fake_store.get(f"accessories/{group.id}")
        assert stored["accessoryType"] == "Case"
        assert stored["models"] == [{"name": "A"}, {"name": "B"}]
        assert stored["contributor"] == {"name": "Admin", "points": 0}
        assert stored["source"] == "Manual Entry"
        assert isinstance(stored["lastUpdated"], datetime)

    async def test_create_requires_models(self, firestore_client) -> None:
        with pytest.raises(ValidationException):
            await FirestoreAccessoryRepository(firestore_client).create(
                AccessoryCreate(accessory_type="Case", models=["  "])
            )

    async def test_add_model_appends_once(self, fake_store, firestore_client) -> None:
        fake_store.put("accessories/g1", {"accessoryType": "Case", "models": ["A"]})
        repo = FirestoreAccessoryRepository(firestore_client)
        await repo.add_model("g1", "B", contributor_name="Ravi")
        await repo.add_model("g1", "B", contributor_name="Ravi")
        assert fake_store.get("accessories/g1")["models"] == [
            "A",
            {"name": "B", "contributorName": "Ravi"},
        ]

    async def test_remove_model_handles_both_encodings(self, fake_store, firestore_client) -> None:
        fake_store.put("accessories/g1", {
            "accessoryType": "Case",
            "models": ["Pixel 8", {"name": "pixel 8"}, {"name": "Pixel 9"}],
        })
        repo = FirestoreAccessoryRepository(firestore_client)
        assert await repo.remove_model("g1", "PIXEL 8") == 2
        assert fake_store.get("accessories/g1")["models"] == [{"name": "Pixel 9"}]
        assert await repo.remove_model("g1", "Pixel 8") == 0

    async def test_delete_missing_group(self, firestore_client) -> None:
        with pytest.raises(ResourceNotFoundException):
            await FirestoreAccessoryRepository(firestore_client).delete("nope")


class TestContributionRepository:
    async def test_create_and_list_newest_first(self, fake_store, firestore_client) -> None:
        repo = FirestoreContributionRepository(firestore_client)
        fake_store.put("contributions/old", {
            "accessoryType": "Case", "models": ["A"], "submittedBy": "user-uid",
            "status": "pending", "submittedAt": datetime(2020, 1, 1, tzinfo=timezone.utc),
        })
        created = await repo.create("user-uid", "Case", ["B", "C"], "User Chain Creation")

        assert fake_store.get(f"contributions/{created.id}")["status"] == "pending"
        pending = await repo.list_by_status(ContributionStatus.PENDING)
        assert [c.id for c in pending] == [created.id, "old"]
        mine = await repo.list_for_user("user-uid")
        assert len(mine) == 2
        assert await repo.list_for_user("someone-else") == []

    async def test_add_to_group_id_is_stored(self, fake_store, firestore_client) -> None:
        repo = FirestoreContributionRepository(firestore_client)
        created = await repo.create("u", "Case", ["A"], "User Contribution", add_to_accessory_id="g1")
        assert fake_store.get(f"contributions/{created.id}")["addToAccessoryId"] == "g1"

    async def test_unknown_status_is_not_read_as_pending(self, fake_store, firestore_client) -> None:
        repo = FirestoreContributionRepository(firestore_client)
        fake_store.put("contributions/bad", {
            "accessoryType": "Case", "models": ["A"], "submittedBy": "user-uid", "status": "archived",
        })
        with pytest.raises(ValidationException, match="unknown status"):
            await repo.get_by_id("bad")
        assert await repo.list_for_user("user-uid") == []


class TestUserRepository:
    async def test_get_or_create_from_claims(self, fake_store, firestore_client) -> None:
        repo = FirestoreUserRepository(firestore_client)
        claims = TokenClaims(uid="new-uid", email="n@example.com", display_name="Nia", photo_url="p.png")

        user = await repo.get_or_create(claims)

        assert user.points == 0
        assert user.role == UserRole.USER
        assert fake_store.get("users/new-uid")["photoURL"] == "p.png"
        again = await repo.get_or_create(claims)
        assert again.uid == "new-uid"

    async def test_update_profile_and_flags(self, fake_store, firestore_client) -> None:
        repo = FirestoreUserRepository(firestore_client)
        updated = await repo.update_profile("user-uid", ProfileUpdate(social_media_link="https://x.com/a"))
        assert updated.social_media_link == "https://x.com/a"
        assert updated.display_name == "Asha"
        assert (await repo.set_role("user-uid", UserRole.ADMIN)).role == UserRole.ADMIN
        assert (await repo.set_suspended("user-uid", True)).is_suspended is True

    async def test_update_unknown_user(self, firestore_client) -> None:
        with pytest.raises(ResourceNotFoundException):
            await FirestoreUserRepository(firestore_client).set_role("ghost", UserRole.ADMIN)

    async def test_top_by_points_skips_suspended(self, firestore_client) -> None:
        top = await FirestoreUserRepository(firestore_client).top_by_points(2)
        assert [u.uid for u in top] == ["user-uid", "admin-uid"]


class TestCatalogRepositories:
    async def test_category_duplicate_is_case_insensitive(self, fake_store, firestore_client) -> None:
        repo = FirestoreCategoryRepository(firestore_client)
        await repo.add("Tempered Glass")
        with pytest.raises(CategoryAlreadyExistsException):
            await repo.add(" tempered glass ")
        assert await repo.exists("Tempered Glass")
        assert not await repo.exists("Back Cover")

    async def test_master_model_add_and_duplicate(self, fake_store, firestore_client) -> None:
        repo = FirestoreMasterModelRepository(firestore_client)
        created = await repo.add("Galaxy S23/Plus")
        assert created.id == "Galaxy S23%2FPlus"
        with pytest.raises(MasterModelAlreadyExistsException):
            await repo.add("Galaxy S23/Plus")

    async def test_master_model_ids_keep_similar_names_apart(self, fake_store, firestore_client) -> None:
        repo = FirestoreMasterModelRepository(firestore_client)
        await repo.add("Moto G/5")
        await repo.add("Moto G_5")
        await repo.add("Moto G%2F5")
        assert await repo.add_many(["Moto G/5", "Moto G 5"]) == 1
        assert [m.name for m in await repo.list_all()] == [
            "Moto G 5",
            "Moto G%2F5",
            "Moto G/5",
            "Moto G_5",
        ]

    async def test_master_model_add_many_skips_existing(self, fake_store, firestore_client) -> None:
        fake_store.put("master_models/Pixel 8", {"name": "Pixel 8"})
        repo = FirestoreMasterModelRepository(firestore_client)
        added = await repo.add_many(["Pixel 8", "Pixel 9", " Pixel 9 ", "", "Pixel 9a"])
        assert added == 2
        assert [m.name for m in await repo.list_all()] == ["Pixel 8", "Pixel 9", "Pixel 9a"]


class TestSearchLogRepository:
    async def test_latest_newest_first_with_date_fallback(self, fake_store, firestore_client) -> None:
        now = datetime.now(timezone.utc)
        fake_store.put("search_logs/a", {"term": "s23", "category": None, "timestamp": now - timedelta(days=1)})
        fake_store.put("search_logs/b", {"term": "pixel", "category": "Case", "timestamp": now})
        repo = FirestoreSearchLogRepository(firestore_client)
        await repo.add("iphone", "Glass")

        entries = await repo.latest(2)

        assert [e.term for e in entries] == ["iphone", "pixel"]
        assert entries[0].category == "Glass"


class TestPushTokenRepository:
    async def test_add_list_remove(self, fake_store, firestore_client) -> None:
        repo = FirestorePushTokenRepository(firestore_client)
        await repo.add("user-uid", "fcm:token/1")
        assert fake_store.get(f"push_tokens/{token_doc_id('fcm:token/1')}")["uid"] == "user-uid"
        assert await repo.list_tokens() == ["fcm:token/1"]
        await repo.remove("fcm:token/1")
        assert await repo.list_tokens() == []
