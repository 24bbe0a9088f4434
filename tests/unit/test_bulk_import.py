"""Bulk CSV import: use case plus the batched Firestore writer."""

import pytest

from app.application.use_cases import BulkImportService
from app.domain.exceptions import ValidationException
from app.infrastructure.firebase.repositories import FirestoreMasterModelRepository
from app.infrastructure.firebase.services import FirestoreBulkAccessoryWriter


@pytest.fixture
def bulk_service(firestore_client) -> BulkImportService:
    return BulkImportService(
        FirestoreBulkAccessoryWriter(firestore_client),
        FirestoreMasterModelRepository(firestore_client),
        batch_size=2,
    )


async def test_rows_become_groups_in_batches(fake_store, bulk_service) -> None:
    csv_bytes = (
        "model,category,contributorName\n"
        "Galaxy S23|Galaxy S23+,Tempered Glass,Ravi\n"
        "Pixel 8,Back Cover,\n"
        "Pixel 8,Back Cover,\n"
        ",Back Cover,\n"
    ).encode()

    result = await bulk_service.import_accessories(csv_bytes)

    assert (result.created, result.merged, result.skipped, result.batches) == (3, 0, 1, 2)
    groups = list(fake_store.collection("accessories").values())
    assert len(groups) == 3
    glass = next(g for g in groups if g["accessoryType"] == "Tempered Glass")
    assert glass["models"] == [
        {"name": "Galaxy S23", "contributorName": "Ravi"},
        {"name": "Galaxy S23+", "contributorName": "Ravi"},
    ]
    assert glass["contributor"] == {"name": "Ravi", "points": 0}
    assert glass["source"] == "Bulk Upload"


async def test_accessory_id_rows_merge_into_existing(fake_store, bulk_service) -> None:
    fake_store.put("accessories/g1", {"accessoryType": "Case", "models": [{"name": "A"}]})

    result = await bulk_service.import_accessories(b"model,accessoryId\nA|B,g1\n")

    assert result.merged == 1
    assert fake_store.get("accessories/g1")["models"] == [{"name": "A"}, {"name": "B"}]
    assert fake_store.get("accessories/g1")["accessoryType"] == "Case"


async def test_no_usable_rows_is_rejected(bulk_service) -> None:
    with pytest.raises(ValidationException, match="no rows"):
        await bulk_service.import_accessories(b"model\n | \n")


async def test_master_model_import_counts_added_and_skipped(fake_store, bulk_service) -> None:
    fake_store.put("master_models/Pixel 8", {"name": "Pixel 8"})

    result = await bulk_service.import_master_models(b"Master Model\nPixel 8\nPixel 9\n\xc2\xa0\n")

    assert result.added == 1
    assert result.skipped == 2
    assert "Pixel 9" in fake_store.collection("master_models")
