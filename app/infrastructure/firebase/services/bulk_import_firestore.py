"""Firestore-backed accessory bulk import writer (implements IBulkAccessoryWriter)."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from app.application.dtos.bulk_import import BulkImportResult, BulkImportRow
from app.infrastructure.firebase._rest_client import (
    MAX_BATCH_WRITES,
    FirestoreRESTClient,
    WriteBatch,
)
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP, ArrayUnion
from app.infrastructure.firebase.collections import COLLECTION_ACCESSORIES

logger = logging.getLogger(__name__)

BULK_SOURCE = "Bulk Upload"
DEFAULT_BULK_CONTRIBUTOR = "Admin"


def _entries(row: BulkImportRow) -> list[dict[str, Any]]:
    entries = []
    for name in row.models:
        entry: dict[str, Any] = {"name": name}
        if row.contributor_name:
            entry["contributorName"] = row.contributor_name
        entries.append(entry)
    return entries


class FirestoreBulkAccessoryWriter:
    """Writes parsed CSV rows as batched Firestore commits.

    Rows without an accessoryId become new documents (one per row, never
    merged with each other). Rows with an accessoryId are merged into that
    document with an array union. Batches are committed concurrently; when
    one fails the error propagates and batches that already committed stay
    applied.
    """

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_ACCESSORIES)

    def _add_row(self, batch: WriteBatch, row: BulkImportRow) -> bool:
        """Queue the row's write; returns True when it merges into an existing id."""
        entries = _entries(row)
        if row.accessory_id:
            data: dict[str, Any] = {
                "models": ArrayUnion(entries),
                "lastUpdated": SERVER_TIMESTAMP,
            }
            if row.category:
                data["accessoryType"] = row.category
            batch.set(self._coll.document(row.accessory_id), data, merge=True)
            return True
        batch.set(self._coll.document(), {
            "accessoryType": row.category or "",
            "models": entries,
            "contributor": {
                "name": row.contributor_name or DEFAULT_BULK_CONTRIBUTOR,
                "points": 0,
            },
            "lastUpdated": SERVER_TIMESTAMP,
            "source": BULK_SOURCE,
        })
        return False

    async def write(
        self, rows: list[BulkImportRow], batch_size: int, skipped: int = 0
    ) -> BulkImportResult:
        """Commit rows in batches of at most batch_size writes."""
        size = max(1, min(batch_size, MAX_BATCH_WRITES))
        batches: list[WriteBatch] = []
        created = merged = 0
        for start in range(0, len(rows), size):
            batch = self._client.batch()
            for row in rows[start : start + size]:
                if self._add_row(batch, row):
                    merged += 1
                else:
                    created += 1
            batches.append(batch)
        await asyncio.gather(*(b.commit() for b in batches))
        logger.info(
            "Bulk import committed %s batches (created=%s, merged=%s, skipped=%s)",
            len(batches),
            created,
            merged,
            skipped,
        )
        return BulkImportResult(
            created=created, merged=merged, skipped=skipped, batches=len(batches)
        )
