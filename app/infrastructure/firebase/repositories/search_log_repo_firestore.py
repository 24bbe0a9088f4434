"""Firestore-backed search log (implements ISearchLogRepository)."""

from __future__ import annotations

from datetime import datetime

from app.application.dtos.analytics import SearchLogEntry
from app.infrastructure.firebase._rest_client import DESCENDING, FirestoreRESTClient
from app.infrastructure.firebase._rest_encoding import SERVER_TIMESTAMP
from app.infrastructure.firebase.collections import COLLECTION_SEARCH_LOGS
from app.shared.utils.datetime import ensure_utc, utc_now


def _parse_date(raw: object) -> datetime | None:
    # Entries written before the server stamp resolved fall back to the "date" string.
    if not isinstance(raw, str) or not raw:
        return None
    try:
        return ensure_utc(datetime.fromisoformat(raw))
    except ValueError:
        return None


class FirestoreSearchLogRepository:
    """Append-only search log using Firestore."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        self._client = client
        self._coll = client.collection(COLLECTION_SEARCH_LOGS)

    async def add(self, term: str, category: str | None) -> None:
        await self._coll.document().set({
            "term": term,
            "category": category,
            "timestamp": SERVER_TIMESTAMP,
            "date": utc_now().date().isoformat(),
        })

    async def latest(self, limit: int) -> list[SearchLogEntry]:
        """Return the newest entries, timestamp descending."""
        query = self._coll.order_by("timestamp", DESCENDING).limit(limit)
        entries: list[SearchLogEntry] = []
        async for doc in query.stream():
            data = doc.to_dict()
            ts = data.get("timestamp")
            entries.append(
                SearchLogEntry(
                    id=doc.id,
                    term=data.get("term") or "",
                    category=data.get("category"),
                    timestamp=ensure_utc(ts) if isinstance(ts, datetime) else _parse_date(data.get("date")),
                )
            )
        return entries
