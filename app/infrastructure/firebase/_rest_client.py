"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All writes go through documents:commit so that field transforms,
preconditions, batches and transactions share one code path.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from app.domain.exceptions import FitmyphoneException
from app.infrastructure.exceptions import (
    DocumentExistsError,
    DocumentMissingError,
    StorePermissionError,
    TransactionAbortedError,
)
from app.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_document,
    encode_fields,
    leaf_field_paths,
    quote_field_path,
    split_transforms,
)
from app.infrastructure.firebase.error_emitter import store_error_emitter
from app.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

_FIRESTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
_BASE = "https://firestore.googleapis.com/v1"

MAX_BATCH_WRITES = 500
_PAGE_SIZE = 300

T = TypeVar("T")


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=[_FIRESTORE_SCOPE]
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


def _url(path: str) -> str:
    return f"{_BASE}/{quote(path, safe='/()')}"


def _error_status(resp: httpx.Response) -> tuple[str, str]:
    """Return (status, message) from a Google API error body."""
    try:
        err = resp.json().get("error", {})
    except (json.JSONDecodeError, AttributeError):
        return "", resp.text
    if not isinstance(err, dict):
        return "", str(err)
    return str(err.get("status", "")), str(err.get("message", ""))


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    *,
    params: dict | None = None,
    path: str = "",
    operation: str = "get",
) -> Any:
    """Perform async HTTP request to Firestore REST API. 404 returns None."""
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method not in ("GET", "POST", "PATCH", "DELETE"):
        raise ValueError(f"Unsupported method: {method!r}")
    resp = await client.request(method, url, headers=headers, json=body, params=params)
    if resp.status_code == 404:
        return None
    if resp.status_code == 403:
        _, message = _error_status(resp)
        error = StorePermissionError(path, operation, message)
        store_error_emitter.emit(error)
        raise error
    if resp.status_code == 409:
        status, _ = _error_status(resp)
        if status == "ABORTED":
            raise TransactionAbortedError()
        raise DocumentExistsError(path)
    if resp.status_code not in (200, 204):
        resp.raise_for_status()
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


def _doc_id(name: str) -> str:
    return name.split("/")[-1] if name else ""


def _build_write(name: str, data: dict[str, Any], mode: str) -> dict:
    """Build a REST Write for set/merge/update/create of one document."""
    fields, transforms = split_transforms(data)
    write: dict[str, Any] = {"update": {"name": name, "fields": encode_fields(fields)}}
    if mode == "merge":
        write["updateMask"] = {"fieldPaths": leaf_field_paths(fields)}
    elif mode == "update":
        write["updateMask"] = {"fieldPaths": [quote_field_path(k) for k in fields]}
        write["currentDocument"] = {"exists": True}
    elif mode == "create":
        write["currentDocument"] = {"exists": False}
    elif mode != "set":
        raise ValueError(f"Unknown write mode: {mode!r}")
    if transforms:
        write["updateTransforms"] = transforms
    return write


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict, path: str = ""):
        self.id = id_
        self.path = path
        self._data = data

    def to_dict(self) -> dict:
        return self._data

    def get(self, field: str, default: Any = None) -> Any:
        return self._data.get(field, default)


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    @property
    def path(self) -> str:
        return self._path

    async def get(self, transaction: Transaction | None = None) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        params = None
        if transaction is not None:
            transaction._check_read()
            params = {"transaction": transaction.id}
        out = await _request_async(
            self._client._http,
            _url(self._path),
            access_token=await self._client.get_token(),
            params=params,
            path=self._path,
            operation="get",
        )
        if out is None:
            return None
        return DocumentSnapshot(self.id, decode_document(out), self._path)

    async def set(self, data: dict[str, Any], merge: bool = False) -> None:
        """Create or overwrite the document; with merge=True only the given fields change."""
        await self._client._commit(
            [_build_write(self._path, data, "merge" if merge else "set")]
        )

    async def update(self, data: dict[str, Any]) -> None:
        """Update top-level fields of an existing document.

        Raises:
            DocumentMissingError: If the document does not exist.
        """
        await self._client._commit([_build_write(self._path, data, "update")])

    async def create(self, data: dict[str, Any]) -> None:
        """Create the document; DocumentExistsError if it already exists."""
        await self._client._commit([_build_write(self._path, data, "create")])

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing."""
        await self._client._commit([{"delete": self._path}])


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array_contains": "ARRAY_CONTAINS",
    "array-contains": "ARRAY_CONTAINS",
    "array_contains_any": "ARRAY_CONTAINS_ANY",
    "array-contains-any": "ARRAY_CONTAINS_ANY",
}

ASCENDING = "ASCENDING"
DESCENDING = "DESCENDING"


class Query:
    """Fluent query builder for a collection; runs via runQuery (filter/order/offset/limit on server)."""

    def __init__(self, client: FirestoreRESTClient, parent: str, collection_id: str):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._filters: list[dict] = []
        self._orders: list[dict] = []
        self._offset: int = 0
        self._limit: int | None = None

    def where(self, field: str, op: str, value: Any) -> Query:
        self._filters.append(
            {
                "fieldFilter": {
                    "field": {"fieldPath": quote_field_path(field)},
                    "op": _OP_MAP.get(op, op),
                    "value": _encode_value(value),
                }
            }
        )
        return self

    def order_by(self, field: str, direction: str = ASCENDING) -> Query:
        self._orders.append(
            {"field": {"fieldPath": quote_field_path(field)}, "direction": direction}
        )
        return self

    def offset(self, n: int) -> Query:
        self._offset = n
        return self

    def limit(self, n: int) -> Query:
        self._limit = n
        return self

    def _structured_query(self) -> dict[str, Any]:
        structured: dict[str, Any] = {"from": [{"collectionId": self._collection_id}]}
        if len(self._filters) == 1:
            structured["where"] = self._filters[0]
        elif self._filters:
            structured["where"] = {
                "compositeFilter": {"op": "AND", "filters": list(self._filters)}
            }
        if self._orders:
            structured["orderBy"] = list(self._orders)
        if self._offset:
            structured["offset"] = self._offset
        if self._limit is not None:
            structured["limit"] = self._limit
        return structured

    async def stream(
        self, transaction: Transaction | None = None
    ) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        body: dict[str, Any] = {"structuredQuery": self._structured_query()}
        if transaction is not None:
            transaction._check_read()
            body["transaction"] = transaction.id
        collection_path = f"{self._parent}/{self._collection_id}"
        resp = await _request_async(
            self._client._http,
            f"{_url(self._parent)}:runQuery",
            method="POST",
            body=body,
            access_token=await self._client.get_token(),
            path=collection_path,
            operation="list",
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            name = doc.get("name", "")
            yield DocumentSnapshot(_doc_id(name), decode_document(doc), name)

    async def get(self, transaction: Transaction | None = None) -> list[DocumentSnapshot]:
        """Run the query and return all snapshots as a list."""
        return [doc async for doc in self.stream(transaction=transaction)]


class CollectionReference:
    """Reference to a collection; matches firestore API style."""

    def __init__(self, client: FirestoreRESTClient, path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    def document(self, document_id: str | None = None) -> DocumentReference:
        """Reference a document; a new CUID is generated when no ID is given."""
        return DocumentReference(
            self._client, f"{self._path}/{document_id or generate_cuid()}"
        )

    async def create(self, document_id: str, data: dict[str, Any]) -> None:
        """Create a document with the given ID (fail with DocumentExistsError if it exists)."""
        await self.document(document_id).create(data)

    def _query(self) -> Query:
        parent, collection_id = self._path.rsplit("/", 1)
        return Query(self._client, parent, collection_id)

    def where(self, field: str, op: str, value: Any) -> Query:
        """Start a query with a filter. Use .order_by(), .offset(), .limit(), then .stream()."""
        return self._query().where(field, op, value)

    def order_by(self, field: str, direction: str = ASCENDING) -> Query:
        return self._query().order_by(field, direction)

    def limit(self, n: int) -> Query:
        return self._query().limit(n)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection, following page tokens."""
        page_token: str | None = None
        while True:
            params: dict[str, Any] = {"pageSize": _PAGE_SIZE}
            if page_token:
                params["pageToken"] = page_token
            out = await _request_async(
                self._client._http,
                _url(self._path),
                access_token=await self._client.get_token(),
                params=params,
                path=self._path,
                operation="list",
            )
            if not out:
                return
            for doc in out.get("documents", []):
                name = doc.get("name", "")
                yield DocumentSnapshot(_doc_id(name), decode_document(doc), name)
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class _WriteBuffer:
    """Collects REST writes for a batch or a transaction."""

    def __init__(self) -> None:
        self._writes: list[dict] = []

    def _add(self, write: dict) -> None:
        self._writes.append(write)

    def set(self, ref: DocumentReference, data: dict[str, Any], merge: bool = False) -> None:
        self._add(_build_write(ref.path, data, "merge" if merge else "set"))

    def update(self, ref: DocumentReference, data: dict[str, Any]) -> None:
        self._add(_build_write(ref.path, data, "update"))

    def create(self, ref: DocumentReference, data: dict[str, Any]) -> None:
        self._add(_build_write(ref.path, data, "create"))

    def delete(self, ref: DocumentReference) -> None:
        self._add({"delete": ref.path})

    def __len__(self) -> int:
        return len(self._writes)


class WriteBatch(_WriteBuffer):
    """Atomic group of at most MAX_BATCH_WRITES writes."""

    def __init__(self, client: FirestoreRESTClient) -> None:
        super().__init__()
        self._client = client

    def _add(self, write: dict) -> None:
        if len(self._writes) >= MAX_BATCH_WRITES:
            raise ValueError(f"A batch holds at most {MAX_BATCH_WRITES} writes")
        super()._add(write)

    async def commit(self) -> None:
        await self._client._commit(self._writes)


class Transaction(_WriteBuffer):
    """Read-write transaction: all reads must happen before the first write."""

    def __init__(self, client: FirestoreRESTClient, transaction_id: str) -> None:
        super().__init__()
        self._client = client
        self.id = transaction_id

    def _check_read(self) -> None:
        if self._writes:
            raise ValueError("Transactions require all reads to happen before all writes.")

    async def get(self, ref: DocumentReference) -> DocumentSnapshot | None:
        return await ref.get(transaction=self)

    async def query(self, query: Query) -> list[DocumentSnapshot]:
        return await query.get(transaction=self)


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._database = f"projects/{project_id}/databases/(default)"
        self._prefix = f"{self._database}/documents"
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    @property
    def project_id(self) -> str:
        return self._project_id

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    async def _commit(self, writes: list[dict], transaction: str | None = None) -> dict:
        body: dict[str, Any] = {"writes": writes}
        if transaction is not None:
            body["transaction"] = transaction
        first = writes[0] if writes else {}
        path = first.get("delete") or first.get("update", {}).get("name", self._prefix)
        out = await _request_async(
            self._http,
            f"{_url(self._prefix)}:commit",
            method="POST",
            body=body,
            access_token=await self.get_token(),
            path=path,
            operation="write",
        )
        if out is None:
            # NOT_FOUND on commit means an exists=True precondition failed.
            missing = [
                w["update"]["name"]
                for w in writes
                if w.get("currentDocument", {}).get("exists") is True
            ]
            raise DocumentMissingError(", ".join(missing) or path)
        return out

    async def _begin_transaction(self, retry_transaction: str | None = None) -> str:
        read_write: dict[str, Any] = {}
        if retry_transaction:
            read_write["retryTransaction"] = retry_transaction
        out = await _request_async(
            self._http,
            f"{_url(self._prefix)}:beginTransaction",
            method="POST",
            body={"options": {"readWrite": read_write}},
            access_token=await self.get_token(),
            path=self._prefix,
            operation="write",
        )
        return out["transaction"]

    async def _rollback(self, transaction_id: str) -> None:
        try:
            await _request_async(
                self._http,
                f"{_url(self._prefix)}:rollback",
                method="POST",
                body={"transaction": transaction_id},
                access_token=await self.get_token(),
                path=self._prefix,
                operation="write",
            )
        except (httpx.HTTPError, FitmyphoneException):
            logger.warning("Transaction rollback failed", exc_info=True)

    async def run_transaction(
        self,
        fn: Callable[[Transaction], Awaitable[T]],
        *,
        max_attempts: int = 5,
    ) -> T:
        """Run fn inside a read-write transaction and commit its writes.

        The whole function is retried when Firestore aborts the transaction
        because of contention. Any other error rolls back and propagates.

        Raises:
            TransactionAbortedError: If every attempt was aborted.
        """
        retry_id: str | None = None
        for attempt in range(1, max_attempts + 1):
            transaction_id = await self._begin_transaction(retry_id)
            tx = Transaction(self, transaction_id)
            try:
                result = await fn(tx)
                await self._commit(tx._writes, transaction=transaction_id)
            except TransactionAbortedError:
                logger.info(
                    "Transaction aborted by contention (attempt %s/%s)",
                    attempt,
                    max_attempts,
                )
                retry_id = transaction_id
                continue
            except Exception:
                await self._rollback(transaction_id)
                raise
            return result
        raise TransactionAbortedError(max_attempts)
