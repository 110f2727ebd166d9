"""
In-memory document store.

Used by the console demo and the test-suite in place of a hosted
document database. Every call awaits once before touching state, so
concurrent coroutines interleave at each read and write the same way
they would against a remote store.
"""

import asyncio
import copy
import logging
import uuid
from typing import Any, Optional

from barber_booking.errors import NotFoundError, StoreUnavailableError
from barber_booking.store.base import Document, DocumentStore, RangeFilter, join_path, parent_collection

logger = logging.getLogger(__name__)


class InMemoryDocumentStore(DocumentStore):
    """Dict-backed store keyed by full document path."""

    def __init__(self, latency_seconds: float = 0.0) -> None:
        self._documents: dict[str, Document] = {}
        self.latency_seconds = latency_seconds
        self.available = True

    async def _round_trip(self) -> None:
        await asyncio.sleep(self.latency_seconds)
        if not self.available:
            raise StoreUnavailableError("Document store is unavailable")

    async def get_document(self, path: str) -> Optional[Document]:
        await self._round_trip()
        document = self._documents.get(path)
        if document is None:
            return None
        return {"id": path.rsplit("/", 1)[-1], **copy.deepcopy(document)}

    async def query(
        self,
        collection: str,
        equals: Optional[dict[str, Any]] = None,
        ranges: Optional[list[RangeFilter]] = None,
    ) -> list[Document]:
        await self._round_trip()
        equals = equals or {}
        ranges = ranges or []
        results = []
        for path, document in self._documents.items():
            if parent_collection(path) != collection:
                continue
            if any(document.get(name) != value for name, value in equals.items()):
                continue
            if not all(flt.matches(document.get(flt.field)) for flt in ranges):
                continue
            results.append({"id": path.rsplit("/", 1)[-1], **copy.deepcopy(document)})
        return results

    async def write_document(self, path: str, data: Document, merge: bool = False) -> None:
        await self._round_trip()
        payload = copy.deepcopy({k: v for k, v in data.items() if k != "id"})
        if merge and path in self._documents:
            self._documents[path].update(payload)
        else:
            self._documents[path] = payload

    async def add_document(self, collection: str, data: Document) -> str:
        await self._round_trip()
        doc_id = uuid.uuid4().hex[:20]
        self._documents[join_path(collection, doc_id)] = copy.deepcopy(
            {k: v for k, v in data.items() if k != "id"}
        )
        logger.debug("Document added: %s/%s", collection, doc_id)
        return doc_id

    async def update_document(self, path: str, data: Document) -> None:
        await self._round_trip()
        if path not in self._documents:
            raise NotFoundError(f"Document {path} not found")
        self._documents[path].update(copy.deepcopy({k: v for k, v in data.items() if k != "id"}))

    async def delete_document(self, path: str) -> None:
        await self._round_trip()
        self._documents.pop(path, None)

    def reset(self) -> None:
        """Drop every document. Used by test fixtures for isolation."""
        self._documents.clear()
