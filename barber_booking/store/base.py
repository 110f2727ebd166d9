"""
Document store contract consumed by the scheduling core.

In production this is backed by a hosted document database (Firestore,
MongoDB, DynamoDB). The core only relies on the async operations below.
Paths are ``/``-joined segments alternating collection and document id,
e.g. ``barbeiros/uid-1/agenda/horarios``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

Document = dict[str, Any]

RANGE_OPERATORS = ("<", "<=", ">", ">=")


@dataclass(frozen=True)
class RangeFilter:
    """A single ordered comparison applied to a document field."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in RANGE_OPERATORS:
            raise ValueError(f"Unsupported range operator {self.op!r}; use one of {RANGE_OPERATORS}")

    def matches(self, candidate: Any) -> bool:
        if candidate is None:
            return False
        if self.op == "<":
            return candidate < self.value
        if self.op == "<=":
            return candidate <= self.value
        if self.op == ">":
            return candidate > self.value
        return candidate >= self.value


def join_path(*segments: str) -> str:
    return "/".join(segments)


def parent_collection(path: str) -> str:
    """``a/b/c/d`` -> ``a/b/c``."""
    return path.rsplit("/", 1)[0]


class DocumentStore(ABC):
    """Async key/document store. Returned documents always include ``id``.

    Implementations raise ``StoreUnavailableError`` for transient
    infrastructure failures and ``NotFoundError`` from ``update_document``
    when the target does not exist.
    """

    @abstractmethod
    async def get_document(self, path: str) -> Optional[Document]:
        """Fetch one document, or None if it does not exist."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        equals: Optional[dict[str, Any]] = None,
        ranges: Optional[list[RangeFilter]] = None,
    ) -> list[Document]:
        """Return documents of ``collection`` matching every filter."""

    @abstractmethod
    async def write_document(self, path: str, data: Document, merge: bool = False) -> None:
        """Create or replace a document; ``merge`` keeps fields not in ``data``."""

    @abstractmethod
    async def add_document(self, collection: str, data: Document) -> str:
        """Insert under a generated id and return that id."""

    @abstractmethod
    async def update_document(self, path: str, data: Document) -> None:
        """Patch fields of an existing document."""

    @abstractmethod
    async def delete_document(self, path: str) -> None:
        """Remove a document; deleting a missing one is a no-op."""
