"""
RecipeBook Backend — Abstract Document Store Interface
========================================================

What:  Abstract base class for the schemaless document collaborator.
How:   FirestoreDocumentStore implements it against Cloud Firestore; the test
       suite provides an in-memory implementation.
Who:   Called by the user, favorite and recipe services.

Array fields:
    `favorite_recipes` and `created_recipes` are only ever changed through
    array_union / array_remove, which the store applies atomically on the
    server. Callers never read an array, mutate it and write it back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class DocumentRef:
    """Immutable handle to a single record: (collection, key)."""

    collection: str
    key: str


@dataclass
class StoredDocument:
    """A record as read from the store: its key plus a copy of its fields."""

    key: str
    data: Dict[str, Any] = field(default_factory=dict)


class DocumentStore(ABC):
    """
    Capability set consumed from the document database.

    Contract:
        - Collections are named ("users", "recipes"); keys are strings
        - `update` is a partial write and fails with NotFoundError on a missing record
        - Unclassified failures are raised as DocumentStoreError
    """

    def reference(self, collection: str, key: str) -> DocumentRef:
        """Build an immutable handle to `collection/key` (no I/O)."""
        return DocumentRef(collection=collection, key=key)

    @abstractmethod
    async def get(self, collection: str, key: str) -> Optional[StoredDocument]:
        """Fetch one record by key; None when it does not exist."""

    @abstractmethod
    async def query(
        self,
        collection: str,
        field_name: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[StoredDocument]:
        """Return records whose `field_name` equals `value`."""

    @abstractmethod
    async def set(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        """Write a whole record, replacing any existing one."""

    @abstractmethod
    async def update(self, collection: str, key: str, fields: Dict[str, Any]) -> None:
        """Overwrite the given fields of an existing record."""

    @abstractmethod
    def new_key(self, collection: str) -> str:
        """Generate a fresh, unused key for `collection`."""

    @abstractmethod
    async def array_union(
        self, collection: str, key: str, field_name: str, values: List[Any]
    ) -> None:
        """Atomically append each value not already present in the array field."""

    @abstractmethod
    async def array_remove(
        self, collection: str, key: str, field_name: str, values: List[Any]
    ) -> None:
        """Atomically remove every element equal to one of `values`."""
