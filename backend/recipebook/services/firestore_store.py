"""
RecipeBook Backend — Cloud Firestore Document Store
=====================================================

What:  DocumentStore implementation backed by Firestore's native async client.
How:   Thin mapping of each capability onto AsyncClient calls. Array changes
       use Firestore transforms (ArrayUnion / ArrayRemove), which the server
       applies atomically, so concurrent favorite or recipe writes to the same
       user record cannot lose updates.
Who:   Built once per process by recipebook.dependencies.

Error translation:
    google.api_core NotFound on update → NotFoundError
    any other GoogleAPICallError       → DocumentStoreError
"""

import logging
from typing import Any, Dict, List, Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter

from recipebook.exceptions import DocumentStoreError, NotFoundError
from recipebook.services.store_base import DocumentStore, StoredDocument

logger = logging.getLogger(__name__)


class FirestoreDocumentStore(DocumentStore):
    """
    Firestore adapter.

    Args:
        client: A google.cloud.firestore.AsyncClient (firebase_admin.firestore_async.client())
    """

    def __init__(self, client: firestore.AsyncClient):
        self._client = client

    def _doc(self, collection: str, key: str):
        return self._client.collection(collection).document(key)

    @staticmethod
    def _wrap(operation: str, collection: str, key: Optional[str], exc: Exception) -> DocumentStoreError:
        logger.error("Firestore %s failed on %s/%s: %s", operation, collection, key or "*", exc)
        return DocumentStoreError(
            message=str(exc) or "A database error occurred. Please try again later.",
            context={"operation": operation, "collection": collection, "key": key},
        )

    async def get(self, collection: str, key: str) -> Optional[StoredDocument]:
        try:
            snapshot = await self._doc(collection, key).get()
        except google_exceptions.GoogleAPICallError as e:
            raise self._wrap("get", collection, key, e) from e
        if not snapshot.exists:
            return None
        return StoredDocument(key=snapshot.id, data=snapshot.to_dict() or {})

    async def query(
        self,
        collection: str,
        field_name: str,
        value: Any,
        limit: Optional[int] = None,
    ) -> List[StoredDocument]:
        query = self._client.collection(collection).where(
            filter=FieldFilter(field_name, "==", value)
        )
        if limit:
            query = query.limit(limit)
        try:
            snapshots = await query.get()
        except google_exceptions.GoogleAPICallError as e:
            raise self._wrap("query", collection, None, e) from e
        return [
            StoredDocument(key=snapshot.id, data=snapshot.to_dict() or {})
            for snapshot in snapshots
        ]

    async def set(self, collection: str, key: str, data: Dict[str, Any]) -> None:
        try:
            await self._doc(collection, key).set(data)
        except google_exceptions.GoogleAPICallError as e:
            raise self._wrap("set", collection, key, e) from e

    async def update(self, collection: str, key: str, fields: Dict[str, Any]) -> None:
        try:
            await self._doc(collection, key).update(fields)
        except google_exceptions.NotFound as e:
            raise NotFoundError(
                resource="document",
                message=f"No document to update: {collection}/{key}",
            ) from e
        except google_exceptions.GoogleAPICallError as e:
            raise self._wrap("update", collection, key, e) from e

    def new_key(self, collection: str) -> str:
        # document() with no argument allocates a random 20-char id client-side
        return self._client.collection(collection).document().id

    async def array_union(
        self, collection: str, key: str, field_name: str, values: List[Any]
    ) -> None:
        await self.update(collection, key, {field_name: firestore.ArrayUnion(values)})

    async def array_remove(
        self, collection: str, key: str, field_name: str, values: List[Any]
    ) -> None:
        await self.update(collection, key, {field_name: firestore.ArrayRemove(values)})
