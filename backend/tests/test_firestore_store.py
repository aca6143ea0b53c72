"""
RecipeBook Backend — Firestore Document Store Tests (Mocked)
==============================================================

What:  FirestoreDocumentStore against a mocked google.cloud.firestore.AsyncClient.
Why:   Tests must not reach a real Firestore project.

What we test:
    ✅ get / query map snapshots onto StoredDocument
    ✅ Array changes are sent as ArrayUnion / ArrayRemove transforms
    ✅ NotFound on update → NotFoundError; other API errors → DocumentStoreError
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from recipebook.exceptions import DocumentStoreError, NotFoundError
from recipebook.services.firestore_store import FirestoreDocumentStore


def make_snapshot(doc_id, data, exists=True):
    snapshot = MagicMock()
    snapshot.id = doc_id
    snapshot.exists = exists
    snapshot.to_dict.return_value = data if exists else None
    return snapshot


@pytest.fixture
def doc_ref():
    ref = MagicMock()
    ref.get = AsyncMock()
    ref.set = AsyncMock()
    ref.update = AsyncMock()
    return ref


@pytest.fixture
def client(doc_ref):
    mock_client = MagicMock()
    mock_client.collection.return_value.document.return_value = doc_ref
    return mock_client


@pytest.fixture
def firestore_store(client):
    return FirestoreDocumentStore(client=client)


class TestReads:

    @pytest.mark.asyncio
    async def test_get_existing(self, firestore_store, client, doc_ref):
        doc_ref.get.return_value = make_snapshot("u1", {"email": "a@b.c"})

        result = await firestore_store.get("users", "u1")

        client.collection.assert_called_with("users")
        client.collection.return_value.document.assert_called_with("u1")
        assert result.key == "u1"
        assert result.data == {"email": "a@b.c"}

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, firestore_store, doc_ref):
        doc_ref.get.return_value = make_snapshot("u1", None, exists=False)

        assert await firestore_store.get("users", "u1") is None

    @pytest.mark.asyncio
    async def test_query_uses_equality_filter_and_limit(self, firestore_store, client):
        query = client.collection.return_value.where.return_value
        limited = query.limit.return_value
        limited.get = AsyncMock(return_value=[make_snapshot("u7", {"session_id": "s"})])

        results = await firestore_store.query("users", "session_id", "s", limit=1)

        field_filter = client.collection.return_value.where.call_args.kwargs["filter"]
        assert field_filter.field_path == "session_id"
        assert field_filter.op_string == "=="
        assert field_filter.value == "s"
        query.limit.assert_called_once_with(1)
        assert [doc.key for doc in results] == ["u7"]

    @pytest.mark.asyncio
    async def test_query_failure_wrapped(self, firestore_store, client):
        query = client.collection.return_value.where.return_value
        query.get = AsyncMock(side_effect=google_exceptions.ServiceUnavailable("down"))

        with pytest.raises(DocumentStoreError):
            await firestore_store.query("users", "email", "a@b.c")


class TestWrites:

    @pytest.mark.asyncio
    async def test_set_writes_whole_document(self, firestore_store, doc_ref):
        await firestore_store.set("recipes", "r1", {"title": "Soup"})

        doc_ref.set.assert_awaited_once_with({"title": "Soup"})

    @pytest.mark.asyncio
    async def test_update_missing_document_raises_not_found(self, firestore_store, doc_ref):
        doc_ref.update.side_effect = google_exceptions.NotFound("no entity")

        with pytest.raises(NotFoundError):
            await firestore_store.update("users", "ghost", {"session_id": "x"})

    @pytest.mark.asyncio
    async def test_update_other_failure_wrapped(self, firestore_store, doc_ref):
        doc_ref.update.side_effect = google_exceptions.Aborted("contention")

        with pytest.raises(DocumentStoreError) as exc_info:
            await firestore_store.update("users", "u1", {"session_id": "x"})
        assert exc_info.value.context["operation"] == "update"

    @pytest.mark.asyncio
    async def test_array_union_sends_transform(self, firestore_store, doc_ref):
        await firestore_store.array_union("users", "u1", "created_recipes", ["r9"])

        (fields,), _ = doc_ref.update.call_args
        transform = fields["created_recipes"]
        assert isinstance(transform, firestore.ArrayUnion)
        assert transform.values == ["r9"]

    @pytest.mark.asyncio
    async def test_array_remove_sends_transform(self, firestore_store, doc_ref):
        ref = {"recipeId": "r1", "isFavorite": True}
        await firestore_store.array_remove("users", "u1", "favorite_recipes", [ref])

        (fields,), _ = doc_ref.update.call_args
        transform = fields["favorite_recipes"]
        assert isinstance(transform, firestore.ArrayRemove)
        assert transform.values == [ref]

    def test_new_key_comes_from_auto_id(self, firestore_store, client):
        client.collection.return_value.document.return_value.id = "AUTO123"

        assert firestore_store.new_key("recipes") == "AUTO123"
        client.collection.return_value.document.assert_called_with()

    def test_reference_is_immutable(self, firestore_store):
        ref = firestore_store.reference("users", "u1")

        assert (ref.collection, ref.key) == ("users", "u1")
        with pytest.raises(AttributeError):
            ref.key = "u2"
