# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: test_chroma_vector_store.py
# -----------------------------------------------------------------------------
import uuid

import chromadb
import pytest

from fakes import make_config
from vectorstore.ChromaProductVectorStore import ChromaProductVectorStore, to_chroma_where


@pytest.fixture
def store():
    return ChromaProductVectorStore(
        cfg=make_config(),
        collection_name=f"test-{uuid.uuid4().hex[:12]}",
        client=chromadb.EphemeralClient(),
    )


def _meta(pid, price, quantity=10, category="Outdoors", active=True):
    return {
        "id": pid,
        "name": pid,
        "price": price,
        "quantity": quantity,
        "category": category,
        "brand": None,
        "isActive": active,
    }


def test_to_chroma_where_single_clause():
    assert to_chroma_where({"category": {"$eq": "Outdoors"}}) == {"category": {"$eq": "Outdoors"}}
    assert to_chroma_where({}) is None
    assert to_chroma_where(None) is None


def test_to_chroma_where_splits_range_into_and():
    where = {"isActive": {"$eq": True}, "price": {"$gte": 10, "$lte": 50}}

    assert to_chroma_where(where) == {
        "$and": [
            {"isActive": {"$eq": True}},
            {"price": {"$gte": 10}},
            {"price": {"$lte": 50}},
        ]
    }


def test_to_chroma_where_rejects_unknown_operator():
    with pytest.raises(ValueError, match=r"\$in"):
        to_chroma_where({"category": {"$in": ["a", "b"]}})


def test_empty_collection_query_returns_nothing(store):
    assert store.count() == 0
    assert store.query([1.0, 0.0, 0.0], top_k=5) == []


def test_upsert_query_and_delete(store):
    store.upsert("product_a", [1.0, 0.0, 0.0], _meta("a", 20.0), document="red tent")
    store.upsert("product_b", [0.0, 1.0, 0.0], _meta("b", 80.0))
    store.upsert("product_c", [0.9, 0.1, 0.0], _meta("c", 30.0, category="Cooking"))

    hits = store.query([1.0, 0.0, 0.0], top_k=2)
    assert [h.id for h in hits] == ["product_a", "product_c"]
    assert hits[0].score == pytest.approx(1.0, abs=1e-4)
    assert hits[0].product_id == "a"
    assert hits[0].metadata["brand"] == ""

    filtered = store.query(
        [1.0, 0.0, 0.0], top_k=5, where={"price": {"$gte": 25, "$lte": 100}, "category": {"$eq": "Outdoors"}}
    )
    assert [h.id for h in filtered] == ["product_b"]

    store.delete("product_a")
    store.delete("product_a")  # second delete is a no-op
    assert store.exists("product_a") is False
    assert store.count() == 2


def test_upsert_replaces_existing_vector(store):
    store.upsert("product_a", [1.0, 0.0, 0.0], _meta("a", 20.0))
    store.upsert("product_a", [0.0, 1.0, 0.0], _meta("a", 15.0))

    hits = store.query([0.0, 1.0, 0.0], top_k=1)
    assert store.count() == 1
    assert hits[0].metadata["price"] == 15.0


def test_empty_vector_is_refused(store):
    with pytest.raises(ValueError):
        store.upsert("product_a", [], _meta("a", 1.0))


def test_connection(store):
    assert store.test_connection() is True


def test_own_vector_with_matching_filter_is_top_hit(store):
    store.upsert("product_a", [0.2, 0.9, 0.4], _meta("a", 45.0))
    store.upsert("product_b", [0.25, 0.85, 0.45], _meta("b", 45.0, category="Cooking"))

    where = {"isActive": {"$eq": True}, "quantity": {"$gt": 0}, "category": {"$eq": "Outdoors"}}
    hits = store.query([0.2, 0.9, 0.4], top_k=3, where=where)

    assert hits[0].id == "product_a"
    assert hits[0].score >= 0.6
