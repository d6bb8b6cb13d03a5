# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: test_product_search_service.py
# -----------------------------------------------------------------------------
import pytest

from services.ProductSearchService import ProductSearchService
from vectorstore.ProductVectorStore import VectorHit


@pytest.fixture
def shop(catalog, sync_service, make_product):
    products = {
        "headphones": make_product(
            "Sony Wireless Headphones", quantity=25, price=349.99,
            category="Electronics", brand="Sony", tags=["wireless", "headphones"],
        ),
        "tv": make_product(
            "Samsung QLED TV", quantity=8, price=1299.99, category="Electronics", brand="Samsung",
        ),
        "jeans": make_product(
            "Levi's 501 Jeans", quantity=45, price=79.99, category="Clothing", brand="Levi's",
        ),
        "headset": make_product(
            "Limited Gaming Headset", quantity=2, price=199.99, category="Electronics", brand="GameTech",
        ),
    }
    sync_service.run_bulk_sync(inter_batch_delay=0)
    return products


@pytest.fixture
def search_service(catalog, embedder, vector_store) -> ProductSearchService:
    return ProductSearchService(catalog=catalog, embedder=embedder, vector_store=vector_store, min_score=0.0)


def test_search_returns_hydrated_products(search_service, shop):
    out = search_service.search("wireless headphones")

    assert out["query"] == "wireless headphones"
    assert out["total_found"] == len(out["products"]) == 3
    top = out["products"][0]
    assert top["id"] == shop["headphones"].id
    assert set(top) == {
        "id", "name", "description", "price", "quantity", "category",
        "brand", "sku", "image_url", "relevance_score",
    }
    scores = [p["relevance_score"] for p in out["products"]]
    assert scores == sorted(scores, reverse=True)


def test_low_stock_products_are_not_searchable(search_service, shop):
    out = search_service.search("gaming headset")
    assert shop["headset"].id not in {p["id"] for p in out["products"]}


def test_inferred_filters(search_service, vector_store, shop):
    out = search_service.search("electronics under $500")

    assert [p["id"] for p in out["products"]] == [shop["headphones"].id]
    assert out["filters"] == {"category": "Electronics", "price_range": {"min": None, "max": 500.0}}
    where = vector_store.last_query["where"]
    assert where["category"] == {"$eq": "Electronics"}
    assert where["price"] == {"$lte": 500.0}
    assert where["isActive"] == {"$eq": True}
    assert where["quantity"] == {"$gt": 0}


def test_explicit_filters_win(search_service, shop):
    out = search_service.search("levi's jeans", brand="Sony", min_price=100)

    assert out["filters"]["brand"] == "Sony"
    assert out["filters"]["price_range"] == {"min": 100, "max": None}
    assert [p["id"] for p in out["products"]] == [shop["headphones"].id]


def test_stale_vector_is_dropped_at_hydration(catalog, search_service, shop):
    # sold out without reconciliation: the vector still claims stock
    catalog.update_inventory(shop["jeans"].id, 0)

    out = search_service.search("jeans")

    assert shop["jeans"].id not in {p["id"] for p in out["products"]}


def test_max_results_is_capped(search_service, vector_store, shop):
    search_service.search("tv", max_results=500)
    assert vector_store.last_query["top_k"] == 20


def test_thin_results_come_with_suggestions(search_service, shop):
    out = search_service.search("electronics under $500")
    assert out["suggestions"] == ["GameTech electronics under $500", "Levi's electronics under $500"]


def test_empty_query_is_rejected(search_service):
    with pytest.raises(ValueError):
        search_service.search("   ")


class _ScriptedStore:
    def __init__(self, hits):
        self.hits = hits

    def query(self, vector, top_k=10, where=None):
        return list(self.hits)


def test_hits_below_min_score_are_dropped(catalog, embedder, make_product):
    strong = make_product("Strong Match", quantity=10)
    weak = make_product("Weak Match", quantity=10)
    store = _ScriptedStore([
        VectorHit(id="a", score=0.91, metadata={"id": strong.id}),
        VectorHit(id="b", score=0.42, metadata={"id": weak.id}),
        VectorHit(id="c", score=0.95, metadata={"id": "deleted-product"}),
    ])
    service = ProductSearchService(catalog=catalog, embedder=embedder, vector_store=store, min_score=0.6)

    out = service.search("match")

    assert [p["id"] for p in out["products"]] == [strong.id]
    assert out["products"][0]["relevance_score"] == 0.91


def test_low_stock_product_is_dropped_at_hydration(catalog, embedder, vector_store, shop):
    # dropped below the threshold without reconciliation: still in stock, no longer searchable
    catalog.update_inventory(shop["headphones"].id, 3)
    service = ProductSearchService(
        catalog=catalog, embedder=embedder, vector_store=vector_store, min_score=0.0, low_stock_threshold=5
    )

    out = service.search("wireless headphones")

    assert shop["headphones"].id not in {p["id"] for p in out["products"]}
    assert shop["tv"].id in {p["id"] for p in out["products"]}
