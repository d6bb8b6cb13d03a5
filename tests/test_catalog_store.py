# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: test_catalog_store.py
# -----------------------------------------------------------------------------
from datetime import timedelta

import pytest

from catalog.CatalogModels import JobStatus, JobType, default_vector_id, utcnow
from catalog.errors import DuplicateSku, InvalidJobTransition, JobNotFound, ProductNotFound


def test_create_product_derives_active_from_quantity(make_product):
    in_stock = make_product("Tent", quantity=3)
    empty = make_product("Stove", quantity=0)

    assert in_stock.is_active is True
    assert empty.is_active is False
    assert in_stock.has_embedding is False
    assert in_stock.vector_id is None


def test_duplicate_sku_is_rejected(catalog, make_product):
    make_product("Tent", sku="TENT-1")
    with pytest.raises(DuplicateSku):
        catalog.create_product(name="Other tent", sku="TENT-1", price=10.0)


def test_update_inventory_sets_quantity_and_active(catalog, make_product):
    product = make_product("Lantern", quantity=4)

    sold_out = catalog.update_inventory(product.id, 0)
    assert sold_out.quantity == 0
    assert sold_out.is_active is False

    restocked = catalog.update_inventory(product.id, 12)
    assert restocked.is_active is True
    assert catalog.require_product(product.id).quantity == 12


def test_update_inventory_rejects_bad_input(catalog, make_product):
    product = make_product()
    with pytest.raises(ValueError):
        catalog.update_inventory(product.id, -1)
    with pytest.raises(ProductNotFound):
        catalog.update_inventory("missing", 3)
    assert catalog.require_product(product.id).quantity == 10


def test_update_product_refuses_inventory_and_embedding_fields(catalog, make_product):
    product = make_product()
    with pytest.raises(ValueError):
        catalog.update_product(product.id, quantity=50)
    with pytest.raises(ValueError):
        catalog.update_product(product.id, has_embedding=True)

    updated = catalog.update_product(product.id, name="Renamed", tags=["b", "a"])
    assert updated.name == "Renamed"


def test_get_products_by_ids_keeps_caller_order(catalog, make_product):
    a = make_product("A")
    b = make_product("B")
    c = make_product("C")

    found = catalog.get_products_by_ids([c.id, "nope", a.id, b.id])
    assert [p.id for p in found] == [c.id, a.id, b.id]


def test_mark_embedded_and_not_embedded(catalog, make_product):
    product = make_product()

    embedded = catalog.mark_embedded(product.id)
    assert embedded.has_embedding is True
    assert embedded.vector_id == default_vector_id(product.id)
    assert embedded.last_embedded is not None
    assert product.id not in {p.id for p in catalog.get_products_needing_embedding()}

    cleared = catalog.mark_not_embedded(product.id)
    assert cleared.has_embedding is False
    assert cleared.vector_id is None
    assert cleared.last_embedded is None


def test_products_needing_embedding(catalog, make_product):
    fresh = make_product("Fresh")
    done = make_product("Done")
    make_product("Empty", quantity=0)
    catalog.mark_embedded(done.id)

    ids = {p.id for p in catalog.get_products_needing_embedding()}
    assert ids == {fresh.id}


def test_low_and_out_of_stock_lists(catalog, make_product):
    make_product("Healthy", quantity=20)
    low = make_product("Low", quantity=2)
    out = make_product("Out", quantity=0)

    assert [p.id for p in catalog.get_low_stock_products(5)] == [low.id]
    assert [p.id for p in catalog.get_out_of_stock_products()] == [out.id]


def test_product_stats_use_active_products_for_coverage(catalog, make_product):
    a = make_product("A", quantity=10)
    make_product("B", quantity=3)
    make_product("C", quantity=0)
    catalog.mark_embedded(a.id)

    stats = catalog.get_product_stats(5)
    assert stats == {
        "total_products": 3,
        "active_products": 2,
        "products_with_embeddings": 1,
        "low_stock_products": 1,
        "out_of_stock_products": 1,
        "embedding_coverage": 50.0,
    }


def test_product_stats_on_empty_catalog(catalog):
    assert catalog.get_product_stats(5)["embedding_coverage"] == 0.0


def test_categories_and_brands_come_from_active_products(make_product, catalog):
    make_product("Tent", category="Outdoors", brand="REI")
    make_product("Phone", category="Electronics", brand="Apple")
    make_product("Old radio", quantity=0, category="Vintage", brand="Zenith")

    assert catalog.get_categories() == ["Electronics", "Outdoors"]
    assert catalog.get_brands() == ["Apple", "REI"]


# ----------------------------------------------------------------------
# Embedding jobs
# ----------------------------------------------------------------------
def test_job_lifecycle(catalog):
    job = catalog.create_embedding_job(JobType.BULK)
    assert job.status == JobStatus.PENDING.value

    catalog.update_embedding_job(job.id, status=JobStatus.RUNNING, total_items=3)
    catalog.update_embedding_job(job.id, processed_items=2)
    done = catalog.update_embedding_job(job.id, status=JobStatus.COMPLETED, processed_items=3)

    assert done.status == JobStatus.COMPLETED.value
    assert done.processed_items == 3
    assert done.completed_at is not None


def test_job_cannot_skip_running(catalog):
    job = catalog.create_embedding_job(JobType.BULK)
    with pytest.raises(InvalidJobTransition):
        catalog.update_embedding_job(job.id, status=JobStatus.COMPLETED)
    with pytest.raises(InvalidJobTransition):
        catalog.update_embedding_job(job.id, status=JobStatus.FAILED)


def test_terminal_job_is_frozen(catalog):
    job = catalog.create_embedding_job(JobType.BULK, total_items=2)
    catalog.update_embedding_job(job.id, status=JobStatus.RUNNING)
    catalog.update_embedding_job(job.id, status=JobStatus.FAILED, error_message="boom")

    with pytest.raises(InvalidJobTransition):
        catalog.update_embedding_job(job.id, processed_items=1)
    assert catalog.get_embedding_job(job.id).error_message == "boom"


def test_job_progress_is_monotonic_and_bounded(catalog):
    job = catalog.create_embedding_job(JobType.BULK, total_items=5)
    catalog.update_embedding_job(job.id, status=JobStatus.RUNNING, processed_items=3)

    with pytest.raises(ValueError):
        catalog.update_embedding_job(job.id, processed_items=2)
    with pytest.raises(ValueError):
        catalog.update_embedding_job(job.id, processed_items=6)
    assert catalog.get_embedding_job(job.id).processed_items == 3


def test_unknown_job(catalog):
    with pytest.raises(JobNotFound):
        catalog.update_embedding_job("missing", status=JobStatus.RUNNING)
    assert catalog.get_embedding_job("missing") is None


def test_fail_stale_jobs_only_touches_running(catalog):
    running = catalog.create_embedding_job(JobType.BULK)
    catalog.update_embedding_job(running.id, status=JobStatus.RUNNING)
    pending = catalog.create_embedding_job(JobType.BULK)

    failed = catalog.fail_stale_jobs(utcnow() + timedelta(minutes=1), message="abandoned")

    assert failed == [running.id]
    assert catalog.get_embedding_job(running.id).status == JobStatus.FAILED.value
    assert catalog.get_embedding_job(pending.id).status == JobStatus.PENDING.value


def test_list_and_active_jobs(catalog):
    a = catalog.create_embedding_job(JobType.BULK)
    b = catalog.create_embedding_job(JobType.SINGLE, total_items=1, product_id="p1")
    catalog.update_embedding_job(b.id, status=JobStatus.RUNNING)

    assert {j.id for j in catalog.get_active_embedding_jobs()} == {a.id, b.id}
    assert [j.id for j in catalog.list_embedding_jobs(job_type=JobType.SINGLE)] == [b.id]
    assert [j.id for j in catalog.list_embedding_jobs(status=JobStatus.PENDING)] == [a.id]


def test_set_inventory_returns_the_quantity_it_replaced(catalog, make_product):
    product = make_product("Lantern", quantity=4)

    previous, updated = catalog.set_inventory(product.id, 9)
    assert (previous, updated.quantity) == (4, 9)

    previous, updated = catalog.set_inventory(product.id, 0)
    assert (previous, updated.quantity, updated.is_active) == (9, 0, False)
