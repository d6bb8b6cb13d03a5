# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: test_bulk_sync.py
# -----------------------------------------------------------------------------
import pytest

from catalog.CatalogModels import JobStatus, default_vector_id
from catalog.errors import JobNotFound
from inventory.types import EmbeddingAction
from services.InventorySyncService import InventorySyncService
from services.ProductSearchService import ProductSearchService


@pytest.fixture
def mixed_catalog(catalog, sync_service, vector_store, make_product):
    """One sellable product, one low-stock product with a leftover vector, one sold out."""
    healthy = make_product("Trekking Poles", quantity=12)
    low = make_product("Bear Canister", quantity=20)
    sync_service.apply_action(low, EmbeddingAction.ADD)
    catalog.update_inventory(low.id, 2)
    empty = make_product("Bivy Sack", quantity=0)
    return healthy, low, empty


def test_full_sync_adds_and_removes(catalog, sync_service, vector_store, mixed_catalog):
    healthy, low, empty = mixed_catalog

    result = sync_service.run_bulk_sync(batch_size=2, inter_batch_delay=0)

    assert result.success is True
    assert result.total == 3
    assert result.processed == 3
    assert (result.added, result.removed, result.skipped, result.failed) == (1, 1, 1, 0)
    assert result.processed == result.successful + result.failed + result.skipped

    assert vector_store.exists(default_vector_id(healthy.id))
    assert not vector_store.exists(default_vector_id(low.id))
    assert catalog.require_product(low.id).has_embedding is False

    job = catalog.get_embedding_job(result.job_id)
    assert job.status == JobStatus.COMPLETED.value
    assert job.total_items == 3
    assert job.processed_items == 3
    assert job.completed_at is not None


def test_second_full_run_counts_updates(sync_service, mixed_catalog):
    sync_service.run_bulk_sync(inter_batch_delay=0)
    again = sync_service.run_bulk_sync(inter_batch_delay=0)

    assert again.updated == 1
    assert again.added == 0


def test_incremental_sync_only_touches_drift(catalog, sync_service, mixed_catalog):
    sync_service.run_bulk_sync(inter_batch_delay=0)

    result = sync_service.run_bulk_sync(inter_batch_delay=0, mode="incremental")

    assert result.success is True
    assert result.total == 0
    assert catalog.get_embedding_job(result.job_id).status == JobStatus.COMPLETED.value


def test_batches_are_spaced_by_delay(sync_service, sleeps, mixed_catalog):
    sync_service.run_bulk_sync(batch_size=1, inter_batch_delay=0.5)

    # one eligible batch + two removal batches
    assert sleeps == [0.5, 0.5]


def test_item_failure_does_not_stop_the_run(catalog, embedder, vector_store, sleeps, make_product):
    make_product("Good Lantern", quantity=10)
    make_product("Cursed Lantern", quantity=10)
    embedder.fail_on = "cursed"
    service = InventorySyncService(
        catalog=catalog, embedder=embedder, vector_store=vector_store, sleep=sleeps.append
    )

    result = service.run_bulk_sync(inter_batch_delay=0)

    assert result.success is True
    assert result.successful == 1
    assert result.failed == 1
    assert result.failures[0]["error"]
    assert catalog.get_embedding_job(result.job_id).status == JobStatus.COMPLETED.value


def test_short_text_is_skipped(catalog, embedder, vector_store, make_product):
    make_product("Tiny", quantity=10)
    service = InventorySyncService(
        catalog=catalog, embedder=embedder, vector_store=vector_store, min_text_chars=500
    )

    result = service.run_bulk_sync(inter_batch_delay=0)

    assert result.skipped == 1
    assert vector_store.count() == 0
    assert embedder.calls == []


def test_fatal_error_fails_the_job(catalog, sync_service, monkeypatch, mixed_catalog):
    def broken(*args, **kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr(catalog, "get_all_products", broken)

    result = sync_service.run_bulk_sync(inter_batch_delay=0)

    assert result.success is False
    assert "database went away" in result.error
    job = catalog.get_embedding_job(result.job_id)
    assert job.status == JobStatus.FAILED.value
    assert "database went away" in job.error_message


def test_pre_created_job_is_run(catalog, sync_service, mixed_catalog):
    job = sync_service.start_bulk_job()
    assert job.status == JobStatus.PENDING.value

    result = sync_service.run_bulk_sync(inter_batch_delay=0, job_id=job.id)

    assert result.job_id == job.id
    assert catalog.get_embedding_job(job.id).status == JobStatus.COMPLETED.value


def test_bad_arguments(sync_service):
    with pytest.raises(ValueError):
        sync_service.run_bulk_sync(mode="sideways")
    with pytest.raises(JobNotFound):
        sync_service.run_bulk_sync(job_id="missing")


def test_full_sync_removes_orphaned_vector_of_low_stock_product(
        catalog, embedder, sync_service, vector_store, monkeypatch, make_product):
    product = make_product("Camp Stove", quantity=0)
    real_mark_embedded = catalog.mark_embedded
    calls = {"n": 0}

    def flaky_mark_embedded(*args, **kwargs):
        calls["n"] += 1
        if calls["n"] == 1:
            raise RuntimeError("db blip")
        return real_mark_embedded(*args, **kwargs)

    monkeypatch.setattr(catalog, "mark_embedded", flaky_mark_embedded)

    restocked = sync_service.reconcile(catalog.update_inventory(product.id, 10), 0, 10)
    assert restocked.error == "db blip"
    vector_id = default_vector_id(product.id)
    assert vector_store.exists(vector_id)
    assert catalog.require_product(product.id).has_vector_entry is False

    # the catalog no longer knows about the vector, so the drop to low stock is a no-op
    dropped = sync_service.reconcile(catalog.update_inventory(product.id, 3), 10, 3)
    assert dropped.action == EmbeddingAction.NONE
    assert vector_store.exists(vector_id)

    search = ProductSearchService(
        catalog=catalog, embedder=embedder, vector_store=vector_store, min_score=0.0, low_stock_threshold=5
    )
    assert product.id not in {p["id"] for p in search.search("camp stove")["products"]}

    result = sync_service.run_bulk_sync(inter_batch_delay=0)

    assert result.success is True
    assert (result.removed, result.skipped, result.failed) == (1, 0, 0)
    assert not vector_store.exists(vector_id)


def test_incremental_sync_trusts_catalog_flags(catalog, sync_service, vector_store, make_product):
    product = make_product("Stuff Sack", quantity=2)
    vector_store.upsert(default_vector_id(product.id), [1.0, 0.0, 0.0], {"id": product.id})

    result = sync_service.run_bulk_sync(inter_batch_delay=0, mode="incremental")

    assert result.total == 0
    assert vector_store.exists(default_vector_id(product.id))


def test_progress_is_written_every_n_items(catalog, sync_service, monkeypatch, make_product):
    for i in range(5):
        make_product(f"Tent Peg {i}", quantity=10)
    real_update = catalog.update_embedding_job
    writes = []

    def recording_update(job_id, **kwargs):
        writes.append(kwargs)
        return real_update(job_id, **kwargs)

    monkeypatch.setattr(catalog, "update_embedding_job", recording_update)

    result = sync_service.run_bulk_sync(batch_size=10, inter_batch_delay=0, progress_every=2)

    assert result.processed == 5
    progress = [w["processed_items"] for w in writes if w.get("processed_items") is not None]
    assert progress == [2, 4, 5]
    assert writes[-1]["status"] == JobStatus.COMPLETED
    assert catalog.get_embedding_job(result.job_id).processed_items == 5
