# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: test_inventory_sync_service.py
# -----------------------------------------------------------------------------
from catalog.CatalogModels import JobStatus, JobType, Product, default_vector_id
from inventory.types import EmbeddingAction


def _embed(sync_service, catalog, product):
    sync_service.apply_action(product, EmbeddingAction.ADD)
    return catalog.require_product(product.id)


def test_restock_adds_vector(catalog, sync_service, vector_store, make_product):
    product = make_product("Camp Chair", quantity=0)
    updated = catalog.update_inventory(product.id, 10)

    outcome = sync_service.reconcile(updated, 0, 10)

    assert outcome.action == EmbeddingAction.ADD
    assert outcome.applied is True
    vector_id = default_vector_id(product.id)
    assert vector_store.exists(vector_id)
    assert vector_store.metadata[vector_id]["quantity"] == 10
    assert vector_store.metadata[vector_id]["isActive"] is True

    stored = catalog.require_product(product.id)
    assert stored.has_embedding is True
    assert stored.vector_id == vector_id


def test_sell_out_removes_vector(catalog, sync_service, vector_store, make_product):
    product = _embed(sync_service, catalog, make_product("Headlamp", quantity=8))
    updated = catalog.update_inventory(product.id, 0)

    outcome = sync_service.reconcile(updated, 8, 0)

    assert outcome.action == EmbeddingAction.REMOVE
    assert vector_store.count() == 0
    stored = catalog.require_product(product.id)
    assert stored.has_embedding is False
    assert stored.vector_id is None


def test_low_stock_removes_vector(catalog, sync_service, vector_store, make_product):
    product = _embed(sync_service, catalog, make_product("Water Filter", quantity=9))
    updated = catalog.update_inventory(product.id, 2)

    outcome = sync_service.reconcile(updated, 9, 2)

    assert outcome.action == EmbeddingAction.REMOVE
    assert not vector_store.exists(default_vector_id(product.id))


def test_healthy_change_refreshes_metadata(catalog, sync_service, vector_store, make_product):
    product = _embed(sync_service, catalog, make_product("Sleeping Bag", quantity=9))
    updated = catalog.update_inventory(product.id, 30)

    outcome = sync_service.reconcile(updated, 9, 30)

    assert outcome.action == EmbeddingAction.REFRESH
    assert vector_store.metadata[default_vector_id(product.id)]["quantity"] == 30


def test_vector_failure_keeps_catalog_change(catalog, sync_service, vector_store, make_product):
    product = make_product("Compass", quantity=0)
    updated = catalog.update_inventory(product.id, 15)
    vector_store.fail_upserts = True

    outcome = sync_service.reconcile(updated, 0, 15)

    assert outcome.action == EmbeddingAction.ADD
    assert outcome.applied is False
    assert "unavailable" in outcome.error
    stored = catalog.require_product(product.id)
    assert stored.quantity == 15
    assert stored.has_embedding is False


def test_single_product_jobs_are_recorded(catalog, sync_service, vector_store, make_product):
    product = make_product("Tarp", quantity=0)
    ok = sync_service.reconcile(catalog.update_inventory(product.id, 10), 0, 10)

    job = catalog.get_embedding_job(ok.job_id)
    assert job.job_type == JobType.SINGLE.value
    assert job.status == JobStatus.COMPLETED.value
    assert job.processed_items == 1
    assert job.product_id == product.id

    vector_store.fail_deletes = True
    failed = sync_service.reconcile(catalog.update_inventory(product.id, 0), 10, 0)
    job = catalog.get_embedding_job(failed.job_id)
    assert job.job_type == JobType.REMOVE.value
    assert job.status == JobStatus.FAILED.value
    assert job.error_message


def test_no_action_records_no_job(catalog, sync_service, make_product):
    product = make_product("Rope", quantity=10)
    outcome = sync_service.reconcile(catalog.update_inventory(product.id, 12), 10, 12)

    assert outcome.action == EmbeddingAction.NONE
    assert outcome.job_id is None
    assert catalog.list_embedding_jobs() == []


def test_resync_product_follows_current_state(catalog, sync_service, vector_store, make_product):
    product = make_product("Stove", quantity=10)
    assert sync_service.resync_product(product.id).action == EmbeddingAction.ADD
    assert sync_service.resync_product(product.id).action == EmbeddingAction.REFRESH

    catalog.update_inventory(product.id, 1)
    assert sync_service.resync_product(product.id).action == EmbeddingAction.REMOVE
    assert vector_store.count() == 0
    assert sync_service.resync_product(product.id).action == EmbeddingAction.NONE


def test_low_stock_maintenance(catalog, sync_service, vector_store, make_product):
    healthy = _embed(sync_service, catalog, make_product("Healthy", quantity=20))
    low = _embed(sync_service, catalog, make_product("Low", quantity=20))
    make_product("Low, never embedded", quantity=1)
    # stock dropped without reconciliation
    catalog.update_inventory(low.id, 2)

    result = sync_service.perform_low_stock_maintenance()

    assert result.success is True
    assert result.processed == 2
    assert result.embeddings_removed == 1
    assert vector_store.exists(default_vector_id(healthy.id))
    assert not vector_store.exists(default_vector_id(low.id))


def test_recover_stale_jobs(catalog, sync_service):
    job = catalog.create_embedding_job(JobType.BULK)
    catalog.update_embedding_job(job.id, status=JobStatus.RUNNING)

    assert sync_service.recover_stale_jobs(max_age_minutes=60) == []
    assert sync_service.recover_stale_jobs(max_age_minutes=0) == [job.id]
    assert catalog.get_embedding_job(job.id).status == JobStatus.FAILED.value


def test_maintenance_deactivates_out_of_stock_rows_left_active(catalog, sync_service, vector_store, make_product):
    product = _embed(sync_service, catalog, make_product("Lantern", quantity=10))
    # stock zeroed by a writer that bypassed update_inventory
    with catalog.db.session() as session:
        row = session.get(Product, product.id)
        row.quantity = 0
        row.is_active = True

    result = sync_service.perform_low_stock_maintenance()

    assert result.success is True
    assert result.deactivated == 1
    assert result.embeddings_removed == 1
    assert result.processed == 0
    stored = catalog.require_product(product.id)
    assert stored.is_active is False
    assert stored.has_embedding is False
    assert not vector_store.exists(default_vector_id(product.id))


def _index_state(catalog, vector_store, product_id):
    stored = catalog.require_product(product_id)
    key = default_vector_id(product_id)
    return (
        stored.has_embedding,
        stored.vector_id,
        vector_store.exists(key),
        vector_store.metadata.get(key),
        vector_store.count(),
    )


def test_reconcile_add_is_idempotent(catalog, sync_service, vector_store, make_product):
    product = make_product("Trekking Poles", quantity=0)
    updated = catalog.update_inventory(product.id, 10)

    first = sync_service.reconcile(updated, 0, 10)
    after_first = _index_state(catalog, vector_store, product.id)
    second = sync_service.reconcile(updated, 0, 10)

    assert first.applied and second.applied
    assert _index_state(catalog, vector_store, product.id) == after_first
    assert after_first[0] is True and after_first[2] is True and after_first[4] == 1


def test_reconcile_refresh_is_idempotent(catalog, sync_service, vector_store, make_product):
    product = _embed(sync_service, catalog, make_product("Dry Bag", quantity=9))
    updated = catalog.update_inventory(product.id, 30)

    sync_service.reconcile(updated, 9, 30)
    after_first = _index_state(catalog, vector_store, product.id)
    second = sync_service.reconcile(updated, 9, 30)

    assert second.action == EmbeddingAction.REFRESH
    assert _index_state(catalog, vector_store, product.id) == after_first
    assert after_first[3]["quantity"] == 30


def test_reconcile_remove_is_idempotent(catalog, sync_service, vector_store, make_product):
    product = _embed(sync_service, catalog, make_product("Fire Starter", quantity=8))
    updated = catalog.update_inventory(product.id, 0)

    sync_service.reconcile(updated, 8, 0)
    after_first = _index_state(catalog, vector_store, product.id)
    second = sync_service.reconcile(updated, 8, 0)

    assert second.error is None
    assert _index_state(catalog, vector_store, product.id) == after_first
    assert after_first == (False, None, False, None, 0)
