# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-31
# Description: InventorySyncService.py
# -----------------------------------------------------------------------------
import functools
import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from catalog.CatalogModels import EmbeddingJob, JobStatus, JobType, Product, utcnow
from catalog.CatalogStore import CatalogStore
from catalog.errors import JobNotFound
from embedding.EmbeddingText import build_product_embedding_text
from embedding.ProductEmbedder import ProductEmbedder
from embedding.errors import InsufficientEmbeddingText
from inventory.ReconcilePolicy import decide_embedding_action, is_search_eligible
from inventory.types import BulkSyncResult, EmbeddingAction, MaintenanceResult, ReconcileOutcome
from settings import (
    BULK_DEFAULTS,
    LOW_STOCK_THRESHOLD,
    MAINTENANCE_BATCH_SIZE,
    MIN_EMBED_TEXT_CHARS,
    STALE_JOB_MINUTES,
    TRACK_SINGLE_JOBS,
)
from utility.logging_utils import get_class_logger
from vectorstore.ProductVectorStore import ProductVectorStore, build_vector_metadata

_SINGLE_JOB_TYPES = {
    EmbeddingAction.ADD: JobType.SINGLE,
    EmbeddingAction.REFRESH: JobType.UPDATE,
    EmbeddingAction.REMOVE: JobType.REMOVE,
}

SYNC_MODES = ("full", "incremental")


def _batches(items: Sequence[Product], size: int) -> Iterator[Sequence[Product]]:
    for i in range(0, len(items), size):
        yield items[i:i + size]


@dataclass
class InventorySyncService:
    """
    Keeps the vector index consistent with the catalog.

    Catalog writes commit first; the vector side is applied afterwards on a
    best-effort basis. Any drift left behind by a failure is healed by the
    next reconciliation of that product or by a bulk run.
    """

    catalog: CatalogStore
    embedder: ProductEmbedder
    vector_store: ProductVectorStore
    low_stock_threshold: int = LOW_STOCK_THRESHOLD
    min_text_chars: int = MIN_EMBED_TEXT_CHARS
    track_single_jobs: bool = TRACK_SINGLE_JOBS
    sleep: Callable[[float], None] = time.sleep
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    # ------------------------------------------------------------------
    # Single product
    # ------------------------------------------------------------------
    def decide(self, product: Product, previous_quantity: int, new_quantity: int) -> EmbeddingAction:
        return decide_embedding_action(
            previous_quantity,
            new_quantity,
            has_embedding=bool(product.has_embedding),
            has_vector_entry=product.has_vector_entry,
            low_stock_threshold=self.low_stock_threshold,
        )

    def _embedding_text(self, product: Product) -> str:
        text = build_product_embedding_text(product)
        if len(text.strip()) < self.min_text_chars:
            raise InsufficientEmbeddingText(product.id, len(text.strip()), self.min_text_chars)
        return text

    def _upsert_vector(self, product: Product, text: Optional[str] = None) -> str:
        text = text if text is not None else self._embedding_text(product)
        vector = self.embedder.embed_text(text)
        vector_id = product.vector_key
        self.vector_store.upsert(vector_id, vector, build_vector_metadata(product), document=text)
        self.catalog.mark_embedded(product.id, vector_id)
        return vector_id

    def _remove_vector(self, product: Product) -> str:
        vector_id = product.vector_key
        self.vector_store.delete(vector_id)
        self.catalog.mark_not_embedded(product.id)
        return vector_id

    def apply_action(self, product: Product, action: EmbeddingAction) -> Optional[str]:
        """Execute an action against the index + catalog flags. Returns the vector id touched."""
        if action in (EmbeddingAction.ADD, EmbeddingAction.REFRESH):
            return self._upsert_vector(product)
        if action == EmbeddingAction.REMOVE:
            return self._remove_vector(product)
        return None

    def _begin_single_job(self, action: EmbeddingAction, product_id: str) -> Optional[EmbeddingJob]:
        if not self.track_single_jobs or action == EmbeddingAction.NONE:
            return None
        try:
            job = self.catalog.create_embedding_job(_SINGLE_JOB_TYPES[action], total_items=1, product_id=product_id)
            return self.catalog.update_embedding_job(job.id, status=JobStatus.RUNNING)
        except Exception as e:
            self.logger.warning("Could not record embedding job for %s: %s", product_id, e)
            return None

    def _finish_single_job(self, job: Optional[EmbeddingJob], error: Optional[str]) -> None:
        if job is None:
            return
        try:
            if error:
                self.catalog.update_embedding_job(job.id, status=JobStatus.FAILED, error_message=error)
            else:
                self.catalog.update_embedding_job(job.id, status=JobStatus.COMPLETED, processed_items=1)
        except Exception as e:
            self.logger.warning("Could not finish embedding job %s: %s", job.id, e)

    def _run_action(self, product: Product, action: EmbeddingAction) -> ReconcileOutcome:
        outcome = ReconcileOutcome(product_id=product.id, action=action)
        if action == EmbeddingAction.NONE:
            return outcome

        job = self._begin_single_job(action, product.id)
        outcome.job_id = job.id if job else None
        try:
            outcome.vector_id = self.apply_action(product, action)
            outcome.applied = True
            self.logger.info("Embedding %s applied for product %s", action.value, product.id)
        except Exception as e:
            outcome.error = str(e)
            self.logger.error(
                "Embedding %s failed for product %s (catalog change kept): %s",
                action.value, product.id, e, exc_info=True,
            )
        self._finish_single_job(job, outcome.error)
        return outcome

    def reconcile(self, product: Product, previous_quantity: int, new_quantity: int) -> ReconcileOutcome:
        """
        Bring one product's vector in line with a quantity change that has
        already been committed. Never raises for index/provider failures.
        """
        action = self.decide(product, previous_quantity, new_quantity)
        self.logger.debug(
            "Reconcile %s: qty %d -> %d => %s", product.id, previous_quantity, new_quantity, action.value
        )
        return self._run_action(product, action)

    def resync_product(self, product_id: str) -> ReconcileOutcome:
        """
        Re-derive a product's vector from its current state, used after
        catalog edits: eligible products are (re)embedded, others removed.
        """
        product = self.catalog.require_product(product_id)
        if is_search_eligible(product.quantity, product.is_active, self.low_stock_threshold):
            action = EmbeddingAction.REFRESH if product.has_embedding else EmbeddingAction.ADD
        elif product.has_vector_entry:
            action = EmbeddingAction.REMOVE
        else:
            action = EmbeddingAction.NONE
        return self._run_action(product, action)

    # ------------------------------------------------------------------
    # Bulk job
    # ------------------------------------------------------------------
    def start_bulk_job(self) -> EmbeddingJob:
        job = self.catalog.create_embedding_job(JobType.BULK)
        self.logger.info("Bulk embedding job %s created (PENDING)", job.id)
        return job

    def _eligible(self, product: Product) -> bool:
        return is_search_eligible(product.quantity, product.is_active, self.low_stock_threshold)

    def _partition(self, mode: str) -> Tuple[List[Product], List[Product]]:
        products = self.catalog.get_all_products()
        eligible = [p for p in products if self._eligible(p)]
        ineligible = [p for p in products if not self._eligible(p)]

        if mode == "incremental":
            needing = {p.id for p in self.catalog.get_products_needing_embedding()}
            eligible = [p for p in eligible if p.id in needing]
            ineligible = [p for p in ineligible if p.has_vector_entry]

        return eligible, ineligible

    def _bulk_embed_one(self, product_id: str, result: BulkSyncResult) -> None:
        try:
            product = self.catalog.get_product(product_id)
            if product is None or not self._eligible(product):
                result.skipped += 1
                self.logger.debug("Skipping %s: gone or no longer eligible", product_id)
                return
            try:
                text = self._embedding_text(product)
            except InsufficientEmbeddingText as e:
                result.skipped += 1
                self.logger.warning("Skipping %s: %s", product_id, e)
                return

            was_embedded = bool(product.has_embedding)
            self._upsert_vector(product, text)
            result.successful += 1
            if was_embedded:
                result.updated += 1
            else:
                result.added += 1
        except Exception as e:
            result.failed += 1
            result.failures.append({"product_id": product_id, "error": str(e)})
            self.logger.error("Embedding failed for product %s: %s", product_id, e)
        finally:
            result.processed += 1

    def _bulk_remove_one(self, product_id: str, result: BulkSyncResult, sweep_index: bool = False) -> None:
        """
        Remove an ineligible product's vector. With `sweep_index` the index
        itself is checked as well, which catches vectors whose catalog flags
        were never set (upsert landed, mark_embedded failed).
        """
        try:
            product = self.catalog.get_product(product_id)
            if product is None or self._eligible(product):
                result.skipped += 1
                return
            if not product.has_vector_entry and not (sweep_index and self.vector_store.exists(product.vector_key)):
                result.skipped += 1
                return
            if not product.has_vector_entry:
                self.logger.warning("Removing orphaned vector %s for product %s", product.vector_key, product_id)
            self._remove_vector(product)
            result.successful += 1
            result.removed += 1
        except Exception as e:
            result.failed += 1
            result.failures.append({"product_id": product_id, "error": str(e)})
            self.logger.error("Embedding removal failed for product %s: %s", product_id, e)
        finally:
            result.processed += 1

    def run_bulk_sync(
            self,
            batch_size: Optional[int] = None,
            inter_batch_delay: Optional[float] = None,
            *,
            mode: str = "full",
            job_id: Optional[str] = None,
            progress_every: Optional[int] = None,
    ) -> BulkSyncResult:
        """
        Rebuild the index from the catalog.

        Eligible products (active, not low stock) are embedded and upserted;
        everything else has its vector removed. Items run one at a time,
        batches are spaced by `inter_batch_delay` seconds. Per-item failures
        are counted and the run continues; anything else ends the job FAILED.
        The outcome is returned, never raised.
        """
        if mode not in SYNC_MODES:
            raise ValueError(f"mode must be one of {SYNC_MODES}, got {mode!r}")

        batch_size = batch_size or BULK_DEFAULTS["batch_size"]
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        delay = BULK_DEFAULTS["inter_batch_delay"] if inter_batch_delay is None else inter_batch_delay
        progress_every = progress_every or BULK_DEFAULTS["progress_every"]

        if job_id:
            job = self.catalog.get_embedding_job(job_id)
            if job is None:
                raise JobNotFound(job_id)
        else:
            job = self.start_bulk_job()

        result = BulkSyncResult(job_id=job.id, mode=mode)
        self.logger.info(
            "Bulk embedding sync (start) job=%s mode=%s batch_size=%d delay=%.2fs",
            job.id, mode, batch_size, delay,
        )

        try:
            self.catalog.update_embedding_job(job.id, status=JobStatus.RUNNING)

            eligible, ineligible = self._partition(mode)
            result.total = len(eligible) + len(ineligible)
            self.catalog.update_embedding_job(job.id, total_items=result.total)
            self.logger.info(
                "Bulk embedding sync: %d to embed, %d to remove/skip", len(eligible), len(ineligible)
            )

            work = [(self._bulk_embed_one, b) for b in _batches(eligible, batch_size)]
            remove_one = functools.partial(self._bulk_remove_one, sweep_index=(mode == "full"))
            work += [(remove_one, b) for b in _batches(ineligible, batch_size)]

            for index, (handler, batch) in enumerate(work):
                if index > 0 and delay > 0:
                    self.sleep(delay)
                for product in batch:
                    handler(product.id, result)
                    if result.processed % progress_every == 0:
                        self.catalog.update_embedding_job(job.id, processed_items=result.processed)
                self.logger.info("Bulk embedding sync: %d/%d processed", result.processed, result.total)

            self.catalog.update_embedding_job(
                job.id, status=JobStatus.COMPLETED, processed_items=result.processed
            )
        except Exception as e:
            result.success = False
            result.error = str(e)
            self.logger.exception("Bulk embedding sync job %s failed: %s", job.id, e)
            self._fail_job(job.id, result)

        self.logger.info("Bulk embedding sync (done) job=%s %s", job.id, result.message)
        return result

    def _fail_job(self, job_id: str, result: BulkSyncResult) -> None:
        try:
            current = self.catalog.get_embedding_job(job_id)
            processed = None
            if current is not None and current.processed_items <= result.processed <= current.total_items:
                processed = result.processed
            self.catalog.update_embedding_job(
                job_id, status=JobStatus.FAILED, processed_items=processed, error_message=result.error
            )
        except Exception as e:
            self.logger.error("Could not mark job %s FAILED: %s", job_id, e)

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------
    def perform_low_stock_maintenance(self, batch_size: int = MAINTENANCE_BATCH_SIZE) -> MaintenanceResult:
        """
        Deactivate out-of-stock rows still flagged active, then remove
        vectors of active products that dropped below the low-stock threshold.
        """
        result = MaintenanceResult()
        try:
            for product in self.catalog.get_out_of_stock_products():
                if not product.is_active:
                    continue
                try:
                    repaired = self.catalog.update_inventory(product.id, max(0, int(product.quantity)))
                    result.deactivated += 1
                    self.logger.warning("Deactivated out-of-stock product %s", product.id)
                    if repaired.has_vector_entry:
                        self._remove_vector(repaired)
                        result.embeddings_removed += 1
                except Exception as e:
                    result.failed += 1
                    self.logger.error("Could not deactivate %s: %s", product.id, e)

            low_stock = self.catalog.get_low_stock_products(self.low_stock_threshold)
            self.logger.info("Low-stock maintenance (start): %d product(s)", len(low_stock))

            for index, batch in enumerate(_batches(low_stock, batch_size)):
                if index > 0:
                    self.sleep(0.1)
                for product in batch:
                    result.processed += 1
                    if not product.has_vector_entry:
                        continue
                    try:
                        self._remove_vector(product)
                        result.embeddings_removed += 1
                    except Exception as e:
                        result.failed += 1
                        self.logger.error("Could not remove embedding for %s: %s", product.id, e)
        except Exception as e:
            result.success = False
            result.error = str(e)
            self.logger.exception("Low-stock maintenance failed: %s", e)

        self.logger.info(
            "Low-stock maintenance (done): processed=%d deactivated=%d removed=%d failed=%d",
            result.processed, result.deactivated, result.embeddings_removed, result.failed,
        )
        return result

    def recover_stale_jobs(self, max_age_minutes: int = STALE_JOB_MINUTES) -> List[str]:
        """Mark RUNNING jobs that made no progress for `max_age_minutes` as FAILED."""
        cutoff = utcnow() - timedelta(minutes=max_age_minutes)
        return self.catalog.fail_stale_jobs(
            cutoff,
            message=f"Abandoned: no progress since before {cutoff.isoformat(timespec='seconds')}",
        )
