# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-25
# Description: CatalogStore.py
# -----------------------------------------------------------------------------
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import IntegrityError

from catalog.CatalogDatabase import CatalogDatabase
from catalog.CatalogModels import (
    EmbeddingJob,
    JobStatus,
    JobType,
    Product,
    can_transition,
    default_vector_id,
    new_id,
    utcnow,
)
from catalog.errors import DuplicateSku, InvalidJobTransition, JobNotFound, ProductNotFound
from utility.logging_utils import get_class_logger


# Fields catalog writers may change through update_product.
# quantity/is_active go through update_inventory; embedding flags through mark_*.
CATALOG_FIELDS = (
    "name",
    "description",
    "sku",
    "price",
    "category",
    "brand",
    "image_url",
    "tags",
    "search_keywords",
)


def _normalise_tags(tags: Optional[Iterable[str]]) -> List[str]:
    if not tags:
        return []
    return sorted({t.strip() for t in tags if t and t.strip()})


class CatalogStore:
    """
    Relational product catalog plus embedding-job bookkeeping.

    Every method runs in its own short session; returned ORM objects are
    detached snapshots.
    """

    def __init__(self, db: CatalogDatabase, *, logger: Optional[logging.Logger] = None):
        self.db = db
        self.logger = logger or get_class_logger(self.__class__)

    # ------------------------------------------------------------------
    # Schema / health
    # ------------------------------------------------------------------
    def create_schema(self) -> None:
        self.db.create_schema()

    def test_connection(self) -> bool:
        try:
            return self.db.ping()
        except Exception as e:
            self.logger.error("Catalog database connection failed: %s", e)
            return False

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------
    def create_product(
            self,
            *,
            name: str,
            sku: str,
            price: float,
            quantity: int = 0,
            description: Optional[str] = None,
            category: Optional[str] = None,
            brand: Optional[str] = None,
            image_url: Optional[str] = None,
            tags: Optional[Iterable[str]] = None,
            search_keywords: Optional[str] = None,
    ) -> Product:
        if quantity < 0:
            raise ValueError("quantity must be >= 0")
        if price < 0:
            raise ValueError("price must be >= 0")

        now = utcnow()
        product = Product(
            id=new_id(),
            name=name,
            sku=sku,
            price=float(price),
            quantity=int(quantity),
            is_active=quantity > 0,
            description=description,
            category=category,
            brand=brand,
            image_url=image_url,
            tags=_normalise_tags(tags),
            search_keywords=search_keywords,
            has_embedding=False,
            created_at=now,
            updated_at=now,
        )
        try:
            with self.db.session() as session:
                if session.query(Product.id).filter(Product.sku == sku).first():
                    raise DuplicateSku(sku)
                session.add(product)
        except IntegrityError as e:
            raise DuplicateSku(sku) from e

        self.logger.info("Created product %s (sku=%s, qty=%d)", product.id, sku, quantity)
        return product

    def update_product(self, product_id: str, **fields: Any) -> Product:
        """Update catalog attributes. Inventory and embedding fields are rejected."""
        unknown = sorted(set(fields) - set(CATALOG_FIELDS))
        if unknown:
            raise ValueError(f"update_product cannot change fields: {unknown}")
        if "price" in fields and fields["price"] is not None and fields["price"] < 0:
            raise ValueError("price must be >= 0")

        try:
            with self.db.session() as session:
                product = session.get(Product, product_id)
                if product is None:
                    raise ProductNotFound(product_id)

                new_sku = fields.get("sku")
                if new_sku and new_sku != product.sku:
                    clash = session.query(Product.id).filter(Product.sku == new_sku).first()
                    if clash:
                        raise DuplicateSku(new_sku)

                for key, value in fields.items():
                    if key == "tags":
                        value = _normalise_tags(value)
                    setattr(product, key, value)
                product.updated_at = utcnow()
        except IntegrityError as e:
            raise DuplicateSku(str(fields.get("sku"))) from e

        return product

    def get_product(self, product_id: str) -> Optional[Product]:
        with self.db.session() as session:
            return session.get(Product, product_id)

    def require_product(self, product_id: str) -> Product:
        product = self.get_product(product_id)
        if product is None:
            raise ProductNotFound(product_id)
        return product

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        with self.db.session() as session:
            return session.query(Product).filter(Product.sku == sku).first()

    def get_products_by_ids(self, product_ids: Sequence[str]) -> List[Product]:
        """Products for the given ids, in the order the ids were given. Unknown ids are dropped."""
        if not product_ids:
            return []
        with self.db.session() as session:
            rows = session.query(Product).filter(Product.id.in_(list(product_ids))).all()
        by_id = {p.id: p for p in rows}
        return [by_id[pid] for pid in product_ids if pid in by_id]

    def set_inventory(self, product_id: str, quantity: int) -> Tuple[int, Product]:
        """
        Set quantity and derive is_active in the same write.

        Returns (previous_quantity, product). The previous value is read in
        the writing transaction with the row locked (FOR UPDATE where the
        database supports it), so concurrent writers each see the quantity
        they actually replaced.
        """
        if quantity < 0:
            raise ValueError("quantity must be >= 0")

        with self.db.session() as session:
            product = session.get(Product, product_id, with_for_update=True)
            if product is None:
                raise ProductNotFound(product_id)
            previous = int(product.quantity)
            product.quantity = int(quantity)
            product.is_active = quantity > 0
            product.updated_at = utcnow()

        self.logger.debug(
            "Inventory updated: %s qty=%d->%d active=%s", product_id, previous, quantity, product.is_active
        )
        return previous, product

    def update_inventory(self, product_id: str, quantity: int) -> Product:
        return self.set_inventory(product_id, quantity)[1]

    def _filtered_query(self, session, *, is_active, has_stock, category):
        query = session.query(Product)
        if is_active is not None:
            query = query.filter(Product.is_active == is_active)
        if has_stock:
            query = query.filter(Product.quantity > 0)
        if category:
            query = query.filter(Product.category == category)
        return query

    def get_all_products(
            self,
            *,
            is_active: Optional[bool] = None,
            has_stock: bool = False,
            category: Optional[str] = None,
            limit: Optional[int] = None,
            offset: int = 0,
    ) -> List[Product]:
        with self.db.session() as session:
            query = self._filtered_query(session, is_active=is_active, has_stock=has_stock, category=category)
            query = query.order_by(Product.created_at.asc(), Product.id.asc())
            if offset:
                query = query.offset(offset)
            if limit is not None:
                query = query.limit(limit)
            return query.all()

    def count_products(
            self,
            *,
            is_active: Optional[bool] = None,
            has_stock: bool = False,
            category: Optional[str] = None,
    ) -> int:
        with self.db.session() as session:
            return self._filtered_query(
                session, is_active=is_active, has_stock=has_stock, category=category
            ).count()

    def get_products_needing_embedding(self) -> List[Product]:
        """Active, in-stock products that were never embedded or changed since."""
        with self.db.session() as session:
            return (
                session.query(Product)
                .filter(
                    Product.is_active.is_(True),
                    Product.quantity > 0,
                    or_(
                        Product.has_embedding.is_(False),
                        Product.last_embedded.is_(None),
                        and_(Product.has_embedding.is_(True), Product.updated_at > Product.last_embedded),
                    ),
                )
                .order_by(Product.created_at.asc(), Product.id.asc())
                .all()
            )

    def get_low_stock_products(self, threshold: int) -> List[Product]:
        with self.db.session() as session:
            return (
                session.query(Product)
                .filter(Product.is_active.is_(True), Product.quantity < threshold)
                .order_by(Product.quantity.asc(), Product.name.asc())
                .all()
            )

    def get_out_of_stock_products(self) -> List[Product]:
        with self.db.session() as session:
            return (
                session.query(Product)
                .filter(Product.quantity <= 0)
                .order_by(Product.name.asc())
                .all()
            )

    # ------------------------------------------------------------------
    # Embedding flags (InventorySyncService only)
    # ------------------------------------------------------------------
    def mark_embedded(self, product_id: str, vector_id: Optional[str] = None) -> Product:
        with self.db.session() as session:
            product = session.get(Product, product_id)
            if product is None:
                raise ProductNotFound(product_id)
            now = utcnow()
            product.has_embedding = True
            product.last_embedded = now
            product.vector_id = vector_id or product.vector_id or default_vector_id(product_id)
            product.updated_at = now
        return product

    def mark_not_embedded(self, product_id: str) -> Product:
        with self.db.session() as session:
            product = session.get(Product, product_id)
            if product is None:
                raise ProductNotFound(product_id)
            product.has_embedding = False
            product.last_embedded = None
            product.vector_id = None
            product.updated_at = utcnow()
        return product

    # ------------------------------------------------------------------
    # Embedding jobs
    # ------------------------------------------------------------------
    def create_embedding_job(
            self,
            job_type: JobType,
            *,
            total_items: int = 0,
            product_id: Optional[str] = None,
    ) -> EmbeddingJob:
        if total_items < 0:
            raise ValueError("total_items must be >= 0")
        now = utcnow()
        job = EmbeddingJob(
            id=new_id(),
            status=JobStatus.PENDING.value,
            job_type=JobType(job_type).value,
            product_id=product_id,
            total_items=total_items,
            processed_items=0,
            created_at=now,
            updated_at=now,
        )
        with self.db.session() as session:
            session.add(job)
        self.logger.debug("Created %s embedding job %s", job.job_type, job.id)
        return job

    def update_embedding_job(
            self,
            job_id: str,
            *,
            status: Optional[JobStatus] = None,
            processed_items: Optional[int] = None,
            total_items: Optional[int] = None,
            error_message: Optional[str] = None,
    ) -> EmbeddingJob:
        """
        Apply a progress / status update.

        Raises InvalidJobTransition for an illegal status change or any update to
        a finished job, ValueError when processed_items would go backwards or
        exceed total_items.
        """
        with self.db.session() as session:
            job = session.get(EmbeddingJob, job_id)
            if job is None:
                raise JobNotFound(job_id)

            current = JobStatus(job.status)
            target = JobStatus(status) if status is not None else current

            if job.is_terminal:
                raise InvalidJobTransition(job_id, current.value, target.value)
            if target != current and not can_transition(current, target):
                raise InvalidJobTransition(job_id, current.value, target.value)

            new_total = job.total_items if total_items is None else int(total_items)
            new_processed = job.processed_items if processed_items is None else int(processed_items)

            if new_processed < job.processed_items:
                raise ValueError(
                    f"processed_items cannot decrease ({job.processed_items} -> {new_processed})"
                )
            if new_processed > new_total:
                raise ValueError(
                    f"processed_items ({new_processed}) cannot exceed total_items ({new_total})"
                )

            now = utcnow()
            job.total_items = new_total
            job.processed_items = new_processed
            job.status = target.value
            if error_message is not None:
                job.error_message = error_message
            if target != current and job.is_terminal:
                job.completed_at = now
            job.updated_at = now

        return job

    def get_embedding_job(self, job_id: str) -> Optional[EmbeddingJob]:
        with self.db.session() as session:
            return session.get(EmbeddingJob, job_id)

    def list_embedding_jobs(
            self,
            *,
            status: Optional[JobStatus] = None,
            job_type: Optional[JobType] = None,
            limit: int = 20,
    ) -> List[EmbeddingJob]:
        with self.db.session() as session:
            query = session.query(EmbeddingJob)
            if status is not None:
                query = query.filter(EmbeddingJob.status == JobStatus(status).value)
            if job_type is not None:
                query = query.filter(EmbeddingJob.job_type == JobType(job_type).value)
            return query.order_by(EmbeddingJob.created_at.desc()).limit(limit).all()

    def get_active_embedding_jobs(self) -> List[EmbeddingJob]:
        with self.db.session() as session:
            return (
                session.query(EmbeddingJob)
                .filter(EmbeddingJob.status.in_([JobStatus.PENDING.value, JobStatus.RUNNING.value]))
                .order_by(EmbeddingJob.created_at.asc())
                .all()
            )

    def fail_stale_jobs(self, older_than: datetime, message: str) -> List[str]:
        """Mark RUNNING jobs with no progress since `older_than` as FAILED. Returns their ids."""
        with self.db.session() as session:
            stale = (
                session.query(EmbeddingJob)
                .filter(
                    EmbeddingJob.status == JobStatus.RUNNING.value,
                    EmbeddingJob.updated_at < older_than,
                )
                .all()
            )
            now = utcnow()
            for job in stale:
                job.status = JobStatus.FAILED.value
                job.error_message = message
                job.completed_at = now
                job.updated_at = now
            ids = [job.id for job in stale]

        if ids:
            self.logger.warning("Marked %d stale embedding job(s) FAILED: %s", len(ids), ids)
        return ids

    # ------------------------------------------------------------------
    # Statistics / facets
    # ------------------------------------------------------------------
    def get_product_stats(self, low_stock_threshold: int) -> Dict[str, Any]:
        with self.db.session() as session:
            total = session.query(func.count(Product.id)).scalar() or 0
            active = session.query(func.count(Product.id)).filter(Product.is_active.is_(True)).scalar() or 0
            embedded = session.query(func.count(Product.id)).filter(Product.has_embedding.is_(True)).scalar() or 0
            low_stock = (
                session.query(func.count(Product.id))
                .filter(Product.quantity > 0, Product.quantity < low_stock_threshold)
                .scalar() or 0
            )
            out_of_stock = session.query(func.count(Product.id)).filter(Product.quantity <= 0).scalar() or 0

        return {
            "total_products": total,
            "active_products": active,
            "products_with_embeddings": embedded,
            "low_stock_products": low_stock,
            "out_of_stock_products": out_of_stock,
            # share of sellable products that are searchable
            "embedding_coverage": round(embedded / active * 100.0, 1) if active else 0.0,
        }

    def _distinct_active(self, column) -> List[str]:
        with self.db.session() as session:
            rows = (
                session.query(column)
                .filter(column.isnot(None), Product.is_active.is_(True))
                .distinct()
                .all()
            )
        return sorted(v for (v,) in rows if v)

    def get_categories(self) -> List[str]:
        return self._distinct_active(Product.category)

    def get_brands(self) -> List[str]:
        return self._distinct_active(Product.brand)
