# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: CatalogModels.py
# -----------------------------------------------------------------------------
"""
SQLAlchemy models for the product catalog and embedding jobs.

Job status flow:
    PENDING -> RUNNING -> COMPLETED | FAILED

COMPLETED and FAILED are terminal.
"""
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict

from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Index, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def utcnow() -> datetime:
    # Naive UTC so values compare cleanly after a SQLite round trip
    return datetime.now(timezone.utc).replace(tzinfo=None)


def new_id() -> str:
    return str(uuid.uuid4())


class JobStatus(str, Enum):
    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"


class JobType(str, Enum):
    SINGLE = "SINGLE"
    BULK = "BULK"
    REMOVE = "REMOVE"
    UPDATE = "UPDATE"


ALLOWED_TRANSITIONS = {
    JobStatus.PENDING: [JobStatus.RUNNING],
    JobStatus.RUNNING: [JobStatus.COMPLETED, JobStatus.FAILED],
    JobStatus.COMPLETED: [],  # Terminal state
    JobStatus.FAILED: [],  # Terminal state
}

TERMINAL_STATUSES = (JobStatus.COMPLETED, JobStatus.FAILED)


def can_transition(from_status: JobStatus, to_status: JobStatus) -> bool:
    """True when the job may move from `from_status` to `to_status`."""
    return to_status in ALLOWED_TRANSITIONS.get(JobStatus(from_status), [])


def default_vector_id(product_id: str) -> str:
    return f"product-{product_id}"


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


class Product(Base):
    """Catalog product.

    `is_active` mirrors `quantity > 0` and is written together with quantity.
    `has_embedding`, `last_embedded` and `vector_id` belong to the embedding
    sync and are only written through CatalogStore.mark_embedded /
    CatalogStore.mark_not_embedded.
    """
    __tablename__ = "products"
    __table_args__ = (
        Index("ix_products_active_quantity", "is_active", "quantity"),
        Index("ix_products_category", "category"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    sku = Column(String(64), nullable=False, unique=True)
    price = Column(Float, nullable=False)
    quantity = Column(Integer, nullable=False, default=0)
    category = Column(String(128), nullable=True)
    brand = Column(String(128), nullable=True)
    image_url = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    search_keywords = Column(Text, nullable=True)

    is_active = Column(Boolean, nullable=False, default=False)
    has_embedding = Column(Boolean, nullable=False, default=False)
    last_embedded = Column(DateTime, nullable=True)
    vector_id = Column(String(128), nullable=True, unique=True)

    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    @property
    def has_vector_entry(self) -> bool:
        return bool(self.has_embedding or self.vector_id)

    @property
    def vector_key(self) -> str:
        """Key of this product's entry in the vector index."""
        return self.vector_id or default_vector_id(self.id)

    def to_dict(self) -> Dict[str, Any]:
        """Convert product to dictionary representation"""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "sku": self.sku,
            "price": float(self.price),
            "quantity": int(self.quantity),
            "category": self.category,
            "brand": self.brand,
            "image_url": self.image_url,
            "tags": list(self.tags or []),
            "search_keywords": self.search_keywords,
            "is_active": bool(self.is_active),
            "has_embedding": bool(self.has_embedding),
            "last_embedded": _iso(self.last_embedded),
            "vector_id": self.vector_id,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Product {self.sku} qty={self.quantity} active={self.is_active}>"


class EmbeddingJob(Base):
    """One bulk or single-product embedding run, kept for observability."""
    __tablename__ = "embedding_jobs"
    __table_args__ = (
        Index("ix_embedding_jobs_status", "status"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    status = Column(String(16), nullable=False, default=JobStatus.PENDING.value)
    job_type = Column(String(16), nullable=False)
    product_id = Column(String(36), nullable=True)
    error_message = Column(Text, nullable=True)
    total_items = Column(Integer, nullable=False, default=0)
    processed_items = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)
    completed_at = Column(DateTime, nullable=True)

    @property
    def is_terminal(self) -> bool:
        return JobStatus(self.status) in TERMINAL_STATUSES

    def to_dict(self) -> Dict[str, Any]:
        """Convert job to dictionary representation"""
        return {
            "id": self.id,
            "status": self.status,
            "job_type": self.job_type,
            "product_id": self.product_id,
            "error_message": self.error_message,
            "total_items": int(self.total_items or 0),
            "processed_items": int(self.processed_items or 0),
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
            "completed_at": _iso(self.completed_at),
        }
