# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-15
# Updated: 2026-01-27
# Description: ProductVectorStore
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

# Filter language shared by every implementation:
#   {"field": {"$eq" | "$ne" | "$gt" | "$gte" | "$lt" | "$lte": value}, ...}
# Top-level keys are AND-ed together.
VectorFilter = Dict[str, Dict[str, Any]]

FILTER_OPERATORS = ("$eq", "$ne", "$gt", "$gte", "$lt", "$lte")


@dataclass
class VectorHit:
    id: str
    score: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def product_id(self) -> Optional[str]:
        return self.metadata.get("id")


def build_vector_metadata(product: Any) -> Dict[str, Any]:
    """Metadata stored next to a product vector; the searchable filter fields live here."""
    description = getattr(product, "description", None) or ""
    return {
        "id": product.id,
        "name": product.name,
        "description": description[:500],
        "price": float(product.price),
        "quantity": int(product.quantity),
        "category": product.category or "",
        "brand": product.brand or "",
        "sku": product.sku,
        "isActive": bool(product.is_active),
    }


@runtime_checkable
class ProductVectorStore(Protocol):
    def test_connection(self) -> bool:
        ...

    def upsert(
            self,
            vector_id: str,
            vector: Sequence[float],
            metadata: Dict[str, Any],
            document: Optional[str] = None,
    ) -> None:
        ...

    def delete(self, vector_id: str) -> None:
        ...

    def exists(self, vector_id: str) -> bool:
        ...

    def query(
            self,
            vector: Sequence[float],
            top_k: int = 10,
            where: Optional[VectorFilter] = None,
    ) -> List[VectorHit]:
        ...

    def count(self) -> int:
        ...
