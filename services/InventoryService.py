# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-01
# Description: InventoryService.py
# -----------------------------------------------------------------------------
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence

from catalog.CatalogModels import Product, utcnow
from catalog.CatalogStore import CatalogStore
from catalog.errors import ProductNotFound
from chat.OllamaChat import OllamaChat
from inventory.types import InventoryUpdateResult
from services.InventorySyncService import InventorySyncService
from settings import INVENTORY_BATCH_DELAY_SECONDS, INVENTORY_BATCH_SIZE, LOW_STOCK_THRESHOLD
from utility.logging_utils import get_class_logger

EMBEDDING_COVERAGE_TARGET = 90.0

_REPORT_PROMPT = """Analyze this ecommerce inventory situation and provide 3-5 actionable recommendations:

Inventory Status:
- Total Products: {total_products}
- Active Products: {active_products}
- Low Stock Items: {low_stock_count}
- Out of Stock Items: {out_of_stock_count}
- Search Embedding Coverage: {embedding_coverage:.1f}%

Provide specific, actionable recommendations for inventory management. Focus on immediate actions and strategic improvements."""


def _stock_row(product: Product) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "sku": product.sku,
        "quantity": int(product.quantity),
        "category": product.category,
    }


@dataclass
class InventoryService:
    """
    Stock level changes and inventory reporting.

    Every quantity write is followed by a reconciliation of the product's
    vector; reconciliation failures are reported on the result but never
    undo the stock change.
    """

    catalog: CatalogStore
    sync_service: InventorySyncService
    chat_client: Optional[OllamaChat] = None
    low_stock_threshold: int = LOW_STOCK_THRESHOLD
    batch_size: int = INVENTORY_BATCH_SIZE
    batch_delay: float = INVENTORY_BATCH_DELAY_SECONDS
    sleep: Callable[[float], None] = time.sleep
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def update_inventory(
            self,
            product_id: str,
            quantity: int,
            *,
            update_embedding: bool = True,
    ) -> InventoryUpdateResult:
        """
        Raises ProductNotFound / ValueError; embedding problems land on the result.

        The previous quantity comes from the same transaction as the write,
        so the reconcile decision sees the transition that actually happened
        even when two writers race on one product.
        """
        previous_quantity, updated = self.catalog.set_inventory(product_id, quantity)

        result = InventoryUpdateResult(
            product_id=product_id,
            previous_quantity=previous_quantity,
            new_quantity=int(updated.quantity),
            was_active=previous_quantity > 0,
            is_active=bool(updated.is_active),
        )

        if update_embedding:
            outcome = self.sync_service.reconcile(updated, previous_quantity, int(updated.quantity))
            result.embedding_action = outcome.action.value
            result.embedding_applied = outcome.applied
            result.embedding_error = outcome.error

        self.logger.info(
            "Inventory %s: %d -> %d (active=%s, embedding=%s%s)",
            product_id, previous_quantity, result.new_quantity, result.is_active,
            result.embedding_action, " FAILED" if result.embedding_error else "",
        )
        return result

    def bulk_update(
            self,
            updates: Sequence[Dict[str, Any]],
            *,
            update_embeddings: bool = True,
    ) -> Dict[str, Any]:
        """Apply updates in small sequential batches; one bad item does not stop the rest."""
        results: List[InventoryUpdateResult] = []

        for start in range(0, len(updates), self.batch_size):
            if start > 0 and self.batch_delay > 0:
                self.sleep(self.batch_delay)
            for item in updates[start:start + self.batch_size]:
                product_id = str(item["product_id"])
                quantity = int(item["quantity"])
                try:
                    results.append(
                        self.update_inventory(product_id, quantity, update_embedding=update_embeddings)
                    )
                except (ProductNotFound, ValueError) as e:
                    self.logger.warning("Bulk inventory update skipped %s: %s", product_id, e)
                    results.append(
                        InventoryUpdateResult(product_id=product_id, new_quantity=quantity, success=False, error=str(e))
                    )

        successful = sum(1 for r in results if r.success)
        return {
            "results": [r.to_dict() for r in results],
            "summary": {
                "total": len(results),
                "successful": successful,
                "failed": len(results) - successful,
                "embeddings_updated": sum(1 for r in results if r.embedding_applied),
            },
        }

    def check_inventory(
            self,
            *,
            product_id: Optional[str] = None,
            sku: Optional[str] = None,
            threshold: Optional[int] = None,
    ) -> Dict[str, Any]:
        """One product's stock status, or the low-stock list when no product is named."""
        threshold = self.low_stock_threshold if threshold is None else threshold

        if product_id or sku:
            product = self.catalog.get_product(product_id) if product_id else self.catalog.get_product_by_sku(sku)
            if product is None:
                raise ProductNotFound(product_id or f"sku={sku}")
            return {
                "product": {
                    **_stock_row(product),
                    "is_active": bool(product.is_active),
                    "is_low_stock": 0 < product.quantity < threshold,
                    "is_out_of_stock": product.quantity <= 0,
                    "has_embedding": bool(product.has_embedding),
                }
            }

        low = self.catalog.get_low_stock_products(threshold)
        return {"threshold": threshold, "low_stock_products": [_stock_row(p) for p in low]}

    def _rule_recommendations(self, stats: Dict[str, Any], low: List[Product], out: List[Product]) -> List[str]:
        recommendations: List[str] = []
        if out:
            recommendations.append(
                f"URGENT: {len(out)} products are out of stock and need immediate restocking"
            )
        if low:
            recommendations.append(f"{len(low)} products are running low on stock")
        if stats["embedding_coverage"] < EMBEDDING_COVERAGE_TARGET:
            recommendations.append(
                f"Embedding coverage is {stats['embedding_coverage']:.1f}% - consider running full embedding sync"
            )
        return recommendations

    def _ai_recommendations(self, stats: Dict[str, Any], low_count: int, out_count: int) -> List[str]:
        if self.chat_client is None:
            return []
        prompt = _REPORT_PROMPT.format(
            total_products=stats["total_products"],
            active_products=stats["active_products"],
            low_stock_count=low_count,
            out_of_stock_count=out_count,
            embedding_coverage=stats["embedding_coverage"],
        )
        try:
            answer = self.chat_client.complete([{"role": "user", "content": prompt}])
        except Exception as e:
            self.logger.warning("AI inventory recommendations unavailable: %s", e)
            return []
        lines = [line.strip() for line in answer.splitlines() if line.strip()]
        return lines[:5]

    def generate_report(self, *, include_ai: bool = True) -> Dict[str, Any]:
        stats = self.catalog.get_product_stats(self.low_stock_threshold)
        low = self.catalog.get_low_stock_products(self.low_stock_threshold)
        out = self.catalog.get_out_of_stock_products()

        recommendations = self._rule_recommendations(stats, low, out)
        if include_ai:
            recommendations.extend(self._ai_recommendations(stats, len(low), len(out)))

        return {
            "generated_at": utcnow().isoformat(),
            "low_stock_threshold": self.low_stock_threshold,
            "stats": stats,
            "low_stock_products": [_stock_row(p) for p in low],
            "out_of_stock_products": [_stock_row(p) for p in out],
            "recommendations": recommendations,
        }
