# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: CatalogService.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from catalog.CatalogStore import CatalogStore
from services.InventorySyncService import InventorySyncService
from settings import LOW_STOCK_THRESHOLD
from utility.logging_utils import get_class_logger


@dataclass
class CatalogService:
    """
    Catalog reads and writes for the API. New products and edited ones are
    handed to the sync service so their vector follows the catalog row.
    """

    catalog: CatalogStore
    sync_service: InventorySyncService
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    def list_products(
            self,
            *,
            page: int = 1,
            limit: int = 20,
            category: Optional[str] = None,
            is_active: Optional[bool] = True,
    ) -> Dict[str, Any]:
        page = max(1, page)
        offset = (page - 1) * limit
        products = self.catalog.get_all_products(
            is_active=is_active, category=category, limit=limit, offset=offset
        )
        total = self.catalog.count_products(is_active=is_active, category=category)
        return {
            "products": [p.to_dict() for p in products],
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "pages": (total + limit - 1) // limit if limit else 0,
            },
        }

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self.catalog.require_product(product_id).to_dict()

    def create_product(self, data: Dict[str, Any]) -> Dict[str, Any]:
        product = self.catalog.create_product(**data)
        outcome = self.sync_service.resync_product(product.id)
        if outcome.error:
            self.logger.warning("Product %s created without embedding: %s", product.id, outcome.error)
        return {
            "product": self.catalog.require_product(product.id).to_dict(),
            "embedding": outcome.to_dict(),
        }

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        self.catalog.update_product(product_id, **changes)
        outcome = self.sync_service.resync_product(product_id)
        return {
            "product": self.catalog.require_product(product_id).to_dict(),
            "embedding": outcome.to_dict(),
        }

    def stats(self) -> Dict[str, Any]:
        return self.catalog.get_product_stats(LOW_STOCK_THRESHOLD)

    def categories(self):
        return self.catalog.get_categories()

    def brands(self):
        return self.catalog.get_brands()
