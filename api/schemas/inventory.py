# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: api/schemas/inventory.py
# -----------------------------------------------------------------------------
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from api.schemas.common import Envelope


class InventoryUpdateRequest(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)
    update_embedding: bool = True


class InventoryUpdateResponse(Envelope):
    product_id: str
    previous_quantity: Optional[int] = None
    new_quantity: int
    was_active: Optional[bool] = None
    is_active: Optional[bool] = None
    embedding_action: str
    embedding_applied: bool
    embedding_error: Optional[str] = None
    error: Optional[str] = None


class BulkUpdateItem(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)


class BulkUpdateRequest(BaseModel):
    updates: List[BulkUpdateItem] = Field(..., min_length=1, max_length=1000)
    update_embeddings: bool = True


class BulkUpdateSummary(BaseModel):
    total: int
    successful: int
    failed: int
    embeddings_updated: int


class BulkUpdateResponse(Envelope):
    results: List[InventoryUpdateResponse]
    summary: BulkUpdateSummary


class StockRow(BaseModel):
    id: str
    name: str
    sku: str
    quantity: int
    category: Optional[str] = None


class ProductStockStatus(StockRow):
    is_active: bool
    is_low_stock: bool
    is_out_of_stock: bool
    has_embedding: bool


class InventoryCheckResponse(Envelope):
    product: Optional[ProductStockStatus] = None
    threshold: Optional[int] = None
    low_stock_products: Optional[List[StockRow]] = None


class InventoryReportResponse(Envelope):
    generated_at: str
    low_stock_threshold: int
    stats: Dict[str, Any]
    low_stock_products: List[StockRow]
    out_of_stock_products: List[StockRow]
    recommendations: List[str]


class MaintenanceResponse(Envelope):
    processed: int
    deactivated: int
    embeddings_removed: int
    failed: int
    error: Optional[str] = None
