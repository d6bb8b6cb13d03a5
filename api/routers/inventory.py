# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: inventory.py
# -----------------------------------------------------------------------------
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_inventory_service, get_sync_service
from api.schemas.inventory import (
    BulkUpdateRequest,
    BulkUpdateResponse,
    InventoryCheckResponse,
    InventoryReportResponse,
    InventoryUpdateRequest,
    InventoryUpdateResponse,
    MaintenanceResponse,
)
from catalog.errors import ProductNotFound
from services.InventoryService import InventoryService
from services.InventorySyncService import InventorySyncService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post("/update", response_model=InventoryUpdateResponse)
def post_inventory_update(
        req: InventoryUpdateRequest,
        svc: InventoryService = Depends(get_inventory_service),
) -> InventoryUpdateResponse:
    logger.info("POST /api/inventory/update (start) product=%s qty=%d", req.product_id, req.quantity)
    try:
        result = svc.update_inventory(req.product_id, req.quantity, update_embedding=req.update_embedding)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Inventory update failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Inventory update failed: {e}")

    logger.info("POST /api/inventory/update (done) embedding=%s", result.embedding_action)
    return InventoryUpdateResponse(**result.to_dict())


@router.post("/bulk-update", response_model=BulkUpdateResponse)
def post_bulk_update(
        req: BulkUpdateRequest,
        svc: InventoryService = Depends(get_inventory_service),
) -> BulkUpdateResponse:
    logger.info("POST /api/inventory/bulk-update (start) items=%d", len(req.updates))
    try:
        out = svc.bulk_update(
            [u.model_dump() for u in req.updates],
            update_embeddings=req.update_embeddings,
        )
    except Exception as e:
        logger.exception("Bulk inventory update failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Bulk inventory update failed: {e}")

    logger.info("POST /api/inventory/bulk-update (done) summary=%s", out["summary"])
    return BulkUpdateResponse(**out)


@router.get("/check", response_model=InventoryCheckResponse)
def get_inventory_check(
        product_id: Optional[str] = Query(None),
        sku: Optional[str] = Query(None),
        threshold: Optional[int] = Query(None, ge=0),
        svc: InventoryService = Depends(get_inventory_service),
) -> InventoryCheckResponse:
    try:
        out = svc.check_inventory(product_id=product_id, sku=sku, threshold=threshold)
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("Inventory check failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Inventory check failed: {e}")
    return InventoryCheckResponse(**out)


@router.get("/report", response_model=InventoryReportResponse)
def get_inventory_report(
        include_ai: bool = Query(True, description="Ask the chat model for extra recommendations"),
        svc: InventoryService = Depends(get_inventory_service),
) -> InventoryReportResponse:
    logger.info("GET /api/inventory/report (start) include_ai=%s", include_ai)
    try:
        out = svc.generate_report(include_ai=include_ai)
    except Exception as e:
        logger.exception("Inventory report failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Inventory report failed: {e}")
    logger.info("GET /api/inventory/report (done)")
    return InventoryReportResponse(**out)


@router.post("/maintenance", response_model=MaintenanceResponse)
def post_inventory_maintenance(
        svc: InventorySyncService = Depends(get_sync_service),
) -> MaintenanceResponse:
    logger.info("POST /api/inventory/maintenance (start)")
    result = svc.perform_low_stock_maintenance()
    if not result.success:
        raise HTTPException(status_code=500, detail=f"Maintenance failed: {result.error}")
    logger.info("POST /api/inventory/maintenance (done) removed=%d", result.embeddings_removed)
    return MaintenanceResponse(
        processed=result.processed,
        deactivated=result.deactivated,
        embeddings_removed=result.embeddings_removed,
        failed=result.failed,
    )
