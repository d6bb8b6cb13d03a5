# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Updated: 2026-02-09
# Description: search router
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_search_service
from api.schemas.search import SearchRequest, SearchResponse
from services.ProductSearchService import ProductSearchService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/search", tags=["search"])


@router.post("", response_model=SearchResponse)
def post_search(
    req: SearchRequest,
    svc: ProductSearchService = Depends(get_search_service),
) -> SearchResponse:
    query_text = (req.query or "").strip()
    if not query_text:
        raise HTTPException(status_code=400, detail="query must not be empty")
    if req.min_price is not None and req.max_price is not None and req.min_price > req.max_price:
        raise HTTPException(status_code=400, detail="min_price must not exceed max_price")

    logger.info("POST /api/search (start) query=%r max_results=%d", query_text, req.max_results)

    try:
        out: Dict[str, Any] = svc.search(
            query_text,
            max_results=req.max_results,
            category=req.category,
            brand=req.brand,
            min_price=req.min_price,
            max_price=req.max_price,
            in_stock_only=req.in_stock_only,
        )
    except Exception as e:
        logger.exception("Search failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Search failed: {e}")

    logger.info("POST /api/search (done) results=%d", out["total_found"])
    return SearchResponse(**out)
