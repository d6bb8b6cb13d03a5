# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: products.py
# -----------------------------------------------------------------------------
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_catalog_service
from api.schemas.products import (
    FacetResponse,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductStatsResponse,
    ProductUpdate,
)
from catalog.errors import DuplicateSku, ProductNotFound
from services.CatalogService import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["products"])


@router.get("/products", response_model=ProductListResponse)
def list_products(
        page: int = Query(1, ge=1),
        limit: int = Query(20, ge=1, le=100),
        category: Optional[str] = Query(None),
        is_active: Optional[bool] = Query(True),
        svc: CatalogService = Depends(get_catalog_service),
) -> ProductListResponse:
    try:
        out = svc.list_products(page=page, limit=limit, category=category, is_active=is_active)
    except Exception as e:
        logger.exception("list_products failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch products: {e}")
    return ProductListResponse(**out)


@router.post("/products", response_model=ProductResponse, status_code=201)
def create_product(
        req: ProductCreate,
        svc: CatalogService = Depends(get_catalog_service),
) -> ProductResponse:
    logger.info("POST /api/products (start) sku=%s", req.sku)
    try:
        out = svc.create_product(req.model_dump())
    except DuplicateSku as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("POST /api/products (done) id=%s", out["product"]["id"])
    return ProductResponse(**out)


@router.get("/products/stats", response_model=ProductStatsResponse)
def product_stats(svc: CatalogService = Depends(get_catalog_service)) -> ProductStatsResponse:
    try:
        return ProductStatsResponse(stats=svc.stats())
    except Exception as e:
        logger.exception("product_stats failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch product statistics: {e}")


@router.get("/products/{product_id}", response_model=ProductResponse)
def get_product(product_id: str, svc: CatalogService = Depends(get_catalog_service)) -> ProductResponse:
    try:
        return ProductResponse(product=svc.get_product(product_id))
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/products/{product_id}", response_model=ProductResponse)
def update_product(
        product_id: str,
        req: ProductUpdate,
        svc: CatalogService = Depends(get_catalog_service),
) -> ProductResponse:
    changes = req.model_dump(exclude_unset=True)
    if not changes:
        raise HTTPException(status_code=400, detail="no fields to update")
    try:
        return ProductResponse(**svc.update_product(product_id, changes))
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except DuplicateSku as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/categories", response_model=FacetResponse)
def list_categories(svc: CatalogService = Depends(get_catalog_service)) -> FacetResponse:
    try:
        return FacetResponse(values=svc.categories())
    except Exception as e:
        logger.exception("list_categories failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch categories: {e}")


@router.get("/brands", response_model=FacetResponse)
def list_brands(svc: CatalogService = Depends(get_catalog_service)) -> FacetResponse:
    try:
        return FacetResponse(values=svc.brands())
    except Exception as e:
        logger.exception("list_brands failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch brands: {e}")
