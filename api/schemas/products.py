# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: api/schemas/products.py
# -----------------------------------------------------------------------------
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from api.schemas.common import Envelope


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    sku: str = Field(..., min_length=1, max_length=64)
    price: float = Field(..., ge=0)
    quantity: int = Field(0, ge=0)
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    search_keywords: Optional[str] = None


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    sku: Optional[str] = Field(None, min_length=1, max_length=64)
    price: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    category: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = None
    tags: Optional[List[str]] = None
    search_keywords: Optional[str] = None


class ProductOut(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    sku: str
    price: float
    quantity: int
    category: Optional[str] = None
    brand: Optional[str] = None
    image_url: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    search_keywords: Optional[str] = None
    is_active: bool
    has_embedding: bool
    last_embedded: Optional[str] = None
    vector_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class ProductListResponse(Envelope):
    products: List[ProductOut]
    pagination: Pagination


class ProductResponse(Envelope):
    product: ProductOut
    embedding: Optional[Dict[str, Any]] = None


class ProductStatsResponse(Envelope):
    stats: Dict[str, Any]


class FacetResponse(Envelope):
    values: List[str]
