# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: api/schemas/search.py
# -----------------------------------------------------------------------------
from typing import List, Optional

from pydantic import BaseModel, Field

from api.schemas.common import Envelope


class SearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    max_results: int = Field(10, ge=1, le=20)
    category: Optional[str] = None
    brand: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    in_stock_only: bool = True


class ProductHit(BaseModel):
    id: str
    name: str
    description: str = ""
    price: float
    quantity: int
    category: Optional[str] = None
    brand: Optional[str] = None
    sku: str
    image_url: Optional[str] = None
    relevance_score: float


class PriceRange(BaseModel):
    min: Optional[float] = None
    max: Optional[float] = None


class SearchFilters(BaseModel):
    category: Optional[str] = None
    brand: Optional[str] = None
    price_range: Optional[PriceRange] = None


class SearchResponse(Envelope):
    query: str
    search_terms: str
    products: List[ProductHit]
    total_found: int
    filters: SearchFilters
    in_stock_only: bool
    suggestions: List[str] = Field(default_factory=list)
