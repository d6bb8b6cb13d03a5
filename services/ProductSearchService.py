# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: ProductSearchService.py
# -----------------------------------------------------------------------------
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from catalog.CatalogModels import Product
from catalog.CatalogStore import CatalogStore
from embedding.ProductEmbedder import ProductEmbedder
from inventory.ReconcilePolicy import is_search_eligible
from search.SearchIntent import build_suggestions, extract_search_intent
from settings import LOW_STOCK_THRESHOLD, SEARCH_DEFAULTS, SEARCH_MAX_RESULTS, SEARCH_SUGGESTION_BELOW
from utility.logging_utils import get_class_logger
from vectorstore.ProductVectorStore import ProductVectorStore, VectorFilter, VectorHit


def _project(product: Product, score: float) -> Dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "description": product.description or "",
        "price": float(product.price),
        "quantity": int(product.quantity),
        "category": product.category,
        "brand": product.brand,
        "sku": product.sku,
        "image_url": product.image_url,
        "relevance_score": round(score, 2),
    }


@dataclass
class ProductSearchService:
    """
    Semantic product search: infer filters from the query, embed the search
    terms, ask the vector index for filtered nearest neighbours and hydrate
    the hits from the catalog. Read-only.
    """

    catalog: CatalogStore
    embedder: ProductEmbedder
    vector_store: ProductVectorStore
    min_score: float = SEARCH_DEFAULTS["min_score"]
    max_results_cap: int = SEARCH_MAX_RESULTS
    low_stock_threshold: int = LOW_STOCK_THRESHOLD
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)

    @staticmethod
    def build_filter(
            *,
            in_stock_only: bool,
            category: Optional[str],
            brand: Optional[str],
            min_price: Optional[float],
            max_price: Optional[float],
    ) -> VectorFilter:
        where: VectorFilter = {}
        if in_stock_only:
            where["isActive"] = {"$eq": True}
            where["quantity"] = {"$gt": 0}
        if category:
            where["category"] = {"$eq": category}
        if brand:
            where["brand"] = {"$eq": brand}
        price: Dict[str, float] = {}
        if min_price is not None:
            price["$gte"] = float(min_price)
        if max_price is not None:
            price["$lte"] = float(max_price)
        if price:
            where["price"] = price
        return where

    def _hydrate(self, hits: List[VectorHit], in_stock_only: bool) -> List[Dict[str, Any]]:
        ids = [h.product_id for h in hits if h.product_id]
        products = {p.id: p for p in self.catalog.get_products_by_ids(ids)}

        out: List[Dict[str, Any]] = []
        for hit in hits:
            product = products.get(hit.product_id)
            if product is None:
                self.logger.warning("Vector %s points at a product missing from the catalog", hit.id)
                continue
            # vectors can lag behind the catalog
            if in_stock_only and not is_search_eligible(product.quantity, product.is_active, self.low_stock_threshold):
                self.logger.debug("Dropping stale hit %s (qty=%d)", product.id, product.quantity)
                continue
            out.append(_project(product, hit.score))
        return out

    def search(
            self,
            query: str,
            *,
            max_results: Optional[int] = None,
            category: Optional[str] = None,
            brand: Optional[str] = None,
            min_price: Optional[float] = None,
            max_price: Optional[float] = None,
            in_stock_only: Optional[bool] = None,
    ) -> Dict[str, Any]:
        query = (query or "").strip()
        if not query:
            raise ValueError("query must not be empty")

        max_results = max_results or SEARCH_DEFAULTS["max_results"]
        max_results = max(1, min(int(max_results), self.max_results_cap))
        in_stock_only = SEARCH_DEFAULTS["in_stock_only"] if in_stock_only is None else in_stock_only

        categories = self.catalog.get_categories()
        brands = self.catalog.get_brands()
        intent = extract_search_intent(query, categories=categories, brands=brands)

        # explicit filters always win over inferred ones
        applied_category = category or intent.category
        applied_brand = brand or intent.brand
        applied_min = min_price if min_price is not None else intent.min_price
        applied_max = max_price if max_price is not None else intent.max_price

        where = self.build_filter(
            in_stock_only=in_stock_only,
            category=applied_category,
            brand=applied_brand,
            min_price=applied_min,
            max_price=applied_max,
        )

        self.logger.info(
            "Product search: terms=%r max_results=%d where=%s", intent.search_terms, max_results, where
        )

        vector = self.embedder.embed_text(intent.search_terms)
        hits = self.vector_store.query(vector, top_k=max_results, where=where)
        hits = [h for h in hits if h.score >= self.min_score]
        products = self._hydrate(hits, in_stock_only)[:max_results]

        has_price = applied_min is not None or applied_max is not None
        suggestions: List[str] = []
        if len(products) < SEARCH_SUGGESTION_BELOW:
            suggestions = build_suggestions(
                query,
                categories=categories,
                brands=brands,
                has_category=bool(applied_category),
                has_brand=bool(applied_brand),
                has_price_range=has_price,
            )

        filters: Dict[str, Any] = {}
        if applied_category:
            filters["category"] = applied_category
        if applied_brand:
            filters["brand"] = applied_brand
        if has_price:
            filters["price_range"] = {"min": applied_min, "max": applied_max}

        self.logger.info("Product search done: %d result(s)", len(products))
        return {
            "query": query,
            "search_terms": intent.search_terms,
            "products": products,
            "total_found": len(products),
            "filters": filters,
            "in_stock_only": in_stock_only,
            "suggestions": suggestions,
        }
